"""
Teletype renderer for WOPR dialogue steps.

The renderer turns render instructions into a sequence of transport writes.
Control sequences are opaque strings; the renderer never interprets them.
"""

import logging
import time
from typing import Callable, Iterable, Optional

from . import content
from .dialogue import ClearScreen, Control, DialogueStep, Identify, Instruction, LineBump, Write


DEFAULT_CHAR_DELAY = 0.02
DEFAULT_SWEEP_DELAY = 0.015


class Renderer:
    """
    Renders instructions through a transport with a typing animation.

    One renderer belongs to one session; ``current_row`` tracks the cursor
    row of that session only.
    """

    def __init__(
        self,
        char_delay: float = DEFAULT_CHAR_DELAY,
        sweep_delay: float = DEFAULT_SWEEP_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.char_delay = char_delay
        self.sweep_delay = sweep_delay
        self.sleep = sleep
        self.current_row = 0
        self.logger = logging.getLogger(__name__)

    def animate(self, transport, text: str, delay: Optional[float] = None) -> None:
        """
        Send text one character at a time.

        Args:
            transport: Destination transport
            text: Text to send
            delay: Pause between characters, the renderer default when None
        """
        speed = self.char_delay if delay is None else delay
        for char in text:
            if transport.closed:
                return
            transport.send(char)
            if speed:
                self.sleep(speed)

    def bump_line(self, transport, count: int = 1) -> None:
        for _ in range(count):
            transport.send("\n")
            self.current_row += 1

    def set_cursor_position(self, transport, row: int, col: int) -> None:
        transport.send(content.cursor_position(row, col))
        self.current_row = row

    def clear_screen(self, transport) -> None:
        transport.send(content.CLEAR)
        self.set_cursor_position(transport, 0, 0)

    def identify(self, transport) -> None:
        """
        Draw the identification sweep.

        A growing run of padding ending in a full block crosses the terminal
        width twice, restoring the cursor and clearing the line after each
        pass.
        """
        self.clear_screen(transport)
        width = getattr(transport, "width", content.DEFAULT_TERMINAL_WIDTH)
        self._sweep(transport, width)
        self.bump_line(transport)
        self._sweep(transport, width)

    def _sweep(self, transport, width: int) -> None:
        for i in range(width):
            if transport.closed:
                return
            # \r returns to the start of the line before every frame
            transport.send("\r" + content.FULL_BLOCK.rjust(i))
            if self.sweep_delay:
                self.sleep(self.sweep_delay)
        transport.send(content.CLEAR_AND_RESTORE)

    def render(self, transport, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            if isinstance(instruction, Write):
                self.animate(transport, instruction.text, instruction.delay)
            elif isinstance(instruction, LineBump):
                self.bump_line(transport, instruction.count)
            elif isinstance(instruction, Control):
                transport.send(instruction.sequence)
            elif isinstance(instruction, ClearScreen):
                self.clear_screen(transport)
            elif isinstance(instruction, Identify):
                self.identify(transport)
            else:
                raise TypeError(f"Unknown render instruction: {instruction!r}")

    def render_step(self, transport, step: DialogueStep) -> None:
        """Render the output of a dialogue step."""
        self.logger.debug(f"Rendering {step.screen.name}")
        self.render(transport, step.output)
