"""
Tests for the teletype renderer.
"""

import pytest

from src.wopr import content
from src.wopr.dialogue import (
    BANNER, DIALOGUE, ClearScreen, Control, DialogueStep, Identify, LineBump, Write
)
from src.wopr.renderer import DEFAULT_CHAR_DELAY, DEFAULT_SWEEP_DELAY, Renderer
from src.wopr.screens import Screen
from helpers import CaptureTransport


class TestRenderer:
    """Test cases for Renderer."""

    def setup_method(self):
        """Set up test fixtures."""
        self.sleeps = []
        self.renderer = Renderer(sleep=self.sleeps.append)
        self.transport = CaptureTransport(width=5)

    def test_animate_sends_one_character_per_write(self):
        """Test that text goes out a character at a time with pauses."""
        self.renderer.animate(self.transport, "LOGON")

        assert self.transport.writes == ["L", "O", "G", "O", "N"]
        assert self.sleeps == [DEFAULT_CHAR_DELAY] * 5

    def test_animate_custom_delay(self):
        """Test a per-call delay override."""
        self.renderer.animate(self.transport, "AB", delay=0.005)
        assert self.sleeps == [0.005, 0.005]

    def test_animate_stops_when_transport_closes(self):
        """Test that animation stops once the transport is closed."""
        self.transport.closed = True
        self.renderer.animate(self.transport, "GREETINGS")

        assert self.transport.writes == []
        assert self.sleeps == []

    def test_bump_line_counts_rows(self):
        """Test that newline writes advance the row counter."""
        self.renderer.bump_line(self.transport)
        self.renderer.bump_line(self.transport, 2)

        assert self.transport.writes == ["\n", "\n", "\n"]
        assert self.renderer.current_row == 3

    def test_set_cursor_position(self):
        """Test the cursor positioning sequence is one-based."""
        self.renderer.current_row = 7
        self.renderer.set_cursor_position(self.transport, 0, 0)

        assert self.transport.writes == ["\033[1;1f"]
        assert self.renderer.current_row == 0

    def test_clear_screen(self):
        """Test clearing the screen homes the cursor."""
        self.renderer.render(self.transport, (ClearScreen(),))
        assert self.transport.writes == [content.CLEAR, "\033[1;1f"]

    def test_control_passed_through_verbatim(self):
        """Test that control sequences are sent as a single write."""
        self.renderer.render(self.transport, (Control(content.COLOR_LIGHT_BLUE),))
        assert self.transport.writes == ["\x1b[38;5;51m"]

    def test_identify_sweeps_twice(self):
        """Test the identification sweep across the transport width."""
        self.renderer.render(self.transport, (Identify(),))

        frames = [w for w in self.transport.writes if w.startswith("\r")]
        assert frames == [
            "\r█", "\r█", "\r █", "\r  █", "\r   █",
        ] * 2
        assert self.transport.writes.count(content.CLEAR_AND_RESTORE) == 2
        assert self.transport.writes.count("\n") == 1
        assert self.transport.writes[:2] == [content.CLEAR, "\033[1;1f"]
        assert self.sleeps == [DEFAULT_SWEEP_DELAY] * 10

    def test_identify_defaults_width(self):
        """Test the sweep falls back to 80 columns."""
        transport = CaptureTransport()
        del transport.width
        Renderer(sweep_delay=0, sleep=self.sleeps.append).identify(transport)

        frames = [w for w in transport.writes if w.startswith("\r")]
        assert len(frames) == 2 * content.DEFAULT_TERMINAL_WIDTH

    def test_unknown_instruction(self):
        """Test that unknown instructions are refused."""
        with pytest.raises(TypeError):
            self.renderer.render(self.transport, ("LOGON",))

    def test_banner(self):
        """Test the banner sets the color before identifying."""
        self.renderer.render(self.transport, BANNER)
        assert self.transport.writes[0] == content.COLOR_LIGHT_BLUE


class TestRenderStepRoundTrip:
    """Rendering a step into a capturing transport reproduces its content."""

    @pytest.mark.parametrize("screen", list(Screen))
    def test_round_trip(self, screen, renderer):
        """Test literal text and newline writes for every step."""
        step = DIALOGUE[screen]
        transport = CaptureTransport()

        renderer.render_step(transport, step)

        written = "".join(
            w for w in transport.writes
            if w not in (content.CLEAR, "\033[1;1f")
        )
        assert written.replace("\n", "") == step.text.replace("\n", "")
        newline_writes = transport.writes.count("\n")
        assert newline_writes == step.line_bumps + step.text.count("\n")

    def test_round_trip_explanation(self, renderer, capture):
        """Test an exact transcript of the EXPLANATION step."""
        renderer.render_step(capture, DIALOGUE[Screen.EXPLANATION])

        assert capture.output == (
            "\n\n"
            "EXCELLENT. IT'S BEEN A LONG TIME. CAN YOU EXPLAIN"
            "\n"
            "THE REMOVAL OF YOUR USER ACCOUNT NUMBER ON 6/23/73?"
            "\n\n"
        )
        assert capture.writes.count("\n") == DIALOGUE[Screen.EXPLANATION].line_bumps

    def test_round_trip_greeting(self, renderer, capture):
        """Test a step that clears the screen first."""
        renderer.render_step(capture, DIALOGUE[Screen.GREETING])

        assert capture.writes[:2] == [content.CLEAR, "\033[1;1f"]
        assert "".join(capture.writes[2:]) == "GREETINGS PROFESSOR FALKEN.\n\n"
        assert renderer.current_row == 2

    def test_round_trip_custom_step(self, renderer, capture):
        """Test a step built from plain writes and bumps."""
        step = DialogueStep(Screen.PLAY_GAME, (LineBump(2), Write("SHALL WE"), LineBump(), Write("PLAY?")))
        renderer.render_step(capture, step)

        assert capture.output.replace("\n", "") == step.text
        assert capture.writes.count("\n") == step.line_bumps == 3
