"""
Session engine driving one WOPR conversation.

The engine feeds normalized input to the dialogue state machine and applies
the resulting action: rendering through the transport, persisting the new
screen, and disconnecting on rejection. It works the same for console and
network transports; only where input comes from differs.
"""

import logging
from typing import Optional, Union

from . import content
from .dialogue import BANNER, DIALOGUE, NOT_RECOGNIZED, Action, ActionKind, normalize, transition
from .exceptions import WoprError
from .registry import SessionRegistry
from .renderer import Renderer
from .screens import Screen, SessionState
from .session import SessionRecorder


class SessionEngine:
    """
    Runs the scripted conversation for one transport.

    Network sessions keep their state in the shared registry. A console
    session has no registry and keeps its single state on the engine.
    """

    def __init__(
        self,
        transport,
        renderer: Optional[Renderer] = None,
        registry: Optional[SessionRegistry] = None,
        recorder: Optional[SessionRecorder] = None,
    ):
        self.transport = transport
        self.renderer = renderer or Renderer()
        self.registry = registry
        self.recorder = recorder
        self.logger = logging.getLogger(__name__)
        self._local_state = SessionState()

    @property
    def state(self) -> SessionState:
        if self.registry is None:
            return self._local_state
        return self.registry.get(self.transport)

    @property
    def screen(self) -> Screen:
        return self.state.screen

    @property
    def name(self) -> str:
        return getattr(self.transport, "name", "console")

    def start(self) -> None:
        """Identify the system and show the LOGON prompt."""
        self.logger.info(f"Starting session for {self.name}")
        if self.recorder:
            self.recorder.record_event("connection", f"Session started for {self.name}")
        self.renderer.render(self.transport, BANNER)
        self._enter(Screen.LOGON, authenticated=False, previous=Screen.LOGON)
        # Network clients get the default color back after the prompt; the console resets in run()
        if not self.transport.supports_synchronous_input():
            self.transport.send(content.COLOR_RESET)

    def handle_input(self, raw: Union[str, bytes]) -> Action:
        """
        Process one line of input from the client.

        Args:
            raw: Input as received

        Returns:
            Action: The action that was applied
        """
        if self.transport.closed:
            return Action.noop()

        token = normalize(raw)
        current = self.state
        self.logger.info(f"{self.name} [{current.screen.name}] {token}")
        if self.recorder:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8", errors="replace")
            self.recorder.record_input(raw, token, current.screen)

        action = transition(current.screen, token)
        if action.kind is ActionKind.ADVANCE:
            self.renderer.render(self.transport, action.preface)
            authenticated = action.authenticate or (
                current.authenticated and action.screen is not Screen.LOGON
            )
            self._enter(action.screen, authenticated, previous=current.screen)
        elif action.kind is ActionKind.REJECT:
            self._reject(current.screen, token)
        return action

    def run(self) -> None:
        """
        Drive a synchronous transport until its input ends.

        Raises:
            WoprError: If the transport cannot read input synchronously
        """
        if not self.transport.supports_synchronous_input():
            raise WoprError("Transport does not support synchronous input")

        self.start()
        try:
            while not self.transport.closed:
                line = self.transport.read_line()
                if line is None:
                    self.logger.debug("End of console input")
                    break
                self.handle_input(line)
        finally:
            self.transport.send(content.COLOR_RESET)

    def _enter(self, screen: Screen, authenticated: bool, previous: Screen) -> None:
        if self.registry is None:
            self._local_state = SessionState(authenticated=authenticated, screen=screen)
        elif self.registry.get(self.transport).authenticated != authenticated:
            self.registry.update(self.transport, SessionState(authenticated=authenticated, screen=screen))
        self.transport.set_screen(screen)

        if self.recorder:
            self.recorder.record_screen(previous, screen)
        self.renderer.render_step(self.transport, DIALOGUE[screen])

    def _reject(self, screen: Screen, token: str) -> None:
        self.logger.info(f"Identification {token!r} not recognized for {self.name}")
        if self.recorder:
            self.recorder.record_event("rejected", "Identification not recognized", {"token": token})

        self.renderer.render(self.transport, NOT_RECOGNIZED)
        self.transport.disconnect()

        # Nothing to hang up on locally, so the console goes back to LOGON
        if self.transport.supports_synchronous_input():
            self._enter(Screen.LOGON, authenticated=False, previous=screen)
