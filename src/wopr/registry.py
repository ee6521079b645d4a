"""
Session registry for network connections.

Maps each live network transport to its SessionState. All operations take
the same lock, so concurrent sessions never lose each other's updates.
"""

import logging
import threading
from dataclasses import replace
from typing import Any, Dict, Optional

from .exceptions import DuplicateRegistrationError, UnregisteredTransportError
from .screens import Screen, SessionState


class SessionRegistry:
    """Thread-safe store of per-connection session state."""

    def __init__(self):
        self._sessions: Dict[Any, SessionState] = {}
        self._lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

    def register(self, transport) -> SessionState:
        """
        Admit a transport with a fresh, unauthenticated LOGON state.

        Raises:
            DuplicateRegistrationError: If the transport already has an entry
        """
        with self._lock:
            if transport in self._sessions:
                raise DuplicateRegistrationError(f"Transport already registered: {transport!r}")
            state = SessionState()
            self._sessions[transport] = state
            count = len(self._sessions)
        self.logger.debug(f"Registered session ({count} active)")
        return state

    def get(self, transport) -> SessionState:
        """
        Return the current state of a transport.

        Raises:
            UnregisteredTransportError: If the transport has no entry
        """
        with self._lock:
            return self._get_unlocked(transport)

    def update(self, transport, state: SessionState) -> None:
        """
        Replace the state of a registered transport.

        Raises:
            UnregisteredTransportError: If the transport has no entry
        """
        with self._lock:
            self._get_unlocked(transport)
            self._sessions[transport] = state

    def set_screen(self, transport, screen: Screen) -> SessionState:
        """Move a registered transport to another screen, keeping its authentication."""
        with self._lock:
            state = replace(self._get_unlocked(transport), screen=screen)
            self._sessions[transport] = state
            return state

    def remove(self, transport) -> Optional[SessionState]:
        """Drop a transport's entry; removing an unknown transport does nothing."""
        with self._lock:
            state = self._sessions.pop(transport, None)
            count = len(self._sessions)
        if state is not None:
            self.logger.debug(f"Removed session ({count} active)")
        return state

    def snapshot(self) -> Dict[Any, SessionState]:
        with self._lock:
            return dict(self._sessions)

    def _get_unlocked(self, transport) -> SessionState:
        try:
            return self._sessions[transport]
        except KeyError:
            raise UnregisteredTransportError(f"Transport not registered: {transport!r}") from None

    def __contains__(self, transport) -> bool:
        with self._lock:
            return transport in self._sessions

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
