"""
Transports carrying the WOPR conversation.

A transport knows how to talk to one party. It does not hold the party's
place in the conversation: for network sessions that lives in the session
registry, which ``set_screen`` writes through to.
"""

import logging
import shutil
import socket
import sys
import threading
from typing import Optional, Protocol, TextIO, Tuple

from . import content
from .registry import SessionRegistry
from .screens import Screen


DEFAULT_SEND_TIMEOUT = 5.0


class Transport(Protocol):
    """Capabilities every transport provides."""

    closed: bool
    width: int

    def send(self, text: str) -> None:
        ...

    def disconnect(self) -> None:
        ...

    def supports_synchronous_input(self) -> bool:
        ...

    def set_screen(self, screen: Screen) -> None:
        ...


class ConsoleTransport:
    """
    Transport for the local terminal.

    Output goes straight to stdout and input is read a line at a time from
    stdin. Disconnecting is a no-op: a console session returns to the LOGON
    prompt instead.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.closed = False
        self.width = shutil.get_terminal_size(
            (content.DEFAULT_TERMINAL_WIDTH, 24)
        ).columns

    def send(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def disconnect(self) -> None:
        pass

    def supports_synchronous_input(self) -> bool:
        return True

    def set_screen(self, screen: Screen) -> None:
        pass

    def read_line(self) -> Optional[str]:
        """
        Block until the next line is typed.

        Returns:
            The line without its terminator, or None at end of input
        """
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\r\n")


class NetworkTransport:
    """
    Transport for one accepted TCP connection.

    Sends are bounded by a socket timeout. A send that fails or times out
    marks the transport closed instead of raising, and the owning session
    thread ends on its next read.
    """

    def __init__(
        self,
        conn: socket.socket,
        registry: SessionRegistry,
        peer: Optional[Tuple[str, int]] = None,
        send_timeout: float = DEFAULT_SEND_TIMEOUT,
    ):
        self.conn = conn
        self.registry = registry
        self.peer = peer
        self.closed = False
        self.width = content.DEFAULT_TERMINAL_WIDTH
        self._close_lock = threading.Lock()
        self.logger = logging.getLogger(__name__)
        self.conn.settimeout(send_timeout)

    @property
    def name(self) -> str:
        if self.peer:
            return f"{self.peer[0]}:{self.peer[1]}"
        return f"connection-{id(self):x}"

    def send(self, text: str) -> None:
        conn = self.conn
        if self.closed or conn is None:
            return
        try:
            conn.sendall(text.encode("utf-8"))
        except socket.timeout:
            self.logger.warning(f"Send to {self.name} timed out, dropping client")
            self.closed = True
        except OSError as e:
            self.logger.info(f"Send to {self.name} failed: {e}")
            self.closed = True

    def disconnect(self) -> None:
        """Reset the client's colors, release its registry entry and close."""
        with self._close_lock:
            if self.conn is None:
                return
            self.send(content.COLOR_RESET)
            self.closed = True
            self.registry.remove(self)
            try:
                self.conn.close()
            except OSError as e:
                self.logger.warning(f"Error closing {self.name}: {e}")
            finally:
                self.conn = None
        self.logger.info(f"Disconnected {self.name}")

    def supports_synchronous_input(self) -> bool:
        return False

    def set_screen(self, screen: Screen) -> None:
        self.registry.set_screen(self, screen)

    def receive(self, size: int = 4096) -> Optional[bytes]:
        """
        Wait for the next chunk from the client.

        Read timeouts only bound sends, so an idle client is waited on
        indefinitely.

        Returns:
            The received bytes, or None once the connection is gone
        """
        while not self.closed:
            conn = self.conn
            if conn is None:
                return None
            try:
                data = conn.recv(size)
            except socket.timeout:
                continue
            except OSError as e:
                self.logger.info(f"Read from {self.name} failed: {e}")
                return None
            if not data:
                return None
            return data
        return None
