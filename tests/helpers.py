"""
Test doubles for WOPR transports.
"""

from src.wopr.screens import Screen


class CaptureTransport:
    """Transport that records every write for inspection."""

    def __init__(self, synchronous: bool = False, width: int = 10, registry=None):
        self.writes = []
        self.registry = registry
        self.closed = False
        self.width = width
        self.disconnects = 0
        self.screens = []
        self.synchronous = synchronous
        self.name = "capture"

    def send(self, text):
        if not self.closed:
            self.writes.append(text)

    def disconnect(self):
        self.disconnects += 1
        if not self.synchronous:
            self.closed = True
            if self.registry is not None:
                self.registry.remove(self)

    def supports_synchronous_input(self):
        return self.synchronous

    def set_screen(self, screen: Screen):
        self.screens.append(screen)
        if self.registry is not None:
            self.registry.set_screen(self, screen)

    @property
    def output(self) -> str:
        return "".join(self.writes)


class ScriptedConsole(CaptureTransport):
    """Synchronous transport that feeds lines from a script."""

    def __init__(self, lines, width: int = 10):
        super().__init__(synchronous=True, width=width)
        self.lines = list(lines)

    def read_line(self):
        if not self.lines:
            return None
        return self.lines.pop(0)


class MockSocket:
    """Mock socket for testing network transports."""

    def __init__(self, receive_data=None):
        self.sent_data = []
        self.receive_data = list(receive_data or [])
        self.timeout = None
        self.closed = False
        self.should_raise_on_send = None

    def settimeout(self, timeout):
        self.timeout = timeout

    def sendall(self, data):
        if self.should_raise_on_send:
            raise self.should_raise_on_send
        self.sent_data.append(data)

    def recv(self, size):
        if not self.receive_data:
            return b""
        data = self.receive_data.pop(0)
        if isinstance(data, Exception):
            raise data
        return data[:size]

    def close(self):
        self.closed = True

    @property
    def sent_text(self) -> str:
        return b"".join(self.sent_data).decode("utf-8")
