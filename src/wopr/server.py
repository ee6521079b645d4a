"""
WOPR network server.

Accepts TCP connections and runs every session on its own thread, so a
client that is mid-animation or idle never holds up another client or the
accept loop.
"""

import logging
import socket
import threading
from typing import Callable, Optional

from .config import ServerConfig
from .engine import SessionEngine
from .exceptions import ServerBindError, UnregisteredTransportError
from .registry import SessionRegistry
from .renderer import Renderer
from .session import SessionRecorder
from .transport import NetworkTransport


TELNET_IAC = 255
ACCEPT_POLL_INTERVAL = 0.5


class WoprServer:
    """
    Connection acceptor for network mode.
    """

    def __init__(
        self,
        config: ServerConfig,
        registry: Optional[SessionRegistry] = None,
        renderer_factory: Callable[[], Renderer] = Renderer,
    ):
        self.config = config
        self.registry = registry or SessionRegistry()
        self.renderer_factory = renderer_factory
        self.listener: Optional[socket.socket] = None
        self.logger = logging.getLogger(__name__)
        self._threads = set()
        self._threads_lock = threading.Lock()
        self._stopping = threading.Event()

    @property
    def address(self):
        if not self.listener:
            return None
        return self.listener.getsockname()

    def bind(self) -> None:
        """
        Open the listening socket.

        Raises:
            ServerBindError: If the address cannot be bound
        """
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind((self.config.host, self.config.port))
            listener.listen()
            listener.settimeout(ACCEPT_POLL_INTERVAL)
        except OSError as e:
            listener.close()
            error_msg = f"Failed to listen on {self.config.host or '*'}:{self.config.port}: {e}"
            self.logger.error(error_msg)
            raise ServerBindError(error_msg) from e

        self.listener = listener
        host, port = self.address
        self.logger.info(f"Listening on {host}:{port}")

    def serve_forever(self) -> None:
        """Accept connections until shutdown() is called."""
        if self.listener is None:
            self.bind()

        while not self._stopping.is_set():
            try:
                conn, addr = self.listener.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if self._stopping.is_set():
                    break
                self.logger.warning(f"Accept failed: {e}")
                continue

            thread = threading.Thread(
                target=self._serve_client,
                args=(conn, addr),
                name=f"wopr-{addr[0]}:{addr[1]}",
                daemon=True,
            )
            with self._threads_lock:
                self._threads.add(thread)
            thread.start()

    def shutdown(self, timeout: float = 1.0) -> None:
        """
        Stop accepting and disconnect every live session.

        Args:
            timeout: How long to wait for each session thread to finish
        """
        self._stopping.set()
        if self.listener:
            try:
                self.listener.close()
            except OSError as e:
                self.logger.warning(f"Error closing listener: {e}")
        for transport in self.registry.snapshot():
            transport.disconnect()

        with self._threads_lock:
            threads = list(self._threads)
        for thread in threads:
            thread.join(timeout)
        self.logger.info("Server stopped")

    def active_sessions(self) -> int:
        return len(self.registry)

    def _serve_client(self, conn: socket.socket, addr) -> None:
        transport = NetworkTransport(conn, self.registry, peer=addr)
        recorder = SessionRecorder(peer=transport.name) if self.config.record_sessions else None
        self.registry.register(transport)
        self.logger.info(f"Accepted connection from {transport.name}")

        engine = SessionEngine(
            transport,
            renderer=self.renderer_factory(),
            registry=self.registry,
            recorder=recorder,
        )
        try:
            engine.start()
            while not transport.closed:
                data = transport.receive()
                if data is None:
                    break
                # Telnet negotiation is not input
                if data[0] == TELNET_IAC:
                    continue
                engine.handle_input(data)
        except Exception as e:
            # shutdown() may drop the registry entry while input is in flight
            if isinstance(e, UnregisteredTransportError) and transport.closed:
                self.logger.info(f"Session for {transport.name} ended by shutdown")
                return
            self.logger.exception(f"Session for {transport.name} failed")
            if recorder:
                recorder.record_event("error", f"Session failed: {e}", {"error_type": type(e).__name__})
        finally:
            transport.disconnect()
            if recorder:
                recorder.record_event("disconnection", "Client disconnected")
                self._save_transcript(recorder)
            with self._threads_lock:
                self._threads.discard(threading.current_thread())

    def _save_transcript(self, recorder: SessionRecorder) -> None:
        try:
            session_file = recorder.save_session(self.config.sessions_dir)
        except OSError as e:
            self.logger.warning(f"Could not save transcript {recorder.session_id}: {e}")
            return
        self.logger.info(f"Transcript saved to: {session_file}")
