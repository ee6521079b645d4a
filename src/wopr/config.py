"""
Server configuration from the environment.

Recognized variables:
- WOPR_PORT: TCP port to listen on (default: 2000)
- WOPR_HOST: Address to bind (default: all interfaces)
- WOPR_SESSIONS_DIR: Directory for session transcripts (default: sessions)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigurationError


DEFAULT_PORT = 2000
DEFAULT_HOST = ""
DEFAULT_SESSIONS_DIR = "sessions"


@dataclass(frozen=True)
class ServerConfig:
    """Settings for network mode."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    sessions_dir: str = DEFAULT_SESSIONS_DIR
    record_sessions: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ServerConfig":
        """
        Build a configuration from environment variables.

        Args:
            environ: Environment to read, os.environ when None
            **overrides: Values taking precedence over the environment

        Returns:
            ServerConfig: The resulting configuration

        Raises:
            ConfigurationError: If WOPR_PORT is not a valid port number
        """
        env = os.environ if environ is None else environ
        values = {
            "host": env.get("WOPR_HOST", DEFAULT_HOST),
            "port": parse_port(env.get("WOPR_PORT")),
            "sessions_dir": env.get("WOPR_SESSIONS_DIR") or DEFAULT_SESSIONS_DIR,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def parse_port(value: Optional[str]) -> int:
    """
    Parse a port number, falling back to the default when unset.

    Raises:
        ConfigurationError: If the value is not an integer in 0-65535
    """
    if value is None or value == "":
        return DEFAULT_PORT
    try:
        port = int(value)
    except ValueError:
        raise ConfigurationError(f"WOPR_PORT must be an integer, got: {value!r}") from None
    if not 0 <= port <= 65535:
        raise ConfigurationError(f"WOPR_PORT must be between 0 and 65535, got: {port}")
    return port
