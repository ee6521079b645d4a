"""
Tests for environment configuration.
"""

import pytest

from src.wopr.config import DEFAULT_PORT, ServerConfig, parse_port
from src.wopr.exceptions import ConfigurationError


class TestServerConfig:
    """Test cases for ServerConfig."""

    def test_defaults(self):
        """Test an empty environment gives the defaults."""
        config = ServerConfig.from_env({})

        assert config.port == DEFAULT_PORT == 2000
        assert config.host == ""
        assert config.sessions_dir == "sessions"
        assert config.record_sessions is False

    def test_port_from_env(self):
        """Test WOPR_PORT overrides the port."""
        assert ServerConfig.from_env({"WOPR_PORT": "2323"}).port == 2323

    def test_host_and_sessions_dir_from_env(self):
        """Test the other variables."""
        config = ServerConfig.from_env({"WOPR_HOST": "127.0.0.1", "WOPR_SESSIONS_DIR": "/tmp/wopr"})

        assert config.host == "127.0.0.1"
        assert config.sessions_dir == "/tmp/wopr"

    def test_overrides_win(self):
        """Test explicit overrides beat the environment, None does not."""
        config = ServerConfig.from_env(
            {"WOPR_SESSIONS_DIR": "env_dir"},
            sessions_dir="cli_dir",
            record_sessions=True,
            host=None,
        )

        assert config.sessions_dir == "cli_dir"
        assert config.record_sessions is True
        assert config.host == ""

    def test_reads_os_environ(self, monkeypatch):
        """Test os.environ is used by default."""
        monkeypatch.setenv("WOPR_PORT", "4000")
        assert ServerConfig.from_env().port == 4000

    @pytest.mark.parametrize("value", ["abc", "20.5", "-1", "65536"])
    def test_malformed_port(self, value):
        """Test invalid ports fail fast."""
        with pytest.raises(ConfigurationError):
            ServerConfig.from_env({"WOPR_PORT": value})

    def test_parse_port_unset(self):
        """Test unset or empty values fall back to the default."""
        assert parse_port(None) == DEFAULT_PORT
        assert parse_port("") == DEFAULT_PORT
