"""Tests for configuration management."""

import pytest
from pydantic import ValidationError

from pusher_http.config import PusherConfig
from pusher_http.types import Credentials


class TestPusherConfig:
    """Tests for the PusherConfig class."""

    def test_required_fields(self):
        """Test that required fields are enforced."""
        with pytest.raises(ValidationError):
            PusherConfig(_env_file=None)

    def test_empty_secret_rejected(self):
        """Test that an empty secret is not accepted."""
        with pytest.raises(ValidationError, match="secret"):
            PusherConfig(app_id="1", key="key", secret="", _env_file=None)

    def test_empty_key_rejected(self):
        with pytest.raises(ValidationError):
            PusherConfig(app_id="1", key="", secret="secret", _env_file=None)

    def test_default_values(self):
        """Test default configuration values."""
        config = PusherConfig(app_id="1", key="key", secret="secret", _env_file=None)

        assert config.cluster == "mt1"
        assert config.use_tls is True
        assert config.host is None
        assert config.timeout == 30.0
        assert config.log_level == "INFO"

    def test_build_base_url(self, config):
        """Test API URL construction from the cluster."""
        assert config.build_base_url() == "https://api-eu.pusher.com"

    def test_build_base_url_without_tls(self):
        config = PusherConfig(
            app_id="1", key="key", secret="secret", use_tls=False, _env_file=None
        )

        assert config.build_base_url() == "http://api-mt1.pusher.com"

    def test_build_base_url_host_override(self):
        """Test that an explicit host and port replace the cluster host."""
        config = PusherConfig(
            app_id="1",
            key="key",
            secret="secret",
            host="localhost",
            port=8080,
            use_tls=False,
            _env_file=None,
        )

        assert config.build_base_url() == "http://localhost:8080"

    def test_loads_from_environment(self, monkeypatch):
        """Test that PUSHER_ variables are picked up."""
        monkeypatch.setenv("PUSHER_APP_ID", "42")
        monkeypatch.setenv("PUSHER_KEY", "env-key")
        monkeypatch.setenv("PUSHER_SECRET", "env-secret")
        monkeypatch.setenv("PUSHER_CLUSTER", "ap1")

        config = PusherConfig(_env_file=None)

        assert config.app_id == "42"
        assert config.key == "env-key"
        assert config.build_base_url() == "https://api-ap1.pusher.com"

    def test_secret_is_secret(self, config):
        """Test that secret is a SecretStr."""
        # Should not expose secret in string representation
        assert "7ad3773142a6692b25b8" not in str(config)
        assert "7ad3773142a6692b25b8" not in repr(config)

        # But can get the actual value when needed
        assert config.secret.get_secret_value() == "7ad3773142a6692b25b8"

    def test_credentials(self, config):
        """Test that credentials carry the secret but hide it from repr."""
        credentials = config.credentials()

        assert credentials == Credentials(
            app_id="3", key="278d425bdf160c739803", secret="7ad3773142a6692b25b8"
        )
        assert "7ad3773142a6692b25b8" not in repr(credentials)

    def test_credentials_are_immutable(self, config):
        credentials = config.credentials()

        with pytest.raises(AttributeError):
            credentials.secret = "other"  # type: ignore[misc]
