"""Tests for environment-driven settings."""

import pytest

from jrp.core.errors import ConfigurationError
from jrp.core.settings import (
    KEYSTORE_PATH_DEFAULT,
    ClientSettings,
    KeyStoreSettings,
    load_settings,
)


class TestKeyStoreSettings:
    """Tests for KeyStoreSettings."""

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JRP_KEYSTORE_PATH", "/etc/jrp/signing.p12")
        monkeypatch.setenv("JRP_KEYSTORE_PASSWORD", "store")
        monkeypatch.setenv("JRP_KEYSTORE_ALIAS", "signing")
        monkeypatch.setenv("JRP_KEYSTORE_KEY_PASSWORD", "key")

        config = KeyStoreSettings().to_config()
        assert config.path == "/etc/jrp/signing.p12"
        assert config.store_password == "store"
        assert config.alias == "signing"
        assert config.key_password == "key"

    def test_key_password_defaults_to_store_password(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("JRP_KEYSTORE_PATH", raising=False)
        monkeypatch.delenv("JRP_KEYSTORE_KEY_PASSWORD", raising=False)
        monkeypatch.setenv("JRP_KEYSTORE_PASSWORD", "store")
        monkeypatch.setenv("JRP_KEYSTORE_ALIAS", "signing")
        config = KeyStoreSettings().to_config()
        assert config.key_password == "store"
        assert config.path == KEYSTORE_PATH_DEFAULT

    def test_empty_alias_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JRP_KEYSTORE_PASSWORD", "store")
        monkeypatch.setenv("JRP_KEYSTORE_ALIAS", "")
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(KeyStoreSettings)
        assert "JRP_KEYSTORE_ALIAS" in str(exc_info.value)

    def test_missing_password_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("JRP_KEYSTORE_PASSWORD", raising=False)
        monkeypatch.setenv("JRP_KEYSTORE_ALIAS", "signing")
        with pytest.raises(ConfigurationError, match="JRP_KEYSTORE_PASSWORD"):
            load_settings(KeyStoreSettings)


class TestClientSettings:
    """Tests for ClientSettings."""

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JRP_CLIENT_ID", "client-42")
        monkeypatch.setenv("JRP_CLIENT_SECRET", "secret")
        settings = load_settings(ClientSettings)
        assert settings.id == "client-42"
        assert settings.secret == "secret"

    def test_unset_client_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("JRP_CLIENT_ID", raising=False)
        monkeypatch.delenv("JRP_CLIENT_SECRET", raising=False)
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(ClientSettings)
        assert "JRP_CLIENT_ID, JRP_CLIENT_SECRET" in str(exc_info.value)

    def test_empty_client_is_rejected_without_echoing_values(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("JRP_CLIENT_ID", "")
        monkeypatch.setenv("JRP_CLIENT_SECRET", "do-not-log-me")
        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(ClientSettings)
        message = str(exc_info.value)
        assert "JRP_CLIENT_ID" in message
        assert "JRP_CLIENT_SECRET" not in message
        assert "do-not-log-me" not in message
