"""Application settings loaded from environment variables."""

from typing import TypeVar

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from jrp.core.errors import ConfigurationError
from jrp.crypto.types import KeyStoreConfig

KEYSTORE_PATH_DEFAULT = "classpath:keystore.p12"
LOG_LEVEL_DEFAULT = "INFO"

SettingsT = TypeVar("SettingsT", bound=BaseSettings)


class KeyStoreSettings(BaseSettings):
    """PKCS#12 key container location and secrets."""

    model_config = SettingsConfigDict(env_prefix="JRP_KEYSTORE_")

    path: str = Field(default=KEYSTORE_PATH_DEFAULT, min_length=1)
    password: str = Field(min_length=1)
    alias: str = Field(min_length=1)
    key_password: str | None = None

    def to_config(self) -> KeyStoreConfig:
        """Freeze the settings into the loader's configuration value."""
        key_password = self.key_password
        if key_password is None:
            key_password = self.password
        return KeyStoreConfig(
            path=self.path,
            store_password=self.password,
            alias=self.alias,
            key_password=key_password,
        )


class ClientSettings(BaseSettings):
    """The single client allowed to request tokens."""

    model_config = SettingsConfigDict(env_prefix="JRP_CLIENT_")

    id: str = Field(min_length=1)
    secret: str = Field(min_length=1)


class AppSettings(BaseSettings):
    """Process-wide settings."""

    model_config = SettingsConfigDict(env_prefix="JRP_")

    log_level: str = LOG_LEVEL_DEFAULT


def load_settings(settings_cls: type[SettingsT]) -> SettingsT:
    """Read ``settings_cls`` from the environment.

    Missing or empty values raise ConfigurationError naming the variables,
    never their values.
    """
    try:
        return settings_cls()
    except ValidationError as exc:
        prefix = settings_cls.model_config.get("env_prefix", "")
        names = sorted(
            f"{prefix}{err['loc'][0]}".upper() for err in exc.errors() if err["loc"]
        )
        raise ConfigurationError(
            f"missing or empty settings: {', '.join(names)}"
        ) from None
