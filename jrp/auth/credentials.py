"""
Client authentication for the client-credentials grant.
Credentials arrive as Authorization: Basic base64(client_id:client_secret)
and are checked against the single client configured at startup.
"""
import base64
import binascii
import hmac
import logging

from pydantic import BaseModel, ConfigDict, Field

from jrp.core.errors import AuthenticationError
from jrp.core.settings import ClientSettings
from jrp.crypto.password import prepare_secret_hash, verify_secret

logger = logging.getLogger(__name__)

MISSING_AUTHORIZATION_HEADER = "missing_authorization_header"
INVALID_CREDENTIALS_FORMAT = "invalid_credentials_format"
INVALID_CREDENTIALS = "invalid_credentials"

_BASIC_PREFIX = "Basic "


class ClientCredentials(BaseModel):
    """The one client identity allowed to request tokens."""

    model_config = ConfigDict(frozen=True)

    client_id: str = Field(min_length=1)
    client_secret_hash: str = Field(min_length=1)

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "ClientCredentials":
        """Build from settings, hashing the secret unless it is already hashed."""
        return cls(
            client_id=settings.id,
            client_secret_hash=prepare_secret_hash(settings.secret),
        )

    def __repr__(self) -> str:
        return f"ClientCredentials(client_id={self.client_id!r})"

    __str__ = __repr__


def parse_basic_authorization(header_value: str | None) -> tuple[str, str]:
    """Split a Basic Authorization header into (client_id, client_secret)."""
    if not header_value or not header_value.startswith(_BASIC_PREFIX):
        raise AuthenticationError(MISSING_AUTHORIZATION_HEADER)
    encoded = header_value[len(_BASIC_PREFIX) :].strip()
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise AuthenticationError(INVALID_CREDENTIALS_FORMAT) from exc
    client_id, sep, client_secret = decoded.partition(":")
    if not sep:
        raise AuthenticationError(INVALID_CREDENTIALS_FORMAT)
    return client_id, client_secret


class CredentialValidator:
    """Checks a client id/secret pair against the configured client."""

    def __init__(self, credentials: ClientCredentials) -> None:
        self._credentials = credentials

    def authenticate(self, client_id: str, client_secret: str) -> bool:
        id_matches = hmac.compare_digest(
            client_id.encode(), self._credentials.client_id.encode()
        )
        # hash check runs even when the id mismatches
        secret_matches = verify_secret(client_secret, self._credentials.client_secret_hash)
        return id_matches and secret_matches

    def authenticate_header(self, header_value: str | None) -> str:
        """Authenticate a raw Authorization header; return the client id."""
        client_id, client_secret = parse_basic_authorization(header_value)
        if not self.authenticate(client_id, client_secret):
            logger.warning("Rejected credentials for client_id=%s", client_id)
            raise AuthenticationError(INVALID_CREDENTIALS)
        return client_id
