"""Type definitions for key containers, key material, and JWT claims."""

from datetime import datetime

from cryptography import x509
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes
from pydantic import BaseModel, ConfigDict, Field

ADMIN_ROLE = "admin"


class KeyStoreConfig(BaseModel):
    """Where the signing key lives and how to unlock it."""

    model_config = ConfigDict(frozen=True)

    path: str
    store_password: str
    alias: str = Field(min_length=1)
    key_password: str

    def __repr__(self) -> str:
        return f"KeyStoreConfig(path={self.path!r}, alias={self.alias!r})"

    __str__ = __repr__


class KeyMaterial(BaseModel):
    """Private key and certificate taken from one alias entry of one load."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    private_key: PrivateKeyTypes
    certificate: x509.Certificate
    alias: str

    def __repr__(self) -> str:
        return f"KeyMaterial(alias={self.alias!r})"

    __str__ = __repr__


class TokenClaims(BaseModel):
    """Claims bundle signed into an access token."""

    model_config = ConfigDict(frozen=True)

    subject: str
    roles: tuple[str, ...] = (ADMIN_ROLE,)
    issued_at: datetime
    expiration: datetime

    def to_payload(self) -> dict[str, object]:
        """Render the JWT payload with a fixed claim order."""
        return {
            "sub": self.subject,
            "roles": list(self.roles),
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expiration.timestamp()),
        }


class DecodedToken(BaseModel):
    """Verified access token claims."""

    model_config = ConfigDict(extra="allow")

    sub: str
    roles: list[str]
    iat: int
    exp: int
