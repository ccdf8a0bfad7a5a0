"""JWT creation and verification using RS256."""

import logging
from datetime import UTC, datetime, timedelta

import jwt
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from jrp.core.errors import KeyAccessError, SigningError
from jrp.crypto.key_store import KeyMaterialStore
from jrp.crypto.types import ADMIN_ROLE, DecodedToken, TokenClaims

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TTL = 3600
SIGNING_ALGORITHM = "RS256"
MIN_RSA_KEY_SIZE = 2048
TOKEN_ROLES = (ADMIN_ROLE,)


def build_claims(subject: str, now: datetime | None = None) -> TokenClaims:
    """Claims for ``subject`` issued at ``now`` (whole seconds, UTC)."""
    issued_at = (now or datetime.now(UTC)).replace(microsecond=0)
    return TokenClaims(
        subject=subject,
        roles=TOKEN_ROLES,
        issued_at=issued_at,
        expiration=issued_at + timedelta(seconds=ACCESS_TOKEN_TTL),
    )


class TokenIssuer:
    """Signs access tokens with the key held by a KeyMaterialStore."""

    def __init__(self, key_store: KeyMaterialStore) -> None:
        self._key_store = key_store

    def generate_token(self, subject: str) -> str:
        """Create a signed RS256 JWT access token for ``subject``."""
        try:
            material = self._key_store.current
        except KeyAccessError as exc:
            raise SigningError("no key material available for signing") from exc

        key = material.private_key
        if not isinstance(key, RSAPrivateKey):
            raise SigningError(
                f"alias {material.alias!r} holds a {type(key).__name__}, RS256 needs an RSA key"
            )
        if key.key_size < MIN_RSA_KEY_SIZE:
            raise SigningError(
                f"alias {material.alias!r} RSA key is {key.key_size} bits, "
                f"RS256 needs at least {MIN_RSA_KEY_SIZE}"
            )

        claims = build_claims(subject)
        try:
            token = jwt.encode(
                claims.to_payload(),
                key,
                algorithm=SIGNING_ALGORITHM,
                headers={"typ": "JWT"},
            )
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            raise SigningError(f"signing with alias {material.alias!r} failed") from exc
        logger.info("Issued access token for subject %s", subject)
        return token

    def verify_token(self, token: str) -> DecodedToken:
        """Verify a token against the certificate's public key and decode it."""
        public_key = self._key_store.current.certificate.public_key()
        raw = jwt.decode(
            token,
            public_key,
            algorithms=[SIGNING_ALGORITHM],
            options={"require": ["sub", "iat", "exp"]},
        )
        return DecodedToken.model_validate(raw)
