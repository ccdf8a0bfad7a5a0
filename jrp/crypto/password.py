"""Argon2id hashing of the configured client secret.

The secret is configured once, either in plain text or as a ready-made
``$argon2`` hash. ``prepare_secret_hash`` turns that value into the hash the
validator compares against; it runs at startup and nowhere else.
"""

import logging

import argon2

from jrp.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

ARGON2_PREFIX = "$argon2"

_hasher = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=65536,
    parallelism=1,
)


def hash_secret(secret: str) -> str:
    return _hasher.hash(secret)


def is_secret_hash(value: str) -> bool:
    return value.startswith(ARGON2_PREFIX)


def prepare_secret_hash(configured: str) -> str:
    """Return the Argon2 hash for a configured client secret.

    Plain secrets are hashed. Pre-hashed values are parsed so a truncated or
    mangled hash fails startup instead of rejecting every request later.
    """
    if not is_secret_hash(configured):
        return hash_secret(configured)
    try:
        argon2.extract_parameters(configured)
    except argon2.exceptions.InvalidHashError:
        raise ConfigurationError(
            "configured client secret hash is not a valid Argon2 hash"
        ) from None
    if _hasher.check_needs_rehash(configured):
        logger.warning(
            "Configured client secret hash differs from the current Argon2 parameters"
        )
    return configured


def verify_secret(plain: str, hashed: str) -> bool:
    """Check a presented client secret against the stored hash."""
    try:
        return _hasher.verify(hashed, plain)
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False
