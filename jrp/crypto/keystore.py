"""Load the signing key and its certificate from a PKCS#12 key container."""

import logging
from importlib import resources
from pathlib import Path

from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, rsa
from cryptography.hazmat.primitives.serialization import pkcs12

from jrp.core.errors import ConfigurationError, KeyAccessError
from jrp.crypto.types import KeyMaterial, KeyStoreConfig

logger = logging.getLogger(__name__)

CLASSPATH_PREFIX = "classpath:"
RESOURCE_ANCHOR = "jrp.resources"

_PRIVATE_KEY_TYPES = (
    rsa.RSAPrivateKey,
    ec.EllipticCurvePrivateKey,
    dsa.DSAPrivateKey,
    ed25519.Ed25519PrivateKey,
    ed448.Ed448PrivateKey,
)


def _secret(value: str) -> bytes | None:
    return value.encode() if value else None


def _friendly_name(entry: pkcs12.PKCS12Certificate) -> str | None:
    if entry.friendly_name is None:
        return None
    return entry.friendly_name.decode("utf-8", errors="replace")


def _matches(entry: pkcs12.PKCS12Certificate, wanted: str) -> bool:
    # entries without a friendly name are never addressable by alias
    name = _friendly_name(entry)
    if not name:
        return False
    return name.casefold() == wanted


class KeyStoreLoader:
    """Opens a key container and extracts one aliased key/certificate entry.

    Paths starting with ``classpath:`` name a resource bundled inside the
    ``resource_anchor`` package; any other path is read from the filesystem.
    """

    def __init__(self, resource_anchor: str = RESOURCE_ANCHOR) -> None:
        self._resource_anchor = resource_anchor

    def load(self, config: KeyStoreConfig) -> KeyMaterial:
        """Load the entry named by ``config.alias``.

        Only the first key entry of a PKCS#12 file is readable; later key
        entries surface as certificates and are reported as such.
        """
        logger.info("Loading key container %s (alias=%s)", config.path, config.alias)
        data = self._read(config.path, config.alias)
        bundle = self._open(data, config.store_password, config.path, config.alias)
        self._find_key_entry(bundle, config.alias)

        if config.key_password != config.store_password:
            try:
                bundle = pkcs12.load_pkcs12(data, _secret(config.key_password))
            except ValueError as exc:
                raise KeyAccessError(
                    f"key password rejected for alias {config.alias!r}"
                ) from exc

        entry = self._find_key_entry(bundle, config.alias)
        key = bundle.key
        if key is None or not isinstance(key, _PRIVATE_KEY_TYPES):
            raise KeyAccessError(
                f"entry is not a private key (alias {config.alias!r})"
            )
        logger.info(
            "Loaded %s signing key for alias %s",
            type(key).__name__,
            config.alias,
        )
        return KeyMaterial(
            private_key=key,
            certificate=entry.certificate,
            alias=config.alias,
        )

    def _read(self, path: str, alias: str) -> bytes:
        """Read container bytes from a bundled resource or the filesystem."""
        if path.startswith(CLASSPATH_PREFIX):
            name = path[len(CLASSPATH_PREFIX) :].lstrip("/")
            try:
                return resources.files(self._resource_anchor).joinpath(name).read_bytes()
            except (ModuleNotFoundError, OSError) as exc:
                raise ConfigurationError(
                    f"cannot read bundled key container {path!r} (alias={alias!r})"
                ) from exc
        try:
            return Path(path).read_bytes()
        except OSError as exc:
            raise ConfigurationError(
                f"cannot read key container {path!r} (alias={alias!r})"
            ) from exc

    @staticmethod
    def _open(
        data: bytes, password: str, path: str, alias: str
    ) -> pkcs12.PKCS12KeyAndCertificates:
        try:
            return pkcs12.load_pkcs12(data, _secret(password))
        except ValueError as exc:
            # cryptography reports bad passwords and malformed data alike
            raise ConfigurationError(
                f"cannot open key container {path!r} (alias={alias!r}): "
                "wrong password or unsupported format"
            ) from exc

    @staticmethod
    def _find_key_entry(
        bundle: pkcs12.PKCS12KeyAndCertificates, alias: str
    ) -> pkcs12.PKCS12Certificate:
        """Return the certificate of the key entry named ``alias``."""
        wanted = alias.casefold()
        if bundle.cert is not None and _matches(bundle.cert, wanted):
            return bundle.cert
        for extra in bundle.additional_certs:
            if _matches(extra, wanted):
                raise KeyAccessError(
                    f"entry is not a private key or not the container's primary "
                    f"key entry (alias {alias!r})"
                )
        raise KeyAccessError(f"alias not found: {alias!r}")
