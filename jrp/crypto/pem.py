"""PEM rendering of the signing certificate."""

import base64

from cryptography.hazmat.primitives import serialization

from jrp.crypto.key_store import KeyMaterialStore

PEM_HEADER = "-----BEGIN CERTIFICATE-----"
PEM_FOOTER = "-----END CERTIFICATE-----"


def certificate_to_pem(der: bytes) -> str:
    """Frame DER certificate bytes as a single-line Base64 PEM block."""
    body = base64.b64encode(der).decode("ascii")
    return f"{PEM_HEADER}\n{body}\n{PEM_FOOTER}"


class PublicKeyExporter:
    """Exports the certificate that verifies issued tokens."""

    def __init__(self, key_store: KeyMaterialStore) -> None:
        self._key_store = key_store

    def export_pem(self) -> str:
        """PEM text of the certificate; KeyAccessError when none is loaded."""
        material = self._key_store.current
        der = material.certificate.public_bytes(serialization.Encoding.DER)
        return certificate_to_pem(der)
