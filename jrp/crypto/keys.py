"""RSA signing key generation and PKCS#12 container packaging."""

from datetime import UTC, datetime, timedelta

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import pkcs12
from cryptography.x509.oid import NameOID

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537
CERT_VALIDITY_DAYS = 365


def generate_rsa_key(key_size: int = RSA_KEY_SIZE) -> rsa.RSAPrivateKey:
    """Generate a new RSA keypair for JWT signing."""
    return rsa.generate_private_key(
        public_exponent=RSA_PUBLIC_EXPONENT,
        key_size=key_size,
    )


def build_self_signed_certificate(
    private_key: rsa.RSAPrivateKey,
    common_name: str,
    validity_days: int = CERT_VALIDITY_DAYS,
) -> x509.Certificate:
    """Wrap the public half of ``private_key`` in a self-signed certificate."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(UTC)
    return (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=1))
        .not_valid_after(now + timedelta(days=validity_days))
        .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=True)
        .sign(private_key, hashes.SHA256())
    )


def build_pkcs12_container(
    private_key: rsa.RSAPrivateKey,
    certificate: x509.Certificate,
    alias: str,
    password: str,
    extra_certificates: list[x509.Certificate | pkcs12.PKCS12Certificate] | None = None,
) -> bytes:
    """Serialize a key entry named ``alias`` into a password-protected PKCS#12 blob."""
    encryption: serialization.KeySerializationEncryption
    if password:
        encryption = serialization.BestAvailableEncryption(password.encode())
    else:
        encryption = serialization.NoEncryption()
    return pkcs12.serialize_key_and_certificates(
        name=alias.encode(),
        key=private_key,
        cert=certificate,
        cas=extra_certificates,
        encryption_algorithm=encryption,
    )
