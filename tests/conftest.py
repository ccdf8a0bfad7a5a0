"""Shared test fixtures for the token provider."""

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives.asymmetric import rsa
from httpx import ASGITransport, AsyncClient

from jrp.auth.credentials import ClientCredentials
from jrp.core.app import create_app
from jrp.crypto.key_store import KeyMaterialStore
from jrp.crypto.keys import (
    build_pkcs12_container,
    build_self_signed_certificate,
    generate_rsa_key,
)
from jrp.crypto.password import hash_secret
from jrp.crypto.types import KeyStoreConfig

ALIAS = "jwt-signing"
STORE_PASSWORD = "store-pass"
CLIENT_ID = "client-42"
CLIENT_SECRET = "s3cret-value"


@pytest.fixture(autouse=True)
def _set_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set environment variables for test settings."""
    monkeypatch.setenv("JRP_LOG_LEVEL", "DEBUG")


@pytest.fixture(scope="session")
def signing_key() -> rsa.RSAPrivateKey:
    """One RSA-2048 key shared by the whole session."""
    return generate_rsa_key()


@pytest.fixture(scope="session")
def certificate(signing_key: rsa.RSAPrivateKey) -> x509.Certificate:
    return build_self_signed_certificate(signing_key, "jrp-tests")


@pytest.fixture(scope="session")
def keystore_path(
    tmp_path_factory: pytest.TempPathFactory,
    signing_key: rsa.RSAPrivateKey,
    certificate: x509.Certificate,
) -> Path:
    """A PKCS#12 container holding the session key under ``ALIAS``."""
    path = tmp_path_factory.mktemp("keystore") / "keystore.p12"
    path.write_bytes(
        build_pkcs12_container(signing_key, certificate, ALIAS, STORE_PASSWORD)
    )
    return path


@pytest.fixture
def keystore_config(keystore_path: Path) -> KeyStoreConfig:
    return KeyStoreConfig(
        path=str(keystore_path),
        store_password=STORE_PASSWORD,
        alias=ALIAS,
        key_password=STORE_PASSWORD,
    )


@pytest.fixture
def key_store(keystore_config: KeyStoreConfig) -> KeyMaterialStore:
    """A store with the session key already loaded."""
    store = KeyMaterialStore(keystore_config)
    store.load()
    return store


@pytest.fixture(scope="session")
def client_credentials() -> ClientCredentials:
    return ClientCredentials(
        client_id=CLIENT_ID,
        client_secret_hash=hash_secret(CLIENT_SECRET),
    )


@pytest.fixture
async def client(
    key_store: KeyMaterialStore, client_credentials: ClientCredentials
) -> AsyncIterator[AsyncClient]:
    """Create an httpx test client over the assembled application."""
    app = create_app(key_store=key_store, credentials=client_credentials)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
