"""FastAPI application factory for the JWT RSA token provider."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse

from jrp.auth.credentials import ClientCredentials, CredentialValidator
from jrp.core.errors import HTTP_SERVER_ERROR, HTTP_UNAUTHORIZED, ProviderError
from jrp.core.logging import configure_logging
from jrp.core.settings import AppSettings, ClientSettings, KeyStoreSettings, load_settings
from jrp.crypto.jwt_manager import TokenIssuer
from jrp.crypto.key_store import KeyMaterialStore
from jrp.crypto.pem import PublicKeyExporter
from jrp.oauth.routes_public_key import router as public_key_router
from jrp.oauth.routes_token import router as token_router

logger = logging.getLogger(__name__)


async def _provider_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Render a ProviderError as an OAuth-style error body."""
    assert isinstance(exc, ProviderError)
    if exc.status_code >= HTTP_SERVER_ERROR:
        logger.error("Request failed: %s", exc, exc_info=exc)
        return JSONResponse({"error": "server_error"}, status_code=exc.status_code)

    headers = None
    if exc.status_code == HTTP_UNAUTHORIZED:
        headers = {"WWW-Authenticate": 'Basic realm="oauth"'}
    return JSONResponse(
        {"error": exc.error_code},
        status_code=exc.status_code,
        headers=headers,
    )


def create_app(
    key_store: KeyMaterialStore | None = None,
    credentials: ClientCredentials | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Settings are read from the environment once; the key container is
    loaded during startup and any failure aborts it.
    """
    settings = load_settings(AppSettings)
    configure_logging(settings.log_level)

    if key_store is None:
        key_store = KeyMaterialStore(load_settings(KeyStoreSettings).to_config())
    if credentials is None:
        credentials = ClientCredentials.from_settings(load_settings(ClientSettings))

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        material = key_store.load()
        logger.info("Signing key ready (alias=%s)", material.alias)
        yield

    app = FastAPI(
        title="OAuth2 JWT Token Provider",
        version="1.0.0",
        description="Issues RS256 access tokens for the client_credentials grant",
        lifespan=lifespan,
    )

    app.state.key_store = key_store
    app.state.token_issuer = TokenIssuer(key_store)
    app.state.public_key_exporter = PublicKeyExporter(key_store)
    app.state.credential_validator = CredentialValidator(credentials)

    app.add_exception_handler(ProviderError, _provider_error_handler)

    app.include_router(token_router)
    app.include_router(public_key_router)

    return app
