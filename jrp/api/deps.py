"""FastAPI dependency injection for the token and public key endpoints."""

from typing import Annotated

from fastapi import Depends, Request

from jrp.auth.credentials import CredentialValidator
from jrp.crypto.jwt_manager import TokenIssuer
from jrp.crypto.pem import PublicKeyExporter


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_public_key_exporter(request: Request) -> PublicKeyExporter:
    return request.app.state.public_key_exporter


def get_credential_validator(request: Request) -> CredentialValidator:
    return request.app.state.credential_validator


def require_client(
    request: Request,
    validator: Annotated[CredentialValidator, Depends(get_credential_validator)],
) -> str:
    """Authenticate the Basic Authorization header and return the client id."""
    return validator.authenticate_header(request.headers.get("Authorization"))
