"""OAuth token endpoint (client-credentials grant only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Form

from jrp.api.deps import get_token_issuer, require_client
from jrp.core.errors import ValidationError
from jrp.crypto.jwt_manager import ACCESS_TOKEN_TTL, TokenIssuer
from jrp.oauth.types import TokenForm, TokenResponse

router = APIRouter()

CLIENT_CREDENTIALS = "client_credentials"


@router.post("/oauth/token")
def token_endpoint(
    client_id: Annotated[str, Depends(require_client)],
    issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    form: Annotated[TokenForm, Form()],
) -> TokenResponse:
    """POST /oauth/token -- issue an access token to the authenticated client."""
    if not form.grant_type:
        raise ValidationError("invalid_request")
    if form.grant_type != CLIENT_CREDENTIALS:
        raise ValidationError("unsupported_grant_type")

    return TokenResponse(
        access_token=issuer.generate_token(client_id),
        expires_in=ACCESS_TOKEN_TTL,
    )
