"""Type definitions for OAuth token endpoint payloads."""

from pydantic import BaseModel


class TokenResponse(BaseModel):
    """OAuth token endpoint response."""

    token_type: str = "Bearer"
    access_token: str
    expires_in: int


class TokenForm(BaseModel):
    """Form fields accepted by the token endpoint."""

    grant_type: str | None = None
