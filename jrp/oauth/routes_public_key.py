"""Public certificate endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from jrp.api.deps import get_public_key_exporter
from jrp.crypto.pem import PublicKeyExporter

router = APIRouter()


@router.get("/oauth/public-key", response_class=PlainTextResponse)
def public_key(
    exporter: Annotated[PublicKeyExporter, Depends(get_public_key_exporter)],
) -> PlainTextResponse:
    """GET /oauth/public-key -- PEM certificate for token verification."""
    return PlainTextResponse(exporter.export_pem())
