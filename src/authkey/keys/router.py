"""
FastAPI router for the key-issuance endpoint.

Checks run in a fixed order and stop at the first failure: method, bearer
credential, server configuration, operator authorization, token exchange,
key creation.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from authkey.config import Settings, get_settings
from authkey.keys.service import KeyIssuanceService
from authkey.operators.store import OperatorStore
from authkey.shared.exceptions import AuthenticationError
from authkey.shared.logging import get_logger
from authkey.tailscale.client import TailscaleClient
from authkey.tailscale.schemas import IssuedKey

logger = get_logger(__name__)

router = APIRouter(tags=["keys"])

AUTHKEY_PATH = "/tailscale-authkey"

security = HTTPBearer(auto_error=False)


async def get_http_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    """One client per request; nothing is shared between invocations."""
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        yield client


@router.api_route(AUTHKEY_PATH, methods=["POST", "OPTIONS"], response_model=IssuedKey)
async def issue_authkey(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> Response:
    """Exchange a verified operator's credential for a single-use auth key.

    OPTIONS is answered with an empty 204 before anything else is looked at.
    """
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    if credentials is None:
        raise AuthenticationError()

    settings.ensure_configured()

    service = KeyIssuanceService(
        operators=OperatorStore(settings, http_client),
        tailscale=TailscaleClient(settings, http_client),
    )
    issued = await service.issue(credentials.credentials)

    return JSONResponse(
        content=issued.model_dump(),
        headers={"Cache-Control": "no-store"},
    )
