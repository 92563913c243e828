"""Catch-all echo endpoints."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Header, Request

from diagnostic_server.api.dependencies import (
    get_app_settings,
    get_health_state,
    get_identity,
    get_startup_params,
)
from diagnostic_server.core.config import Settings
from diagnostic_server.models.echo import EchoResponse
from diagnostic_server.models.state import HealthState, ServerIdentity
from diagnostic_server.services.delay import parse_response_delay
from diagnostic_server.services.echo import PrettyJSONResponse, build_echo, request_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["echo"])


def _log_request(request: Request, settings: Settings) -> None:
    logger.info("%s request to %s: %s", request.method, settings.base_path, request_url(request))


# PUBLIC_INTERFACE
@router.get(
    "/{full_path:path}",
    response_model=EchoResponse,
    response_class=PrettyJSONResponse,
    summary="Echo GET",
    description="Echo request metadata, health state and startup params.",
)
async def echo_get(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    identity: ServerIdentity = Depends(get_identity),
    health: HealthState = Depends(get_health_state),
    params: Any = Depends(get_startup_params),
):
    _log_request(request, settings)
    return build_echo(request, settings.base_path, identity, health, params)


# PUBLIC_INTERFACE
@router.post(
    "/{full_path:path}",
    response_model=EchoResponse,
    response_class=PrettyJSONResponse,
    summary="Echo POST with delay",
    description="Echo after waiting x-response-delay milliseconds (default 500).",
)
async def echo_post(
    request: Request,
    x_response_delay: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_app_settings),
    identity: ServerIdentity = Depends(get_identity),
    health: HealthState = Depends(get_health_state),
    params: Any = Depends(get_startup_params),
):
    """Suspend for the requested delay without blocking other requests, then echo."""
    _log_request(request, settings)
    delay_ms = parse_response_delay(x_response_delay)
    await asyncio.sleep(delay_ms / 1000)
    return build_echo(request, settings.base_path, identity, health, params)
