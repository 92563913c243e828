"""Health check endpoints and their toggles."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status

from diagnostic_server.api.dependencies import (
    get_app_settings,
    get_health_state,
    get_identity,
    get_startup_params,
)
from diagnostic_server.core.config import Settings
from diagnostic_server.models.echo import EchoResponse
from diagnostic_server.models.state import HealthState, ServerIdentity
from diagnostic_server.services.echo import PrettyJSONResponse, build_echo

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/healthcheck", tags=["health"])


# PUBLIC_INTERFACE
@router.get("/", include_in_schema=False)
@router.get("", summary="Health Check", description="200 normally, 500 once the fail latch is set.", operation_id="health_check")
async def health_check(health: HealthState = Depends(get_health_state)):
    """Return an empty 200, or an empty 500 when failing is latched."""
    if health.record_check():
        logger.info("Healthcheck")
    if health.fail_health_check:
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(status_code=status.HTTP_200_OK)


# PUBLIC_INTERFACE
@router.get("/log/", response_model=EchoResponse, response_class=PrettyJSONResponse, include_in_schema=False)
@router.get(
    "/log",
    response_model=EchoResponse,
    response_class=PrettyJSONResponse,
    summary="Toggle health check logging",
    description="Negate the health check log flag and echo the request.",
)
async def toggle_health_check_log(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    identity: ServerIdentity = Depends(get_identity),
    health: HealthState = Depends(get_health_state),
    params: Any = Depends(get_startup_params),
):
    health.toggle_log()
    return build_echo(request, settings.base_path, identity, health, params)


# PUBLIC_INTERFACE
@router.get("/fail/", response_model=EchoResponse, response_class=PrettyJSONResponse, include_in_schema=False)
@router.get(
    "/fail",
    response_model=EchoResponse,
    response_class=PrettyJSONResponse,
    summary="Fail health checks",
    description="Latch the health check into failing and echo the request.",
)
async def fail_health_check(
    request: Request,
    settings: Settings = Depends(get_app_settings),
    identity: ServerIdentity = Depends(get_identity),
    health: HealthState = Depends(get_health_state),
    params: Any = Depends(get_startup_params),
):
    """Set the fail latch. Nothing clears it for the life of the process."""
    health.latch_fail()
    return build_echo(request, settings.base_path, identity, health, params)
