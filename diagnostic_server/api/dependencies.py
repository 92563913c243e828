"""FastAPI dependencies exposing the per-application state to routers.

State is created by create_app() and stored on ``app.state``; routers reach
it only through these accessors.
"""
from __future__ import annotations

from typing import Any

from fastapi import Request

from diagnostic_server.core.config import Settings
from diagnostic_server.models.state import HealthState, ServerIdentity


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_identity(request: Request) -> ServerIdentity:
    return request.app.state.identity


def get_health_state(request: Request) -> HealthState:
    return request.app.state.health


def get_startup_params(request: Request) -> Any:
    return request.app.state.params
