"""Startup params resolution.

The params object comes from one of three sources, in priority order:
1) An SSM parameter (SECRET_NAME) of type String whose value is JSON text.
2) Inline JSON text (SECRET_JSON).
3) An empty object.

The SSM lookup is a single attempt with a bounded timeout; no retries are
configured so a failing store fails startup exactly once.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from diagnostic_server.core.config import Settings
from diagnostic_server.core.errors import ConfigFetchError, ConfigParseError

logger = logging.getLogger(__name__)

STRING_PARAM_TYPE = "String"


def build_ssm_client(settings: Settings):
    """Create the SSM client used for the startup lookup.

    Raises:
        ConfigFetchError: If the client cannot be configured (e.g. no region).
    """
    config = Config(
        connect_timeout=settings.secret_fetch_timeout,
        read_timeout=settings.secret_fetch_timeout,
        retries={"total_max_attempts": 1, "mode": "standard"},
    )
    try:
        return boto3.client("ssm", config=config)
    except BotoCoreError as exc:
        raise ConfigFetchError(f"Could not create SSM client: {exc}") from exc


def _parse_json(text: str, label: str) -> Any:
    try:
        return json.loads(text)
    except (TypeError, ValueError) as exc:
        raise ConfigParseError(f"Invalid {label} JSON -- {exc}") from exc


def fetch_secret_json(name: str, client) -> Any:
    """Fetch a String parameter and parse its value as JSON.

    Raises:
        ConfigFetchError: If the lookup fails or the parameter is not a String.
        ConfigParseError: If the value is not valid JSON.
    """
    try:
        response = client.get_parameter(Name=name)
    except (BotoCoreError, ClientError) as exc:
        raise ConfigFetchError(f"Could not fetch param {name}: {exc}") from exc

    parameter = response["Parameter"]
    param_type = parameter.get("Type")
    if param_type != STRING_PARAM_TYPE:
        raise ConfigFetchError(f'Param must be "{STRING_PARAM_TYPE}" type: {param_type}')
    return _parse_json(parameter.get("Value"), "param")


# PUBLIC_INTERFACE
async def resolve_startup_params(settings: Settings, client=None) -> Any:
    """Resolve the startup params before the server starts listening.

    The blocking SSM call runs in a worker thread so the event loop stays free.

    Raises:
        ConfigFetchError: See fetch_secret_json.
        ConfigParseError: If the stored or inline value is not valid JSON.
    """
    if settings.secret_name:
        logger.info("Getting secret JSON...")
        if client is None:
            client = build_ssm_client(settings)
        return await run_in_threadpool(fetch_secret_json, settings.secret_name, client)
    if settings.secret_json:
        return _parse_json(settings.secret_json, "inline")
    return {}
