"""Echo body construction and pretty JSON rendering."""
from __future__ import annotations

import json
from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse

from diagnostic_server.models.echo import EchoResponse
from diagnostic_server.models.state import HealthState, ServerIdentity


class PrettyJSONResponse(JSONResponse):
    """JSON response indented with two spaces."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


def request_url(request: Request) -> str:
    """Return the path and query string as sent, without percent-decoding."""
    raw_path = request.scope.get("raw_path")
    path = raw_path.decode("latin-1") if raw_path else request.url.path
    query = request.scope.get("query_string", b"").decode("latin-1")
    return f"{path}?{query}" if query else path


def _collect_headers(request: Request) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    for name, value in request.headers.items():
        headers[name] = f"{headers[name]}, {value}" if name in headers else value
    return headers


def greeting(base_path: str) -> str:
    return f"Greetings from {base_path}"


# PUBLIC_INTERFACE
def build_echo(
    request: Request,
    base_path: str,
    identity: ServerIdentity,
    health: HealthState,
    params: Any,
) -> EchoResponse:
    """Snapshot the request and server state into an echo body."""
    return EchoResponse(
        server_id=identity.server_id,
        server_start_timestamp=identity.started_at,
        message=greeting(base_path),
        method=request.method,
        url=request_url(request),
        headers=_collect_headers(request),
        log_health_check=health.log_health_check,
        fail_health_check=health.fail_health_check,
        params=params,
    )
