"""Echo response DTO."""
from __future__ import annotations
from typing import Any, Dict, Union
from pydantic import BaseModel, ConfigDict, Field


class EchoResponse(BaseModel):
    """Request metadata plus server state, returned by the echo routes."""
    model_config = ConfigDict(populate_by_name=True)

    server_id: str = Field(..., alias="serverId", description="Server identity")
    server_start_timestamp: str = Field(..., alias="serverStartTimestamp", description="Server start time")
    message: str = Field(..., description="Greeting referencing the base path")
    method: str = Field(..., description="HTTP method of the request")
    url: str = Field(..., description="Request path including the query string")
    headers: Dict[str, str] = Field(default_factory=dict, description="Request headers")
    log_health_check: Union[bool, int] = Field(..., alias="logHealthCheck", description="Health-check log flag")
    fail_health_check: bool = Field(..., alias="failHealthCheck", description="Health-check fail latch")
    params: Any = Field(default=None, description="Resolved startup params")
