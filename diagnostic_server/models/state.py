"""Process identity and health-check state."""
from __future__ import annotations

import random
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from diagnostic_server.core.logging import iso_timestamp

DEFAULT_HEALTH_CHECK_LOG_COUNT = 5


class ServerIdentity(BaseModel):
    """Identity generated once at process start."""
    model_config = ConfigDict(frozen=True)

    server_id: str = Field(..., description="Random 32-bit value as 8 uppercase hex characters")
    started_at: str = Field(..., description="ISO-8601 startup timestamp")


# PUBLIC_INTERFACE
def new_server_identity() -> ServerIdentity:
    """Generate the identity for this process."""
    return ServerIdentity(server_id=f"{random.getrandbits(32):08X}", started_at=iso_timestamp())


class HealthState(BaseModel):
    """Health-check flags shared by the handlers of one application.

    ``log_health_check`` is either a countdown of checks still to be logged or
    a boolean once toggled. Handlers run on a single event loop and never
    suspend while touching these fields, so no lock is taken.
    """
    fail_health_check: bool = Field(default=False, description="Latched once set")
    log_health_check: Union[bool, int] = Field(
        default=DEFAULT_HEALTH_CHECK_LOG_COUNT, description="Countdown of checks to log, or a boolean"
    )

    def record_check(self) -> bool:
        """Consume one health check and report whether it should be logged."""
        if not self.log_health_check:
            return False
        # bool is an int subclass; only a real countdown decrements
        if type(self.log_health_check) is int and self.log_health_check > 0:
            self.log_health_check -= 1
        return True

    def toggle_log(self) -> None:
        # Negation drops a remaining countdown: 3 -> False -> True.
        self.log_health_check = not self.log_health_check

    def latch_fail(self) -> None:
        self.fail_health_check = True
