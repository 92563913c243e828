"""Response delay parsing for the echo POST route."""
from __future__ import annotations

import re
from typing import Optional

DEFAULT_RESPONSE_DELAY_MS = 500
# Largest delay a timer honors; anything above fires after OVERFLOW_DELAY_MS.
MAX_TIMER_DELAY_MS = 2**31 - 1
OVERFLOW_DELAY_MS = 1

_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")


def parse_response_delay(raw: Optional[str]) -> int:
    """Return the delay in milliseconds requested by an ``x-response-delay`` value.

    The leading integer is used and trailing text ignored (``"100ms"`` is 100).
    Missing, non-numeric and zero values fall back to the default; negative
    values clamp to zero. Values beyond the timer range fire after 1 ms.
    """
    match = _LEADING_INT.match(raw or "")
    if not match:
        return DEFAULT_RESPONSE_DELAY_MS
    sign, digits = match.groups()
    digits = digits.lstrip("0")
    if not digits:
        return DEFAULT_RESPONSE_DELAY_MS
    if sign == "-":
        return 0
    if len(digits) > len(str(MAX_TIMER_DELAY_MS)) or int(digits) > MAX_TIMER_DELAY_MS:
        return OVERFLOW_DELAY_MS
    return int(digits)
