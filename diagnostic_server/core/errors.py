"""Startup error taxonomy.

Every error here is fatal: the server entry point logs it with its traceback
and exits with status 1. Request handlers never raise these.
"""
from __future__ import annotations


class DiagnosticServerError(Exception):
    """Base class for errors that abort server startup."""


class ConfigFetchError(DiagnosticServerError):
    """The parameter store returned an unusable parameter or the fetch failed."""


class ConfigParseError(DiagnosticServerError):
    """A stored or inline startup params value is not valid JSON."""


class ListenError(DiagnosticServerError):
    """The listening socket could not be bound."""
