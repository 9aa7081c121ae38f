# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-14
# Description: Errors.py
# -----------------------------------------------------------------------------
"""
Error taxonomy for the smart-search pipeline.

Only ConfigurationError is meant to leave the service layer. The others are
raised inside a component and turned into a fallback, a counter or "no answer"
by the component that owns the call.
"""
from typing import Iterable


class ConfigurationError(ValueError):
    """Missing credentials or endpoint for an external service."""

    def __init__(self, message: str, missing_env_vars: Iterable[str] = ()) -> None:
        self.missing_env_vars = list(missing_env_vars)
        if self.missing_env_vars:
            message = f"{message} (missing environment variables: {self.missing_env_vars})"
        super().__init__(message)


class TransportError(RuntimeError):
    """Network failure, non-2xx status or malformed body from an external service."""

    def __init__(self, message: str, kind: str = "transport") -> None:
        self.kind = kind
        super().__init__(message)


class ContentError(ValueError):
    """Nothing to embed: the composite text of a receipt is empty."""
