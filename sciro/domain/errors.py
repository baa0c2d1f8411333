"""
Engine error types.

Only ConfigurationError ever reaches the integrator. The other types are
raised and caught inside the engine so failures are logged with a
consistent shape and then dropped.
"""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Fatal setup problem detected while constructing an engine."""


class IntegrationCallbackError(Exception):
    """An integrator-supplied callable raised."""

    def __init__(self, call_site: str, cause: BaseException) -> None:
        super().__init__(f"{call_site} raised {type(cause).__name__}: {cause}")
        self.call_site = call_site
        self.cause = cause


class DeliveryError(Exception):
    """Webhook POST failed or answered with a non-2xx status."""

    def __init__(self, message: str, status: int | None = None, body: object = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


class DefensiveReadError(Exception):
    """Optional environment context could not be read."""
