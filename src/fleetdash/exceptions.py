"""Custom exception hierarchy for fleetdash."""

from __future__ import annotations


class FleetDashError(Exception):
    """Base exception for all fleetdash errors."""


class FleetConfigError(FleetDashError):
    """Invalid or missing configuration."""


class FleetTransportError(FleetDashError):
    """Request-level failure (network, non-2xx status, undecodable body)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class FleetConnectionError(FleetTransportError):
    """The API could not be reached (DNS, refused connection, timeout)."""


class FleetHTTPError(FleetTransportError):
    """The API answered with a non-2xx status.

    ``status_text`` carries the HTTP reason phrase when the server sent one.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        status_text: str = "",
        endpoint: str = "",
    ) -> None:
        self.status_text = status_text
        super().__init__(message, status_code=status_code, endpoint=endpoint)


class FleetDecodeError(FleetTransportError):
    """Response body is not JSON or does not match the resource schema."""
