"""
Error taxonomy for the ClinicalTrials.gov MCP server.

Validation errors are raised before any network call. API and network errors
are raised by the client after a request has been attempted. Nothing here is
retried.
"""

from __future__ import annotations


class CtGovError(Exception):
    """Base exception for everything raised by this package."""


class ConfigurationError(CtGovError):
    """Raised when the server configuration is unusable."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            "Configuration validation failed:\n" + "\n".join(errors)
        )


class ValidationError(CtGovError):
    """Malformed tool input. ``field`` names the offending input when known."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        self.message = message
        super().__init__(message)


class InvalidMethodError(CtGovError):
    """The unified tool was called with a ``method`` it does not know."""

    def __init__(self, method: object, allowed: tuple[str, ...]):
        self.method = method
        self.allowed = allowed
        super().__init__(
            f"Invalid method: {method}. Must be one of: {', '.join(allowed)}"
        )


class UnknownToolError(CtGovError):
    """CallTool named a tool that is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ApiRequestError(CtGovError):
    """ClinicalTrials.gov answered with a non-2xx status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status_text: str = "",
        url: str | None = None,
    ):
        self.status_code = status_code
        self.status_text = status_text
        self.url = url
        super().__init__(message)

    @classmethod
    def from_status(
        cls, status_code: int, status_text: str, url: str | None = None
    ) -> "ApiRequestError":
        return cls(
            f"API request failed: {status_code} {status_text}".rstrip(),
            status_code=status_code,
            status_text=status_text,
            url=url,
        )


class NotFoundError(ApiRequestError):
    """A study lookup returned 404."""

    def __init__(self, nct_id: str, url: str | None = None):
        self.nct_id = nct_id
        super().__init__(
            f"Study not found: {nct_id}. Please verify the NCT ID is correct.",
            status_code=404,
            status_text="Not Found",
            url=url,
        )


class RedirectedError(ApiRequestError):
    """A study lookup was redirected; the NCT ID is probably an alias."""

    def __init__(
        self,
        nct_id: str,
        location: str | None = None,
        url: str | None = None,
        status_code: int = 301,
    ):
        self.nct_id = nct_id
        self.location = location
        message = (
            f"Study {nct_id} has been redirected. "
            "This may be an alias - try the canonical NCT ID."
        )
        if location:
            message += f" Redirect target: {location}"
        super().__init__(
            message, status_code=status_code, status_text="Redirected", url=url
        )


class NetworkError(CtGovError):
    """The request never produced an HTTP response (DNS, refused, timeout)."""

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(message)
