"""
Errors - Exception types raised by validators and Directory providers

Every Directory failure is raised as a DirectoryError subclass so callers can
turn it into an actionable message with describe_error().
"""

from typing import Optional


class InputInvalidError(ValueError):
    """Tool parameters were rejected before any Directory call."""


class ConfigurationError(RuntimeError):
    """The Directory client could not be built from the configuration."""


class DirectoryError(Exception):
    """A Directory call failed for a reason not covered by a subclass."""

    status: Optional[int] = None

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class BadRequestError(DirectoryError):
    status = 400


class UnauthorizedError(DirectoryError):
    status = 401


class ForbiddenError(DirectoryError):
    status = 403


class NotFoundError(DirectoryError):
    status = 404


class ConflictError(DirectoryError):
    status = 409


class RateLimitedError(DirectoryError):
    status = 429


class DirectoryConnectionError(DirectoryError):
    """The Directory could not be reached (DNS, TCP, TLS or timeout)."""


ERRORS_BY_STATUS = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitedError,
}


def error_for_status(status: int, message: str) -> DirectoryError:
    """Build the DirectoryError subclass matching an HTTP status code."""
    error_class = ERRORS_BY_STATUS.get(status, DirectoryError)
    return error_class(message, status=status)


def describe_error(error: Exception) -> str:
    """
    Turn any exception into a message suitable for a tool response.

    Args:
        error: The exception raised while serving a request

    Returns:
        Human-readable message with a remediation hint where one exists
    """
    if isinstance(error, InputInvalidError):
        return f"Invalid input: {error}"

    if isinstance(error, ConfigurationError):
        return f"Configuration error: {error}"

    if isinstance(error, BadRequestError):
        return (
            f"Error (400 Bad Request): {error.message}. Check your parameters, "
            "a required field may be missing or malformed."
        )
    if isinstance(error, UnauthorizedError):
        return (
            "Error (401 Unauthorized): Invalid or expired API token. Verify "
            "CLOUDFLARE_API_TOKEN is set and has Zone:Read + DNS:Edit permissions."
        )
    if isinstance(error, ForbiddenError):
        return (
            "Error (403 Forbidden): Token lacks required permissions. Ensure it has "
            "Zone:Read and DNS:Edit scopes for the target zone."
        )
    if isinstance(error, NotFoundError):
        return (
            f"Error (404 Not Found): {error.message}. The requested resource does not "
            "exist, double-check the zone_id and record_id."
        )
    if isinstance(error, ConflictError):
        return (
            f"Error (409 Conflict): {error.message}. A record with this name and type "
            "may already exist. Use list_records to check before recreating it."
        )
    if isinstance(error, RateLimitedError):
        return (
            "Error (429 Rate Limited): Directory API rate limit hit "
            "(1,200 requests / 5 min). Wait a moment and retry."
        )
    if isinstance(error, DirectoryConnectionError):
        return (
            f"Error: Could not connect to the Directory API ({error.message}). "
            "Check network connectivity and retry the request."
        )
    if isinstance(error, DirectoryError):
        if error.status:
            return f"Error ({error.status}): {error.message}"
        return f"Error: {error.message}"

    return f"Error: {error}"
