"""
Error taxonomy for the hy CLI.

Every failure a command can hit is one of these. The root click group turns
any HyError into a single "Error: ..." line on stderr and exit code 1.
"""

from typing import Optional


class HyError(Exception):
    """Base class for all user-facing CLI errors."""

    exit_code = 1


class ConfigurationError(HyError):
    """Missing credential, workspace or unreadable local config."""


class ValidationError(HyError):
    """Missing flags/fields or locally detected invalid state."""


class ApiError(HyError):
    """The API answered with a non-success status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(self.describe())

    def describe(self) -> str:
        if self.body:
            return f"API error ({self.status_code}): {self.body}"
        return f"API error ({self.status_code})"


class ApiClientError(ApiError):
    """4xx response."""

    def describe(self) -> str:
        message = f"API error ({self.status_code})"
        if self.body:
            message += f": {self.body}"
        if self.status_code == 401:
            message += ". Run 'hy auth login' to authenticate"
        return message


class BuildInProgressError(ApiClientError):
    """409 from the build trigger."""

    def describe(self) -> str:
        return "build already in progress for this production"


class ApiServerError(ApiError):
    """5xx or otherwise unexpected response."""

    def describe(self) -> str:
        if self.body:
            return f"server error ({self.status_code}): {self.body}"
        return f"server error ({self.status_code})"


class TransportError(HyError):
    """No HTTP status at all: DNS, connection or timeout failure."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"request failed: {cause}")


class MalformedResponseError(HyError):
    """Success status but the body could not be understood."""


class UploadError(HyError):
    """File bytes could not be stored after the asset record was created."""

    def __init__(self, asset_id: str, reason: str):
        self.asset_id = asset_id
        self.reason = reason
        super().__init__(
            f"upload failed: {reason} (asset record {asset_id} was created "
            "but the file was not stored)"
        )


class LoginError(HyError):
    """Browser login returned an error."""


class LoginTimeoutError(LoginError):
    """Browser login did not call back before the deadline."""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout
        if timeout:
            super().__init__(f"login timed out after {timeout:g} seconds")
        else:
            super().__init__("login timed out")
