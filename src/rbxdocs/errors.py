from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    NETWORK_ERROR = "NETWORK_ERROR"
    REMOTE_ERROR = "REMOTE_ERROR"
    ASSET_NOT_FOUND = "ASSET_NOT_FOUND"


class RbxDocsError(Exception):
    """Base class for every failure that may escape ``get_metadata()``.

    Caught by server.py and serialised into the MCP error response.
    Cache read failures are not represented here: they never leave the
    cache boundary and are treated as a miss.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str,
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
                "recoverable": self.recoverable,
            }
        }


class NetworkError(RbxDocsError):
    """The transport call to a remote endpoint failed."""

    def __init__(self, message: str) -> None:
        super().__init__(
            code=ErrorCode.NETWORK_ERROR,
            message=message,
            suggestion="Check your internet connection and try again.",
            recoverable=True,
        )


class RemoteError(RbxDocsError):
    """A remote endpoint answered with a non-success status or an unusable body."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(
            code=ErrorCode.REMOTE_ERROR,
            message=message,
            suggestion="The documentation index may be temporarily unavailable.",
            recoverable=status_code is not None and (status_code >= 500 or status_code == 429),
        )
        self.status_code = status_code


class AssetNotFound(RbxDocsError):
    """The latest release does not carry the metadata asset."""

    def __init__(self, asset_name: str) -> None:
        super().__init__(
            code=ErrorCode.ASSET_NOT_FOUND,
            message=f"{asset_name} not found in release assets",
            suggestion="The latest release may still be publishing. Try again later.",
            recoverable=False,
        )
        self.asset_name = asset_name
