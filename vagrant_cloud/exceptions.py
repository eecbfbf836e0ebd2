"""
Vagrant Cloud exception hierarchy.

All exceptions inherit from VagrantCloudError for easy catching. Transport
failures are not wrapped: they surface as ``httpx`` exceptions.
"""

from typing import Any


class VagrantCloudError(Exception):
    """Base exception for all vagrant_cloud errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class RequestEncodingError(VagrantCloudError):
    """Request body could not be encoded as JSON."""


class UploadError(VagrantCloudError):
    """Local failure while preparing an upload (open, stat, request build)."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message, path=path)
        self.path = path


class ResponseDecodeError(VagrantCloudError):
    """Response body is not valid JSON."""

    def __init__(self, message: str, *, status_code: int) -> None:
        super().__init__(message, status_code=status_code)
        self.status_code = status_code
