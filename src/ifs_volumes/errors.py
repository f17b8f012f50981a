"""
ifs-volumes error definitions

Standard exceptions used across the ifs-volumes project.
"""

from typing import Optional, Dict, Any


class VolumeError(Exception):
    """Base exception for all volume errors"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "UNKNOWN"
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class TransportError(VolumeError):
    """Request to the storage array failed"""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        method: Optional[str] = None,
        url: Optional[str] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code or "TRANSPORT_ERROR",
            details=details,
        )
        self.status = status
        self.method = method
        self.url = url


class NotFoundError(TransportError):
    """Remote resource does not exist"""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            status=404,
            method=method,
            url=url,
            error_code="NOT_FOUND",
            details=details,
        )


class PartialCreationError(VolumeError):
    """
    Volume was created but its ownership could not be assigned.

    The volume exists on the array with its initial ownership. Callers
    decide whether to delete it or re-apply ownership with
    ``VolumeService.set_ownership``.
    """

    def __init__(self, volume_name: str, path: str, cause: BaseException):
        super().__init__(
            message=f"Volume '{volume_name}' was created but ownership assignment failed: {cause}",
            error_code="PARTIAL_CREATION",
            details={"volume_name": volume_name, "path": path},
        )
        self.volume_name = volume_name
        self.path = path
        self.cause = cause


class InvalidRequestError(VolumeError):
    """Invalid request parameters"""

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            message=f"Invalid field '{field}': {reason}",
            error_code="INVALID_REQUEST"
        )
        self.field = field
        self.value = value
        self.reason = reason


# Error codes
ERROR_CODES = {
    # Transport errors
    "TRANSPORT_ERROR": "Request to the storage array failed",
    "NOT_FOUND": "Resource does not exist on the storage array",
    "TIMEOUT": "Request deadline exceeded",
    "BAD_RESPONSE": "Response body could not be decoded or has an unexpected shape",

    # Workflow errors
    "PARTIAL_CREATION": "Volume created but ownership not assigned",

    # Request errors
    "INVALID_REQUEST": "Invalid request parameter",
}
