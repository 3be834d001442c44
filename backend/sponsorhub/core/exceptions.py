"""
Domain exceptions for SponsorHub
================================

Services raise these instead of HTTPException so business rules stay
independent of the web layer. ``main.py`` renders every SponsorHubError
through the error envelope built by ``error_response``.

Usage:
    from sponsorhub.core.exceptions import ResourceNotFoundError, InvalidStateError

    if not event:
        raise ResourceNotFoundError("Event", event_id)

    if event.status != EventStatus.DRAFT:
        raise InvalidStateError("Only draft events can be published", event.status.value)
"""

from typing import Optional, Any, Dict, List


class SponsorHubError(Exception):
    """Base class: carries the HTTP status, a machine-readable code and details"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


# ---- 403 ----

class AuthorizationError(SponsorHubError):
    """Authenticated, but not the owner / participant / right role"""
    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ---- 404 ----

class ResourceNotFoundError(SponsorHubError):
    status_code = 404

    def __init__(self, resource_type: str, resource_id: Optional[str] = None):
        super().__init__(
            f"{resource_type} not found",
            code=f"{resource_type.upper().replace(' ', '_')}_NOT_FOUND",
            details={"resource_id": resource_id} if resource_id else None
        )


# ---- 400 ----

class ValidationError(SponsorHubError):
    """Business-rule validation that the request schema cannot express"""
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="VALIDATION_ERROR", details={"field": field} if field else None)


class InvalidIdError(ValidationError):
    """Path or body id is not a UUID"""

    def __init__(self, resource_type: str):
        super().__init__(f"Invalid {resource_type} ID")
        self.code = "INVALID_ID"


class InvalidStateError(SponsorHubError):
    """Status-guarded transition attempted from the wrong status"""
    status_code = 400

    def __init__(self, message: str, current_status: Optional[str] = None):
        super().__init__(
            message,
            code="INVALID_STATE",
            details={"current_status": current_status} if current_status else None
        )


class InvalidFileTypeError(ValidationError):

    def __init__(self, file_type: str, allowed_types: List[str]):
        super().__init__(f"File type '{file_type}' not allowed. Allowed: {', '.join(allowed_types)}")
        self.code = "INVALID_FILE_TYPE"
        self.details = {"file_type": file_type, "allowed_types": allowed_types}


# ---- 409 / 413 ----

class ConflictError(SponsorHubError):
    """Duplicate proposal, request or email"""
    status_code = 409

    def __init__(self, message: str):
        super().__init__(message, code="CONFLICT")


class FileTooLargeError(SponsorHubError):
    status_code = 413

    def __init__(self, max_size: int):
        super().__init__(
            f"File too large. Maximum size is {max_size // (1024 * 1024)}MB",
            code="FILE_TOO_LARGE",
            details={"max_size": max_size}
        )


# ---- 500 ----

class StorageError(SponsorHubError):
    """Writing or removing an uploaded file failed"""

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")


def error_response(error: SponsorHubError) -> Dict[str, Any]:
    """Error envelope: success false, message and code, details when present"""
    content: Dict[str, Any] = {"success": False, "message": error.message, "code": error.code}
    if error.details:
        content["details"] = error.details
    return content
