"""
Custom exception classes for admin record operations and global error handling
"""

from typing import Optional, Dict, Any
from fastapi import status


class AdminError(Exception):
    """Base exception for admin record errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class RecordNotFoundError(AdminError):
    """Exception raised when a record is not found"""

    def __init__(self, record_id: Any = None, record_type: str = None):
        if record_id is not None and record_type:
            message = f"{record_type} with ID {record_id} not found"
        elif record_type:
            message = f"{record_type} not found"
        else:
            message = "Record not found"

        details = {}
        if record_id is not None:
            details["id"] = str(record_id)

        super().__init__(
            message=message,
            status_code=status.HTTP_404_NOT_FOUND,
            details=details
        )


class RecordValidationError(AdminError):
    """Exception raised when record validation fails"""

    def __init__(self, message: str, field: str = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(
            message=message,
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class ConfirmationRequiredError(AdminError):
    """Exception raised when a destructive action was not confirmed"""

    def __init__(self, action: str = "delete", record_type: str = "record"):
        message = f"Confirmation required to {action} this {record_type.lower()}"
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details={"action": action, "confirm": False}
        )


class DuplicateRecordError(AdminError):
    """Exception raised when a unique field already exists"""

    def __init__(self, field: str, value: Any, record_type: str = "record"):
        if value is None:
            message = f"A {record_type.lower()} with this {field} already exists"
            details = {"field": field}
        else:
            message = f"A {record_type.lower()} with {field} '{value}' already exists"
            details = {"field": field, "value": str(value)}
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details=details
        )


class SectionNotFoundError(AdminError):
    """Exception raised for an unknown section settings page"""

    def __init__(self, page: str):
        super().__init__(
            message=f"Section settings page '{page}' not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"page": page}
        )


class FileUploadError(AdminError):
    """Exception raised when file upload fails"""

    def __init__(
        self,
        message: str,
        filename: str = None,
        file_type: str = None,
        status_code: int = status.HTTP_400_BAD_REQUEST
    ):
        details = {}
        if filename:
            details["filename"] = filename
        if file_type:
            details["file_type"] = file_type

        super().__init__(
            message=message,
            status_code=status_code,
            details=details
        )


class FileSizeError(FileUploadError):
    """Exception raised when file size exceeds limit"""

    def __init__(self, filename: str, size: int, max_size: int):
        max_mb = max_size // (1024 * 1024)
        message = f"File '{filename}' size ({size} bytes) exceeds maximum allowed size ({max_mb}MB)"
        super().__init__(
            message=message,
            filename=filename,
            file_type="size_limit",
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        )
        self.size = size
        self.max_size = max_size


class FileTypeError(FileUploadError):
    """Exception raised when file type is not allowed"""

    def __init__(self, filename: str, file_type: str, allowed_types: list = None):
        if allowed_types:
            allowed_str = ", ".join(allowed_types)
            message = f"File type '{file_type}' not allowed for '{filename}'. Allowed types: {allowed_str}"
        else:
            message = f"File type '{file_type}' not allowed for '{filename}'"

        super().__init__(
            message=message,
            filename=filename,
            file_type=file_type,
            status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
        )


class DatabaseError(AdminError):
    """Exception raised when database operation fails"""

    def __init__(self, message: str, operation: str = None):
        details = {}
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details
        )


class RemoteSyncError(AdminError):
    """Exception raised when the admin client cannot reach or save to the API"""

    def __init__(self, message: str, status_code: int = status.HTTP_503_SERVICE_UNAVAILABLE, details: dict = None):
        super().__init__(message=message, status_code=status_code, details=details)


class FormStateError(AdminError):
    """Exception raised on an invalid form modal transition"""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=status.HTTP_409_CONFLICT)


def create_error_response(error: AdminError) -> dict:
    """
    Create a standardized error response from AdminError

    Args:
        error: AdminError instance

    Returns:
        Dictionary with error details in standardized format
    """
    response = {
        "message": error.message,
        "status": False,
        "error_type": error.__class__.__name__
    }

    if error.details:
        response["details"] = error.details

    return response


def error_from_envelope(error_type: str, message: str, status_code: int, details: Optional[Dict[str, Any]] = None) -> AdminError:
    """
    Rebuild an AdminError received in an API error body

    The server's message is kept as is; the class is picked by
    ``error_type`` and falls back to the HTTP status.
    """
    error_classes = {cls.__name__: cls for cls in _all_subclasses(AdminError)}
    cls = error_classes.get(error_type)
    if cls is None:
        if status_code == status.HTTP_404_NOT_FOUND:
            cls = RecordNotFoundError
        elif status_code == status.HTTP_409_CONFLICT:
            cls = ConfirmationRequiredError
        elif status_code in (status.HTTP_400_BAD_REQUEST, status.HTTP_422_UNPROCESSABLE_ENTITY):
            cls = RecordValidationError
        elif status_code >= 500:
            cls = RemoteSyncError
        else:
            cls = AdminError

    error = cls.__new__(cls)
    AdminError.__init__(error, message=message, status_code=status_code, details=details)
    return error


def _all_subclasses(cls):
    for subclass in cls.__subclasses__():
        yield subclass
        yield from _all_subclasses(subclass)
