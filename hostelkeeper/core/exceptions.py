"""
Custom Exceptions for the hostel management backend

Every exception carries a human readable message, a stable error code and
the HTTP status the API layer answers with.
"""

from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"

    # Authentication & Authorization
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    AUTHORIZATION_FAILED = "AUTHORIZATION_FAILED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_DATE = "INVALID_DATE"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"

    # Conflicts
    CONFLICT = "CONFLICT"
    ALREADY_MARKED = "ALREADY_MARKED"
    DUPLICATE_REPORT = "DUPLICATE_REPORT"
    INVALID_STATE_TRANSITION = "INVALID_STATE_TRANSITION"

    # Business logic errors
    NOT_APPROVED = "NOT_APPROVED"
    CAPACITY_EXCEEDED = "CAPACITY_EXCEEDED"
    GENDER_MISMATCH = "GENDER_MISMATCH"
    LOCATION_NOT_VERIFIED = "LOCATION_NOT_VERIFIED"

    # External service errors
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Validation
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        status_code: int = 422
    ):
        details = {"field_errors": field_errors} if field_errors else {}
        super().__init__(message, error_code, details, status_code)


class InvalidDateError(ValidationError):
    """Attendance may only be marked for the current day"""

    def __init__(self, requested: date, today: date):
        super().__init__(
            "Attendance can only be marked for the current date.",
            error_code=ErrorCode.INVALID_DATE,
            status_code=400,
        )
        self.details = {"requested": requested.isoformat(), "today": today.isoformat()}


class InvalidDateRangeError(ValidationError):
    def __init__(self, start: date, end: date):
        super().__init__(
            "End date must not be before start date",
            error_code=ErrorCode.INVALID_DATE_RANGE,
        )
        self.details = {"start": start.isoformat(), "end": end.isoformat()}


# ========================================
# Not found
# ========================================

class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, ErrorCode.RESOURCE_NOT_FOUND, details, 404)


# ========================================
# Conflicts
# ========================================

class ConflictError(BaseAppException):
    """Exception raised when an operation conflicts with current state"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFLICT,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details, 409)


class AlreadyMarkedError(ConflictError):
    def __init__(self, user_id: str, day: date):
        super().__init__(
            "Attendance already marked for this date",
            ErrorCode.ALREADY_MARKED,
            {"user_id": user_id, "date": day.isoformat()},
        )


class DuplicateReportError(ConflictError):
    def __init__(self, student_id: str, leave_request_id: Optional[str]):
        super().__init__(
            "Return already reported for this leave request",
            ErrorCode.DUPLICATE_REPORT,
            {"student_id": student_id, "leave_request_id": leave_request_id},
        )


class InvalidStateTransitionError(ConflictError):
    def __init__(self, resource_type: str, current: str, requested: str):
        super().__init__(
            f"{resource_type} already processed (status: {current})",
            ErrorCode.INVALID_STATE_TRANSITION,
            {"resource_type": resource_type, "current": current, "requested": requested},
        )


# ========================================
# Business rules
# ========================================

class BusinessRuleError(BaseAppException):
    """Base for rejected operations that are neither conflicts nor bad input"""

    def __init__(self, message: str, error_code: ErrorCode, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details, 400)


class NotApprovedError(BusinessRuleError):
    def __init__(self, leave_request_id: str, status: str):
        super().__init__(
            "Leave is not approved",
            ErrorCode.NOT_APPROVED,
            {"leave_request_id": leave_request_id, "status": status},
        )


class CapacityExceededError(BusinessRuleError):
    def __init__(self, room_id: str, capacity: int):
        super().__init__(
            "Room full",
            ErrorCode.CAPACITY_EXCEEDED,
            {"room_id": room_id, "capacity": capacity},
        )


class GenderMismatchError(BusinessRuleError):
    def __init__(self, student_gender: Optional[str], room_gender: str):
        super().__init__(
            "Gender mismatch between student and room",
            ErrorCode.GENDER_MISMATCH,
            {"student_gender": student_gender, "room_gender": room_gender},
        )


class LocationNotVerifiedError(BusinessRuleError):
    def __init__(self, latitude: float, longitude: float):
        super().__init__(
            "Location verification failed. You must be on campus to mark attendance.",
            ErrorCode.LOCATION_NOT_VERIFIED,
            {"latitude": latitude, "longitude": longitude, "location_verified": False},
        )


# ========================================
# Authentication & Authorization
# ========================================

class AuthenticationError(BaseAppException):
    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, ErrorCode.AUTHENTICATION_FAILED, status_code=401)


class AuthorizationError(BaseAppException):
    def __init__(self, message: str = "Forbidden", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.AUTHORIZATION_FAILED, details, 403)


# ========================================
# External services
# ========================================

class ExternalServiceError(BaseAppException):
    """Exception raised when an external service call fails"""

    def __init__(
        self,
        service_name: str,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        message = message or f"{service_name} request failed"
        details = {"service": service_name, **(details or {})}
        super().__init__(message, ErrorCode.EXTERNAL_SERVICE_ERROR, details, 502)
        self.service_name = service_name
