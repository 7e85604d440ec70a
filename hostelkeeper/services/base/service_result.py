"""
Result objects for batch operations that report failures instead of raising.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar


class ErrorSeverity(str, Enum):
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    """Failure description carried by an unsuccessful result."""

    code: str
    message: str
    severity: ErrorSeverity = ErrorSeverity.ERROR
    details: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Outcome of a batch operation.

    ``data`` is set on success and may hold partial progress on failure,
    so callers can report how far a run got.
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None

    @classmethod
    def success(cls, data: Optional[TData] = None, message: Optional[str] = None) -> "ServiceResult[TData]":
        return cls(is_success=True, data=data, message=message)

    @classmethod
    def failure(cls, error: ServiceError, data: Optional[TData] = None) -> "ServiceResult[TData]":
        return cls(is_success=False, data=data, error=error, message=error.message)
