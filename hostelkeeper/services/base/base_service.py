"""
Base service class providing common functionality for all services.
"""

from contextlib import contextmanager
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from hostelkeeper.core.exceptions import BaseAppException, ErrorCode
from hostelkeeper.core.logging import get_logger
from hostelkeeper.core.notifications import Notifier, NullNotifier
from hostelkeeper.services.base.service_result import ErrorSeverity, ServiceError, ServiceResult


class BaseService:
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Transaction management that commits on success and rolls back on error
    - Conversion of unexpected exceptions into ServiceResult failures
    """

    def __init__(self, db_session: Session, notifier: Optional[Notifier] = None):
        self.db: Session = db_session
        self.notifier: Notifier = notifier or NullNotifier()
        self._logger = get_logger(f"hostelkeeper.services.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self):
        """
        Commit on success, roll back and re-raise on any exception.

        Example:
            with self.transaction():
                self.rooms.add(room)
        """
        try:
            yield self.db
            self.db.commit()
        except BaseAppException:
            self._rollback()
            raise
        except Exception as e:
            self._rollback()
            self._logger.error(f"Transaction failed: {e}", exc_info=True)
            raise

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.db.rollback()
        except Exception as e:
            # Rollback errors should not mask the original error
            self._logger.warning(f"Rollback failed: {e}")

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
        data: Optional[Any] = None,
    ) -> ServiceResult:
        """Log an unexpected exception and convert it to a failed result."""
        context: Dict[str, Any] = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }
        self._logger.error(f"Error during {operation}: {exception}", exc_info=True, extra=context)

        code = exception.error_code.value if isinstance(exception, BaseAppException) else ErrorCode.INTERNAL_ERROR.value
        return ServiceResult.failure(
            ServiceError(
                code=code,
                message=f"Failed to {operation}",
                severity=severity,
                details={"error": str(exception), **context},
            ),
            data=data,
        )
