"""
Base service class providing common functionality for all services.
"""

import time
from typing import TypeVar, Generic, Optional, Dict, Any
from abc import ABC
from contextlib import contextmanager
from functools import wraps

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.core.events import BaseEvent, EventBus, event_bus as default_event_bus
from app.core.exceptions import BaseAppException, PersistenceError, handle_database_exception
from app.core.logging import get_logger
from app.repositories.base.base_repository import BaseRepository
from app.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)

logger = get_logger(__name__)


TModel = TypeVar("TModel")
TRepo = TypeVar("TRepo", bound=BaseRepository)


def track_performance(operation_name: str):
    """Decorator to track operation performance."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
                duration = time.perf_counter() - start_time
                logger.info(
                    f"Operation '{operation_name}' completed in {duration:.3f}s",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                        "is_success": getattr(result, "is_success", True),
                    }
                )
                return result
            except Exception as e:
                duration = time.perf_counter() - start_time
                logger.error(
                    f"Operation '{operation_name}' failed after {duration:.3f}s: {str(e)}",
                    extra={
                        "operation": operation_name,
                        "duration_seconds": duration,
                    },
                    exc_info=True
                )
                raise
        return wrapper
    return decorator


def _field_errors(exc: PydanticValidationError) -> Dict[str, list]:
    errors: Dict[str, list] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
        errors.setdefault(field, []).append(err.get("msg", "invalid value"))
    return errors


class BaseService(ABC, Generic[TModel, TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Consistent error handling via ServiceResult
    - Transaction management utilities
    - Domain event publication after commit
    """

    def __init__(
        self,
        repository: TRepo,
        db_session: Session,
        event_bus: Optional[EventBus] = None,
    ):
        """
        Initialize base service.

        Args:
            repository: Repository instance for data access
            db_session: SQLAlchemy database session
            event_bus: Bus receiving domain events (defaults to the global bus)
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self.event_bus: EventBus = event_bus or default_event_bus
        self._logger = get_logger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Roll back and convert an exception to a ServiceResult failure.

        Client errors (application exceptions, input validation) are logged
        at WARNING; persistence and unexpected failures at ERROR.
        """
        self._rollback()

        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }
        if additional_context:
            context.update(additional_context)

        if isinstance(exception, SQLAlchemyError):
            exception = handle_database_exception(exception, operation)

        if isinstance(exception, PersistenceError):
            self._logger.error(
                f"Persistence failure during {operation}",
                exc_info=True,
                extra=context,
            )
            return ServiceResult.failure(
                ServiceError.from_app_exception(exception, ErrorSeverity.ERROR)
            )

        if isinstance(exception, BaseAppException):
            self._logger.warning(
                f"{operation} rejected: {exception.message}",
                extra={**context, "error_code": exception.error_code.value},
            )
            return ServiceResult.failure(ServiceError.from_app_exception(exception))

        if isinstance(exception, PydanticValidationError):
            self._logger.warning(f"{operation} rejected: invalid input", extra=context)
            return ServiceResult.validation_failure(
                "Validation failed",
                details={"field_errors": _field_errors(exception)},
            )

        if isinstance(exception, ValueError):
            self._logger.warning(f"{operation} rejected: {exception}", extra=context)
            return ServiceResult.validation_failure(str(exception))

        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra=context,
        )
        return ServiceResult.failure(
            ServiceError(
                code=ErrorCode.INTERNAL_ERROR,
                message=f"Failed to {operation}",
                severity=ErrorSeverity.CRITICAL,
                details={"entity_ref": context["entity_ref"]},
            )
        )

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self):
        """
        Context manager for database transactions with automatic rollback.

        Example:
            with self.transaction():
                self.repository.create(entity)
                # automatic commit on success, rollback on exception
        """
        try:
            yield self.db
            self._commit()
        except Exception:
            self._rollback()
            raise

    def _commit(self) -> None:
        """Commit the current transaction, mapping store failures."""
        try:
            self.db.commit()
            self._logger.debug("Transaction committed successfully")
        except SQLAlchemyError as e:
            self._rollback()
            raise handle_database_exception(e, "commit") from e

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            # Log but don't raise - rollback errors should not mask original error
            self._logger.warning(f"Rollback failed: {e}")

    # -------------------------------------------------------------------------
    # Events & Logging
    # -------------------------------------------------------------------------

    def _publish(self, event: BaseEvent) -> None:
        """Publish a domain event; call only after the transaction committed."""
        self.event_bus.publish(event)

    def _log_operation(
        self,
        operation: str,
        entity_ref: Optional[Any] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log service operation with standardized format.
        """
        context = {"entity_ref": str(entity_ref) if entity_ref else None}
        if extra:
            context.update(extra)

        self._logger.info(f"Operation: {operation}", extra=context)
