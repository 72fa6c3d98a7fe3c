"""
Custom Exceptions for the Hotel Booking Core

This module defines the exception classes raised by the inventory ledger,
pricing engine, booking lifecycle and refund workflow. Every exception
carries a stable error code and a human-readable message; store-specific
error text is never placed in the message.
"""

from typing import Any, Dict, List, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    OPERATION_FAILED = "OPERATION_FAILED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_DATE_RANGE = "INVALID_DATE_RANGE"

    # Lookup errors
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    HOTEL_NOT_FOUND = "HOTEL_NOT_FOUND"
    REFUND_NOT_FOUND = "REFUND_NOT_FOUND"
    GROUP_BOOKING_NOT_FOUND = "GROUP_BOOKING_NOT_FOUND"

    # Business logic errors
    INSUFFICIENT_INVENTORY = "INSUFFICIENT_INVENTORY"
    NOT_AVAILABLE = "NOT_AVAILABLE"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    CONFLICT = "CONFLICT"

    # Persistence errors
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"


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
# Validation Exceptions
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


class InvalidDateRangeError(BaseAppException):
    """Exception raised when a stay range has no nights"""

    def __init__(
        self,
        message: str = "Check-in date must be before check-out date",
        start_date: Optional[str] = None,
        end_date: Optional[str] = None
    ):
        details = {
            "start_date": start_date,
            "end_date": end_date
        }
        super().__init__(message, ErrorCode.INVALID_DATE_RANGE, details, 422)


# ========================================
# Resource Not Found Exceptions
# ========================================

class ResourceNotFoundError(BaseAppException):
    """
    Exception raised when a requested resource is not found.

    Also used when the caller does not own the resource, so existence
    is never leaked.
    """

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND,
    ):
        if not message:
            message = f"{resource_type} not found"
        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, error_code, details, 404)


class BookingNotFoundError(ResourceNotFoundError):
    def __init__(self, booking_id: Optional[Any] = None):
        super().__init__(
            "Booking",
            str(booking_id) if booking_id is not None else None,
            error_code=ErrorCode.BOOKING_NOT_FOUND,
        )


class HotelNotFoundError(ResourceNotFoundError):
    def __init__(self, hotel_id: Optional[Any] = None):
        super().__init__(
            "Hotel",
            str(hotel_id) if hotel_id is not None else None,
            error_code=ErrorCode.HOTEL_NOT_FOUND,
        )


class RefundNotFoundError(ResourceNotFoundError):
    def __init__(self, refund_id: Optional[Any] = None):
        super().__init__(
            "Refund request",
            str(refund_id) if refund_id is not None else None,
            error_code=ErrorCode.REFUND_NOT_FOUND,
        )


class GroupBookingNotFoundError(ResourceNotFoundError):
    def __init__(self, request_id: Optional[Any] = None):
        super().__init__(
            "Group booking request",
            str(request_id) if request_id is not None else None,
            error_code=ErrorCode.GROUP_BOOKING_NOT_FOUND,
        )


# ========================================
# Business Logic Exceptions
# ========================================

class InsufficientInventoryError(BaseAppException):
    """Exception raised when a reservation would drive a night below zero rooms"""

    def __init__(
        self,
        message: str = "Insufficient inventory for the requested stay",
        hotel_id: Optional[Any] = None,
        date: Optional[Any] = None,
        requested: Optional[int] = None,
        available: Optional[int] = None,
    ):
        details = {
            "hotel_id": str(hotel_id) if hotel_id is not None else None,
            "date": str(date) if date is not None else None,
            "requested": requested,
            "available": available,
        }
        super().__init__(message, ErrorCode.INSUFFICIENT_INVENTORY, details, 409)


class NotAvailableError(BaseAppException):
    """Exception raised when the availability check fails before booking"""

    def __init__(
        self,
        message: str = "Hotel is not available for the requested dates",
        hotel_id: Optional[Any] = None,
        check_in: Optional[Any] = None,
        check_out: Optional[Any] = None,
        rooms: Optional[int] = None,
    ):
        details = {
            "hotel_id": str(hotel_id) if hotel_id is not None else None,
            "check_in": str(check_in) if check_in is not None else None,
            "check_out": str(check_out) if check_out is not None else None,
            "rooms": rooms,
        }
        super().__init__(message, ErrorCode.NOT_AVAILABLE, details, 409)


class InvalidTransitionError(BaseAppException):
    """Exception raised when a status change is not allowed from the current status"""

    def __init__(
        self,
        current_status: Any,
        target_status: Any,
        entity: str = "Booking",
        message: Optional[str] = None,
    ):
        current = getattr(current_status, "value", current_status)
        target = getattr(target_status, "value", target_status)
        if not message:
            message = f"{entity} cannot move from '{current}' to '{target}'"
        details = {
            "entity": entity,
            "current_status": current,
            "target_status": target,
        }
        super().__init__(message, ErrorCode.INVALID_TRANSITION, details, 409)


class ConflictError(BaseAppException):
    def __init__(self, message: str = "Conflicts with existing data", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.CONFLICT, details, 409)


# ========================================
# Persistence Exceptions
# ========================================

class PersistenceError(BaseAppException):
    """Exception raised when the durable store is unavailable or a transaction aborted"""

    def __init__(
        self,
        message: str = "The booking store is temporarily unavailable",
        operation: Optional[str] = None,
    ):
        details = {"operation": operation, "retryable": True}
        super().__init__(message, ErrorCode.PERSISTENCE_FAILURE, details, 503)


# ========================================
# Utility Functions
# ========================================

def handle_database_exception(exc: Exception, operation: Optional[str] = None) -> BaseAppException:
    """Convert database exceptions to application exceptions"""
    error_message = str(exc).lower()

    if "unique constraint" in error_message or "duplicate" in error_message:
        return ConflictError("Conflicts with existing data", {"operation": operation})
    return PersistenceError(operation=operation)


def create_validation_error(field_errors: Dict[str, List[str]]) -> ValidationError:
    """Create a validation error with field-specific errors"""
    total_errors = sum(len(errors) for errors in field_errors.values())
    message = f"Validation failed with {total_errors} error(s)"
    return ValidationError(message, field_errors)


__all__ = [
    'ErrorCode',
    'BaseAppException',
    'ValidationError',
    'InvalidDateRangeError',
    'ResourceNotFoundError',
    'BookingNotFoundError',
    'HotelNotFoundError',
    'RefundNotFoundError',
    'GroupBookingNotFoundError',
    'InsufficientInventoryError',
    'NotAvailableError',
    'InvalidTransitionError',
    'ConflictError',
    'PersistenceError',
    'handle_database_exception',
    'create_validation_error',
]
