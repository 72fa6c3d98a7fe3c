"""
Base service layer components.

All services follow consistent patterns for:
- Result handling via ServiceResult
- Error management and logging
- Transaction safety
"""

from app.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)

from app.services.base.base_service import BaseService, track_performance


__all__ = [
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    "ErrorSeverity",
    "BaseService",
    "track_performance",
]
