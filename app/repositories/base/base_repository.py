"""
Base repository with standardized CRUD operations and error handling.

Repositories never commit: the calling service owns the transaction so
that inventory changes and booking rows succeed or fail together.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ResourceNotFoundError, handle_database_exception
from app.core.logging import get_logger
from app.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with standardized operations.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # ==================== Create Operations ====================

    def create(self, entity: ModelType) -> ModelType:
        """
        Add an entity to the session and flush it so its id is assigned.

        Raises:
            PersistenceError: If the store rejects the insert
        """
        try:
            self.db.add(entity)
            self.db.flush()
            logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
            return entity
        except SQLAlchemyError as e:
            raise handle_database_exception(e, f"create {self.model.__name__}") from e

    # ==================== Read Operations ====================

    def find_by_id(self, id: UUID) -> Optional[ModelType]:
        """
        Find entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity or None
        """
        try:
            return self.db.get(self.model, id)
        except SQLAlchemyError as e:
            raise handle_database_exception(e, f"find {self.model.__name__}") from e

    def get_by_id(self, id: UUID) -> ModelType:
        """
        Get entity by ID or raise exception.

        Raises:
            ResourceNotFoundError: If entity not found
        """
        entity = self.find_by_id(id)
        if not entity:
            raise ResourceNotFoundError(self.model.__name__, str(id))
        return entity

    def find_by_criteria(
        self,
        criteria: Dict[str, Any],
        skip: int = 0,
        limit: Optional[int] = 100,
        order_by: Optional[List[str]] = None,
    ) -> List[ModelType]:
        """
        Find entities matching criteria.

        Args:
            criteria: Filter criteria as key-value pairs (None values are skipped)
            skip: Number of records to skip
            limit: Maximum number of records
            order_by: List of fields to order by (prefix with - for desc)

        Returns:
            List of matching entities
        """
        stmt = select(self.model)

        for key, value in criteria.items():
            if value is None or not hasattr(self.model, key):
                continue
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple, set, frozenset)):
                stmt = stmt.where(column.in_(list(value)))
            else:
                stmt = stmt.where(column == value)

        for field in order_by or []:
            if field.startswith('-'):
                stmt = stmt.order_by(getattr(self.model, field[1:]).desc())
            else:
                stmt = stmt.order_by(getattr(self.model, field))

        if skip:
            stmt = stmt.offset(skip)
        if limit:
            stmt = stmt.limit(limit)

        try:
            return list(self.db.execute(stmt).scalars().all())
        except SQLAlchemyError as e:
            raise handle_database_exception(e, f"query {self.model.__name__}") from e

    def find_one_by_criteria(self, criteria: Dict[str, Any]) -> Optional[ModelType]:
        results = self.find_by_criteria(criteria, limit=1)
        return results[0] if results else None

    # ==================== Count Operations ====================

    def count(self, criteria: Optional[Dict[str, Any]] = None) -> int:
        stmt = select(func.count(self.model.id))
        for key, value in (criteria or {}).items():
            if value is None or not hasattr(self.model, key):
                continue
            stmt = stmt.where(getattr(self.model, key) == value)
        try:
            return self.db.execute(stmt).scalar_one()
        except SQLAlchemyError as e:
            raise handle_database_exception(e, f"count {self.model.__name__}") from e

    def exists(self, criteria: Dict[str, Any]) -> bool:
        return self.count(criteria) > 0

    # ==================== Session Helpers ====================

    def flush(self) -> None:
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            raise handle_database_exception(e, f"flush {self.model.__name__}") from e

    def refresh(self, entity: ModelType) -> ModelType:
        self.db.refresh(entity)
        return entity
