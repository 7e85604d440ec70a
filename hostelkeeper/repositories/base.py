"""
Base repository with the CRUD operations shared by every domain repository.
"""

from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from hostelkeeper.core.exceptions import ResourceNotFoundError
from hostelkeeper.core.logging import get_logger
from hostelkeeper.models.base import BaseModel

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Repository over one model class.

    Repositories flush but never commit; the calling service owns the
    transaction.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    # ==================== Read Operations ====================

    def find_by_id(self, id: Any, for_update: bool = False) -> Optional[ModelType]:
        """Find entity by ID, optionally locking the row."""
        if id is None:
            return None
        stmt = select(self.model).where(self.model.id == id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.db.scalars(stmt).first()

    def get_by_id(self, id: Any, for_update: bool = False) -> ModelType:
        """
        Get entity by ID or raise.

        Raises:
            ResourceNotFoundError: If entity not found
        """
        entity = self.find_by_id(id, for_update=for_update)
        if entity is None:
            raise ResourceNotFoundError(self.model.__name__, str(id) if id is not None else None)
        return entity

    def find_all(self, *criteria, order_by=None, skip: int = 0, limit: Optional[int] = None) -> List[ModelType]:
        stmt = select(self.model).where(*criteria)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.scalars(stmt).all())

    def find_one(self, *criteria) -> Optional[ModelType]:
        return self.db.scalars(select(self.model).where(*criteria).limit(1)).first()

    def count(self, *criteria) -> int:
        return self.db.scalar(select(func.count()).select_from(self.model).where(*criteria)) or 0

    # ==================== Write Operations ====================

    def add(self, entity: ModelType) -> ModelType:
        """Add and flush so generated columns are populated."""
        self.db.add(entity)
        self.db.flush()
        logger.debug(f"Added {self.model.__name__} with id: {entity.id}")
        return entity

    def try_insert(self, entity: ModelType) -> bool:
        """
        Insert inside a SAVEPOINT.

        Returns False, leaving the outer transaction intact, when a unique
        constraint rejects the row.
        """
        try:
            with self.db.begin_nested():
                self.db.add(entity)
        except IntegrityError:
            logger.debug(f"{self.model.__name__} insert rejected by unique constraint")
            return False
        return True

    def delete(self, entity: ModelType) -> None:
        self.db.delete(entity)
        self.db.flush()
        logger.debug(f"Deleted {self.model.__name__} with id: {entity.id}")
