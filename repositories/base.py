"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

import logging
from typing import Any, Dict, Generic, TypeVar, Optional, Type
from uuid import UUID
from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from abc import ABC

from app.exceptions import ConflictError

ModelType = TypeVar("ModelType")

logger = logging.getLogger("petmeal.repositories")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.
    All repositories should inherit from this class.

    Writes are single statements committed immediately; an IntegrityError
    is rolled back and re-raised as ConflictError with the subclass's
    message for that operation.
    """

    create_conflict_message = "Record conflicts with an existing record"
    update_conflict_message = "Update conflicts with an existing record"
    delete_conflict_message = "Record is still referenced"

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        """Get entity by primary key"""
        return self.db.get(self.model, entity_id)

    def exists(self, entity_id: UUID) -> bool:
        """Check if entity exists"""
        return self.get_by_id(entity_id) is not None

    def create(self, entity: ModelType) -> ModelType:
        """Insert new entity"""
        try:
            self.db.add(entity)
            self.db.commit()
        except IntegrityError as e:
            self._raise_conflict(e, self.create_conflict_message)
        self.db.refresh(entity)
        return entity

    def update_fields(self, entity_id: UUID, values: Dict[str, Any]) -> bool:
        """
        Write ``values`` onto one row in a single UPDATE.

        Returns:
            False if no row has that id
        """
        stmt = (
            update(self.model)
            .where(self.model.id == entity_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except IntegrityError as e:
            self._raise_conflict(e, self.update_conflict_message)
        return result.rowcount > 0

    def delete_by_id(self, entity_id: UUID) -> bool:
        """Hard delete by id; False if no row has that id"""
        stmt = delete(self.model).where(self.model.id == entity_id)
        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except IntegrityError as e:
            self._raise_conflict(e, self.delete_conflict_message)
        return result.rowcount > 0

    def _raise_conflict(self, error: IntegrityError, message: str):
        self.db.rollback()
        logger.warning(f"{self.model.__name__} write rejected by store: {error.orig}")
        raise ConflictError(message, details=str(error.orig)) from error
