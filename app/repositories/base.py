from typing import Generic, TypeVar, Type, Optional, Any, Dict, Union
from uuid import UUID
from sqlalchemy.orm import Session
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.db.models.declarations import Base
from app.core.errors import PersistenceError

logger = logging.getLogger("smartvault")

# Generic types
ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class BaseRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Base repository with CRUD operations.

    Database failures are rolled back and re-raised as PersistenceError.
    """

    def __init__(self, model: Type[ModelType]):
        """Bind the repository to a SQLAlchemy model"""
        self.model = model

    def get(self, db: Session, id: UUID) -> Optional[ModelType]:
        """Get a record by id"""
        try:
            return db.query(self.model).filter(self.model.id == id).first()
        except SQLAlchemyError as e:
            logger.error(f"Error in get: {e}")
            db.rollback()
            raise PersistenceError(cause=str(e)) from e

    def create(
        self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """Create a record"""
        try:
            if isinstance(obj_in, dict):
                obj_data = obj_in
            else:
                obj_data = obj_in.model_dump(exclude_unset=True)

            db_obj = self.model(**obj_data)
            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            logger.error(f"Error in create: {e}")
            db.rollback()
            raise PersistenceError(cause=str(e)) from e

    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]],
    ) -> ModelType:
        """Update an existing record"""
        try:
            if isinstance(obj_in, dict):
                update_data = obj_in
            else:
                update_data = obj_in.model_dump(exclude_unset=True)

            for field in update_data:
                if hasattr(db_obj, field):
                    setattr(db_obj, field, update_data[field])

            db.add(db_obj)
            db.commit()
            db.refresh(db_obj)
            return db_obj
        except SQLAlchemyError as e:
            logger.error(f"Error in update: {e}")
            db.rollback()
            raise PersistenceError(cause=str(e)) from e

    def remove(self, db: Session, *, id: UUID) -> Optional[ModelType]:
        """Delete a record"""
        try:
            obj = db.get(self.model, id)
            if obj:
                db.delete(obj)
                db.commit()
            return obj
        except SQLAlchemyError as e:
            logger.error(f"Error in remove: {e}")
            db.rollback()
            raise PersistenceError(cause=str(e)) from e
