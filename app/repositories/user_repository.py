from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.core.errors import PersistenceError
from app.db.models.user import User
from app.repositories.base import BaseRepository
from app.schemas.database_schemas import UserCreate

logger = logging.getLogger("smartvault")


class UserRepository(BaseRepository[User, UserCreate, UserCreate]):
    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        """Get a user by email"""
        try:
            return db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"Error in get_by_email: {e}")
            db.rollback()
            raise PersistenceError(cause=str(e)) from e

    def create_with_hashed_password(
        self, db: Session, *, obj_in: UserCreate, hashed_password: str
    ) -> User:
        """Create a user with an already hashed password"""
        user_data = obj_in.model_dump(exclude={"password"})
        user_data["password_hash"] = hashed_password
        return self.create(db, obj_in=user_data)


# Repository instance
user_repository = UserRepository(User)
