import uuid
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from uuid import UUID

import bcrypt
import jwt
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.config import settings
from app.core.errors import InvalidCredentials, ValidationError
from app.db.models.user import User
from app.repositories.user_repository import user_repository
from app.schemas.database_schemas import UserCreate

logger = logging.getLogger("smartvault")


class TokenData(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime


class AuthService:
    """Registration, login and bearer tokens"""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60 * 24 * 30,
        bcrypt_rounds: int = 12,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.bcrypt_rounds = bcrypt_rounds

    # Passwords
    def get_password_hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except ValueError:
            # Malformed hash in the database
            return False

    # Tokens
    def create_access_token(self, user_id: UUID) -> TokenData:
        """Sign a bearer token carrying the user id"""
        now = datetime.now(timezone.utc)
        expires_at = now + timedelta(minutes=self.expire_minutes)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": expires_at,
            "jti": uuid.uuid4().hex,
        }
        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return TokenData(access_token=token, expires_at=expires_at)

    def decode_access_token(self, token: str) -> Optional[str]:
        """Return the user id of a valid token, None otherwise"""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            logger.debug(f"Rejected token: {e}")
            return None

        user_id = payload.get("sub")
        try:
            return str(UUID(user_id)) if user_id else None
        except ValueError:
            return None

    # Users
    def register(self, db: Session, user_data: UserCreate) -> Tuple[User, TokenData]:
        """Create a user and return it with a fresh token"""
        if not user_data.name or not user_data.email or not user_data.password:
            raise ValidationError("All fields are required")

        # bcrypt only accepts up to 72 bytes
        if len(user_data.password.encode("utf-8")) > 72:
            raise ValidationError("Password is too long")

        if user_repository.get_by_email(db, user_data.email):
            raise ValidationError("User already exists")

        user = user_repository.create_with_hashed_password(
            db,
            obj_in=user_data,
            hashed_password=self.get_password_hash(user_data.password),
        )
        logger.info(f"User registered: {user.id}")
        return user, self.create_access_token(user.id)

    def authenticate(
        self, db: Session, email: Optional[str], password: Optional[str]
    ) -> Tuple[User, TokenData]:
        """Check credentials and return the user with a fresh token"""
        if not email or not password:
            raise ValidationError("All fields are required")

        user = user_repository.get_by_email(db, email)
        if not user or not self.verify_password(password, user.password_hash):
            raise InvalidCredentials()

        return user, self.create_access_token(user.id)

    def get_user_by_id(self, db: Session, user_id: str) -> Optional[User]:
        return user_repository.get(db, UUID(user_id))


# Global instance
auth_service = AuthService(
    settings.JWT_SECRET_KEY,
    algorithm=settings.JWT_ALGORITHM,
    expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    bcrypt_rounds=settings.BCRYPT_ROUNDS,
)
