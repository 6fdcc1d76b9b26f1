from fastapi import APIRouter, HTTPException, Depends
import logging
from sqlalchemy.orm import Session

from app.core.errors import VaultError
from app.db.base import get_db
from app.db.models.user import User
from app.dependencies import get_current_user
from app.schemas.database_schemas import UserCreate, LoginRequest, UserDB
from app.services.auth_service import auth_service, TokenData

logger = logging.getLogger("smartvault")

router = APIRouter()


def _auth_payload(user: User, token_data: TokenData, message: str) -> dict:
    return {
        "status": "success",
        "message": message,
        "user": UserDB.model_validate(user).model_dump(mode="json"),
        "token": token_data.access_token,
        "token_type": token_data.token_type,
        "expires_at": token_data.expires_at.isoformat(),
    }


@router.post("/register", response_model=dict, status_code=201)
async def register_user(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    try:
        user, token_data = auth_service.register(db, user_data)
        return _auth_payload(user, token_data, "User registered successfully")
    except VaultError as ve:
        logger.warning(f"Registration rejected: {ve.message}")
        raise
    except Exception as e:
        logger.error(f"Error in registration: {str(e)}")
        raise HTTPException(status_code=500, detail="Error registering user")


@router.post("/login", response_model=dict)
async def login_user(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Log a user in"""
    try:
        user, token_data = auth_service.authenticate(
            db, login_data.email, login_data.password
        )
        return _auth_payload(user, token_data, "Login successful")
    except VaultError as ve:
        logger.info(f"Login rejected: {ve.message}")
        raise
    except Exception as e:
        logger.error(f"Error in login: {str(e)}")
        raise HTTPException(status_code=500, detail="Error logging in")


@router.get("/me", response_model=dict)
async def get_me(
    current_user: dict = Depends(get_current_user), db: Session = Depends(get_db)
):
    """Current user information"""
    user = auth_service.get_user_by_id(db, current_user["id"])
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return {
        "status": "success",
        "user": UserDB.model_validate(user).model_dump(mode="json"),
    }
