from pydantic_settings import BaseSettings
import os
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # General
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "smart-vault-backend"
    VERSION: str = "1.0.0"
    DEBUG: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "t")

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",  # local frontend
        "http://localhost:5173",
        "*" if os.getenv("DEBUG", "False").lower() in ("true", "1", "t") else "",
    ]

    # PostgreSQL
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "vault")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "vault_password")
    POSTGRES_SERVER: str = os.getenv("POSTGRES_SERVER", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "vault_db")

    # SQLAlchemy connection URL, can be replaced as a whole
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        f"postgresql://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_SERVER}:{POSTGRES_PORT}/{POSTGRES_DB}",
    )

    # Security
    JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "temporalsecretkey123456789")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 30  # 30 days
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Object storage (S3 or any S3-compatible endpoint)
    STORAGE_BUCKET: str = os.getenv("STORAGE_BUCKET", "smart-vault")
    STORAGE_REGION: str = os.getenv("STORAGE_REGION", "us-east-1")
    STORAGE_ENDPOINT_URL: Optional[str] = os.getenv("STORAGE_ENDPOINT_URL") or None
    STORAGE_ACCESS_KEY_ID: Optional[str] = os.getenv("STORAGE_ACCESS_KEY_ID") or None
    STORAGE_SECRET_ACCESS_KEY: Optional[str] = (
        os.getenv("STORAGE_SECRET_ACCESS_KEY") or None
    )
    STORAGE_PUBLIC_BASE_URL: Optional[str] = (
        os.getenv("STORAGE_PUBLIC_BASE_URL") or None
    )
    STORAGE_FOLDER: str = os.getenv("STORAGE_FOLDER", "smart-vault")

    # OCR
    TESSERACT_CMD: Optional[str] = os.getenv("TESSERACT_CMD") or None
    OCR_LANGUAGE: str = os.getenv("OCR_LANGUAGE", "eng")
    OCR_FETCH_TIMEOUT: float = float(os.getenv("OCR_FETCH_TIMEOUT", "30"))

    # Uploads
    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB
    ALLOWED_EXTENSIONS: List[str] = ["jpeg", "jpg", "png", "gif", "pdf", "doc", "docx"]
    ALLOWED_MIME_TYPES: List[str] = [
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ]

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE: str = os.getenv("LOG_FILE", "logs/app.log")


# Settings instance
settings = Settings()

# Make sure the log directory exists
os.makedirs(os.path.dirname(settings.LOG_FILE) or ".", exist_ok=True)
