from functools import lru_cache
from uuid import UUID

from fastapi import Depends, HTTPException, Request

from app.config import settings
from app.services.document_service import DocumentService
from app.services.ocr_service import OcrService
from app.services.storage_service import StorageService


@lru_cache
def get_storage_service() -> StorageService:
    return StorageService.from_settings()


@lru_cache
def get_ocr_service() -> OcrService:
    return OcrService.from_settings()


def get_document_service(
    storage: StorageService = Depends(get_storage_service),
    ocr: OcrService = Depends(get_ocr_service),
) -> DocumentService:
    return DocumentService(storage, ocr, settings.STORAGE_FOLDER)


def get_current_user(request: Request) -> dict:
    """
    Authenticated user stored by the auth middleware.

    The middleware already verified the token and set request.state.user.
    """
    if not getattr(request.state, "user", None):
        raise HTTPException(status_code=401, detail="Not authorized, no token")
    return request.state.user


def get_current_user_id(user: dict = Depends(get_current_user)) -> UUID:
    return UUID(user["id"])
