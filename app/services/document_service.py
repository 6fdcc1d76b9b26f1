import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.core.errors import (
    MissingFile,
    NotAuthorized,
    NotFound,
    UnsupportedMediaType,
)
from app.db.models.document import Document
from app.models.blob import UploadedBlob
from app.repositories.document_repository import document_repository
from app.services.categorizer import DEFAULT_CATEGORY, categorize, resolve_category
from app.services.ocr_service import OcrService
from app.services.storage_service import StorageService

logger = logging.getLogger("smartvault")

UNTITLED = "Untitled Document"


@dataclass
class UploadOutcome:
    document: Document
    ocr_processed: bool
    auto_categorized: bool


class DocumentService:
    """
    Document ingestion and ownership-checked CRUD.

    Storage and OCR clients are injected so they can be replaced in tests.
    """

    def __init__(self, storage: StorageService, ocr: OcrService, folder: str):
        self.storage = storage
        self.ocr = ocr
        self.folder = folder

    async def upload(
        self,
        db: Session,
        blob: Optional[UploadedBlob],
        owner_id: UUID,
        *,
        title: Optional[str] = None,
        category: Optional[str] = None,
        expiry_date: Optional[datetime] = None,
    ) -> UploadOutcome:
        """
        Store a file, OCR it when it is an image and record its metadata.

        A failed OCR never fails the upload. The stored blob is not removed
        if a later step fails.
        """
        if blob is None:
            raise MissingFile()

        stored = await run_in_threadpool(self.storage.upload, blob, self.folder)

        extracted_text = ""
        if blob.is_image:
            try:
                logger.info(f"Running OCR on uploaded image {blob.filename}")
                extracted_text = await self.ocr.extract_text(stored.secure_url)
            except Exception as e:
                logger.warning(f"OCR processing failed for {blob.filename}: {e}")
                extracted_text = ""

        resolved_category = resolve_category(category, extracted_text)
        if category is None and resolved_category != DEFAULT_CATEGORY:
            logger.info(f"Auto-categorized {blob.filename} as {resolved_category}")

        document = document_repository.create(
            db,
            obj_in={
                "owner_id": owner_id,
                "title": title or blob.filename or UNTITLED,
                "category": resolved_category,
                "file_url": stored.secure_url,
                "extracted_text": extracted_text,
                "expiry_date": expiry_date,
                "original_file_name": blob.filename,
                "file_size": blob.size,
                "mime_type": blob.content_type,
            },
        )
        logger.info(f"Document uploaded: {document.id} by {owner_id}")

        return UploadOutcome(
            document=document,
            ocr_processed=blob.is_image and len(extracted_text) > 0,
            auto_categorized=category is None and resolved_category != DEFAULT_CATEGORY,
        )

    async def reprocess(
        self, db: Session, document_id: UUID, caller_id: UUID
    ) -> Document:
        """Run OCR again on a stored image and recategorize it"""
        document = self.get(db, document_id, caller_id)

        if not document.is_image:
            raise UnsupportedMediaType()

        extracted_text = await self.ocr.extract_text(document.file_url)
        new_category = categorize(extracted_text)

        document = document_repository.update(
            db,
            db_obj=document,
            obj_in={
                "extracted_text": extracted_text,
                "category": new_category,
                "updated_at": datetime.utcnow(),
            },
        )
        logger.info(f"Document reprocessed: {document.id} -> {new_category}")
        return document

    def list_documents(
        self,
        db: Session,
        owner_id: UUID,
        *,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Document]:
        return document_repository.get_by_owner(
            db, owner_id, category=category, search=search
        )

    def get(self, db: Session, document_id: UUID, caller_id: UUID) -> Document:
        """Fetch a document the caller owns"""
        document = document_repository.get(db, document_id)
        if not document:
            raise NotFound()
        if document.owner_id != caller_id:
            raise NotAuthorized()
        return document

    def update(
        self,
        db: Session,
        document_id: UUID,
        caller_id: UUID,
        *,
        title: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Document:
        document = self.get(db, document_id, caller_id)

        changes = {"updated_at": datetime.utcnow()}
        if title:
            changes["title"] = title
        if category:
            changes["category"] = category

        return document_repository.update(db, db_obj=document, obj_in=changes)

    async def delete(self, db: Session, document_id: UUID, caller_id: UUID) -> None:
        """Delete the metadata; the stored file is removed on a best-effort basis"""
        document = self.get(db, document_id, caller_id)

        try:
            public_id = self.storage.public_id_from_url(document.file_url, self.folder)
            await run_in_threadpool(self.storage.destroy, public_id)
        except Exception as e:
            logger.warning(f"Failed to delete stored file for document {document.id}: {e}")

        document_repository.remove(db, id=document.id)
        logger.info(f"Document deleted: {document_id}")
