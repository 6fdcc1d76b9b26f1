# app/routes/documents.py
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from app.core.errors import MissingFile, VaultError
from app.db.base import get_db
from app.dependencies import get_current_user_id, get_document_service
from app.schemas.database_schemas import (
    DocumentDB,
    DocumentUpdate,
    ReprocessResponse,
    UploadedDocument,
    UploadResponse,
)
from app.services.categorizer import normalize_optional
from app.services.document_service import DocumentService
from app.utils.upload_helper import parse_expiry_date, read_upload

logger = logging.getLogger("smartvault")

router = APIRouter()


@router.post("/upload", response_model=UploadResponse, status_code=201)
async def upload_document(
    file: Optional[UploadFile] = File(None),
    title: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    expiry_date: Optional[str] = Form(None, alias="expiryDate"),
    owner_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    service: DocumentService = Depends(get_document_service),
):
    """Upload a document with OCR and auto-categorization"""
    # Validation happens before any storage or OCR work
    blob = await read_upload(file)
    if blob is None:
        raise MissingFile()
    expiry = parse_expiry_date(expiry_date)

    try:
        outcome = await service.upload(
            db,
            blob,
            owner_id,
            title=normalize_optional(title),
            category=normalize_optional(category),
            expiry_date=expiry,
        )
    except VaultError:
        raise
    except Exception as e:
        logger.error(f"Upload error: {e}", exc_info=True)
        raise VaultError("Error uploading document", cause=str(e)) from e

    doc = UploadedDocument.model_validate(outcome.document).model_copy(
        update={
            "ocr_processed": outcome.ocr_processed,
            "auto_categorized": outcome.auto_categorized,
        }
    )
    return UploadResponse(doc=doc)


@router.get("", response_model=List[DocumentDB])
async def list_documents(
    category: Optional[str] = None,
    search: Optional[str] = None,
    owner_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    service: DocumentService = Depends(get_document_service),
):
    """List the user's documents, newest first"""
    return service.list_documents(db, owner_id, category=category, search=search)


@router.get("/{document_id}", response_model=DocumentDB)
async def get_document(
    document_id: UUID,
    owner_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    service: DocumentService = Depends(get_document_service),
):
    """Get one document"""
    return service.get(db, document_id, owner_id)


@router.put("/{document_id}", response_model=DocumentDB)
async def update_document(
    document_id: UUID,
    changes: DocumentUpdate,
    owner_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    service: DocumentService = Depends(get_document_service),
):
    """Update a document's title or category"""
    return service.update(
        db, document_id, owner_id, title=changes.title, category=changes.category
    )


@router.delete("/{document_id}")
async def delete_document(
    document_id: UUID,
    owner_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    service: DocumentService = Depends(get_document_service),
):
    """Delete a document and, best effort, its stored file"""
    await service.delete(db, document_id, owner_id)
    return {"message": "Document deleted successfully"}


# Reprocess stays on the DELETE verb
@router.delete("/{document_id}/reprocess", response_model=ReprocessResponse)
async def reprocess_document(
    document_id: UUID,
    owner_id: UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    service: DocumentService = Depends(get_document_service),
):
    """Run OCR again on an image document"""
    try:
        doc = await service.reprocess(db, document_id, owner_id)
    except VaultError:
        raise
    except Exception as e:
        logger.error(f"Reprocess error: {e}", exc_info=True)
        raise VaultError("Error reprocessing document", cause=str(e)) from e

    return ReprocessResponse(
        doc=DocumentDB.model_validate(doc),
        extracted_text=doc.extracted_text or "",
        new_category=doc.category,
    )
