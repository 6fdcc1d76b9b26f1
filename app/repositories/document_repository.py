from typing import Optional, List
from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.core.errors import PersistenceError
from app.db.models.document import Document
from app.repositories.base import BaseRepository
from app.schemas.database_schemas import DocumentCreate, DocumentUpdate

logger = logging.getLogger("smartvault")

ALL_CATEGORIES = "all"


class DocumentRepository(BaseRepository[Document, DocumentCreate, DocumentUpdate]):
    def get_by_owner(
        self,
        db: Session,
        owner_id: UUID,
        *,
        category: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Document]:
        """Get an owner's documents, newest first, optionally filtered"""
        try:
            query = db.query(Document).filter(Document.owner_id == owner_id)

            if category and category != ALL_CATEGORIES:
                query = query.filter(Document.category == category)

            # Literal, case-insensitive substring on title or extracted text
            if search:
                query = query.filter(
                    or_(
                        Document.title.icontains(search, autoescape=True),
                        func.coalesce(Document.extracted_text, "").icontains(
                            search, autoescape=True
                        ),
                    )
                )

            return query.order_by(Document.created_at.desc()).all()
        except SQLAlchemyError as e:
            logger.error(f"Error in get_by_owner: {e}")
            db.rollback()
            raise PersistenceError(cause=str(e)) from e


# Repository instance
document_repository = DocumentRepository(Document)
