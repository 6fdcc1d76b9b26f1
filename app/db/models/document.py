from datetime import datetime

from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship

from app.db.models.declarations import Base, BaseModel


class Document(Base, BaseModel):
    """SQLAlchemy model for uploaded documents"""

    __tablename__ = "documents"

    owner_id = Column(
        Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True
    )
    title = Column(Text, nullable=False)
    category = Column(Text, nullable=False, default="General")
    file_url = Column(String(1024), nullable=False)
    expiry_date = Column(DateTime, nullable=True)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
    extracted_text = Column(Text, nullable=True, default="")
    original_file_name = Column(Text, nullable=True)
    file_size = Column(Integer, nullable=True)
    mime_type = Column(String(255), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="documents")

    @property
    def is_image(self) -> bool:
        return bool(self.mime_type) and self.mime_type.startswith("image/")
