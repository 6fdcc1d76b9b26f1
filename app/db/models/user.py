from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from app.db.models.declarations import Base, BaseModel


class User(Base, BaseModel):
    """SQLAlchemy model for vault users"""

    __tablename__ = "users"

    name = Column(Text, nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # No cascade: deleting a user leaves its documents in place
    documents = relationship("Document", back_populates="owner", lazy="dynamic")
