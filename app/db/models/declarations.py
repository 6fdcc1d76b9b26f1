from sqlalchemy import Column, DateTime, Uuid
from sqlalchemy.orm import declarative_base
import uuid
from datetime import datetime

Base = declarative_base()


class BaseModel:
    """Base model with a UUID id and a creation timestamp"""

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
