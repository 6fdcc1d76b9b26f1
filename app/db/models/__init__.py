# Ordered imports to avoid circular references
from app.db.models.declarations import Base
from app.db.models.user import User
from app.db.models.document import Document

# Lets create_all see every table
__all__ = [
    "Base",
    "User",
    "Document",
]
