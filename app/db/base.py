from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.config import settings

# SQLAlchemy engine
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base comes from declarations.py
from app.db.models.declarations import Base  # noqa: E402


def init_db():
    """Check the connection and create missing tables."""
    # Register every model on Base.metadata
    import app.db.models  # noqa: F401

    with engine.connect():
        pass
    Base.metadata.create_all(bind=engine)


# FastAPI dependency
def get_db():
    """Yield a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
