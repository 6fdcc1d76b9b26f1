"""
Shared fixtures.

The app is configured against an in-memory SQLite database, and object
storage and OCR are replaced by the fakes below through FastAPI dependency
overrides.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_FILE", "logs/test.log")

from typing import Dict, List, Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.errors import OcrError, StorageError  # noqa: E402
from app.db.base import get_db  # noqa: E402
from app.db.models import Base  # noqa: E402
from app.dependencies import get_ocr_service, get_storage_service  # noqa: E402
from app.main import app  # noqa: E402
from app.models.blob import UploadedBlob  # noqa: E402
from app.services.document_service import DocumentService  # noqa: E402
from app.services.storage_service import StorageService, StoredObject  # noqa: E402

FOLDER = "smart-vault"


class FakeStorage:
    """Records uploads and deletions instead of talking to S3"""

    public_id_from_url = staticmethod(StorageService.public_id_from_url)

    def __init__(self):
        self.uploads: List[UploadedBlob] = []
        self.destroyed: List[str] = []
        self.fail_upload = False
        self.fail_destroy = False

    def upload(self, blob: UploadedBlob, folder: str) -> StoredObject:
        if self.fail_upload:
            raise StorageError(cause="bucket unavailable")
        self.uploads.append(blob)
        public_id = f"{folder}/file{len(self.uploads)}"
        return StoredObject(
            secure_url=f"https://storage.test/{public_id}", public_id=public_id
        )

    def destroy(self, public_id: str) -> None:
        if self.fail_destroy:
            raise StorageError("Error deleting file", cause="access denied")
        self.destroyed.append(public_id)


class FakeOcr:
    """Returns a fixed text, or fails when told to"""

    def __init__(self, text: str = ""):
        self.text = text
        self.fail = False
        self.calls: List[str] = []

    async def extract_text(self, source: str) -> str:
        self.calls.append(source)
        if self.fail:
            raise OcrError(cause="tesseract is not installed")
        return self.text


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def ocr() -> FakeOcr:
    return FakeOcr()


@pytest.fixture
def document_service(storage, ocr) -> DocumentService:
    return DocumentService(storage, ocr, FOLDER)


@pytest.fixture
def client(engine, storage, ocr):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_ocr_service] = lambda: ocr
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_blob(
    filename: str = "scan.png",
    content_type: str = "image/png",
    data: bytes = b"\x89PNG fake image",
) -> UploadedBlob:
    return UploadedBlob(
        filename=filename, content_type=content_type, size=len(data), data=data
    )


def register(client: TestClient, email: str = "ana@example.com") -> Dict[str, str]:
    """Register a user and return its auth headers"""
    response = client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": email, "password": "s3cret-pass"},
    )
    assert response.status_code == 201, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def upload(
    client: TestClient,
    headers: Dict[str, str],
    filename: str = "scan.png",
    content_type: str = "image/png",
    data: bytes = b"\x89PNG fake image",
    **fields: Optional[str],
):
    return client.post(
        "/api/document/upload",
        headers=headers,
        files={"file": (filename, data, content_type)},
        data={key: value for key, value in fields.items() if value is not None},
    )
