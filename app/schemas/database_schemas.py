from pydantic import BaseModel, ConfigDict, EmailStr
from typing import Optional
from datetime import datetime
from uuid import UUID


# User schemas
class UserCreate(BaseModel):
    # Optional so missing fields surface as a 400 from the auth service
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None


class UserDB(BaseModel):
    id: UUID
    name: str
    email: EmailStr
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Document schemas
class DocumentCreate(BaseModel):
    owner_id: UUID
    title: str
    category: str = "General"
    file_url: str
    extracted_text: str = ""
    expiry_date: Optional[datetime] = None
    original_file_name: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None


class DocumentUpdate(BaseModel):
    title: Optional[str] = None
    category: Optional[str] = None


class DocumentDB(BaseModel):
    id: UUID
    owner_id: UUID
    title: str
    category: str
    file_url: str
    extracted_text: Optional[str] = ""
    expiry_date: Optional[datetime] = None
    original_file_name: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UploadedDocument(DocumentDB):
    """Stored document plus the flags computed during upload."""

    ocr_processed: bool = False
    auto_categorized: bool = False


class UploadResponse(BaseModel):
    message: str = "Document uploaded successfully"
    doc: UploadedDocument


class ReprocessResponse(BaseModel):
    message: str = "Document reprocessed successfully"
    doc: DocumentDB
    extracted_text: str
    new_category: str
