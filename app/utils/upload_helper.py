from datetime import datetime, timezone
from typing import List, Optional
import logging

from fastapi import UploadFile

from app.config import settings
from app.core.errors import FileTooLarge, InvalidFileType, ValidationError
from app.models.blob import UploadedBlob

logger = logging.getLogger("smartvault")


def check_file_type(
    filename: str,
    content_type: Optional[str],
    allowed_extensions: Optional[List[str]] = None,
    allowed_mime_types: Optional[List[str]] = None,
) -> None:
    """Both the extension and the declared MIME type must be allowed."""
    allowed_extensions = allowed_extensions or settings.ALLOWED_EXTENSIONS
    allowed_mime_types = allowed_mime_types or settings.ALLOWED_MIME_TYPES

    extension = filename.lower().rsplit(".", 1)[-1] if "." in filename else ""
    if extension not in allowed_extensions or content_type not in allowed_mime_types:
        logger.debug(f"Rejected upload {filename} ({content_type})")
        raise InvalidFileType()


async def read_upload(
    file: Optional[UploadFile], max_size: Optional[int] = None
) -> Optional[UploadedBlob]:
    """
    Validate a multipart file and turn it into an UploadedBlob.

    Returns None when no file was sent; the workflow decides how to report it.
    """
    if file is None or not file.filename:
        return None

    max_size = max_size or settings.MAX_UPLOAD_SIZE
    check_file_type(file.filename, file.content_type)

    # Read one byte past the limit to detect oversized payloads
    data = await file.read(max_size + 1)
    if len(data) > max_size:
        raise FileTooLarge()

    return UploadedBlob(
        filename=file.filename,
        content_type=file.content_type,
        size=len(data),
        data=data,
    )


def parse_expiry_date(value: Optional[str]) -> Optional[datetime]:
    """ISO date or datetime; blank means no expiry."""
    if value is None or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError(f"Invalid expiry date: {value}") from None

    # Stored as naive UTC
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
