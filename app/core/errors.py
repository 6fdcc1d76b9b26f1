from typing import Optional


class VaultError(Exception):
    """Base error for the vault. Carries the HTTP status and an error code."""

    status_code: int = 500
    error_code: str = "VAULT_ERROR"
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, *, cause: Optional[str] = None):
        self.message = message or self.message
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"detail": self.message, "error_code": self.error_code}
        if self.status_code >= 500 and self.cause:
            body["error"] = self.cause
        return body


class MissingFile(VaultError):
    status_code = 400
    error_code = "MISSING_FILE"
    message = "No file uploaded"


class InvalidFileType(VaultError):
    status_code = 400
    error_code = "INVALID_FILE_TYPE"
    message = "Invalid file type"


class FileTooLarge(VaultError):
    status_code = 413
    error_code = "FILE_TOO_LARGE"
    message = "File too large"


class ValidationError(VaultError):
    status_code = 400
    error_code = "VALIDATION_ERROR"
    message = "All fields are required"


class InvalidCredentials(VaultError):
    status_code = 401
    error_code = "INVALID_CREDENTIALS"
    message = "Invalid credentials"


class NotFound(VaultError):
    status_code = 404
    error_code = "NOT_FOUND"
    message = "Document not found"


class NotAuthorized(VaultError):
    status_code = 403
    error_code = "NOT_AUTHORIZED"
    message = "Not authorized"


class UnsupportedMediaType(VaultError):
    status_code = 400
    error_code = "UNSUPPORTED_MEDIA_TYPE"
    message = "OCR processing is only available for image files"


class StorageError(VaultError):
    error_code = "STORAGE_ERROR"
    message = "Error storing file"


class OcrError(VaultError):
    error_code = "OCR_ERROR"
    message = "Error extracting text"


class PersistenceError(VaultError):
    error_code = "PERSISTENCE_ERROR"
    message = "Database error"
