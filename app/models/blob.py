# app/models/blob.py
from pydantic import BaseModel


class UploadedBlob(BaseModel):
    """File received in a request, independent of how it was transported"""

    filename: str
    content_type: str
    size: int
    data: bytes

    @property
    def is_image(self) -> bool:
        return self.content_type.startswith("image/")

    def read(self) -> bytes:
        return self.data
