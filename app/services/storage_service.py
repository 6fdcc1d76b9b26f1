import uuid
import logging
from typing import Any, Optional
from urllib.parse import urlparse

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel

from app.config import settings
from app.core.errors import StorageError
from app.models.blob import UploadedBlob

logger = logging.getLogger("smartvault")


class StoredObject(BaseModel):
    """Result of an upload to object storage"""

    secure_url: str
    public_id: str


class StorageService:
    """
    Object storage client (S3 or any S3-compatible endpoint).

    Objects are stored as "{folder}/{id}" with no extension, so the public id
    can be recovered from the last segment of the URL.
    """

    def __init__(
        self,
        bucket: str,
        *,
        region: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
        client: Any = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
    ):
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self.public_base_url = public_base_url
        self.client = client or boto3.session.Session().client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
        )

    @classmethod
    def from_settings(cls) -> "StorageService":
        return cls(
            settings.STORAGE_BUCKET,
            region=settings.STORAGE_REGION,
            endpoint_url=settings.STORAGE_ENDPOINT_URL,
            public_base_url=settings.STORAGE_PUBLIC_BASE_URL,
            access_key=settings.STORAGE_ACCESS_KEY_ID,
            secret_key=settings.STORAGE_SECRET_ACCESS_KEY,
        )

    def url_for(self, key: str) -> str:
        """Public HTTPS URL of a stored object"""
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def upload(self, blob: UploadedBlob, folder: str) -> StoredObject:
        """Store the blob bytes and return its URL"""
        public_id = f"{folder}/{uuid.uuid4().hex}"
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=public_id,
                Body=blob.read(),
                ContentType=blob.content_type,
                Metadata={"original-filename": blob.filename},
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error uploading {blob.filename} to storage: {e}")
            raise StorageError(cause=str(e)) from e

        logger.info(f"File stored: {public_id} ({blob.size} bytes)")
        return StoredObject(secure_url=self.url_for(public_id), public_id=public_id)

    def destroy(self, public_id: str) -> None:
        """Delete a stored object"""
        try:
            self.client.delete_object(Bucket=self.bucket, Key=public_id)
        except (BotoCoreError, ClientError) as e:
            raise StorageError("Error deleting file", cause=str(e)) from e
        logger.info(f"File deleted from storage: {public_id}")

    @staticmethod
    def public_id_from_url(url: str, folder: str) -> str:
        """Storage key from the last path segment of the URL, without extension"""
        file_name = urlparse(url).path.rstrip("/").split("/")[-1]
        return f"{folder}/{file_name.split('.')[0]}"
