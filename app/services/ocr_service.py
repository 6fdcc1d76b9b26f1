import io
import logging
from pathlib import Path
from typing import Callable, Optional

import httpx
import pytesseract
from fastapi.concurrency import run_in_threadpool
from PIL import Image

from app.config import settings
from app.core.errors import OcrError

logger = logging.getLogger("smartvault")


class OcrService:
    """Text extraction from images with Tesseract"""

    def __init__(
        self,
        *,
        language: str = "eng",
        tesseract_cmd: Optional[str] = None,
        fetch_timeout: float = 30.0,
        client_factory: Optional[Callable[[], httpx.AsyncClient]] = None,
    ):
        self.language = language
        self._client_factory = client_factory or (
            lambda: httpx.AsyncClient(timeout=fetch_timeout, follow_redirects=True)
        )
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    @classmethod
    def from_settings(cls) -> "OcrService":
        return cls(
            language=settings.OCR_LANGUAGE,
            tesseract_cmd=settings.TESSERACT_CMD,
            fetch_timeout=settings.OCR_FETCH_TIMEOUT,
        )

    async def _load(self, source: str) -> bytes:
        if source.startswith(("http://", "https://")):
            async with self._client_factory() as client:
                response = await client.get(source)
                response.raise_for_status()
                return response.content
        return await run_in_threadpool(Path(source).read_bytes)

    def _recognize(self, data: bytes) -> str:
        with Image.open(io.BytesIO(data)) as image:
            return pytesseract.image_to_string(image.convert("RGB"), lang=self.language)

    async def extract_text(self, source: str) -> str:
        """
        Extract the text of an image.

        Args:
            source: http(s) URL or local path of the image

        Raises:
            OcrError: the image could not be fetched, opened or recognized
        """
        try:
            data = await self._load(source)
            text = await run_in_threadpool(self._recognize, data)
        except (httpx.HTTPError, OSError, pytesseract.TesseractError) as e:
            raise OcrError(cause=str(e)) from e

        text = text.strip()
        logger.info(f"OCR extracted {len(text)} characters")
        return text
