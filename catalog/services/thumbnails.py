# catalog/services/thumbnails.py
"""
Duas formas de obter a URL da thumbnail: upload direto (multipart) ou URL já
hospedada (JSON). O handler só escolhe a implementação; o serviço chama
`resolve` depois que o ID do vídeo existe.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from catalog.core.errors import ValidationError
from catalog.core.metrics import THUMBNAIL_BYTES
from catalog.domain.repositories.thumbnail_store_interface import IThumbnailStore
from catalog.utils.s3 import build_thumbnail_key

ALLOWED_MIME_PREFIX = "image/"
THUMBNAIL_REQUIRED = "Thumbnail file or thumbnailUrl is required"
ONLY_IMAGES = "Only image files are allowed"
INVALID_THUMBNAIL_URL = "thumbnailUrl must be an http(s) URL"


class ThumbnailSource(ABC):
    @abstractmethod
    def check(self, max_bytes: int) -> None:
        """Validação barata antes de qualquer escrita"""

    @abstractmethod
    def resolve(self, video_id: str, store: IThumbnailStore) -> str:
        """Devolve a URL definitiva da thumbnail"""


@dataclass(frozen=True)
class UploadedThumbnail(ThumbnailSource):
    filename: Optional[str]
    content_type: Optional[str]
    data: bytes

    def check(self, max_bytes: int) -> None:
        if not (self.content_type or "").startswith(ALLOWED_MIME_PREFIX):
            raise ValidationError(ONLY_IMAGES)
        if len(self.data) > max_bytes:
            raise ValidationError(f"Thumbnail exceeds the {max_bytes // (1024 * 1024)}MB limit")

    def resolve(self, video_id: str, store: IThumbnailStore) -> str:
        key = build_thumbnail_key(video_id, self.filename)
        url = store.upload(key, self.data, self.content_type or "application/octet-stream")
        THUMBNAIL_BYTES.inc(len(self.data))
        return url


@dataclass(frozen=True)
class ExternalThumbnail(ThumbnailSource):
    url: str

    def check(self, max_bytes: int) -> None:
        parsed = urlparse(self.url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValidationError(INVALID_THUMBNAIL_URL)

    def resolve(self, video_id: str, store: IThumbnailStore) -> str:
        return self.url


def select_thumbnail_source(
    upload: Optional[UploadedThumbnail],
    url: Optional[str],
) -> ThumbnailSource:
    # arquivo tem precedência sobre URL
    if upload is not None:
        return upload
    if url and url.strip():
        return ExternalThumbnail(url.strip())
    raise ValidationError(THUMBNAIL_REQUIRED)
