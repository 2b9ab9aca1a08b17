import logging

from botocore.exceptions import BotoCoreError, ClientError

from catalog.config import Settings
from catalog.core.errors import UpstreamError
from catalog.domain.repositories.thumbnail_store_interface import IThumbnailStore
from catalog.utils.s3 import delete_object, key_from_url, put_object

logger = logging.getLogger("storage")


class S3ThumbnailStore(IThumbnailStore):
    def __init__(self, settings: Settings):
        self._bucket = settings.s3_bucket
        self._base_url = settings.thumbnail_base_url()

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        try:
            put_object(self._bucket, key, data, content_type)
        except (BotoCoreError, ClientError) as e:
            raise UpstreamError("Failed to upload thumbnail") from e
        return f"{self._base_url}/{key}"

    def delete(self, url: str) -> None:
        url = url or ""
        key = key_from_url(url) if url.startswith(self._base_url + "/") else None
        if key is None:
            # thumbnail externa ou URL fora do padrão: nada a remover
            logger.warning("URL de thumbnail fora do padrão, ignorando remoção: %s", url)
            return
        try:
            delete_object(self._bucket, key)
        except Exception:
            # best-effort: o registro já foi removido
            logger.exception("Falha ao remover thumbnail %s", key)
