# catalog/services/catalog.py
import logging
from typing import Any, List

from catalog.config import Settings
from catalog.core.errors import NotFoundError, UpstreamError
from catalog.domain.models.video import VideoRecord, utc_now
from catalog.domain.repositories.thumbnail_store_interface import IThumbnailStore
from catalog.domain.repositories.video_repository_interface import IVideoRepository
from catalog.services.thumbnails import ThumbnailSource
from catalog.utils.id_gen import new_video_id
from catalog.utils.validators import (
    parse_tags,
    sanitize_iframe_embed,
    validate_duration,
    validate_iframe_embed,
    validate_tags,
    validate_title,
)

logger = logging.getLogger("videos")

VIDEO_NOT_FOUND = "Video not found"


class CatalogService:
    def __init__(self, repo: IVideoRepository, store: IThumbnailStore, settings: Settings):
        self._repo = repo
        self._store = store
        self._settings = settings

    def list_videos(self) -> List[VideoRecord]:
        return [VideoRecord.model_validate(i) for i in self._repo.list_all()]

    def get_video(self, video_id: str) -> VideoRecord:
        item = self._repo.get(video_id)
        if not item:
            raise NotFoundError(VIDEO_NOT_FOUND)
        return VideoRecord.model_validate(item)

    def create_video(
        self,
        *,
        title: Any,
        iframe_embed: Any,
        tags: Any,
        duration: Any,
        thumbnail: ThumbnailSource,
    ) -> VideoRecord:
        """
        Valida -> sanitiza -> gera ID -> resolve thumbnail -> insere.
        Não é transacional: se o insert falhar depois do upload, a thumbnail fica órfã.
        """
        thumbnail.check(self._settings.max_thumbnail_mb * 1024 * 1024)

        clean_title = validate_title(title).raise_for_error().value
        validate_iframe_embed(iframe_embed).raise_for_error()
        tag_list = validate_tags(parse_tags(tags)).raise_for_error().value
        clean_duration = validate_duration(duration, required=self._settings.require_duration).raise_for_error().value
        embed = sanitize_iframe_embed(iframe_embed)

        video_id = new_video_id()
        thumbnail_url = thumbnail.resolve(video_id, self._store)

        record = VideoRecord(
            id=video_id,
            title=clean_title,
            thumbnail_url=thumbnail_url,
            iframe_embed=embed,
            tags=tag_list,
            duration=clean_duration,
            created_at=utc_now(),
        )
        try:
            self._repo.put(record.to_item())
        except UpstreamError:
            logger.warning("Insert falhou; thumbnail possivelmente órfã: %s", thumbnail_url,
                           extra={"video_id": video_id})
            raise

        logger.info("Vídeo criado", extra={"video_id": video_id})
        return record

    def delete_video(self, video_id: str) -> None:
        record = self.get_video(video_id)
        # remoção do registro é a operação autoritativa
        self._repo.delete(video_id)
        self._store.delete(record.thumbnail_url)
        logger.info("Vídeo removido", extra={"video_id": video_id})
