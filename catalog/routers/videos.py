# catalog/routers/videos.py
import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from catalog.config import Settings, get_settings
from catalog.core.auth import require_admin_key
from catalog.core.errors import ValidationError
from catalog.domain.models.requests import CreateVideoForm
from catalog.domain.models.video import VideoRecord
from catalog.domain.repositories.thumbnail_store_interface import IThumbnailStore
from catalog.domain.repositories.video_repository_interface import IVideoRepository
from catalog.infrastructure.repositories.video_repo import VideoRepo
from catalog.infrastructure.storage.thumbnail_store import S3ThumbnailStore
from catalog.services.catalog import CatalogService
from catalog.services.thumbnails import UploadedThumbnail, select_thumbnail_source

router = APIRouter(prefix="/api/videos", tags=["videos"])

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")
FORM_FIELDS = ("title", "iframeEmbed", "duration", "thumbnailUrl")

logger = logging.getLogger("videos")


def get_video_repo() -> IVideoRepository:
    return VideoRepo()


def get_thumbnail_store(settings: Settings = Depends(get_settings)) -> IThumbnailStore:
    return S3ThumbnailStore(settings)


def get_catalog_service(
    repo: IVideoRepository = Depends(get_video_repo),
    store: IThumbnailStore = Depends(get_thumbnail_store),
    settings: Settings = Depends(get_settings),
) -> CatalogService:
    return CatalogService(repo, store, settings)


async def _read_create_body(request: Request) -> Tuple[CreateVideoForm, Optional[UploadedThumbnail]]:
    """Aceita multipart (arquivo em `thumbnail`) ou JSON (com `thumbnailUrl`)."""
    content_type = (request.headers.get("content-type") or "").lower()
    upload = None

    if content_type.startswith(FORM_CONTENT_TYPES):
        # o context manager fecha os arquivos temporários do multipart
        async with request.form() as form:
            raw = {k: form.get(k) for k in FORM_FIELDS if form.get(k) is not None}
            tags = form.getlist("tags")
            if tags:
                raw["tags"] = tags[0] if len(tags) == 1 else tags
            file = form.get("thumbnail")
            if isinstance(file, UploadFile) and file.filename:
                upload = UploadedThumbnail(
                    filename=file.filename,
                    content_type=file.content_type,
                    data=await file.read(),
                )
    else:
        try:
            raw = await request.json()
        except ValueError:
            raise ValidationError("Invalid JSON body")
        if not isinstance(raw, dict):
            raise ValidationError("Invalid JSON body")

    try:
        body = CreateVideoForm.model_validate(raw)
    except PydanticValidationError:
        raise ValidationError("Invalid request body")
    return body, upload


@router.get("", response_model=List[VideoRecord])
def list_videos(service: CatalogService = Depends(get_catalog_service)) -> List[VideoRecord]:
    return service.list_videos()


@router.get("/{video_id}", response_model=VideoRecord)
def get_video(video_id: str, service: CatalogService = Depends(get_catalog_service)) -> VideoRecord:
    return service.get_video(video_id)


@router.post("", response_model=VideoRecord, status_code=201)
async def create_video(
    request: Request,
    service: CatalogService = Depends(get_catalog_service),
    _key: str = Depends(require_admin_key),
) -> VideoRecord:
    body, upload = await _read_create_body(request)
    thumbnail = select_thumbnail_source(upload, body.thumbnail_url)

    # id/createdAt enviados pelo cliente são ignorados
    return service.create_video(
        title=body.title,
        iframe_embed=body.iframe_embed,
        tags=body.tags,
        duration=body.duration,
        thumbnail=thumbnail,
    )


@router.delete("/{video_id}", status_code=204, response_class=Response)
def delete_video(
    video_id: str,
    service: CatalogService = Depends(get_catalog_service),
    _key: str = Depends(require_admin_key),
) -> Response:
    service.delete_video(video_id)
    return Response(status_code=204)
