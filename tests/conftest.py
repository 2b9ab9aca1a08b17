import os

# Credenciais "dummy": catalog.aws cria clients boto3 no import
os.environ.setdefault("AWS_ACCESS_KEY_ID", "test")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "test")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from catalog.config import Settings, get_settings
from catalog.core.errors import UpstreamError
from catalog.domain.models.video import VideoRecord
from catalog.domain.repositories.thumbnail_store_interface import IThumbnailStore
from catalog.domain.repositories.video_repository_interface import IVideoRepository

ADMIN_KEY = "test-admin-key"
CDN = "https://cdn.example"
EMBED = '<iframe src="https://www.youtube.com/embed/abc" width="560" height="315"></iframe>'


# ========= Fakes =========
class FakeVideoRepo(IVideoRepository):
    def __init__(self):
        self.items = {}
        self.fail_put = False
        self.fail_list = None

    def list_all(self) -> List[dict]:
        if self.fail_list:
            raise self.fail_list
        return sorted(
            self.items.values(),
            key=lambda i: VideoRecord.model_validate(i).created_at,
            reverse=True,
        )

    def get(self, video_id: str) -> Optional[dict]:
        return self.items.get(video_id)

    def put(self, item: dict) -> None:
        if self.fail_put:
            raise UpstreamError("Failed to create video")
        self.items[item["id"]] = dict(item)

    def delete(self, video_id: str) -> None:
        self.items.pop(video_id, None)


class FakeThumbnailStore(IThumbnailStore):
    def __init__(self):
        self.uploads = []
        self.deleted = []

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        self.uploads.append((key, data, content_type))
        return f"{CDN}/{key}"

    def delete(self, url: str) -> None:
        self.deleted.append(url)


def make_item(video_id: str, created_at: str, **overrides) -> dict:
    item = {
        "id": video_id,
        "title": "Seed video",
        "thumbnailUrl": f"{CDN}/thumbnails/{video_id}_1.jpg",
        "iframeEmbed": EMBED,
        "tags": ["seed"],
        "duration": None,
        "createdAt": created_at,
    }
    item.update(overrides)
    return item


# ========= Fixtures =========
@pytest.fixture
def settings():
    return Settings(admin_api_key=ADMIN_KEY)


@pytest.fixture
def repo():
    return FakeVideoRepo()


@pytest.fixture
def store():
    return FakeThumbnailStore()


@pytest.fixture
def client(repo, store, settings):
    from catalog.main import app
    from catalog.routers import videos as videos_router

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[videos_router.get_video_repo] = lambda: repo
    app.dependency_overrides[videos_router.get_thumbnail_store] = lambda: store
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"x-admin-key": ADMIN_KEY}
