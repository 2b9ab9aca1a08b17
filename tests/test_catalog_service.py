import re

import pytest

import catalog.services.catalog as catalog_mod
from catalog.config import Settings
from catalog.core.errors import EmbedSanitizationError, NotFoundError, UpstreamError, ValidationError
from catalog.services.catalog import CatalogService
from catalog.services.thumbnails import ExternalThumbnail, UploadedThumbnail

from conftest import EMBED, make_item


@pytest.fixture
def service(repo, store, settings):
    return CatalogService(repo, store, settings)


def _create(service, **overrides):
    kwargs = dict(
        title="  Meu vídeo  ",
        iframe_embed=EMBED,
        tags="music, live",
        duration=None,
        thumbnail=UploadedThumbnail("capa.png", "image/png", b"img"),
    )
    kwargs.update(overrides)
    return service.create_video(**kwargs)


def test_create_persists_record_and_uploads_thumbnail(service, repo, store):
    record = _create(service)

    assert re.match(r"^v_[A-Za-z0-9]{8}$", record.id)
    assert record.title == "Meu vídeo"
    assert record.tags == ["music", "live"]
    assert record.duration is None
    assert record.created_at.tzinfo is not None
    assert record.thumbnail_url.startswith(f"https://cdn.example/thumbnails/{record.id}_")

    stored = repo.items[record.id]
    assert stored["iframeEmbed"] == EMBED
    assert stored["thumbnailUrl"] == record.thumbnail_url
    assert len(store.uploads) == 1


def test_create_uses_generated_id(monkeypatch, service, repo):
    monkeypatch.setattr(catalog_mod, "new_video_id", lambda: "v_FIXED123", raising=True)
    record = _create(service)
    assert record.id == "v_FIXED123"
    assert "v_FIXED123" in repo.items


def test_create_sanitizes_embed(service, repo):
    record = _create(service, iframe_embed=EMBED + "<script>steal()</script>")
    assert record.iframe_embed == EMBED
    assert repo.items[record.id]["iframeEmbed"] == EMBED


def test_create_with_external_thumbnail_and_duration(service, store):
    record = _create(service, thumbnail=ExternalThumbnail("https://img.example/x.jpg"), duration="95.5")
    assert record.thumbnail_url == "https://img.example/x.jpg"
    assert record.duration == 95.5
    assert store.uploads == []


@pytest.mark.parametrize("overrides, message", [
    ({"title": "ab"}, "Title must be at least 3 characters long"),
    ({"title": None}, "Title is required"),
    ({"iframe_embed": "<div></div>"}, "iframeEmbed must contain an <iframe> tag"),
    ({"iframe_embed": "<iframe></iframe>"}, "iframeEmbed must contain a src attribute"),
    ({"tags": ",".join(f"t{i}" for i in range(11))}, "Maximum of 10 tags allowed"),
    ({"duration": -3}, "Duration must be a positive number (in seconds)"),
    ({"thumbnail": UploadedThumbnail("x.txt", "text/plain", b"x")}, "Only image files are allowed"),
])
def test_create_rejects_before_any_write(service, repo, store, overrides, message):
    with pytest.raises(ValidationError) as exc:
        _create(service, **overrides)
    assert exc.value.message == message
    assert repo.items == {}
    assert store.uploads == []


def test_title_checked_before_embed(service):
    with pytest.raises(ValidationError) as exc:
        _create(service, title="", iframe_embed="")
    assert exc.value.message == "Title is required"


def test_javascript_protocol_rejected_before_write(service, repo, store):
    with pytest.raises(EmbedSanitizationError):
        _create(service, iframe_embed='<iframe src="javascript:alert(1)"></iframe>')
    assert repo.items == {} and store.uploads == []


def test_require_duration_setting(repo, store):
    service = CatalogService(repo, store, Settings(admin_api_key="k", require_duration=True))
    with pytest.raises(ValidationError) as exc:
        _create(service)
    assert exc.value.message == "duration is required"


def test_insert_failure_leaves_thumbnail_and_propagates(service, repo, store):
    repo.fail_put = True
    with pytest.raises(UpstreamError):
        _create(service)
    # não há rollback do upload
    assert len(store.uploads) == 1


def test_list_and_get(service, repo):
    repo.put(make_item("v_old00001", "2025-01-01T00:00:00Z"))
    repo.put(make_item("v_new00001", "2026-01-01T00:00:00Z", duration=30))

    assert [v.id for v in service.list_videos()] == ["v_new00001", "v_old00001"]
    assert service.get_video("v_new00001").duration == 30


def test_get_missing(service):
    with pytest.raises(NotFoundError) as exc:
        service.get_video("v_missing1")
    assert exc.value.message == "Video not found"
    assert exc.value.status_code == 404


def test_delete_removes_record_then_thumbnail(service, repo, store):
    repo.put(make_item("v_abcdEF12", "2026-01-01T00:00:00Z"))
    service.delete_video("v_abcdEF12")
    assert repo.items == {}
    assert store.deleted == ["https://cdn.example/thumbnails/v_abcdEF12_1.jpg"]


def test_delete_missing(service, store):
    with pytest.raises(NotFoundError):
        service.delete_video("v_missing1")
    assert store.deleted == []
