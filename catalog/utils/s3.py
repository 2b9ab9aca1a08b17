import time

import catalog.aws as aws_mod
from catalog.core.metrics import S3_OPS

THUMBNAIL_PREFIX = "thumbnails/"


def build_thumbnail_key(video_id: str, original_filename: str | None, now_ms: int | None = None) -> str:
    """thumbnails/{video_id}_{epoch_ms}.{ext}; sem extensão no nome original usa jpg."""
    now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
    name = original_filename or ""
    ext = name.rsplit(".", 1)[-1].lower() if "." in name else ""
    if not ext.isalnum():
        ext = "jpg"
    return f"{THUMBNAIL_PREFIX}{video_id}_{now_ms}.{ext}"


def key_from_url(url: str) -> str | None:
    # URL pública termina em .../thumbnails/{arquivo}
    parts = url.split("/" + THUMBNAIL_PREFIX, 1)
    if len(parts) < 2 or not parts[1]:
        return None
    return THUMBNAIL_PREFIX + parts[1]


def put_object(bucket: str, key: str, file_bytes: bytes, content_type: str) -> None:
    """Envia o objeto ao S3 e incrementa métricas de sucesso/erro."""
    try:
        aws_mod.s3.put_object(Bucket=bucket, Key=key, Body=file_bytes, ContentType=content_type)
        S3_OPS.labels(op="put", status="ok").inc()
    except Exception:
        S3_OPS.labels(op="put", status="error").inc()
        raise


def delete_object(bucket: str, key: str) -> None:
    try:
        aws_mod.s3.delete_object(Bucket=bucket, Key=key)
        S3_OPS.labels(op="delete", status="ok").inc()
    except Exception:
        S3_OPS.labels(op="delete", status="error").inc()
        raise
