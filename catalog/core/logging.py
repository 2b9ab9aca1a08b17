# catalog/core/logging.py
import logging, json, sys, contextvars
from datetime import datetime, timezone

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar("req_id", default=None)

def set_request_context(request_id: str | None = None):
    if request_id is not None: _request_id.set(request_id)

def get_request_id() -> str | None:
    return _request_id.get()

class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "request_id": _request_id.get(),
        }
        # anexar extras usuais se existirem
        for k in ("path", "method", "status", "duration_ms", "video_id", "size_bytes"):
            v = getattr(record, k, None)
            if v is not None: payload[k] = v
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def setup_logging(level: str = "INFO"):
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)

    # abaixa o ruído de libs
    for noisy in ("uvicorn.error", "uvicorn.access", "botocore", "boto3", "asyncio", "multipart"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
