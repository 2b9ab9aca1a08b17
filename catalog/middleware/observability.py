# catalog/middleware/observability.py
import time, uuid, logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from catalog.core.logging import set_request_context
from catalog.core.metrics import REQUESTS, LATENCY

log = logging.getLogger("http")

def _path_template(request: Request) -> str:
    # usa o template (ex: /api/videos/{video_id}) para evitar cardinalidade alta
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path

class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        set_request_context(rid)
        start = time.perf_counter()
        status = 500

        try:
            response: Response = await call_next(request)
            status = response.status_code
            response.headers["X-Request-ID"] = rid
            return response
        finally:
            dur = (time.perf_counter() - start) * 1000.0
            method = request.method
            # a rota só é conhecida depois do roteamento
            path_tmpl = _path_template(request)

            # métricas
            REQUESTS.labels(path=path_tmpl, method=method, status=str(status)).inc()
            LATENCY.labels(path=path_tmpl, method=method).observe(dur / 1000.0)

            # log de acesso
            log.info(
                f"{method} {path_tmpl} -> {status} in {dur:.1f}ms",
                extra={
                    "path": path_tmpl,
                    "method": method,
                    "status": status,
                    "duration_ms": round(dur, 1),
                },
            )
