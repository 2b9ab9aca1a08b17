# catalog/main.py
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.config import get_settings
from catalog.core.auth import ADMIN_KEY_HEADER
from catalog.core.errors import install_error_handlers
from catalog.core.logging import setup_logging
from catalog.core.metrics import router_metrics
from catalog.middleware.observability import ObservabilityMiddleware
from catalog.routers import health as health_router
from catalog.routers import videos as videos_router

settings = get_settings()
logger = logging.getLogger("catalog")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    setup_logging(settings.log_level)
    if not settings.admin_api_key:
        logger.warning("ADMIN_API_KEY não configurada; POST/DELETE vão responder 401")
    logger.info("CORS origins: %s", settings.cors_origins)
    yield


# --- App ---
app = FastAPI(
    title="Video Catalog Service",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS (preflight OPTIONS respondido pelo próprio middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", ADMIN_KEY_HEADER],
)

app.add_middleware(ObservabilityMiddleware)

install_error_handlers(app)

# Routers
app.include_router(videos_router.router)
app.include_router(health_router.router)
app.include_router(router_metrics)
