from fastapi import APIRouter

router = APIRouter(prefix="", tags=["health"])

@router.get("/health", include_in_schema=False)
def health():
    return {"status": "ok"}

@router.get("/", include_in_schema=False)
def index():
    return {
        "status": "ok",
        "message": "Video Catalog API is running",
        "endpoints": {"videos": "/api/videos"},
    }
