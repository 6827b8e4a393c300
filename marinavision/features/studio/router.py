# marinavision/features/studio/router.py
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

STATIC_DIR = Path(__file__).resolve().parents[2] / "static"

router = APIRouter(tags=["studio"])

@router.get("/", include_in_schema=False)
async def studio_page():
    """The upload & gallery page; its assets are served from /static."""
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")
