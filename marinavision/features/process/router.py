# marinavision/features/process/router.py
import asyncio
from typing import List, Optional

from fastapi import APIRouter, Form, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from marinavision.lib.imaging import UploadedImage
from marinavision.logger import get_logger

from .schemas import (
    ProcessResponse,
    SceneParams,
    coerce_aspect_ratio,
    coerce_lens,
    coerce_location,
    coerce_mode,
    coerce_mood,
)
from .service import parse_emphasis, process_batch

log = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["process"])


@router.post(
    "/process",
    response_model=ProcessResponse,
    response_model_exclude_none=True,
    responses={400: {"description": "No images provided"}},
)
async def process_endpoint(
    request: Request,
    location: Optional[str] = Form(None),
    mode: Optional[str] = Form(None),
    lens: Optional[str] = Form(None),
    mood: Optional[str] = Form(None),
    aspect_ratio: Optional[str] = Form(None, alias="aspectRatio"),
    emphasis: Optional[str] = Form(None),   # JSON array string
):
    # `images` may carry text parts too; only real files count
    form = await request.form()
    uploads: List[UploadedImage] = []
    for image in form.getlist("images"):
        if not isinstance(image, UploadFile):
            continue
        # browsers send an empty part when the input has no files
        if not image.filename and not image.size:
            continue
        uploads.append(UploadedImage(
            filename=image.filename or "",
            content_type=image.content_type,
            data=await image.read(),
        ))

    if not uploads:
        return JSONResponse(status_code=400, content={"error": "No images provided."})

    params = SceneParams(
        location=coerce_location(location),
        mode=coerce_mode(mode),
        lens=coerce_lens(lens),
        mood=coerce_mood(mood),
        aspect_ratio=coerce_aspect_ratio(aspect_ratio),
        emphasis=parse_emphasis(emphasis),
    )
    log.info(
        f"Batch of {len(uploads)} for {params.location} "
        f"(mode={params.mode}, lens={params.lens}, mood={params.mood}, aspect={params.aspect_ratio})"
    )

    # provider calls block; keep them off the event loop, still one file at a time
    loop = asyncio.get_running_loop()
    results = await loop.run_in_executor(None, process_batch, uploads, params)

    return ProcessResponse(
        location=params.location,
        mode=params.mode,
        lens=params.lens,
        mood=params.mood,
        results=results,
    )
