# marinavision/features/process/service.py
import json
import uuid
from typing import List, Optional

from marinavision.lib import fal_client, pollinations_client
from marinavision.lib.imaging import UploadedImage, ensure_supported_image, file_to_base64, probe_dimensions
from marinavision.logger import get_logger

from . import validation
from .prompt import build_prompt
from .schemas import GenerationMetadata, GenerationResult, SceneParams

log = get_logger(__name__)

POLLINATIONS_ENGINE = "pollinations"
UNKNOWN_ERROR = "Unknown generation error encountered."


def _split_csv(raw: str) -> List[str]:
    return [x.strip() for x in raw.split(",") if x.strip()]


def parse_emphasis(raw: Optional[str]) -> List[str]:
    """
    Emphasis arrives as a JSON array string. A JSON string is treated as a
    comma list, and text that is not JSON at all is split on commas.
    """
    if not raw or not isinstance(raw, str):
        return []
    try:
        parsed = json.loads(raw)
    except ValueError:
        return _split_csv(raw)
    if isinstance(parsed, list):
        return [str(x).strip() for x in parsed if x is not None and str(x).strip()]
    if isinstance(parsed, str):
        return _split_csv(parsed)
    return []


def _generate_image(upload: UploadedImage, mime: str, positive: str, negative: str, params: SceneParams):
    """Primary engine when configured, Pollinations otherwise or when it fails. Returns (url, engine)."""
    if fal_client.fal_configured():
        try:
            url = fal_client.generate_with_fal(
                base_image_base64=file_to_base64(upload),
                mime_type=mime,
                prompt=positive,
                negative_prompt=negative,
                aspect_ratio=params.aspect_ratio,
            )
            return url, fal_client.engine_name()
        except Exception as e:
            log.warning(f"fal generation failed for {upload.filename}, falling back: {e}")

    url = pollinations_client.generate_with_pollinations(
        prompt=positive,
        negative_prompt=negative,
        aspect_ratio=params.aspect_ratio,
    )
    return url, POLLINATIONS_ENGINE


def run_generation(upload: UploadedImage, params: SceneParams) -> GenerationResult:
    result_id = uuid.uuid4().hex
    original_name = upload.filename or f"upload-{result_id}.png"

    try:
        mime = ensure_supported_image(upload)
        dims = probe_dimensions(upload.data)
        log.info(f"Processing {original_name} ({mime}, {dims[0]}x{dims[1]})" if dims
                 else f"Processing {original_name} ({mime})")

        scene = build_prompt(
            location=params.location,
            mode=params.mode,
            lens=params.lens,
            camera_mood=params.mood,
            emphasis=params.emphasis,
        )
        log.debug(f"scene prompt is: {scene.positive}")

        image_url, engine = _generate_image(upload, mime, scene.positive, scene.negative, params)

        outcome = validation.validate_marine_scene(
            image_url=image_url,
            location=params.location,
            expectations=[
                f"mode: {params.mode}",
                f"lens profile: {params.lens}",
                f"mood: {params.mood}",
                f"engine: {engine}",
            ],
        )
        stage = "failed" if outcome.status == "flagged" else "completed"
        log.info(f"{original_name}: engine={engine} validation={outcome.status} stage={stage}")

        return GenerationResult(
            id=result_id,
            original_name=original_name,
            stage=stage,
            image_url=image_url,
            validation=outcome,
            metadata=GenerationMetadata(
                mode=params.mode,
                lens=params.lens,
                mood=params.mood,
                engine=engine,
                location=params.location,
                aspect_ratio=params.aspect_ratio,
            ),
        )
    except Exception as e:
        log.exception(f"Generation error for {original_name}")
        return GenerationResult(
            id=result_id,
            original_name=original_name,
            stage="failed",
            error=str(e) or UNKNOWN_ERROR,
        )


def process_batch(uploads: List[UploadedImage], params: SceneParams) -> List[GenerationResult]:
    """One file at a time, in upload order. A failing file never stops the batch."""
    results: List[GenerationResult] = []
    for upload in uploads:
        results.append(run_generation(upload, params))
    return results
