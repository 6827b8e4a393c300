# marinavision/lib/fal_client.py
from __future__ import annotations

from typing import Any, Dict, Optional, Union

import requests

from marinavision.config import config
from marinavision.lib.imaging import dimensions_for_aspect, to_data_url
from marinavision.logger import get_logger

log = get_logger(__name__)

# fal presets; 3:2 has no preset so it goes as explicit width/height
_FAL_IMAGE_SIZES = {
    "1:1": "square_hd",
    "4:3": "landscape_4_3",
    "16:9": "landscape_16_9",
}


def fal_image_size(aspect_ratio: str) -> Union[str, Dict[str, int]]:
    preset = _FAL_IMAGE_SIZES.get(aspect_ratio)
    if preset:
        return preset
    width, height = dimensions_for_aspect(aspect_ratio)
    return {"width": width, "height": height}


def fal_configured() -> bool:
    return bool(config.fal_key)


def engine_name() -> str:
    return config.fal_model


def _extract_image_url(data: Any) -> Optional[str]:
    if not isinstance(data, dict):
        return None
    images = data.get("images")
    if isinstance(images, list) and images:
        first = images[0]
        if isinstance(first, dict) and isinstance(first.get("url"), str) and first["url"]:
            return first["url"]
        if isinstance(first, str) and first:
            return first
    image = data.get("image")
    if isinstance(image, dict) and isinstance(image.get("url"), str) and image["url"]:
        return image["url"]
    return None


def generate_with_fal(
    *,
    base_image_base64: str,
    prompt: str,
    negative_prompt: str,
    aspect_ratio: str,
    strength: Optional[float] = None,
    mime_type: str = "image/png",
) -> str:
    """
    Image-to-image regeneration on fal.ai. Returns the URL of the first image.
    Raises RuntimeError when the key is missing, the call fails, or no image comes back.
    """
    if not config.fal_key:
        raise RuntimeError("FAL_KEY is not configured")

    endpoint = f"{config.fal_base_url}/{config.fal_model}"
    payload = {
        "prompt": prompt,
        "negative_prompt": negative_prompt,
        "image_url": to_data_url(base_image_base64, mime_type),
        "strength": config.fal_strength if strength is None else strength,
        "image_size": fal_image_size(aspect_ratio),
        "num_images": 1,
        "enable_safety_checker": True,
        "output_format": "jpeg",
    }
    headers = {"Authorization": f"Key {config.fal_key}", "Content-Type": "application/json"}

    log.debug(f"fal request -> {endpoint} (aspect={aspect_ratio}, strength={payload['strength']})")
    try:
        r = requests.post(endpoint, headers=headers, json=payload, timeout=config.http_timeout)
        r.raise_for_status()
    except requests.HTTPError as e:
        body = e.response.text[:300] if e.response is not None else ""
        raise RuntimeError(f"fal.ai request failed: {e} {body}".strip()) from e
    except requests.RequestException as e:
        raise RuntimeError(f"fal.ai request failed: {e}") from e

    try:
        data = r.json()
    except ValueError as e:
        raise RuntimeError("fal.ai returned a non-JSON response") from e

    url = _extract_image_url(data)
    if not url:
        raise RuntimeError("fal.ai returned no images")
    return url
