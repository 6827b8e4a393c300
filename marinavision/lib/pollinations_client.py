# marinavision/lib/pollinations_client.py
from __future__ import annotations

import random
from typing import Optional
from urllib.parse import quote, urlencode

import requests

from marinavision.config import config
from marinavision.lib.imaging import dimensions_for_aspect
from marinavision.logger import get_logger

log = get_logger(__name__)

# keep URLs under common proxy limits
_MAX_PROMPT_CHARS = 1800


def build_pollinations_url(
    *,
    prompt: str,
    negative_prompt: str,
    aspect_ratio: str,
    seed: Optional[int] = None,
) -> str:
    width, height = dimensions_for_aspect(aspect_ratio)
    params = {
        "width": width,
        "height": height,
        "model": config.pollinations_model,
        "nologo": "true",
        "enhance": "false",
        "seed": seed if seed is not None else random.randint(1, 2_000_000_000),
    }
    if negative_prompt:
        params["negative"] = negative_prompt[:_MAX_PROMPT_CHARS // 2]
    path = quote(prompt[:_MAX_PROMPT_CHARS], safe="")
    return f"{config.pollinations_base_url}/prompt/{path}?{urlencode(params)}"


def generate_with_pollinations(
    *,
    prompt: str,
    negative_prompt: str,
    aspect_ratio: str,
    seed: Optional[int] = None,
) -> str:
    """
    Text-to-image through Pollinations. The image URL is deterministic, so it is
    fetched once to make the provider render it and to confirm an image came back.
    """
    url = build_pollinations_url(
        prompt=prompt,
        negative_prompt=negative_prompt,
        aspect_ratio=aspect_ratio,
        seed=seed,
    )
    log.debug(f"pollinations request -> {url[:160]}...")
    try:
        r = requests.get(url, timeout=config.http_timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise RuntimeError(f"Pollinations request failed: {e}") from e

    ctype = r.headers.get("Content-Type", "")
    if not ctype.startswith("image/"):
        raise RuntimeError(f"Pollinations returned {ctype or 'no content type'} instead of an image")
    return url
