# marinavision/features/process/validation.py
import json
from typing import List

from openai import OpenAIError

from marinavision.config import config
from marinavision.lib import openai_client
from marinavision.lib.json_tools import extract_json_block
from marinavision.logger import get_logger

from .prompt import build_validation_prompt
from .schemas import ValidationOutcome

log = get_logger(__name__)

SYSTEM = (
    "You are a meticulous visual QA inspector for marine marketing photography. "
    "Return STRICT JSON only with keys 'status', 'reasoning' and 'issues'. "
    "No extra text, no comments, no markdown."
)


def _skipped(reason: str) -> ValidationOutcome:
    return ValidationOutcome(status="skipped", reasoning=reason, issues=[])


def _parse_outcome(raw: str) -> ValidationOutcome:
    data = json.loads(extract_json_block(raw))
    if not isinstance(data, dict):
        raise ValueError("validator answer is not a JSON object")

    status = str(data.get("status", "")).strip().lower()
    # anything that is not an explicit approval needs a human look
    if status != "approved":
        status = "flagged"

    issues = data.get("issues") or []
    if isinstance(issues, str):
        issues = [issues]
    elif not isinstance(issues, (list, tuple)):
        issues = []
    issues = [str(i).strip() for i in issues if str(i).strip()]

    reasoning = data.get("reasoning")
    reasoning = str(reasoning).strip() if reasoning else None
    return ValidationOutcome(status=status, reasoning=reasoning, issues=issues)


def validate_marine_scene(*, image_url: str, location: str, expectations: List[str]) -> ValidationOutcome:
    """
    Ask the vision model whether the generated frame is a clean on-water shot.
    Never raises: a missing key, a provider error or an unreadable answer all
    come back as a 'skipped' outcome with the reason.
    """
    if not config.validation_enabled:
        return _skipped("Vision validation disabled.")
    if not config.openai_api_key:
        return _skipped("Vision validation skipped: OPENAI_API_KEY is not configured.")

    prompt = build_validation_prompt(location=location, expectations=expectations)
    try:
        resp = openai_client.get_client().chat.completions.create(
            model=config.openai_vision_model,
            temperature=0,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": SYSTEM},
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": prompt},
                        {"type": "image_url", "image_url": {"url": image_url}},
                    ],
                },
            ],
        )
    except (OpenAIError, RuntimeError) as e:
        log.warning(f"Vision validation call failed: {e}")
        return _skipped(f"Vision validation unavailable: {e}")

    if not resp.choices:
        log.warning("Validator answered with no choices")
        return _skipped("Vision validation returned an empty answer.")

    raw = (resp.choices[0].message.content or "").strip()
    try:
        return _parse_outcome(raw)
    except (ValueError, TypeError) as e:
        log.warning(f"Unreadable validator answer ({e}): {raw[:200]}")
        return _skipped("Vision validation returned an unreadable answer.")
