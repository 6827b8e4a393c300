# marinavision/features/health/router.py
from fastapi import APIRouter

from marinavision.config import config

router = APIRouter(prefix="/api", tags=["health"])

@router.get("/health")
async def health():
    return {
        "status": "ok",
        "engines": {
            "fal": bool(config.fal_key),
            "pollinations": True,
            "validator": bool(config.openai_api_key) and config.validation_enabled,
        },
        "models": {
            "fal": config.fal_model,
            "pollinations": config.pollinations_model,
            "validator": config.openai_vision_model,
        },
    }
