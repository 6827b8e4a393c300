# marinavision/config.py
import os
from dataclasses import dataclass
from typing import List

def _env_bool(name: str, default: bool = False) -> bool:
    val = os.getenv(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}

def _env_csv(name: str, default: str = "*") -> List[str]:
    raw = os.getenv(name, default)
    return [x.strip() for x in raw.split(",") if x.strip()]

def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)

@dataclass(frozen=True)
class Config:
    # OpenAI (vision validator)
    openai_api_key: str
    openai_vision_model: str
    validation_enabled: bool
    # fal.ai (primary generator)
    fal_key: str
    fal_base_url: str
    fal_model: str
    fal_strength: float
    # Pollinations (fallback generator)
    pollinations_base_url: str
    pollinations_model: str
    # HTTP
    http_timeout: float
    max_upload_mb: float
    # API / CORS
    allowed_origins: List[str]
    # Logging
    log_level: str

def load_config() -> Config:
    return Config(
        openai_api_key = os.getenv("OPENAI_API_KEY", ""),
        openai_vision_model = os.getenv("OPENAI_VISION_MODEL", "gpt-4o-mini"),
        validation_enabled = _env_bool("VALIDATION_ENABLED", True),
        fal_key = os.getenv("FAL_KEY", ""),
        fal_base_url = os.getenv("FAL_BASE_URL", "https://fal.run").rstrip("/"),
        fal_model = os.getenv("FAL_MODEL", "fal-ai/flux-pro"),
        fal_strength = _env_float("FAL_STRENGTH", 0.42),
        pollinations_base_url = os.getenv("POLLINATIONS_BASE_URL", "https://image.pollinations.ai").rstrip("/"),
        pollinations_model = os.getenv("POLLINATIONS_MODEL", "flux"),
        http_timeout = _env_float("HTTP_TIMEOUT", 120.0),
        max_upload_mb = _env_float("MAX_UPLOAD_MB", 15.0),
        allowed_origins = _env_csv("ALLOWED_ORIGINS", "*"),
        log_level = os.getenv("LOG_LEVEL", "INFO"),
    )

# Load once
config = load_config()
