# marinavision/__init__.py
from .config import config
from .logger import get_logger
from .features.process.prompt import build_prompt, ScenePrompt
from .features.process.schemas import SceneParams, GenerationResult, ValidationOutcome, ProcessResponse
from .features.process.service import process_batch, run_generation, parse_emphasis
from .main import app


__all__ = ["app",
           "config",
           "get_logger",
           "build_prompt",
           "ScenePrompt",
           "SceneParams",
           "GenerationResult",
           "ValidationOutcome",
           "ProcessResponse",
           "process_batch",
           "run_generation",
           "parse_emphasis",
           ]
