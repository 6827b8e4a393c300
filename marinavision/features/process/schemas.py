# marinavision/features/process/schemas.py
from typing import List, Literal, Optional, get_args
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

JourneyMode = Literal["running", "anchored", "showcase"]
CameraMood = Literal["sunrise", "midday", "sunset", "night"]
LensProfile = Literal["wide", "telephoto", "immersive"]
AspectRatio = Literal["1:1", "4:3", "3:2", "16:9"]

ValidationStatus = Literal["approved", "flagged", "skipped"]
Stage = Literal["completed", "failed"]

DEFAULT_LOCATION = "local waterways"
DEFAULT_MODE: JourneyMode = "running"
DEFAULT_LENS: LensProfile = "wide"
DEFAULT_MOOD: CameraMood = "sunrise"
DEFAULT_ASPECT_RATIO: AspectRatio = "3:2"


def _coerce(value: Optional[str], allowed, default: str) -> str:
    v = (value or "").strip()
    return v if v in get_args(allowed) else default

def coerce_location(value: Optional[str]) -> str:
    return (value or "").strip() or DEFAULT_LOCATION

def coerce_mode(value: Optional[str]) -> JourneyMode:
    return _coerce(value, JourneyMode, DEFAULT_MODE)

def coerce_lens(value: Optional[str]) -> LensProfile:
    return _coerce(value, LensProfile, DEFAULT_LENS)

def coerce_mood(value: Optional[str]) -> CameraMood:
    return _coerce(value, CameraMood, DEFAULT_MOOD)

def coerce_aspect_ratio(value: Optional[str]) -> AspectRatio:
    return _coerce(value, AspectRatio, DEFAULT_ASPECT_RATIO)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SceneParams(_CamelModel):
    location: str = DEFAULT_LOCATION
    mode: JourneyMode = DEFAULT_MODE
    lens: LensProfile = DEFAULT_LENS
    mood: CameraMood = DEFAULT_MOOD
    aspect_ratio: AspectRatio = DEFAULT_ASPECT_RATIO
    emphasis: List[str] = Field(default_factory=list, description="Free-text highlights to accentuate")


class ValidationOutcome(_CamelModel):
    status: ValidationStatus
    reasoning: Optional[str] = None
    issues: List[str] = Field(default_factory=list)


class GenerationMetadata(_CamelModel):
    mode: JourneyMode
    lens: LensProfile
    mood: CameraMood
    engine: str
    location: str
    aspect_ratio: AspectRatio


class GenerationResult(_CamelModel):
    id: str
    original_name: str
    stage: Stage
    image_url: Optional[str] = None
    validation: Optional[ValidationOutcome] = None
    metadata: Optional[GenerationMetadata] = None
    error: Optional[str] = None


class ProcessResponse(_CamelModel):
    location: str
    mode: JourneyMode
    lens: LensProfile
    mood: CameraMood
    results: List[GenerationResult]
