# marinavision/features/process/prompt.py
from typing import Iterable, List, NamedTuple


class ScenePrompt(NamedTuple):
    positive: str
    negative: str


MODE_DIRECTIONS = {
    "running": (
        "The boat is underway at planing speed, bow slightly raised, carving a clean white wake "
        "with natural spray off the chines. Dynamic chase-boat perspective, subtle motion in the water."
    ),
    "anchored": (
        "The boat is moored or anchored in calm, sheltered water close to shore, gently resting at its "
        "natural waterline. Relaxed waterfront lounge atmosphere, soft ripples around the hull."
    ),
    "showcase": (
        "Dealer hero showcase: the boat idles on glassy water, positioned on the rule of thirds with "
        "generous negative space, every line of the hull and deck clearly presented like a brochure cover."
    ),
}

MOOD_LIGHTING = {
    "sunrise": "Golden sunrise light, low warm sun, soft pastel sky and long gentle reflections.",
    "midday": "Bright midday sun, crystal-clear turquoise water, crisp shadows and high clarity.",
    "sunset": "Sunset ember light, saturated orange and magenta sky, warm rim light along the hull.",
    "night": "Blue-hour glow just after dusk, deep blue sky, city and marina lights reflecting on the water.",
}

LENS_FRAMING = {
    "wide": "Ultra-wide 16-24mm lens, spacious cockpit and deck, proportions kept honest without distortion.",
    "telephoto": "Telephoto 135-200mm lens, compressed background, powerful hull-forward profile.",
    "immersive": "Immersive 35-50mm lens at eye level near the waterline, cinematic perspective.",
}

NEGATIVE_TERMS = [
    "trailer",
    "trailer hitch",
    "trailer wheels",
    "bunks",
    "boat stands",
    "dry dock",
    "parking lot",
    "asphalt",
    "gravel",
    "grass",
    "cars",
    "price stickers",
    "dealer lot fence",
    "boat out of water",
    "floating above water",
    "incorrect waterline",
    "warped hull",
    "duplicated outboard motors",
    "changed boat model",
    "altered branding",
    "text",
    "watermark",
    "logo overlay",
    "blurry",
    "low resolution",
    "oversaturated",
    "cartoon",
    "illustration",
]


def _clean(items: Iterable[str]) -> List[str]:
    return [s.strip() for s in items if s and s.strip()]


def build_prompt(
    *,
    location: str,
    mode: str,
    lens: str,
    camera_mood: str,
    emphasis: List[str] | None = None,
) -> ScenePrompt:
    """
    Scene prompt for regenerating a lot photo as an on-water shot.
    The source photo is attached as the base image; the prompt tells the model
    what to keep (the boat) and what to replace (everything around it).
    """
    emphasis = _clean(emphasis or [])
    emphasis_line = (
        f"- Emphasize: {', '.join(emphasis)}.\n"
        if emphasis else ""
    )

    positive = (
        "Photorealistic marine photography of the exact boat shown in the source photo, "
        f"now on the water near {location}.\n"
        f"- Scene direction: {MODE_DIRECTIONS[mode]}\n"
        f"- Lighting & water: {MOOD_LIGHTING[camera_mood]}\n"
        f"- Lens: {LENS_FRAMING[lens]}\n"
        f"- Setting: recognizable local waterway character of {location} (shoreline, skyline, "
        "vegetation and water color true to the region).\n"
        f"{emphasis_line}"
        "- Keep the boat identical: hull shape, colors, graphics, console, upholstery and outboard "
        "count must match the source photo.\n"
        "- Remove every trace of the trailer, lot, vehicles and land beneath the hull; the boat sits "
        "naturally in the water with a correct waterline and matching reflections.\n"
        "- Premium dealership catalog quality, sharp focus, high dynamic range, no text or watermarks."
    )
    negative = ", ".join(NEGATIVE_TERMS)
    return ScenePrompt(positive=positive, negative=negative)


def build_validation_prompt(*, location: str, expectations: List[str]) -> str:
    expectation_lines = "\n".join(f"* {e}" for e in _clean(expectations)) or "* (none)"
    return f"""
You are the quality-control reviewer for a boat dealership's marketing images. The attached image
was generated from a photo of a boat sitting on a trailer in a dealer lot; it must now show the
same boat on the water near "{location}".

**REQUESTED SCENE:**
{expectation_lines}

**APPROVE only if ALL of the following hold:**
* The boat is in the water with a believable waterline and reflections.
* No trailer, trailer wheels, bunks, stands, pavement, gravel or parked vehicles remain.
* The hull is not warped, duplicated, cropped awkwardly or floating.
* No text, watermarks or logo overlays were added.
* The scene broadly matches the requested direction and lighting.

**OUTPUT (strict JSON, no markdown):**
{{"status": "approved" | "flagged", "reasoning": "one or two sentences", "issues": ["short issue", "..."]}}
Use an empty issues list when approved.""".strip()
