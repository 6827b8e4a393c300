# tests/test_process_service.py
import pytest

from marinavision.features.process import validation
from marinavision.features.process.schemas import SceneParams, ValidationOutcome
from marinavision.features.process.service import (
    UNKNOWN_ERROR,
    parse_emphasis,
    process_batch,
    run_generation,
)
from marinavision.lib.imaging import UploadedImage

from tests.conftest import tiny_jpeg_bytes, tiny_png_bytes


def _upload(name="lot-1.png", data=None, ctype="image/png"):
    return UploadedImage(filename=name, content_type=ctype, data=data if data is not None else tiny_png_bytes())


def _params(**kw):
    base = dict(location="Fort Lauderdale, Florida", mode="running", lens="wide", mood="sunrise", aspect_ratio="3:2")
    base.update(kw)
    return SceneParams(**base)


# --------------------
# emphasis parsing
# --------------------

@pytest.mark.parametrize("raw, expected", [
    ('["clean wake", "  glassy water ", ""]', ["clean wake", "glassy water"]),
    ('"skyline, reflections"', ["skyline", "reflections"]),
    ("skyline, reflections,, ", ["skyline", "reflections"]),
    ("42", []),
    ('{"a": 1}', []),
    ("", []),
    (None, []),
])
def test_parse_emphasis(raw, expected):
    assert parse_emphasis(raw) == expected


# --------------------
# engine selection
# --------------------

def test_pollinations_used_when_fal_not_configured(fake_generators):
    res = run_generation(_upload(), _params())
    assert res.stage == "completed"
    assert res.metadata.engine == "pollinations"
    assert res.image_url == "https://image.pollinations.ai/prompt/boat-1"
    assert fake_generators.fal_calls == []
    assert fake_generators.pollinations_calls[0]["aspect_ratio"] == "3:2"


def test_fal_used_when_configured(fake_generators, with_fal_key):
    res = run_generation(_upload(data=tiny_jpeg_bytes(), ctype="image/jpeg", name="lot.jpg"), _params(aspect_ratio="16:9"))
    assert res.stage == "completed"
    assert res.metadata.engine == "fal-ai/flux-pro"
    assert res.image_url.startswith("https://fal.media/")
    call = fake_generators.fal_calls[0]
    assert call["mime_type"] == "image/jpeg"
    assert call["aspect_ratio"] == "16:9"
    assert call["base_image_base64"]
    assert "trailer" in call["negative_prompt"]
    assert fake_generators.pollinations_calls == []


def test_fal_failure_falls_back_to_pollinations(fake_generators, with_fal_key):
    fake_generators.fal_error = RuntimeError("fal.ai request failed: 503")
    res = run_generation(_upload(), _params())
    assert res.stage == "completed"
    assert res.metadata.engine == "pollinations"
    assert len(fake_generators.fal_calls) == 1
    assert len(fake_generators.pollinations_calls) == 1


# --------------------
# validation -> stage
# --------------------

def test_flagged_validation_marks_item_failed_but_keeps_image(fake_generators, monkeypatch):
    monkeypatch.setattr(
        validation, "validate_marine_scene",
        lambda **kw: ValidationOutcome(status="flagged", reasoning="Trailer wheels visible.", issues=["trailer wheels"]),
    )
    res = run_generation(_upload(), _params())
    assert res.stage == "failed"
    assert res.image_url
    assert res.validation.status == "flagged"
    assert res.validation.issues == ["trailer wheels"]
    assert res.error is None


def test_validation_receives_expectations(fake_generators, monkeypatch):
    seen = {}
    def _fake_validate(**kw):
        seen.update(kw)
        return ValidationOutcome(status="approved", reasoning="ok")
    monkeypatch.setattr(validation, "validate_marine_scene", _fake_validate)

    run_generation(_upload(), _params(mode="showcase", lens="telephoto", mood="night"))
    assert seen["location"] == "Fort Lauderdale, Florida"
    assert seen["expectations"] == [
        "mode: showcase",
        "lens profile: telephoto",
        "mood: night",
        "engine: pollinations",
    ]


def test_skipped_validation_without_key_still_completes(fake_generators):
    res = run_generation(_upload(), _params())
    assert res.validation.status == "skipped"
    assert res.stage == "completed"


# --------------------
# per-item errors
# --------------------

def test_generation_error_becomes_item_error(fake_generators):
    fake_generators.pollinations_error = RuntimeError("Pollinations request failed: timeout")
    res = run_generation(_upload(), _params())
    assert res.stage == "failed"
    assert res.error == "Pollinations request failed: timeout"
    assert res.image_url is None
    assert res.metadata is None


def test_empty_error_message_uses_generic_text(fake_generators):
    fake_generators.pollinations_error = RuntimeError()
    res = run_generation(_upload(), _params())
    assert res.error == UNKNOWN_ERROR


def test_unsupported_file_fails_without_calling_providers(fake_generators):
    res = run_generation(_upload(name="notes.txt", data=b"just some text", ctype="text/plain"), _params())
    assert res.stage == "failed"
    assert "not a JPG, PNG, WEBP or HEIC" in res.error
    assert fake_generators.pollinations_calls == []


def test_missing_filename_gets_generated_name(fake_generators):
    res = run_generation(_upload(name=""), _params())
    assert res.original_name == f"upload-{res.id}.png"


def test_batch_keeps_order_and_isolates_failures(fake_generators):
    uploads = [
        _upload(name="a.png"),
        _upload(name="broken.png", data=b""),
        _upload(name="c.png"),
    ]
    results = process_batch(uploads, _params())
    assert [r.original_name for r in results] == ["a.png", "broken.png", "c.png"]
    assert [r.stage for r in results] == ["completed", "failed", "completed"]
    assert len({r.id for r in results}) == 3
