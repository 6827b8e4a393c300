# tests/conftest.py
import json
import types
from dataclasses import replace
from io import BytesIO

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from marinavision.main import app

# -------- Test client --------
@pytest.fixture(scope="session")
def client():
    return TestClient(app)

# -------- Utilities --------
def tiny_png_bytes(w: int = 16, h: int = 16) -> bytes:
    im = Image.new("RGB", (w, h), (10, 80, 140))
    buf = BytesIO()
    im.save(buf, format="PNG")
    return buf.getvalue()

def tiny_jpeg_bytes(w: int = 24, h: int = 16) -> bytes:
    im = Image.new("RGB", (w, h), (200, 180, 90))
    buf = BytesIO()
    im.save(buf, format="JPEG")
    return buf.getvalue()

# -------- Mocks for OpenAI --------
class _MockMessage:
    def __init__(self, content: str):
        self.content = content

class _MockChoice:
    def __init__(self, content: str):
        self.message = _MockMessage(content)

class _MockChatResponse:
    def __init__(self, content):
        self.choices = [] if content is None else [ _MockChoice(content) ]

class FakeVision:
    """Records calls to chat.completions.create and answers with `answer` (None = no choices)."""
    def __init__(self):
        self.answer = json.dumps({"status": "approved", "reasoning": "Clean on-water frame.", "issues": []})
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if isinstance(self.answer, Exception):
            raise self.answer
        return _MockChatResponse(self.answer)

@pytest.fixture(autouse=True)
def offline_config(monkeypatch):
    """
    No provider keys unless a test opts in, whatever the developer's env holds.
    """
    from marinavision.features.health import router as health_router
    from marinavision.features.process import validation
    from marinavision.lib import fal_client

    for mod in (fal_client, validation, health_router):
        monkeypatch.setattr(mod, "config", replace(mod.config, fal_key="", openai_api_key="", validation_enabled=True))
    yield

@pytest.fixture(autouse=True)
def mock_openai(monkeypatch):
    """
    Auto-mock the OpenAI client everywhere so tests don't hit the network.
    """
    from marinavision.lib import openai_client

    fake = FakeVision()
    fake_client = types.SimpleNamespace(chat=types.SimpleNamespace(completions=fake))
    monkeypatch.setattr(openai_client, "get_client", lambda: fake_client)
    yield fake

@pytest.fixture
def with_openai_key(monkeypatch):
    from marinavision.features.process import validation
    monkeypatch.setattr(validation, "config", replace(validation.config, openai_api_key="sk-test"))

@pytest.fixture
def with_fal_key(monkeypatch):
    from marinavision.lib import fal_client
    monkeypatch.setattr(fal_client, "config", replace(fal_client.config, fal_key="fal-test"))

# -------- Fake generators --------
class FakeGenerators:
    def __init__(self):
        self.fal_calls = []
        self.pollinations_calls = []
        self.fal_error = None
        self.pollinations_error = None

    def fal(self, **kwargs):
        self.fal_calls.append(kwargs)
        if self.fal_error:
            raise self.fal_error
        return f"https://fal.media/files/out-{len(self.fal_calls)}.jpg"

    def pollinations(self, **kwargs):
        self.pollinations_calls.append(kwargs)
        if self.pollinations_error:
            raise self.pollinations_error
        return f"https://image.pollinations.ai/prompt/boat-{len(self.pollinations_calls)}"

@pytest.fixture
def fake_generators(monkeypatch):
    from marinavision.lib import fal_client, pollinations_client

    fake = FakeGenerators()
    monkeypatch.setattr(fal_client, "generate_with_fal", fake.fal)
    monkeypatch.setattr(pollinations_client, "generate_with_pollinations", fake.pollinations)
    return fake
