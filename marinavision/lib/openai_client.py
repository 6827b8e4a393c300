# marinavision/lib/openai_client.py
from typing import Optional

from openai import OpenAI
from marinavision.config import config

_client: Optional[OpenAI] = None

def get_client() -> OpenAI:
    """Shared client, built on first use so a keyless deployment still boots."""
    global _client
    if _client is None:
        if not config.openai_api_key:
            raise RuntimeError("OPENAI_API_KEY is not configured")
        _client = OpenAI(api_key=config.openai_api_key, timeout=config.http_timeout)
    return _client
