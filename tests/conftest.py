import pytest
from unittest import mock
from fastapi.testclient import TestClient

from codelens.api import app
from codelens.config import Settings
from codelens.providers.base import ProviderAdapter, build_catalog

CANNED_REPLY = """## DETECTED LANGUAGE/FRAMEWORK: Python

## CODE QUALITY SCORE: 7

## SUGGESTIONS:
- Add type hints to public functions
- Replace print calls with logging

## ISSUES FOUND:
- No input validation on the path argument

## SECURITY CONCERNS:
- None found
"""


class HealthyProvider(ProviderAdapter):
    provider_id = "healthy"
    display_name = "Healthy Backend"
    default_model = "m1"
    catalog = build_catalog({
        "m1": {"name": "Model One", "cost_per_request": 0.5, "max_tokens": 1000},
        "m2": {"name": "Model Two", "cost_per_request": 0.25, "max_tokens": 2000},
    })

    def __init__(self, settings=None):
        self.prompts = []

    async def is_available(self):
        return True

    async def generate(self, model, prompt):
        self.prompts.append(prompt)
        return CANNED_REPLY


class BrokenProbeProvider(HealthyProvider):
    provider_id = "broken"
    display_name = "Broken Backend"

    async def is_available(self):
        raise RuntimeError("probe exploded")


class ExplodingProvider(HealthyProvider):
    provider_id = "exploding"
    display_name = "Exploding Backend"

    async def analyze_code(self, code, options=None):
        raise RuntimeError("adapter bug")


@pytest.fixture
def settings():
    return Settings(
        GEMINI_API_KEY="test-key",
        OLLAMA_URL="http://test.com",
        DEFAULT_PROVIDER="gemini",
    )


@pytest.fixture
def canned_reply():
    return CANNED_REPLY


@pytest.fixture
def fake_providers():
    return {
        "healthy": HealthyProvider,
        "broken": BrokenProbeProvider,
        "exploding": ExplodingProvider,
    }


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


@pytest.fixture
def base_payload():
    return {
        "code": "def add(a, b):\n    return a + b\n",
    }


@pytest.fixture
def fake_ollama():
    """Replace the ollama client; the returned dict drives and records it."""
    state = {
        "installed": ["qwen2.5-coder:7b", "codellama:7b", "mistral:7b"],
        "reply": {"response": CANNED_REPLY},
        "list_error": None,
        "generate_error": None,
        "generate_calls": [],
        "timeouts": [],
    }

    class FakeOllamaClient:
        def __init__(self, host=None, **kwargs):
            self.host = host
            state["timeouts"].append(kwargs.get("timeout"))

        async def list(self):
            if state["list_error"]:
                raise state["list_error"]
            return {"models": [{"model": name} for name in state["installed"]]}

        async def generate(self, **kwargs):
            state["generate_calls"].append(kwargs)
            if state["generate_error"]:
                raise state["generate_error"]
            return state["reply"]

    with mock.patch("codelens.providers.ollama.ollama.AsyncClient", FakeOllamaClient):
        yield state
