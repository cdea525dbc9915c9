"""
Google Gemini backend (cloud API).
"""

import logging
from types import MappingProxyType
from typing import Optional

from google import genai
from google.genai.errors import APIError

from codelens.config import Settings, get_settings
from codelens.constants import GEMINI_DEFAULT_MODEL, GEMINI_MODELS
from codelens.errors import TransportError
from codelens.providers.base import ProviderAdapter, build_catalog


class GeminiProvider(ProviderAdapter):
    provider_id = "gemini"
    display_name = "Google Gemini"
    default_model = GEMINI_DEFAULT_MODEL
    catalog = MappingProxyType(build_catalog(GEMINI_MODELS))

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self._api_key = settings.GEMINI_API_KEY

    async def is_available(self) -> bool:
        return bool(self._api_key)

    async def generate(self, model: str, prompt: str) -> str:
        # Client construction validates the key, so it stays inside the guarded path.
        client = genai.Client(api_key=self._api_key)
        try:
            response = await client.aio.models.generate_content(model=model, contents=prompt)
        except APIError as e:
            logging.error(f"Gemini API Error: {e}")
            raise TransportError(
                f"Gemini API error for model {model}: {e}. Check your API key and quota status.",
                provider=self.provider_id,
                model=model,
            ) from e
        return response.text or ""
