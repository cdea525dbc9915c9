"""
Ollama backend (local inference daemon).

Installed models can change at any time (``ollama pull``/``ollama rm``), so
they are listed from the daemon on every call and never cached.
"""

import logging
from types import MappingProxyType
from typing import Dict, Optional, Set

import httpx
import ollama

from codelens.config import Settings, get_settings
from codelens.constants import (
    OLLAMA_DEFAULT_MODEL,
    OLLAMA_GENERATE_OPTIONS,
    OLLAMA_GENERATE_TIMEOUT,
    OLLAMA_MODELS,
    OLLAMA_PROBE_TIMEOUT,
)
from codelens.errors import ModelUnavailableError, TransportError
from codelens.models import ModelInfo
from codelens.providers.base import ProviderAdapter, build_catalog


class OllamaProvider(ProviderAdapter):
    provider_id = "ollama"
    display_name = "Ollama (Local AI)"
    default_model = OLLAMA_DEFAULT_MODEL
    catalog = MappingProxyType(build_catalog(OLLAMA_MODELS))
    is_local = True

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.base_url = settings.OLLAMA_URL

    async def installed_models(self) -> Set[str]:
        """Names of the models the daemon reports via ``/api/tags``."""
        client = ollama.AsyncClient(host=self.base_url, timeout=OLLAMA_PROBE_TIMEOUT)
        listing = await client.list()
        return {m["model"] for m in listing["models"]}

    async def is_available(self) -> bool:
        try:
            return len(await self.installed_models()) > 0
        except Exception as e:
            logging.info(f"Ollama not available at {self.base_url}: {e}")
            return False

    async def get_available_models(self) -> Dict[str, ModelInfo]:
        try:
            installed = await self.installed_models()
        except Exception as e:
            logging.error(f"Failed to get Ollama models: {e}")
            return {}
        return {name: info for name, info in self.catalog.items() if name in installed}

    async def ensure_model_ready(self, model: str) -> None:
        try:
            installed = await self.installed_models()
        except Exception as e:
            raise TransportError(
                f"Connection error: could not list models at {self.base_url} ({e}). Is Ollama running?",
                provider=self.provider_id,
                model=model,
            ) from e

        if model not in installed:
            raise ModelUnavailableError(
                f"Model {model} is not installed. Run: ollama pull {model}",
                provider=self.provider_id,
                model=model,
            )

    async def generate(self, model: str, prompt: str) -> str:
        client = ollama.AsyncClient(host=self.base_url, timeout=OLLAMA_GENERATE_TIMEOUT)
        try:
            response = await client.generate(
                model=model,
                prompt=prompt,
                stream=False,
                options=dict(OLLAMA_GENERATE_OPTIONS),
            )
        except ollama.ResponseError as e:
            raise TransportError(
                f"Ollama API error for model {model}: {e.error}",
                provider=self.provider_id,
                model=model,
            ) from e
        except (httpx.HTTPError, ConnectionError) as e:
            raise TransportError(
                f"Connection error with model {model}: {e}. Is Ollama running?",
                provider=self.provider_id,
                model=model,
            ) from e
        return response["response"] or ""
