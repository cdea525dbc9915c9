"""
Backends that are registered but not wired to a transport yet.
"""

from types import MappingProxyType
from typing import Optional

from codelens.config import Settings
from codelens.constants import CLAUDE_MODELS, LMSTUDIO_MODELS, OPENAI_MODELS
from codelens.errors import ProviderError
from codelens.providers.base import ProviderAdapter, build_catalog


class UnimplementedProvider(ProviderAdapter):
    """Always unavailable; every analysis ends in the same error report, without any I/O."""

    def __init__(self, settings: Optional[Settings] = None):
        del settings

    async def is_available(self) -> bool:
        return False

    async def generate(self, model: str, prompt: str) -> str:
        raise ProviderError(
            f"{self.get_name()} provider not implemented yet",
            provider=self.provider_id,
            model=model,
        )


class OpenAIProvider(UnimplementedProvider):
    provider_id = "openai"
    display_name = "OpenAI GPT-4"
    default_model = "gpt-4o"
    catalog = MappingProxyType(build_catalog(OPENAI_MODELS))


class ClaudeProvider(UnimplementedProvider):
    provider_id = "claude"
    display_name = "Claude AI"
    default_model = "claude-3-opus-20240229"
    catalog = MappingProxyType(build_catalog(CLAUDE_MODELS))


class LMStudioProvider(UnimplementedProvider):
    provider_id = "lmstudio"
    display_name = "LM Studio"
    default_model = "default"
    catalog = MappingProxyType(build_catalog(LMSTUDIO_MODELS))
    is_local = True
