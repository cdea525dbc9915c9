"""
Maps provider ids to adapter constructors and reports which are usable.
"""

import importlib
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from codelens.config import Settings, get_settings
from codelens.errors import ConfigurationError
from codelens.providers.base import ProviderAdapter

ProviderFactory = Callable[[Settings], ProviderAdapter]

# Registration order is also the fallback order used by the service.
CANDIDATE_PROVIDERS = {
    "gemini": "codelens.providers.gemini:GeminiProvider",
    "openai": "codelens.providers.placeholders:OpenAIProvider",
    "claude": "codelens.providers.placeholders:ClaudeProvider",
    "lmstudio": "codelens.providers.placeholders:LMStudioProvider",
    "ollama": "codelens.providers.ollama:OllamaProvider",
}


def load_factories(candidates: Mapping[str, str] = CANDIDATE_PROVIDERS) -> Dict[str, ProviderFactory]:
    """Import each candidate; deployments without a backend's client library skip it."""
    factories: Dict[str, ProviderFactory] = {}
    for provider_id, path in candidates.items():
        module_name, class_name = path.split(":")
        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            logging.warning(f"Provider {provider_id} not registered: {e}")
            continue
        factories[provider_id] = getattr(module, class_name)
    return factories


class ProviderRegistry:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        factories: Optional[Mapping[str, ProviderFactory]] = None,
    ):
        self.settings = settings or get_settings()
        self._factories = dict(factories) if factories is not None else load_factories()

    def get_registered_providers(self) -> List[str]:
        """All registered ids in registration order, available or not."""
        return list(self._factories)

    def has_provider(self, provider_id: str) -> bool:
        return provider_id in self._factories

    def create(self, provider_id: str) -> ProviderAdapter:
        if provider_id not in self._factories:
            raise ConfigurationError(f"Provider {provider_id} not found or not available")
        return self._factories[provider_id](self.settings)

    async def get_available_providers(self) -> Dict[str, Dict[str, Any]]:
        """
        Probe every registered provider and summarize the available ones.

        A provider whose construction or probe fails is logged and left out;
        the others are still listed.
        """
        available: Dict[str, Dict[str, Any]] = {}
        for provider_id in self._factories:
            try:
                provider = self.create(provider_id)
                if not await provider.is_available():
                    continue
                descriptor = provider.describe(await provider.get_available_models())
                available[provider_id] = {
                    "name": descriptor.display_name,
                    "models": {
                        model_id: info.model_dump()
                        for model_id, info in descriptor.available_models.items()
                    },
                    "default_cost": descriptor.cost_per_request,
                    "max_tokens": descriptor.max_tokens,
                    "supports_streaming": descriptor.supports_streaming,
                }
                logging.info(f"Provider {provider_id} models: {list(descriptor.available_models)}")
            except Exception as e:
                logging.warning(f"Provider {provider_id} failed to load: {e}")
        return available
