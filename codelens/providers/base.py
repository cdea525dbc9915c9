"""
Capability contract shared by every LLM backend.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional

from codelens.errors import EmptyResponseError, ProviderError
from codelens.models import AnalysisOptions, AnalysisReport, ModelInfo, ProviderDescriptor
from codelens.parsing import extract_score, extract_suggestions
from codelens.prompts import build_prompt


def build_catalog(models: Mapping[str, Mapping]) -> Dict[str, ModelInfo]:
    return {model_id: ModelInfo(**info) for model_id, info in models.items()}


def estimate_tokens(text: str) -> int:
    # Four characters per token is a rough estimate, not a tokenizer.
    return len(text) // 4


class ProviderAdapter(ABC):
    """
    One LLM backend behind a uniform interface.

    Subclasses declare their identity and static model catalog as class
    attributes and implement ``generate``. ``analyze_code`` never raises:
    every failure comes back as an error report.
    """

    provider_id: str = ""
    display_name: str = ""
    default_model: str = ""
    catalog: Mapping[str, ModelInfo] = {}
    is_local: bool = False

    def get_name(self) -> str:
        return self.display_name

    def get_default_model(self) -> str:
        return self.default_model

    @abstractmethod
    async def is_available(self) -> bool:
        """True iff the backend is configured and reachable right now."""

    async def get_available_models(self) -> Dict[str, ModelInfo]:
        return dict(self.catalog)

    @abstractmethod
    async def generate(self, model: str, prompt: str) -> str:
        """Send ``prompt`` to the backend and return the reply text."""

    async def ensure_model_ready(self, model: str) -> None:
        """Raise ModelUnavailableError when ``model`` cannot be used right now."""

    def resolve_model(self, model: Optional[str] = None) -> str:
        if model and model in self.catalog:
            return model
        return self.default_model

    def model_info(self, model: Optional[str] = None) -> Optional[ModelInfo]:
        return self.catalog.get(self.resolve_model(model))

    def get_cost_per_request(self, model: Optional[str] = None) -> float:
        info = self.model_info(model)
        return info.cost_per_request if info else 0.0

    def get_max_tokens(self, model: Optional[str] = None) -> int:
        info = self.model_info(model)
        return info.max_tokens if info else 4096

    def supports_streaming(self, model: Optional[str] = None) -> bool:
        info = self.model_info(model)
        return info.supports_streaming if info else False

    def describe(self, models: Optional[Mapping[str, ModelInfo]] = None) -> ProviderDescriptor:
        """Static metadata; ``models`` narrows the catalog, e.g. to what a daemon has installed."""
        return ProviderDescriptor(
            id=self.provider_id,
            display_name=self.get_name(),
            cost_per_request=self.get_cost_per_request(),
            max_tokens=self.get_max_tokens(),
            supports_streaming=self.supports_streaming(),
            available_models=dict(self.catalog if models is None else models),
        )

    async def analyze_code(self, code: str, options: Optional[AnalysisOptions] = None) -> AnalysisReport:
        options = options or AnalysisOptions()
        model = self.resolve_model(options.model)

        try:
            await self.ensure_model_ready(model)
            prompt = build_prompt(code, options)

            started = time.perf_counter()
            text = await self.generate(model, prompt)
            elapsed_ms = round((time.perf_counter() - started) * 1000)

            if not text or not text.strip():
                raise EmptyResponseError(
                    f"Empty response from {self.get_name()} (model {model})",
                    provider=self.provider_id,
                    model=model,
                )
            return self.build_report(model, text, elapsed_ms)
        except ProviderError as e:
            logging.error(f"{self.get_name()} analysis failed: {e.message}")
            return AnalysisReport.failure(self.provider_id, e.message, model=model)
        except Exception as e:
            logging.error(f"Unexpected {self.get_name()} error with model {model}: {e}")
            return AnalysisReport.failure(
                self.provider_id,
                f"{self.get_name()} error with model {model}: {e}",
                model=model,
            )

    def build_report(self, model: str, text: str, elapsed_ms: int) -> AnalysisReport:
        info = self.catalog.get(model)
        return AnalysisReport(
            status="success",
            provider=self.provider_id,
            model=model,
            model_name=info.name if info else model,
            analysis_text=text,
            suggestions=extract_suggestions(text),
            score=extract_score(text),
            cost=0.0 if self.is_local else self.get_cost_per_request(model),
            tokens_used=estimate_tokens(text),
            response_time_ms=elapsed_ms if self.is_local else None,
            local=self.is_local,
        )
