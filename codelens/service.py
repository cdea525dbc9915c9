"""
Entry point used by the request-handling layer: pick a provider, run one
analysis, optionally hand the result to a persistence sink.
"""

import logging
from typing import Callable, Optional

from codelens.errors import ConfigurationError
from codelens.models import AnalysisOptions, AnalysisRecord, AnalysisReport
from codelens.registry import ProviderRegistry

AnalysisSink = Callable[[AnalysisRecord], Optional[int]]


class AnalysisService:
    def __init__(self, registry: ProviderRegistry, sink: Optional[AnalysisSink] = None):
        self.registry = registry
        self.sink = sink

    def resolve_provider_id(self, provider: Optional[str] = None) -> str:
        """
        Requested id if registered, else the first registered provider, else
        the configured default (which ``create`` rejects if unregistered).
        """
        if provider and self.registry.has_provider(provider):
            return provider

        registered = self.registry.get_registered_providers()
        if registered:
            if provider:
                logging.warning(f"Unknown provider {provider}, falling back to {registered[0]}")
            return registered[0]
        return self.registry.settings.DEFAULT_PROVIDER

    async def analyze(
        self,
        code: str,
        options: Optional[AnalysisOptions] = None,
        *,
        provider: Optional[str] = None,
        save: bool = False,
        file_name: Optional[str] = None,
    ) -> AnalysisReport:
        provider_id = self.resolve_provider_id(provider)
        # ConfigurationError is the one failure callers must see as an exception.
        adapter = self.registry.create(provider_id)

        try:
            report = await adapter.analyze_code(code, options or AnalysisOptions())
        except ConfigurationError:
            raise
        except Exception as e:
            logging.error(f"Analysis with provider {provider_id} failed: {e}")
            return AnalysisReport.failure(provider_id, f"Analysis failed: {e}")

        if save and report.status == "success":
            analysis_id = self.persist(code, report, file_name)
            report = report.model_copy(update={"saved": analysis_id is not None, "analysis_id": analysis_id})

        return report

    def persist(self, code: str, report: AnalysisReport, file_name: Optional[str] = None) -> Optional[int]:
        """Hand a successful report to the sink; returns the stored id or None on failure."""
        if self.sink is None:
            logging.warning("Save requested but no analysis sink is configured")
            return None
        try:
            analysis_id = self.sink(AnalysisRecord.from_report(code, report, file_name))
        except Exception as e:
            logging.error(f"Failed to save analysis from provider {report.provider}: {e}")
            return None
        if analysis_id is None:
            logging.error(f"Analysis sink did not store the analysis from provider {report.provider}")
        return analysis_id
