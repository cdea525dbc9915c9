"""
LLM backends for code analysis.

Each backend implements ProviderAdapter. Backends whose client library is
missing are skipped by the registry, so the concrete classes are imported
from their own modules rather than re-exported here.
"""

from .base import ProviderAdapter, build_catalog, estimate_tokens
from .placeholders import (
    ClaudeProvider,
    LMStudioProvider,
    OpenAIProvider,
    UnimplementedProvider,
)

__all__ = [
    "ProviderAdapter",
    "build_catalog",
    "estimate_tokens",
    "UnimplementedProvider",
    "OpenAIProvider",
    "ClaudeProvider",
    "LMStudioProvider",
]
