"""
Error kinds raised while dispatching and running code analyses.

Only ConfigurationError is meant to cross the analysis boundary. The
ProviderError family is raised inside an adapter and turned into an error
report before ``analyze_code`` returns.
"""

from typing import Optional


class CodelensError(Exception):
    """Base class for all codelens errors."""


class ConfigurationError(CodelensError):
    """A provider id was requested that is not registered."""


class ProviderError(CodelensError):
    """A failure while talking to one backend."""

    def __init__(self, message: str, provider: str, model: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.model = model


class ModelUnavailableError(ProviderError):
    """The requested model is not installed or known for the backend."""


class TransportError(ProviderError):
    """Network, timeout or non-success status from the backend."""


class EmptyResponseError(ProviderError):
    """The backend answered but returned no usable text."""
