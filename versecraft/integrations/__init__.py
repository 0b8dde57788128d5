"""Integrations for external services."""

from .generator_api import GeneratorApiClient, extract_error_detail

__all__ = [
    "GeneratorApiClient",
    "extract_error_detail",
]
