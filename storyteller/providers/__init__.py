"""
LLM Providers Package
=====================

Provider implementations for story generation.

Available providers:
- GeminiProvider: Google Generative Language REST API (httpx)
- MockProvider: Deterministic mock for testing and offline runs
"""

from .base import (
    LLMProvider,
    ProviderResponse,
    ProviderErrorCode,
    InvocationParams,
)
from .gemini import GeminiProvider, DEFAULT_BASE_URL
from .mock import MockProvider

__all__ = [
    'LLMProvider',
    'ProviderResponse',
    'ProviderErrorCode',
    'InvocationParams',
    'GeminiProvider',
    'DEFAULT_BASE_URL',
    'MockProvider',
]
