"""
LLM Provider Abstraction Layer
==============================

Abstract interface for generative-language providers (Gemini, mock).

BOUNDARY ENFORCEMENT:
- Providers are stateless invocation handlers
- One invoke() is one outbound call, no internal retries
- Failures are explicit, never raised
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional
from enum import Enum


class ProviderErrorCode(Enum):
    """Explicit failure codes for provider invocations."""
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    INVALID_RESPONSE = "invalid_response"
    API_ERROR = "api_error"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class ProviderResponse:
    """
    Immutable response from a provider.

    INVARIANT: Either (success=True, payload set) or (success=False, error set)

    payload is the decoded JSON body exactly as the provider sent it.
    Extracting text from it is the decoder's job, not the provider's.
    """
    success: bool
    model: str
    payload: Optional[Any] = None

    # Failure info (only set if success=False)
    error_code: Optional[ProviderErrorCode] = None
    error_message: Optional[str] = None

    invoked_at: Optional[datetime] = None
    latency_ms: float = 0.0

    def __post_init__(self):
        if self.success and self.payload is None:
            raise ValueError("Successful response must have payload")
        if not self.success and self.error_code is None:
            raise ValueError("Failed response must have error_code")


@dataclass(frozen=True)
class InvocationParams:
    """
    Frozen invocation parameters shared by every candidate in a chain.
    """
    timeout_seconds: float = 30.0
    temperature: Optional[float] = None
    max_output_tokens: Optional[int] = None


class LLMProvider(ABC):
    """
    Abstract provider interface.

    GUARANTEES:
    - Invocations are stateless
    - Failures are explicit ProviderResponse with error_code
    - Each call is bounded by params.timeout_seconds
    """

    @abstractmethod
    def invoke(
        self,
        prompt: str,
        model: str,
        params: InvocationParams
    ) -> ProviderResponse:
        """
        Invoke the given model with a prompt.

        MUST return ProviderResponse, never raise exceptions.
        """
        pass

    @property
    @abstractmethod
    def provider_id(self) -> str:
        """Unique provider identifier."""
        pass
