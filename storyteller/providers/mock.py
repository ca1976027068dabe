"""
Mock Provider
=============

Deterministic provider for tests and offline runs.

GUARANTEES:
- Same (prompt, model) → identical response
- Per-model failures or raw payloads can be scripted
- Every call is recorded, in order (unless record_calls=False)
- No network access
"""

from __future__ import annotations
import hashlib
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

from .base import (
    LLMProvider,
    ProviderResponse,
    ProviderErrorCode,
    InvocationParams,
)


# A scripted outcome is either an error code (the call fails) or a raw payload
ScriptedOutcome = Union[ProviderErrorCode, Dict[str, Any]]


class MockProvider(LLMProvider):
    """
    Deterministic mock provider.

    Models without a scripted outcome succeed with a shape-B payload
    whose text is derived from hash(prompt + model).
    """

    def __init__(
        self,
        outcomes: Optional[Dict[str, ScriptedOutcome]] = None,
        failure_mode: Optional[ProviderErrorCode] = None,
        record_calls: bool = True
    ):
        """
        Args:
            outcomes: model name → error code or raw payload
            failure_mode: If set, every unscripted model fails with this error
            record_calls: Keep a (model, prompt) log; off for long-running servers
        """
        self._outcomes = dict(outcomes or {})
        self._failure_mode = failure_mode
        self._record_calls = record_calls
        self._calls: List[Tuple[str, str]] = []

    @property
    def provider_id(self) -> str:
        return "mock"

    @property
    def calls(self) -> List[Tuple[str, str]]:
        """(model, prompt) for every invocation so far."""
        return list(self._calls)

    @property
    def models_called(self) -> List[str]:
        return [model for model, _ in self._calls]

    def invoke(
        self,
        prompt: str,
        model: str,
        params: InvocationParams
    ) -> ProviderResponse:
        invoked_at = datetime.now(timezone.utc)
        if self._record_calls:
            self._calls.append((model, prompt))

        outcome = self._outcomes.get(model, self._failure_mode)

        if isinstance(outcome, ProviderErrorCode):
            return ProviderResponse(
                success=False,
                model=model,
                error_code=outcome,
                error_message=f"Mock provider configured to fail: {outcome.value}",
                invoked_at=invoked_at
            )

        payload = outcome if outcome is not None else self._generate_deterministic_payload(prompt, model)
        return ProviderResponse(
            success=True,
            model=model,
            payload=payload,
            invoked_at=invoked_at
        )

    def _generate_deterministic_payload(self, prompt: str, model: str) -> Dict[str, Any]:
        content_hash = hashlib.sha256(f"{prompt}|{model}".encode()).hexdigest()[:16]
        text = f"[{model}] A story told from prompt {content_hash}."
        return {
            "candidates": [
                {"content": {"role": "model", "parts": [{"text": text}]}}
            ]
        }
