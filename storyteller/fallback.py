"""
Model Fallback Executor
=======================

Runs one prompt against an ordered chain of model identifiers.

GUARANTEES:
===========
1. Candidates are tried strictly in order, one at a time
2. Exactly one provider call per candidate, no retries
3. First decoded, non-empty text wins; later candidates are never called
4. If all fail, GenerationExhaustedError carries the LAST failure

EXPLICIT FAILURE STATES (per candidate, all mean "try the next one"):
- Provider failure → ProviderErrorCode mapped to GenerationErrorCode
- Provider raised anyway → API_ERROR
- Unrecognised payload shape → MALFORMED_RESPONSE
- Blank text → EMPTY_GENERATION
"""

from __future__ import annotations
import logging
from typing import List, Sequence, Tuple

from .contracts import (
    CandidateFailure,
    GenerationError,
    GenerationErrorCode,
    GenerationExhaustedError,
    GenerationResult,
    ProviderCallError,
)
from .decoding import decode_generation
from .providers.base import (
    LLMProvider,
    ProviderErrorCode,
    InvocationParams,
)

logger = logging.getLogger(__name__)


_PROVIDER_ERROR_MAP = {
    ProviderErrorCode.TIMEOUT: GenerationErrorCode.TIMEOUT,
    ProviderErrorCode.RATE_LIMITED: GenerationErrorCode.RATE_LIMITED,
    ProviderErrorCode.INVALID_RESPONSE: GenerationErrorCode.INVALID_RESPONSE,
    ProviderErrorCode.API_ERROR: GenerationErrorCode.API_ERROR,
    ProviderErrorCode.NETWORK_ERROR: GenerationErrorCode.NETWORK_ERROR,
}


class ModelFallbackExecutor:
    """
    Sequential first-success executor over a model chain.

    The chain is fixed at construction; the executor holds no
    per-request state, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        provider: LLMProvider,
        models: Sequence[str],
        params: InvocationParams = InvocationParams()
    ):
        """
        Args:
            provider: Provider used for every candidate
            models: Model identifiers in priority order (non-empty)
            params: Timeout and sampling settings for each call
        """
        models = tuple(models)
        if not models:
            raise ValueError("ModelFallbackExecutor requires at least one model")
        self._provider = provider
        self._models = models
        self._params = params

    @property
    def models(self) -> Tuple[str, ...]:
        return self._models

    def generate(self, prompt: str) -> GenerationResult:
        """
        Generate text, falling through the chain on failure.

        Raises:
            GenerationExhaustedError: every candidate failed
        """
        failures: List[CandidateFailure] = []

        for model in self._models:
            logger.info("Trying model %s (prompt length %d)", model, len(prompt))
            try:
                text = self._attempt(prompt, model)
            except GenerationError as e:
                failure = CandidateFailure(model=model, code=e.code, message=str(e))
                failures.append(failure)
                logger.warning("Model %s failed [%s]: %s", model, failure.code.value, failure.message)
                continue

            logger.info("Model %s produced %d characters", model, len(text))
            return GenerationResult(text=text, model=model, failures=tuple(failures))

        logger.error(
            "All models failed. Current priority: %s. "
            "Set GEMINI_MODEL_PRIORITY to change the chain, e.g. gemini-2.5-pro,gemini-2.5-flash",
            ", ".join(self._models)
        )
        raise GenerationExhaustedError(tuple(failures))

    def _attempt(self, prompt: str, model: str) -> str:
        """One call to one model. Raises GenerationError on any failure."""
        try:
            response = self._provider.invoke(prompt=prompt, model=model, params=self._params)
        except Exception as e:
            logger.exception("Provider %s raised while calling %s", self._provider.provider_id, model)
            raise ProviderCallError(
                f"{model} raised {type(e).__name__}: {e}",
                GenerationErrorCode.API_ERROR
            ) from e

        if not response.success:
            raise ProviderCallError(
                response.error_message or f"{model} failed",
                _PROVIDER_ERROR_MAP.get(response.error_code, GenerationErrorCode.API_ERROR)
            )

        return decode_generation(response.payload)
