"""
Gemini Provider
===============

Google Generative Language REST provider (models/{model}:generateContent).

GUARANTEES:
- Exactly one HTTP request per invoke()
- Bounded by params.timeout_seconds: httpx applies it to each phase,
  and the body read is cut off once the whole call passes it
- Every failure is returned as a ProviderResponse, never raised
"""

from __future__ import annotations
import json
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from .base import (
    LLMProvider,
    ProviderResponse,
    ProviderErrorCode,
    InvocationParams,
)


DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiProvider(LLMProvider):
    """
    Calls Gemini over HTTPS with httpx.

    The API key travels in the x-goog-api-key header, not the URL,
    so it never shows up in logged request lines.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Args:
            api_key: Generative Language API key
            base_url: API root, overridable for proxies
            transport: Optional httpx transport (tests inject MockTransport)
        """
        if not api_key:
            raise ValueError("GeminiProvider requires an API key")
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    @property
    def provider_id(self) -> str:
        return "gemini"

    def _build_body(self, prompt: str, params: InvocationParams) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]}
            ]
        }
        generation_config: Dict[str, Any] = {}
        if params.temperature is not None:
            generation_config["temperature"] = params.temperature
        if params.max_output_tokens is not None:
            generation_config["maxOutputTokens"] = params.max_output_tokens
        if generation_config:
            body["generationConfig"] = generation_config
        return body

    def invoke(
        self,
        prompt: str,
        model: str,
        params: InvocationParams
    ) -> ProviderResponse:
        invoked_at = datetime.now(timezone.utc)
        start = time.monotonic()
        url = f"{self._base_url}/models/{model}:generateContent"

        def failure(code: ProviderErrorCode, message: str) -> ProviderResponse:
            return ProviderResponse(
                success=False,
                model=model,
                error_code=code,
                error_message=message,
                invoked_at=invoked_at,
                latency_ms=(time.monotonic() - start) * 1000
            )

        deadline = start + params.timeout_seconds
        timed_out = f"{model} timed out after {params.timeout_seconds}s"

        try:
            with httpx.Client(timeout=params.timeout_seconds, transport=self._transport) as client:
                with client.stream(
                    "POST",
                    url,
                    headers={
                        "x-goog-api-key": self._api_key,
                        "Content-Type": "application/json",
                    },
                    json=self._build_body(prompt, params)
                ) as response:
                    body = bytearray()
                    for chunk in response.iter_bytes():
                        body.extend(chunk)
                        if time.monotonic() > deadline:
                            return failure(ProviderErrorCode.TIMEOUT, timed_out)
        except httpx.TimeoutException:
            return failure(ProviderErrorCode.TIMEOUT, timed_out)
        except httpx.InvalidURL as e:
            return failure(ProviderErrorCode.API_ERROR, f"{model} is not a usable model name: {e}")
        except httpx.HTTPError as e:
            return failure(ProviderErrorCode.NETWORK_ERROR, f"{model} request failed: {e}")

        if response.status_code == 429:
            return failure(
                ProviderErrorCode.RATE_LIMITED,
                f"{model} rate limited: {self._error_text(response, body)}"
            )
        if response.status_code >= 400:
            return failure(
                ProviderErrorCode.API_ERROR,
                f"{model} returned HTTP {response.status_code}: {self._error_text(response, body)}"
            )

        try:
            payload = json.loads(bytes(body))
        except ValueError:
            return failure(ProviderErrorCode.INVALID_RESPONSE, f"{model} returned a non-JSON body")
        if not isinstance(payload, dict):
            return failure(ProviderErrorCode.INVALID_RESPONSE, f"{model} returned a non-object body")

        return ProviderResponse(
            success=True,
            model=model,
            payload=payload,
            invoked_at=invoked_at,
            latency_ms=(time.monotonic() - start) * 1000
        )

    @staticmethod
    def _error_text(response: httpx.Response, body: bytes) -> str:
        """Best-effort error message from a Google API error body."""
        try:
            data = json.loads(bytes(body))
        except ValueError:
            return bytes(body[:200]).decode("utf-8", errors="replace") or response.reason_phrase
        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            message = data["error"].get("message")
            if message:
                return str(message)
        return response.reason_phrase
