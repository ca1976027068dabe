"""
Gemini Provider Tests

All traffic goes through httpx.MockTransport; no request leaves the process.
The provider must return a ProviderResponse for every outcome, never raise.
"""

import json
import time

import httpx
import pytest

from storyteller.providers.base import InvocationParams, ProviderErrorCode
from storyteller.providers.gemini import GeminiProvider


PARAMS = InvocationParams(timeout_seconds=2.0)


def make_provider(handler):
    return GeminiProvider(
        api_key="test-key",
        base_url="https://gemini.test/v1beta/",
        transport=httpx.MockTransport(handler)
    )


class TestRequestShape:

    def test_posts_prompt_to_model_endpoint(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"candidates": []})

        make_provider(handler).invoke("Tell me a story", "gemini-1.5-flash", PARAMS)

        assert seen["url"] == "https://gemini.test/v1beta/models/gemini-1.5-flash:generateContent"
        assert seen["key"] == "test-key"
        assert seen["body"]["contents"][0]["parts"][0]["text"] == "Tell me a story"
        assert "generationConfig" not in seen["body"]

    def test_temperature_sent_when_set(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"text": "x"})

        params = InvocationParams(timeout_seconds=2.0, temperature=0.7, max_output_tokens=512)
        make_provider(handler).invoke("p", "m", params)

        assert seen["body"]["generationConfig"] == {"temperature": 0.7, "maxOutputTokens": 512}

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            GeminiProvider(api_key="")


class TestOutcomes:

    def test_success_returns_raw_payload(self):
        payload = {"candidates": [{"content": {"parts": [{"text": "A tale"}]}}]}
        response = make_provider(lambda r: httpx.Response(200, json=payload)).invoke("p", "m", PARAMS)

        assert response.success
        assert response.model == "m"
        assert response.payload == payload

    def test_rate_limit(self):
        response = make_provider(
            lambda r: httpx.Response(429, json={"error": {"message": "Quota exceeded"}})
        ).invoke("p", "m", PARAMS)

        assert not response.success
        assert response.error_code == ProviderErrorCode.RATE_LIMITED
        assert "Quota exceeded" in response.error_message

    def test_unknown_model_is_api_error(self):
        response = make_provider(
            lambda r: httpx.Response(404, json={"error": {"message": "models/x is not found"}})
        ).invoke("p", "x", PARAMS)

        assert response.error_code == ProviderErrorCode.API_ERROR
        assert "404" in response.error_message
        assert "not found" in response.error_message

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        response = make_provider(handler).invoke("p", "m", PARAMS)

        assert response.error_code == ProviderErrorCode.TIMEOUT
        assert "2.0" in response.error_message

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        response = make_provider(handler).invoke("p", "m", PARAMS)

        assert response.error_code == ProviderErrorCode.NETWORK_ERROR

    def test_non_json_body(self):
        response = make_provider(
            lambda r: httpx.Response(200, text="<html>oops</html>")
        ).invoke("p", "m", PARAMS)

        assert response.error_code == ProviderErrorCode.INVALID_RESPONSE

    def test_non_object_body(self):
        response = make_provider(lambda r: httpx.Response(200, json=["a"])).invoke("p", "m", PARAMS)

        assert response.error_code == ProviderErrorCode.INVALID_RESPONSE

    def test_unusable_model_name(self):
        response = make_provider(lambda r: httpx.Response(200, json={})).invoke("p", "bad\x00model", PARAMS)

        assert not response.success
        assert response.error_code == ProviderErrorCode.API_ERROR


class TestDeadline:

    def test_trickling_body_is_cut_off(self):
        def trickle():
            for _ in range(20):
                time.sleep(0.05)
                yield b" "

        provider = make_provider(lambda r: httpx.Response(200, content=trickle()))

        response = provider.invoke("p", "m", InvocationParams(timeout_seconds=0.2))

        assert response.error_code == ProviderErrorCode.TIMEOUT
        assert response.latency_ms < 1000
