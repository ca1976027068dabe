"""
Mock Provider Tests

The mock must stay deterministic and offline, or every fallback
test built on it stops meaning anything.
"""

import socket
from unittest.mock import patch

from storyteller.decoding import decode_generation
from storyteller.providers.base import InvocationParams, ProviderErrorCode
from storyteller.providers.mock import MockProvider


PARAMS = InvocationParams()


class TestDeterminism:

    def test_same_prompt_same_payload(self):
        provider = MockProvider()
        payloads = [provider.invoke("test prompt", "m", PARAMS).payload for _ in range(5)]

        assert all(p == payloads[0] for p in payloads)

    def test_default_payload_decodes(self):
        response = MockProvider().invoke("test prompt", "m", PARAMS)

        assert response.success
        assert decode_generation(response.payload).startswith("[m]")

    def test_no_network(self):
        provider = MockProvider()

        with patch('socket.socket') as mock_socket:
            mock_socket.side_effect = AssertionError("Network call attempted")
            response = provider.invoke("test prompt", "m", PARAMS)

        assert response.success
        assert mock_socket.call_count == 0


class TestScripting:

    def test_scripted_failure_and_record(self):
        provider = MockProvider(outcomes={"bad": ProviderErrorCode.RATE_LIMITED})

        failed = provider.invoke("p1", "bad", PARAMS)
        ok = provider.invoke("p2", "good", PARAMS)

        assert not failed.success
        assert failed.error_code == ProviderErrorCode.RATE_LIMITED
        assert ok.success
        assert provider.calls == [("bad", "p1"), ("good", "p2")]

    def test_failure_mode_applies_to_unscripted_models(self):
        provider = MockProvider(outcomes={"ok": {"text": "fine"}}, failure_mode=ProviderErrorCode.TIMEOUT)

        assert provider.invoke("p", "ok", PARAMS).payload == {"text": "fine"}
        assert provider.invoke("p", "other", PARAMS).error_code == ProviderErrorCode.TIMEOUT

    def test_recording_can_be_turned_off(self):
        provider = MockProvider(record_calls=False)

        for i in range(100):
            assert provider.invoke(f"p{i}", "m", PARAMS).success

        assert provider.calls == []
