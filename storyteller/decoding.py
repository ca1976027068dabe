"""
Provider Response Decoding
==========================

Turns a raw provider payload into story text.

Two shapes are recognised, tried in order:

    A. Direct text       {"text": "..."}
    B. Candidate parts   {"candidates": [{"content": {"parts": [{"text": "..."}]}}]}

Anything else raises MalformedProviderResponseError. Every index and
key is checked before it is read.
"""

from __future__ import annotations
from typing import Any, Optional

from .contracts import EmptyGenerationError, MalformedProviderResponseError


def _decode_direct_text(payload: Any) -> Optional[str]:
    """Shape A, or None when the payload is not shape A."""
    if not isinstance(payload, dict):
        return None
    text = payload.get("text")
    if isinstance(text, str):
        return text
    return None


def _decode_candidate_parts(payload: Any) -> Optional[str]:
    """Shape B, or None when the payload is not shape B."""
    if not isinstance(payload, dict):
        return None

    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return None

    first = candidates[0]
    if not isinstance(first, dict):
        return None
    content = first.get("content")
    if not isinstance(content, dict):
        return None
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts:
        return None

    texts = [p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)]
    if not texts:
        return None
    return "".join(texts)


def _describe(payload: Any) -> str:
    if isinstance(payload, dict):
        feedback = payload.get("promptFeedback")
        if isinstance(feedback, dict) and feedback.get("blockReason"):
            return f"prompt blocked: {feedback['blockReason']}"
        keys = ", ".join(sorted(str(k) for k in payload)) or "none"
        return f"unrecognised keys: {keys}"
    return f"unexpected payload type: {type(payload).__name__}"


def decode_generation(payload: Any) -> str:
    """
    Extract story text from a provider payload.

    Raises:
        MalformedProviderResponseError: neither shape matched
        EmptyGenerationError: a shape matched but the text is blank
    """
    text = _decode_direct_text(payload)
    if text is None:
        text = _decode_candidate_parts(payload)
    if text is None:
        raise MalformedProviderResponseError(
            f"Could not extract text from provider response ({_describe(payload)})"
        )

    if not text.strip():
        raise EmptyGenerationError("Generated story is empty")
    return text
