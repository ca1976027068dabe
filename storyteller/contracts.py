"""
Storyteller Contracts

Typed inputs, outcomes and errors for story generation.

BOUNDARY ENFORCEMENT:
=====================
- All data types are FROZEN (immutable)
- The storyteller never sees the word table, only an EtymologyAnalysis
- Every failure has an explicit code, never a silent default

WHY SEPARATE CONTRACTS:
=======================
The application (wordmap) owns words and HTTP.
The storyteller owns prompts, providers and the model chain.
These contracts are the only types that cross that line.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


# =============================================================================
# ENUMERATIONS
# =============================================================================

class Language(str, Enum):
    """Output language of a story."""
    KO = "ko"
    EN = "en"

    @classmethod
    def parse(cls, value: str) -> Optional[Language]:
        """Return the matching member, or None for an unsupported code."""
        for member in cls:
            if member.value == value:
                return member
        return None


class Character(str, Enum):
    """Narrator persona used to frame the story."""
    POET = "poet"
    ROBOT = "robot"
    LINGUIST = "linguist"
    FANTASY = "fantasy"
    CHILDREN = "children"

    @classmethod
    def parse(cls, value: str) -> Optional[Character]:
        for member in cls:
            if member.value == value:
                return member
        return None


# =============================================================================
# ANALYSIS INPUT
# =============================================================================

@dataclass(frozen=True)
class EtymologyAnalysis:
    """
    Flattened etymology fields interpolated into prompt templates.

    Missing parts are empty strings, never None, so templates
    render the same way for every word.
    """
    prefix: str = ""
    root: str = ""
    suffix: str = ""
    prefix_meaning: str = ""
    root_meaning: str = ""
    suffix_meaning: str = ""
    root_background: str = ""


# =============================================================================
# GENERATION OUTCOMES
# =============================================================================

class GenerationErrorCode(Enum):
    """Why a single candidate model failed."""
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    INVALID_RESPONSE = "invalid_response"
    API_ERROR = "api_error"
    NETWORK_ERROR = "network_error"
    MALFORMED_RESPONSE = "malformed_response"
    EMPTY_GENERATION = "empty_generation"


@dataclass(frozen=True)
class CandidateFailure:
    """One failed attempt inside the model chain."""
    model: str
    code: GenerationErrorCode
    message: str


@dataclass(frozen=True)
class GenerationResult:
    """
    Successful story text plus the model that produced it.

    INVARIANT: text is non-empty after stripping whitespace.
    """
    text: str
    model: str
    failures: Tuple[CandidateFailure, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.text or not self.text.strip():
            raise ValueError("GenerationResult requires non-empty text")

    @property
    def attempts(self) -> int:
        """Number of provider calls made, including the successful one."""
        return len(self.failures) + 1


# =============================================================================
# ERRORS
# =============================================================================

class GenerationError(Exception):
    """Base class for storyteller failures."""
    code: GenerationErrorCode = GenerationErrorCode.API_ERROR


class ProviderCallError(GenerationError):
    """The provider call itself failed (timeout, HTTP error, network)."""

    def __init__(self, message: str, code: GenerationErrorCode):
        super().__init__(message)
        self.code = code


class MalformedProviderResponseError(GenerationError):
    """Provider payload matched neither known response shape."""
    code = GenerationErrorCode.MALFORMED_RESPONSE


class EmptyGenerationError(GenerationError):
    """Provider returned blank text."""
    code = GenerationErrorCode.EMPTY_GENERATION


class GenerationExhaustedError(GenerationError):
    """
    Every model in the chain failed.

    Carries the last recorded failure as the cause, plus the
    full ordered list for diagnostics.
    """

    def __init__(self, failures: Tuple[CandidateFailure, ...]):
        if not failures:
            raise ValueError("GenerationExhaustedError requires at least one failure")
        self.failures = tuple(failures)
        self.last_failure = self.failures[-1]
        super().__init__(f"All models failed: {self.last_failure.message}")

    @property
    def cause(self) -> str:
        """Message of the final candidate's failure."""
        return self.last_failure.message


class TemplateConfigurationError(Exception):
    """A (language, character) pair has no prompt template."""
