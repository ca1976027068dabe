"""
Word Contracts

Immutable types for the static word table and story requests.
No behavior beyond construction checks, no I/O.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple


# =============================================================================
# WORD ENTRY
# =============================================================================

@dataclass(frozen=True)
class Morpheme:
    """One structural part of a word: its surface text and gloss."""
    text: str
    meaning: str


@dataclass(frozen=True)
class WordStructure:
    """
    Prefix/root/suffix decomposition.

    INVARIANT: root is always present; prefix and suffix are optional.
    """
    root: Morpheme
    prefix: Optional[Morpheme] = None
    suffix: Optional[Morpheme] = None


@dataclass(frozen=True)
class Component:
    """Historical background for one structural part."""
    origin: str
    meaning: str
    effect: Optional[str] = None
    cultural: Optional[str] = None
    related: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class WordComponents:
    prefix: Optional[Component] = None
    root: Optional[Component] = None
    suffix: Optional[Component] = None


@dataclass(frozen=True)
class WordMeaning:
    basic: str
    etymological: str
    extended: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class WordEntry:
    """
    Pre-authored etymology for a single word.

    Loaded once at startup, never mutated.
    """
    word: str
    structure: WordStructure
    components: WordComponents
    meaning: Optional[WordMeaning]
    derivatives: Tuple[str, ...]
    cultural: str

    def __post_init__(self):
        if not self.word or self.word != self.word.lower():
            raise ValueError(f"WordEntry key must be lowercase and non-empty: {self.word!r}")


# =============================================================================
# STORY REQUEST / RESULT
# =============================================================================

@dataclass(frozen=True)
class StoryRequest:
    """Raw story request as received, before validation."""
    word: Optional[str]
    character: Optional[str]
    language: Optional[str] = "ko"


@dataclass(frozen=True)
class StoryResult:
    word: str
    character: str
    language: str
    story: str
    model: str
