"""
Word Table
==========

Read-only etymology table, loaded once from JSON.

INVARIANTS:
- Lookup is case-insensitive (input lowercased first)
- A miss raises WordNotFoundError, never a partial entry
- The table is never mutated after load()
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from storyteller.contracts import EtymologyAnalysis
from .config import DEFAULT_DATA_PATH
from .contracts.errors import WordDataError, WordNotFoundError
from .contracts.words import (
    Component,
    Morpheme,
    WordComponents,
    WordEntry,
    WordMeaning,
    WordStructure,
)

logger = logging.getLogger(__name__)


# =============================================================================
# PARSING
# =============================================================================

def _require_str(data: Mapping[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise WordDataError(f"{where}: '{key}' must be a string")
    return value


def _optional_str(data: Mapping[str, Any], key: str, where: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise WordDataError(f"{where}: '{key}' must be a string or null")
    return value


def _str_tuple(value: Any, where: str) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise WordDataError(f"{where}: expected a list of strings")
    return tuple(value)


def _parse_morpheme(data: Any, where: str) -> Optional[Morpheme]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise WordDataError(f"{where}: expected an object or null")
    return Morpheme(
        text=_require_str(data, "text", where),
        meaning=_require_str(data, "meaning", where),
    )


def _parse_component(data: Any, where: str) -> Optional[Component]:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise WordDataError(f"{where}: expected an object or null")
    related = data.get("related")
    return Component(
        origin=_require_str(data, "origin", where),
        meaning=_require_str(data, "meaning", where),
        effect=_optional_str(data, "effect", where),
        cultural=_optional_str(data, "cultural", where),
        related=_str_tuple(related, f"{where}.related") if related is not None else None,
    )


def parse_entry(word: str, data: Mapping[str, Any]) -> WordEntry:
    """Build a WordEntry from its JSON object. Raises WordDataError."""
    where = f"words[{word!r}]"
    if not isinstance(data, dict):
        raise WordDataError(f"{where}: expected an object")

    structure = data.get("structure")
    components = data.get("components")
    if not isinstance(structure, dict) or not isinstance(components, dict):
        raise WordDataError(f"{where}: 'structure' and 'components' must be objects")

    root = _parse_morpheme(structure.get("root"), f"{where}.structure.root")
    if root is None:
        raise WordDataError(f"{where}: structure.root is required")

    meaning = None
    raw_meaning = data.get("meaning")
    if raw_meaning is not None:
        if not isinstance(raw_meaning, dict):
            raise WordDataError(f"{where}.meaning: expected an object")
        meaning = WordMeaning(
            basic=_require_str(raw_meaning, "basic", f"{where}.meaning"),
            etymological=_require_str(raw_meaning, "etymological", f"{where}.meaning"),
            extended=_str_tuple(raw_meaning.get("extended", []), f"{where}.meaning.extended"),
        )

    return WordEntry(
        word=word,
        structure=WordStructure(
            root=root,
            prefix=_parse_morpheme(structure.get("prefix"), f"{where}.structure.prefix"),
            suffix=_parse_morpheme(structure.get("suffix"), f"{where}.structure.suffix"),
        ),
        components=WordComponents(
            prefix=_parse_component(components.get("prefix"), f"{where}.components.prefix"),
            root=_parse_component(components.get("root"), f"{where}.components.root"),
            suffix=_parse_component(components.get("suffix"), f"{where}.components.suffix"),
        ),
        meaning=meaning,
        derivatives=_str_tuple(data.get("derivatives", []), f"{where}.derivatives"),
        cultural=_require_str(data, "cultural", where),
    )


# =============================================================================
# TABLE
# =============================================================================

class WordTable:
    """
    Immutable word → WordEntry mapping.

    Safe to share across concurrent requests: there are no writers.
    """

    def __init__(self, entries: Mapping[str, WordEntry]):
        normalized: Dict[str, WordEntry] = {}
        for key, entry in entries.items():
            if key.lower() != entry.word:
                raise WordDataError(f"Key {key!r} does not match entry word {entry.word!r}")
            normalized[entry.word] = entry
        self._entries = MappingProxyType(normalized)

    @classmethod
    def load(cls, path: Union[str, Path, None] = None) -> WordTable:
        """Load and validate the JSON word table."""
        path = Path(path) if path is not None else DEFAULT_DATA_PATH
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise WordDataError(f"Cannot read word table {path}: {e}") from e

        if not isinstance(raw, dict):
            raise WordDataError(f"Word table {path} must be a JSON object")

        entries = {word.lower(): parse_entry(word.lower(), data) for word, data in raw.items()}
        table = cls(entries)
        logger.info("Loaded %d words from %s", len(table), path)
        return table

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and word.lower() in self._entries

    def words(self) -> Tuple[str, ...]:
        return tuple(sorted(self._entries))

    def lookup(self, word: str) -> WordEntry:
        """
        Case-insensitive lookup.

        Raises WordNotFoundError on a miss.
        """
        entry = self._entries.get(word.lower())
        if entry is None:
            raise WordNotFoundError(word)
        return entry


# =============================================================================
# PROJECTION
# =============================================================================

def project_analysis(entry: WordEntry) -> EtymologyAnalysis:
    """
    Flatten an entry into the fields the story prompts use.

    Fallback order per field:
      prefix/suffix meaning: structure → components
      root meaning:          components → structure
      root background:       components.root.cultural → entry cultural
    """
    structure = entry.structure
    components = entry.components

    def first(*values: Optional[str]) -> str:
        for value in values:
            if value:
                return value
        return ""

    return EtymologyAnalysis(
        prefix=structure.prefix.text if structure.prefix else "",
        root=structure.root.text,
        suffix=structure.suffix.text if structure.suffix else "",
        prefix_meaning=first(
            structure.prefix.meaning if structure.prefix else None,
            components.prefix.meaning if components.prefix else None,
        ),
        root_meaning=first(
            components.root.meaning if components.root else None,
            structure.root.meaning,
        ),
        suffix_meaning=first(
            structure.suffix.meaning if structure.suffix else None,
            components.suffix.meaning if components.suffix else None,
        ),
        root_background=first(
            components.root.cultural if components.root else None,
            entry.cultural,
        ),
    )
