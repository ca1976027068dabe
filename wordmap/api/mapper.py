"""
API Mapper
==========

Transforms WordEntry values into the JSON shape the front-end reads.

Shape rules:
- structure parts are always present, null when absent
- components only list the parts that exist
- optional component fields are omitted when unset
"""
from typing import Any, Dict, Optional

from ..contracts.words import Component, Morpheme, StoryResult, WordEntry


def _map_morpheme(morpheme: Optional[Morpheme]) -> Optional[Dict[str, str]]:
    if morpheme is None:
        return None
    return {"text": morpheme.text, "meaning": morpheme.meaning}


def _map_component(component: Component) -> Dict[str, Any]:
    dto: Dict[str, Any] = {"origin": component.origin, "meaning": component.meaning}
    if component.related is not None:
        dto["related"] = list(component.related)
    if component.effect is not None:
        dto["effect"] = component.effect
    if component.cultural is not None:
        dto["cultural"] = component.cultural
    return dto


def map_entry_to_dto(entry: WordEntry) -> Dict[str, Any]:
    """Map a WordEntry to its JSON object."""
    components = {}
    for role in ("root", "prefix", "suffix"):
        component = getattr(entry.components, role)
        if component is not None:
            components[role] = _map_component(component)

    dto: Dict[str, Any] = {
        "structure": {
            "prefix": _map_morpheme(entry.structure.prefix),
            "root": _map_morpheme(entry.structure.root),
            "suffix": _map_morpheme(entry.structure.suffix),
        },
        "components": components,
    }
    if entry.meaning is not None:
        dto["meaning"] = {
            "basic": entry.meaning.basic,
            "extended": list(entry.meaning.extended),
            "etymological": entry.meaning.etymological,
        }
    dto["derivatives"] = list(entry.derivatives)
    dto["cultural"] = entry.cultural
    return dto


def map_story_to_dto(result: StoryResult) -> Dict[str, Any]:
    """Map a StoryResult to the success envelope (model stays internal)."""
    return {
        "success": True,
        "word": result.word,
        "character": result.character,
        "language": result.language,
        "story": result.story,
    }
