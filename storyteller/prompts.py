"""
Story Prompt Generation
=======================

Pure functions for rendering persona prompts from an EtymologyAnalysis.

INVARIANT: Same (word, analysis, language, character) → same prompt_hash
No request context, no provider state.

WHY A TABLE:
Template selection is a two-key lookup. Every (language, character)
pair the API accepts must have an entry; PromptTemplates.validate()
checks this once at startup rather than failing on a live request.
"""

from __future__ import annotations
from dataclasses import dataclass
import hashlib
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from .contracts import (
    Character,
    EtymologyAnalysis,
    Language,
    TemplateConfigurationError,
)


SYSTEM_INSTRUCTIONS: Dict[Language, str] = {
    Language.KO: (
        "당신은 창의적인 이야기꾼입니다. 항상 한국어로만 응답하세요. "
        "절대로 영어나 다른 언어를 사용하지 마세요."
    ),
    Language.EN: (
        "You are a creative storyteller. Always respond in English only. "
        "Never use Korean or any other language."
    ),
}


_KO_TEMPLATES: Dict[Character, str] = {
    Character.POET: """당신은 시인입니다. '{word}' 단어에 대한 시를 문학적 표현들을 포함하여 써주세요.
이 단어의 어원은 다음과 같습니다:
- 어근: {root} ({root_meaning})
- 접두사: {prefix} ({prefix_meaning})
- 접미사: {suffix} ({suffix_meaning})

한국어로 시적이고 아름다운 시를 작성해주세요.""",

    Character.ROBOT: """당신은 분석적인 AI 로봇입니다. '{word}' 단어를 기계적이고 논리적으로 분석해주세요.
다음 정보를 바탕으로 분석하되, 기계적이고 차가운 어조로 설명해주세요:
- 어근: {root} ({root_meaning})
- 접두사: {prefix} ({prefix_meaning})
- 접미사: {suffix} ({suffix_meaning})

한국어로 응답해주세요.""",

    Character.LINGUIST: """당신은 언어학자입니다. '{word}' 단어의 어원과 발달 과정을 학술적으로 설명해주세요.
다음 정보를 바탕으로 설명해주세요:
- 어근: {root} ({root_meaning})
- 접두사: {prefix} ({prefix_meaning})
- 접미사: {suffix} ({suffix_meaning})
- 어원 배경: {root_background}

한국어로 응답해주세요.""",

    Character.FANTASY: """당신은 판타지 소설가입니다. '{word}' 단어를 주제로 한 짧은 판타지 이야기를 들려주세요.
다음 요소들을 이야기에 창의적으로 녹여내주세요:
- 어근의 의미: {root_meaning}
- 접두사의 의미: {prefix_meaning}
- 접미사의 의미: {suffix_meaning}

한국어로 마법과 환상이 가득한 이야기를 들려주세요.""",

    Character.CHILDREN: """당신은 동화작가입니다. '{word}' 단어의 의미를 아이들이 이해하기 쉽게 설명하는 짧은 이야기를 들려주세요.
다음 내용을 아이들의 눈높이에 맞게 설명해주세요:
- 단어의 뜻: {root_meaning}
- 단어의 유래: {root_background}

한국어로 재미있고 교육적인 이야기를 들려주세요.""",
}


_EN_TEMPLATES: Dict[Character, str] = {
    Character.POET: """You are a poet. Write a poem about the word '{word}' with literary expressions.
The etymology of this word is:
- Root: {root} ({root_meaning})
- Prefix: {prefix} ({prefix_meaning})
- Suffix: {suffix} ({suffix_meaning})

Please write a poetic and beautiful poem in English.""",

    Character.ROBOT: """You are an analytical AI robot. Please analyze the word '{word}' mechanically and logically.
Based on the following information, please explain in a mechanical and cold tone:
- Root: {root} ({root_meaning})
- Prefix: {prefix} ({prefix_meaning})
- Suffix: {suffix} ({suffix_meaning})

Please respond in English.""",

    Character.LINGUIST: """You are a linguist. Please explain the etymology and development process of the word '{word}' academically.
Please explain based on the following information:
- Root: {root} ({root_meaning})
- Prefix: {prefix} ({prefix_meaning})
- Suffix: {suffix} ({suffix_meaning})
- Etymology Background: {root_background}

Please respond in English.""",

    Character.FANTASY: """You are a fantasy writer. Tell a short fantasy story about the word '{word}'.
Please creatively incorporate these elements into the story:
- Root meaning: {root_meaning}
- Prefix meaning: {prefix_meaning}
- Suffix meaning: {suffix_meaning}

Please write a magical and fantastical story in English.""",

    Character.CHILDREN: """You are a children's book author. Tell a short story explaining the meaning of the word '{word}' in a way that children can easily understand.
Please explain the following content at a child's level:
- Word meaning: {root_meaning}
- Word origin: {root_background}

Please write a fun and educational story in English.""",
}


STORY_TEMPLATES: Mapping[Language, Mapping[Character, str]] = {
    Language.KO: _KO_TEMPLATES,
    Language.EN: _EN_TEMPLATES,
}


@dataclass(frozen=True)
class StoryPrompt:
    """
    Frozen prompt with hash for log correlation.

    prompt_text already includes the system instruction.
    """
    word: str
    language: Language
    character: Character
    prompt_text: str
    prompt_hash: str

    @staticmethod
    def create(
        word: str,
        analysis: EtymologyAnalysis,
        language: Language,
        character: Character,
        templates: Optional[PromptTemplates] = None
    ) -> StoryPrompt:
        """Render the persona prompt and prepend the system instruction."""
        templates = templates or PromptTemplates()
        body = templates.render(word, analysis, language, character)
        prompt_text = f"{SYSTEM_INSTRUCTIONS[language]}\n\n{body}"

        return StoryPrompt(
            word=word,
            language=language,
            character=character,
            prompt_text=prompt_text,
            prompt_hash=hashlib.sha256(prompt_text.encode()).hexdigest()
        )


class PromptTemplates:
    """
    Two-dimensional (language, character) template table.

    The default table covers every Language × Character pair.
    A custom table can be supplied for tests or new personas; it is
    checked with validate() before use.
    """

    def __init__(
        self,
        templates: Optional[Mapping[Language, Mapping[Character, str]]] = None
    ):
        self._templates = templates if templates is not None else STORY_TEMPLATES

    def validate(
        self,
        required: Optional[FrozenSet[Tuple[Language, Character]]] = None
    ) -> None:
        """
        Check that every required pair has a template.

        Raises TemplateConfigurationError listing the missing pairs.
        """
        if required is None:
            required = frozenset((lang, char) for lang in Language for char in Character)

        missing = sorted(
            f"{lang.value}/{char.value}"
            for lang, char in required
            if char not in self._templates.get(lang, {})
        )
        if missing:
            raise TemplateConfigurationError(
                f"Missing story templates for: {', '.join(missing)}"
            )

    def languages(self) -> Tuple[Language, ...]:
        return tuple(lang for lang in Language if lang in self._templates)

    def characters_for(self, language: Language) -> Tuple[Character, ...]:
        """Characters that have a template in the given language."""
        table = self._templates.get(language, {})
        return tuple(char for char in Character if char in table)

    def supports(self, language: Language, character: Character) -> bool:
        return character in self._templates.get(language, {})

    def render(
        self,
        word: str,
        analysis: EtymologyAnalysis,
        language: Language,
        character: Character
    ) -> str:
        """Render the persona prompt (without system instruction)."""
        try:
            template = self._templates[language][character]
        except KeyError:
            raise TemplateConfigurationError(
                f"No story template for {language.value}/{character.value}"
            ) from None

        return template.format(
            word=word,
            prefix=analysis.prefix,
            root=analysis.root,
            suffix=analysis.suffix,
            prefix_meaning=analysis.prefix_meaning,
            root_meaning=analysis.root_meaning,
            suffix_meaning=analysis.suffix_meaning,
            root_background=analysis.root_background,
        )
