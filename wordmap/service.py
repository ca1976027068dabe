"""
Etymology Service
=================

Unified interface for word lookup and story generation.

DESIGN PRINCIPLES:
==================
1. All validation happens before any outbound call
2. The word table and template table are read-only
3. The model chain comes from AppConfig, never from globals
4. No caching: every story request renders and calls afresh

FLOW (generate_story):
======================
1. Validate word/character present      → InvalidRequestError
2. Validate language                    → UnsupportedLanguageError
3. Validate character for that language → UnsupportedCharacterError
4. Resolve word                         → WordNotFoundError
5. Require a provider                   → ProviderNotConfiguredError
6. Project analysis, render prompt, run the model chain
"""

from __future__ import annotations
import logging
from typing import Optional

from storyteller import (
    Character,
    Language,
    ModelFallbackExecutor,
    PromptTemplates,
    StoryPrompt,
)
from storyteller.providers import (
    GeminiProvider,
    InvocationParams,
    LLMProvider,
    MockProvider,
)
from .config import AppConfig
from .contracts.errors import (
    InvalidRequestError,
    ProviderNotConfiguredError,
    UnsupportedCharacterError,
    UnsupportedLanguageError,
)
from .contracts.words import StoryRequest, StoryResult, WordEntry
from .lexicon import WordTable, project_analysis

logger = logging.getLogger(__name__)


def build_provider(config: AppConfig) -> Optional[LLMProvider]:
    """Provider selected by config, or None when Gemini has no API key."""
    if config.provider == "mock":
        return MockProvider(record_calls=False)
    if not config.gemini_api_key:
        return None
    return GeminiProvider(api_key=config.gemini_api_key, base_url=config.gemini_base_url)


class EtymologyService:
    """
    Word lookup plus story generation over a fallback model chain.

    Holds no per-request state; one instance serves every request.
    """

    def __init__(
        self,
        table: WordTable,
        executor: Optional[ModelFallbackExecutor],
        templates: Optional[PromptTemplates] = None
    ):
        """
        Args:
            table: Loaded word table
            executor: Model chain, or None if no provider is configured
            templates: Prompt table (validated here, at construction)
        """
        self._table = table
        self._executor = executor
        self._templates = templates or PromptTemplates()
        self._templates.validate()

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        provider: Optional[LLMProvider] = None,
        table: Optional[WordTable] = None
    ) -> EtymologyService:
        """Assemble the service. An explicit provider overrides config."""
        table = table or WordTable.load(config.data_path)
        provider = provider or build_provider(config)

        executor = None
        if provider is not None:
            executor = ModelFallbackExecutor(
                provider=provider,
                models=config.model_priority,
                params=InvocationParams(
                    timeout_seconds=config.timeout_seconds,
                    temperature=config.temperature
                )
            )
            logger.info(
                "Story provider %s with models: %s",
                provider.provider_id, ", ".join(config.model_priority)
            )
        return cls(table=table, executor=executor)

    @property
    def table(self) -> WordTable:
        return self._table

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def lookup_word(self, word: str) -> WordEntry:
        """Case-insensitive lookup. Raises WordNotFoundError."""
        return self._table.lookup(word)

    # =========================================================================
    # STORY GENERATION
    # =========================================================================

    def validate_story_request(self, request: StoryRequest):
        """
        Check a request without calling anything external.

        Returns (word, language, character, entry) on success.
        """
        word = (request.word or "").strip()
        character_code = (request.character or "").strip()
        if not word or not character_code:
            raise InvalidRequestError("Both word and character are required")

        language_code = request.language if request.language is not None else Language.KO.value
        language = Language.parse(language_code)
        if language is None:
            raise UnsupportedLanguageError(language_code)

        character = Character.parse(character_code)
        if character is None or not self._templates.supports(language, character):
            raise UnsupportedCharacterError(character_code, language.value)

        entry = self._table.lookup(word)
        return word, language, character, entry

    def generate_story(self, request: StoryRequest) -> StoryResult:
        """
        Validate, render, and run the model chain.

        Raises:
            InvalidRequestError, UnsupportedLanguageError,
            UnsupportedCharacterError, WordNotFoundError,
            ProviderNotConfiguredError, GenerationExhaustedError
        """
        word, language, character, entry = self.validate_story_request(request)

        if self._executor is None:
            logger.error("Story requested but GEMINI_API_KEY is not set")
            raise ProviderNotConfiguredError(
                "GEMINI_API_KEY is not set; story generation is unavailable"
            )

        prompt = StoryPrompt.create(
            word=word,
            analysis=project_analysis(entry),
            language=language,
            character=character,
            templates=self._templates
        )
        logger.info(
            "Generating story for word=%s character=%s language=%s (prompt %s, %d chars)",
            word, character.value, language.value, prompt.prompt_hash[:12], len(prompt.prompt_text)
        )

        result = self._executor.generate(prompt.prompt_text)

        return StoryResult(
            word=word,
            character=character.value,
            language=language.value,
            story=result.text,
            model=result.model
        )
