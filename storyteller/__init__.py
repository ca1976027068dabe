"""
Storyteller Package

ARCHITECTURAL BOUNDARY:
=======================
This package turns an etymology analysis into a story via an
external generative-language provider. It knows nothing about the
word table or HTTP.

DIRECTION OF DEPENDENCY:
========================
wordmap → storyteller → provider

DESIGN PRINCIPLES:
==================
1. Prompts are pure functions of (word, analysis, language, character)
2. Providers never raise; failures are explicit responses
3. The model chain is immutable and tried strictly in order
"""

from .contracts import (
    Language,
    Character,
    EtymologyAnalysis,
    GenerationErrorCode,
    CandidateFailure,
    GenerationResult,
    GenerationError,
    ProviderCallError,
    MalformedProviderResponseError,
    EmptyGenerationError,
    GenerationExhaustedError,
    TemplateConfigurationError,
)
from .decoding import decode_generation
from .fallback import ModelFallbackExecutor
from .prompts import PromptTemplates, StoryPrompt, SYSTEM_INSTRUCTIONS

__all__ = [
    'Language',
    'Character',
    'EtymologyAnalysis',
    'GenerationErrorCode',
    'CandidateFailure',
    'GenerationResult',
    'GenerationError',
    'ProviderCallError',
    'MalformedProviderResponseError',
    'EmptyGenerationError',
    'GenerationExhaustedError',
    'TemplateConfigurationError',
    'decode_generation',
    'ModelFallbackExecutor',
    'PromptTemplates',
    'StoryPrompt',
    'SYSTEM_INSTRUCTIONS',
]
