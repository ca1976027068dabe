"""
Word Map Contracts

Immutable data types and the error taxonomy shared by all wordmap modules.
"""

from .words import (
    Morpheme,
    WordStructure,
    Component,
    WordComponents,
    WordMeaning,
    WordEntry,
    StoryRequest,
    StoryResult,
)
from .errors import (
    ErrorCode,
    WordMapError,
    InvalidRequestError,
    UnsupportedLanguageError,
    UnsupportedCharacterError,
    WordNotFoundError,
    ProviderNotConfiguredError,
    ConfigurationError,
    WordDataError,
)

__all__ = [
    'Morpheme',
    'WordStructure',
    'Component',
    'WordComponents',
    'WordMeaning',
    'WordEntry',
    'StoryRequest',
    'StoryResult',
    'ErrorCode',
    'WordMapError',
    'InvalidRequestError',
    'UnsupportedLanguageError',
    'UnsupportedCharacterError',
    'WordNotFoundError',
    'ProviderNotConfiguredError',
    'ConfigurationError',
    'WordDataError',
]
