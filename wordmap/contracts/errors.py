"""
Application Errors

Every request-time failure is one of these types. The HTTP layer maps
each to a status code through http_status; nothing else inspects them.
"""

from __future__ import annotations
from enum import Enum, auto


class ErrorCode(Enum):
    """Explicit error codes, one per failure the API can report."""
    # Request errors
    INVALID_REQUEST = auto()
    UNSUPPORTED_LANGUAGE = auto()
    UNSUPPORTED_CHARACTER = auto()
    WORD_NOT_FOUND = auto()

    # Server errors
    PROVIDER_NOT_CONFIGURED = auto()

    # Startup errors
    INVALID_CONFIGURATION = auto()
    INVALID_WORD_DATA = auto()


class WordMapError(Exception):
    """Base class for application errors."""
    code: ErrorCode = ErrorCode.INVALID_REQUEST
    http_status: int = 500


class InvalidRequestError(WordMapError):
    """Required request fields are missing or blank."""
    code = ErrorCode.INVALID_REQUEST
    http_status = 400


class UnsupportedLanguageError(WordMapError):
    code = ErrorCode.UNSUPPORTED_LANGUAGE
    http_status = 400

    def __init__(self, language):
        self.language = language
        super().__init__(f"Unsupported language: {language}")


class UnsupportedCharacterError(WordMapError):
    code = ErrorCode.UNSUPPORTED_CHARACTER
    http_status = 400

    def __init__(self, character, language):
        self.character = character
        self.language = language
        super().__init__(f"Unsupported character: {character}")


class WordNotFoundError(WordMapError):
    code = ErrorCode.WORD_NOT_FOUND
    http_status = 404

    def __init__(self, word):
        self.word = word
        super().__init__(f"Word not found: {word}")


class ProviderNotConfiguredError(WordMapError):
    """Story generation requested without a provider credential."""
    code = ErrorCode.PROVIDER_NOT_CONFIGURED
    http_status = 500


class ConfigurationError(WordMapError):
    code = ErrorCode.INVALID_CONFIGURATION


class WordDataError(WordMapError):
    code = ErrorCode.INVALID_WORD_DATA
