"""Core module - foundational types, exceptions, and configuration."""

from .types import PromptLookup, DictPromptLookup, PromptRecord
from .config import Settings, get_settings, reload_settings
from .log import configure_logging
from .exceptions import (
    PrenError,
    RenderError,
    TemplateSyntaxError,
    UnterminatedPlaceholderError,
    MalformedPlaceholderError,
    EmptyReferenceNameError,
    UndefinedVariableError,
    PromptNotFoundError,
    CyclicReferenceError,
    RecursionLimitExceededError,
    StorageError,
    PromptExistsError,
    ConfigurationError,
)

__all__ = [
    # Types
    "PromptLookup",
    "DictPromptLookup",
    "PromptRecord",
    # Configuration
    "Settings",
    "get_settings",
    "reload_settings",
    "configure_logging",
    # Exceptions
    "PrenError",
    "RenderError",
    "TemplateSyntaxError",
    "UnterminatedPlaceholderError",
    "MalformedPlaceholderError",
    "EmptyReferenceNameError",
    "UndefinedVariableError",
    "PromptNotFoundError",
    "CyclicReferenceError",
    "RecursionLimitExceededError",
    "StorageError",
    "PromptExistsError",
    "ConfigurationError",
]
