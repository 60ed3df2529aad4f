"""Prompt storage backends."""

from .base import PromptStorage
from .memory import MemoryPromptStorage
from .file import FilePromptStorage, parse_frontmatter, serialize_frontmatter

__all__ = [
    "PromptStorage",
    "MemoryPromptStorage",
    "FilePromptStorage",
    "parse_frontmatter",
    "serialize_frontmatter",
]
