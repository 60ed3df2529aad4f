"""
pren - a simple and ergonomic prompt engine

Stores named prompt templates and renders them, substituting variables and
splicing in other prompts.

Template syntax:
    {{name}}                variable substitution
    {{prompt:name}}         static composition of another prompt
    {{prompt_var:name}}     dynamic composition; the variable names the prompt
    {{{{text}}}}            literal braces, renders as {{text}}

Basic Usage:
    >>> from pren import PromptEngine
    >>> engine = PromptEngine.in_memory()
    >>> engine.add("greeting", "Hello, {{name}}!")
    >>> engine.add("formal", "{{prompt:greeting}} Please enjoy your stay.")
    >>> engine.render("formal", name="Bob")
    'Hello, Bob! Please enjoy your stay.'

For more control, use the individual modules:
    - pren.templates: Tokenizer, classifier, resolver and TemplateEngine
    - pren.storage: In-memory and file-based prompt storage
    - pren.cli: Command-line interface
"""

from typing import Any, Dict, List, Optional

from .core.types import PromptLookup, DictPromptLookup, PromptRecord
from .core.config import get_settings
from .core.exceptions import (
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
from .templates import Template, TemplateEngine, parse_template, render
from .storage import PromptStorage, MemoryPromptStorage, FilePromptStorage


__version__ = "0.2.0"
__all__ = [
    # Main class
    "PromptEngine",
    # Entry points
    "render",
    "parse_template",
    # Types
    "Template",
    "PromptLookup",
    "DictPromptLookup",
    "PromptRecord",
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
    # Components (for advanced use)
    "TemplateEngine",
    "PromptStorage",
    "MemoryPromptStorage",
    "FilePromptStorage",
]


class PromptEngine:
    """
    Main interface for storing and rendering prompts.

    Example:
        >>> engine = PromptEngine(storage_path="~/pren/prompts")
        >>> engine.add("greeting", "Hello, {{name}}!", tags=["example"])
        >>> engine.render("greeting", name="World")
        'Hello, World!'
    """

    def __init__(
        self,
        storage: Optional[PromptStorage] = None,
        storage_path: Optional[str] = None,
        max_depth: Optional[int] = None,
    ):
        """
        Initialize the PromptEngine.

        Args:
            storage: Storage backend (takes precedence over storage_path)
            storage_path: Directory for file storage (defaults to PREN_STORAGE_PATH)
            max_depth: Composition nesting limit (defaults to PREN_MAX_DEPTH)
        """
        if storage is None:
            storage = FilePromptStorage(storage_path or get_settings().storage.base_path)
        self.storage = storage
        self.templates = TemplateEngine(lookup=storage, max_depth=max_depth)

    @classmethod
    def in_memory(cls, prompts: Optional[Dict[str, str]] = None, **kwargs) -> "PromptEngine":
        """Create an engine backed by in-memory storage."""
        storage = MemoryPromptStorage([
            PromptRecord(name=name, content=content)
            for name, content in (prompts or {}).items()
        ])
        return cls(storage=storage, **kwargs)

    # Storage methods
    def add(
        self,
        name: str,
        content: str,
        description: Optional[str] = None,
        tags: Optional[List[str]] = None,
        overwrite: bool = False,
    ) -> PromptRecord:
        """Store a prompt. The content must be a valid template."""
        record = PromptRecord(name=name, content=content, description=description, tags=tags or [])
        self.storage.save_prompt(record, overwrite=overwrite)
        return record

    def get(self, name: str) -> PromptRecord:
        """Get a stored prompt."""
        record = self.storage.get_prompt(name)
        if record is None:
            raise PromptNotFoundError(name)
        return record

    def list_prompts(self, tags: Optional[List[str]] = None) -> List[PromptRecord]:
        """List stored prompts, optionally filtered by tag."""
        if tags:
            return self.storage.get_prompts_by_tag(tags)
        return self.storage.list_prompts()

    def delete(self, name: str) -> None:
        """Delete a stored prompt."""
        self.storage.delete_prompt(name)

    # Rendering methods
    def render(self, prompt_name: str, arguments: Optional[Dict[str, Any]] = None, **kwargs) -> str:
        """Render a stored prompt by name."""
        return self.templates.render(prompt_name, arguments, **kwargs)

    def render_string(self, template: str, arguments: Optional[Dict[str, Any]] = None, **kwargs) -> str:
        """Render template text against the stored prompts."""
        return self.templates.render_string(template, arguments, **kwargs)

    def missing_arguments(self, name: str, arguments: Dict[str, Any]) -> List[str]:
        """Arguments a stored prompt needs that are not supplied."""
        return self.templates.validate_variables(name, arguments)
