"""Custom exceptions for the prompt engine."""

from typing import Optional, Dict, Any, List


class PrenError(Exception):
    """Base exception for all pren errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class RenderError(PrenError):
    """Error while rendering a template. Terminal for the whole render call."""


class TemplateSyntaxError(RenderError):
    """Error in template source text."""

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.position = position
        if position is not None:
            self.details["position"] = position


class UnterminatedPlaceholderError(TemplateSyntaxError):
    """An opening brace sequence has no matching closing sequence."""


class MalformedPlaceholderError(TemplateSyntaxError):
    """A placeholder body contains nested double braces."""


class EmptyReferenceNameError(TemplateSyntaxError):
    """A placeholder names nothing once its prefix is stripped."""


class UndefinedVariableError(RenderError):
    """A variable is not present in the argument environment."""

    def __init__(
        self,
        name: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(f"Missing argument: {name}", details, cause)
        self.name = name


class PromptNotFoundError(RenderError):
    """A referenced prompt cannot be resolved by the lookup."""

    def __init__(
        self,
        name: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(f"Prompt not found: {name}", details, cause)
        self.name = name


class CyclicReferenceError(RenderError):
    """A prompt references itself, directly or through other prompts."""

    def __init__(
        self,
        path: List[str],
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(
            f"Circular reference detected: {' -> '.join(path)}",
            details,
            cause
        )
        self.path = list(path)


class RecursionLimitExceededError(RenderError):
    """Prompt composition nests deeper than the configured limit."""

    def __init__(
        self,
        limit: int,
        path: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(f"Maximum nesting depth of {limit} exceeded", details, cause)
        self.limit = limit
        self.path = list(path or [])
        if self.path:
            self.details["path"] = self.path


class StorageError(PrenError):
    """Error reading or writing stored prompts."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.path = path
        if path:
            self.details["path"] = path


class PromptExistsError(StorageError):
    """A prompt with the same name is already stored."""


class ConfigurationError(PrenError):
    """Error in configuration."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, details, cause)
        self.config_key = config_key
        if config_key:
            self.details["config_key"] = config_key
