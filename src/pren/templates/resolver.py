"""Template resolution: variable substitution and recursive prompt composition."""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional

from .classifier import parse_template
from .environment import ArgumentEnvironment
from .types import SegmentKind, Template
from ..core.config import get_settings
from ..core.exceptions import (
    ConfigurationError,
    CyclicReferenceError,
    PromptNotFoundError,
    RecursionLimitExceededError,
)
from ..core.types import DictPromptLookup, PromptLookup

logger = logging.getLogger(__name__)

# Each composition level holds this many interpreter frames while nested
FRAMES_PER_LEVEL = 3
# Frames left for the caller, tokenizing and lookups at the deepest level
FRAME_HEADROOM = 200


def max_safe_depth() -> int:
    """Deepest nesting limit that cannot exhaust the interpreter stack."""
    return max(1, (sys.getrecursionlimit() - FRAME_HEADROOM) // FRAMES_PER_LEVEL)


class RenderContext:
    """
    Per-call resolution state.

    Holds the stack of prompt names currently being composed. A name may
    appear on the stack at most once; pushing it again is a cycle.
    """

    def __init__(self, max_depth: int):
        self.max_depth = max_depth
        self._stack: List[str] = []

    @property
    def stack(self) -> List[str]:
        return list(self._stack)

    @property
    def depth(self) -> int:
        return len(self._stack)

    @contextmanager
    def entering(self, name: str) -> Iterator[None]:
        """Push name for the duration of the block."""
        if name in self._stack:
            raise CyclicReferenceError(self._stack + [name])
        if len(self._stack) >= self.max_depth:
            raise RecursionLimitExceededError(self.max_depth, self._stack + [name])

        self._stack.append(name)
        try:
            yield
        finally:
            self._stack.pop()


class Resolver:
    """
    Renders templates against an argument environment and a prompt lookup.

    The resolver keeps no state between calls. Every top-level render gets
    a fresh RenderContext and ArgumentEnvironment, and output is returned
    only when the whole tree rendered successfully.

    Example:
        >>> lookup = DictPromptLookup({"greeting": "Hello, {{name}}!"})
        >>> Resolver(lookup).render("{{prompt:greeting}}", {"name": "Bob"})
        'Hello, Bob!'
    """

    def __init__(self, lookup: PromptLookup, max_depth: Optional[int] = None):
        """
        Initialize the resolver.

        Args:
            lookup: Source of composed prompt templates
            max_depth: Composition nesting limit (defaults to PREN_MAX_DEPTH)
        """
        if max_depth is None:
            max_depth = get_settings().engine.max_depth
        if max_depth < 1:
            raise ConfigurationError(
                f"max_depth must be at least 1, got {max_depth}",
                config_key="PREN_MAX_DEPTH"
            )
        ceiling = max_safe_depth()
        if max_depth > ceiling:
            raise ConfigurationError(
                f"max_depth must be at most {ceiling}, got {max_depth}",
                config_key="PREN_MAX_DEPTH"
            )
        self.lookup = lookup
        self.max_depth = max_depth

    def render(self, source: str, arguments: Optional[Mapping[str, Any]] = None) -> str:
        """
        Render raw template text.

        Args:
            source: Template source
            arguments: Variable bindings visible to the whole composition tree

        Returns:
            Rendered text

        Raises:
            RenderError: On the first unresolved reference, cycle or syntax error
        """
        env = ArgumentEnvironment.of(arguments)
        context = RenderContext(self.max_depth)
        return self._render_template(parse_template(source), env, context)

    def render_prompt(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> str:
        """
        Render a stored prompt by name.

        The prompt itself is the root of the resolution stack, so a prompt
        that includes itself is reported as [name, name].
        """
        env = ArgumentEnvironment.of(arguments)
        context = RenderContext(self.max_depth)
        return self._compose(name, env, context)

    def _render_template(
        self,
        template: Template,
        env: ArgumentEnvironment,
        context: RenderContext
    ) -> str:
        parts: List[str] = []

        for segment in template.segments:
            if segment.kind in (SegmentKind.LITERAL, SegmentKind.ESCAPED_LITERAL):
                parts.append(segment.value)
            elif segment.kind == SegmentKind.VARIABLE:
                # Values are inserted as-is, never re-parsed
                parts.append(env.lookup(segment.value))
            elif segment.kind == SegmentKind.PROMPT_REF:
                parts.append(self._compose(segment.value, env, context))
            elif segment.kind == SegmentKind.PROMPT_VAR_REF:
                target = env.lookup(segment.value)
                logger.debug(f"'{segment.value}' selects prompt '{target}'")
                parts.append(self._compose(target, env, context))

        return "".join(parts)

    def _compose(self, name: str, env: ArgumentEnvironment, context: RenderContext) -> str:
        with context.entering(name):
            source = self.lookup.resolve(name)
            if source is None:
                raise PromptNotFoundError(name, details={"path": context.stack})

            logger.debug(f"Composing prompt '{name}' at depth {context.depth}")
            return self._render_template(parse_template(source), env, context)


def render(
    source: str,
    arguments: Optional[Mapping[str, Any]] = None,
    lookup: Optional[PromptLookup] = None,
    max_depth: Optional[int] = None,
) -> str:
    """
    Render template text in one call.

    Args:
        source: Template source
        arguments: Variable bindings
        lookup: Prompt lookup for composition (none means no prompts exist)
        max_depth: Composition nesting limit

    Returns:
        Rendered text
    """
    if lookup is None:
        lookup = DictPromptLookup()
    return Resolver(lookup, max_depth=max_depth).render(source, arguments)
