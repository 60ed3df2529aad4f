"""Token and segment types for parsed templates."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class TokenType(Enum):
    """Raw span types produced by the scanner."""
    LITERAL = "literal"          # Text outside any braces
    PLACEHOLDER = "placeholder"  # Trimmed body of {{ ... }}
    ESCAPE = "escape"            # Inner text of {{{{ ... }}}}


@dataclass(frozen=True)
class Token:
    """A span of template source."""
    type: TokenType
    text: str
    position: int = 0


class SegmentKind(Enum):
    """Kinds of template segments."""
    LITERAL = "literal"
    VARIABLE = "variable"
    PROMPT_REF = "prompt"
    PROMPT_VAR_REF = "prompt_var"
    ESCAPED_LITERAL = "escaped_literal"


@dataclass(frozen=True)
class Segment:
    """
    A classified piece of a template.

    For literal kinds, value is the text to emit. For placeholder kinds,
    value is the variable or prompt name.
    """
    kind: SegmentKind
    value: str
    position: int = 0

    @property
    def is_placeholder(self) -> bool:
        return self.kind not in (SegmentKind.LITERAL, SegmentKind.ESCAPED_LITERAL)


def _unique(values: List[str]) -> List[str]:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


@dataclass(frozen=True)
class Template:
    """An immutable parsed template."""
    source: str
    segments: Tuple[Segment, ...] = ()

    def _values(self, kind: SegmentKind) -> List[str]:
        return _unique([s.value for s in self.segments if s.kind == kind])

    def arguments(self) -> List[str]:
        """Variable names used directly by this template, in order of appearance."""
        return self._values(SegmentKind.VARIABLE)

    def prompt_references(self) -> List[str]:
        """Names of statically composed prompts."""
        return self._values(SegmentKind.PROMPT_REF)

    def prompt_var_references(self) -> List[str]:
        """Variables whose values name dynamically composed prompts."""
        return self._values(SegmentKind.PROMPT_VAR_REF)

    @property
    def is_simple(self) -> bool:
        """True when rendering needs neither arguments nor a lookup."""
        return not any(s.is_placeholder for s in self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)
