"""Placeholder classification."""

from typing import List

from .types import Segment, SegmentKind, Template, Token, TokenType
from .tokenizer import tokenize, OPEN, CLOSE
from ..core.exceptions import EmptyReferenceNameError

PROMPT_PREFIX = "prompt:"
PROMPT_VAR_PREFIX = "prompt_var:"


def classify(body: str, position: int = 0) -> Segment:
    """
    Determine the kind of a trimmed placeholder body.

    Args:
        body: Placeholder body with surrounding whitespace removed
        position: Source offset of the placeholder, for error reporting

    Returns:
        A VARIABLE, PROMPT_REF or PROMPT_VAR_REF segment

    Raises:
        EmptyReferenceNameError: If no name remains after the prefix
    """
    if body.startswith(PROMPT_VAR_PREFIX):
        kind = SegmentKind.PROMPT_VAR_REF
        name = body[len(PROMPT_VAR_PREFIX):].strip()
    elif body.startswith(PROMPT_PREFIX):
        kind = SegmentKind.PROMPT_REF
        name = body[len(PROMPT_PREFIX):].strip()
    else:
        kind = SegmentKind.VARIABLE
        name = body

    if not name:
        raise EmptyReferenceNameError(
            f"Empty {kind.value} name in placeholder at position {position}",
            position=position,
            details={"placeholder": f"{OPEN}{body}{CLOSE}"}
        )

    return Segment(kind, name, position)


def classify_token(token: Token) -> Segment:
    """Turn a scanner token into a template segment."""
    if token.type == TokenType.LITERAL:
        return Segment(SegmentKind.LITERAL, token.text, token.position)
    if token.type == TokenType.ESCAPE:
        return Segment(SegmentKind.ESCAPED_LITERAL, f"{OPEN}{token.text}{CLOSE}", token.position)
    return classify(token.text, token.position)


def parse_template(source: str) -> Template:
    """
    Parse template source into an immutable Template.

    Raises:
        TemplateSyntaxError: On any scanner or classification error
    """
    segments: List[Segment] = [classify_token(t) for t in tokenize(source)]
    return Template(source=source, segments=tuple(segments))
