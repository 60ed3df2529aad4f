"""Template parsing and resolution."""

from .types import Token, TokenType, Segment, SegmentKind, Template
from .tokenizer import Scanner, tokenize
from .classifier import classify, parse_template, PROMPT_PREFIX, PROMPT_VAR_PREFIX
from .environment import ArgumentEnvironment
from .resolver import RenderContext, Resolver, render
from .engine import TemplateEngine, OverlayLookup, create_engine

__all__ = [
    "Token",
    "TokenType",
    "Segment",
    "SegmentKind",
    "Template",
    "Scanner",
    "tokenize",
    "classify",
    "parse_template",
    "PROMPT_PREFIX",
    "PROMPT_VAR_PREFIX",
    "ArgumentEnvironment",
    "RenderContext",
    "Resolver",
    "render",
    "TemplateEngine",
    "OverlayLookup",
    "create_engine",
]
