"""
Models package for printdown

Contains data structures and type definitions for the conversion pipeline.
"""

from .state import ProgramState, pipeline
from .code import CodeKind, CodeRange, Segment
from .tokens import Token, TokenOrigin, SubstitutionResult
from .document import InputFormat, DocumentSettings, TransformedContent, ProcessedDocument
from .directives import DirectiveSpec, DirectiveCategory, REWRITE_KEYS

__all__ = [
    "ProgramState",
    "pipeline",
    "CodeKind",
    "CodeRange",
    "Segment",
    "Token",
    "TokenOrigin",
    "SubstitutionResult",
    "InputFormat",
    "DocumentSettings",
    "TransformedContent",
    "ProcessedDocument",
    "DirectiveSpec",
    "DirectiveCategory",
    "REWRITE_KEYS",
]
