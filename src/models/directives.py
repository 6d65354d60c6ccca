"""
Directive specification and metadata models

Defines the structure of document setting directives
(<!-- key: value --> comments) for the registry and the extractor.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Set


class DirectiveCategory(Enum):
    """
    Categories of setting directives

    Used for organization and documentation of the directive table.
    """
    COLOR = "color"        # theme-color, body-color, link-color
    SIZE = "size"          # font-size, header-size, body-size
    SPACING = "spacing"    # line-height, paragraph-spacing, header-spacing
    FLAG = "flag"          # link-underline, sequential-output
    FOOTER = "footer"      # page-numbers, disclosure
    OUTPUT = "output"      # version-number


@dataclass
class DirectiveSpec:
    """
    Specification for a setting directive

    Attributes:
        key: Comment key (e.g., "theme-color"), matched case-insensitively
        category: Category for organization
        description: Human-readable description
        parse: Normalizer mapping the trimmed raw value to DocumentSettings
               fields (value -> {field_name: field_value})
        examples: Example comment strings
    """
    key: str
    category: DirectiveCategory
    description: str
    parse: Callable[[str], Dict[str, Any]]
    examples: List[str] = field(default_factory=list)


# Keys consumed by the special content transformer, never by the extractor
REWRITE_KEYS: Set[str] = {
    'col-widths',
    'live-site-shield',
    'redaction-shield',
    'page-break',
}


def rewrite_is(key: str) -> bool:
    """Check if a comment key belongs to the rewrite vocabulary"""
    return key.strip().lower() in REWRITE_KEYS
