"""
Document settings extraction

Scans text for single-line <!-- key: value --> setting comments and builds
an immutable DocumentSettings record. For each registered key only the
first occurrence counts.

The document title comes from the first top-level "# Heading" line and is
only derived for markdown input.

Example:
    >>> settings = settings_extract("<!-- page-numbers: x -->")
    >>> settings.page_numbers, settings.page_number_format
    (True, 'X')
"""

import re
from typing import Any, Dict, Optional

from ..models.document import DocumentSettings
from .codespans import codeRanges_find, position_isProtected
from .directives import DirectiveRegistry
from .log import LOG

TITLE_PATTERN = re.compile(r'^#[ \t]+(\S.*)$', re.MULTILINE)


def directive_pattern(key: str) -> re.Pattern[str]:
    """
    Build the comment pattern for one directive key

    The value is everything up to the closing marker on the same line,
    possibly empty; surrounding whitespace is trimmed by the caller.
    """
    return re.compile(
        r'<!--[ \t]*' + re.escape(key) + r'[ \t]*:([^\n]*?)-->',
        re.IGNORECASE,
    )


class SettingsExtractor:
    """
    Table-driven extractor for setting directives

    Compiles one pattern per registered directive up front; extraction is
    then a single scan per directive over the text.
    """

    def __init__(self, registry: Optional[DirectiveRegistry] = None) -> None:
        """
        Args:
            registry: Directive table (default: built-in DirectiveRegistry)
        """
        self.registry = registry or DirectiveRegistry()
        self.patterns = [
            (spec, directive_pattern(spec.key)) for spec in self.registry
        ]

    def extract(self, text: str) -> DocumentSettings:
        """
        Extract document settings from text

        Args:
            text: Document text with directive comments still present

        Returns:
            DocumentSettings with every found directive set, the rest unset
        """
        fields: Dict[str, Any] = {}

        for spec, pattern in self.patterns:
            match = pattern.search(text)
            if not match:
                continue
            value = match.group(1).strip()
            fields.update(spec.parse(value))
            LOG(f"Found {spec.key} in document: {value!r}", level=2)

        return DocumentSettings(**fields)


def settings_extract(text: str) -> DocumentSettings:
    """Extract DocumentSettings using the built-in directive table"""
    return SettingsExtractor().extract(text)


def title_extract(markdown_text: str) -> Optional[str]:
    """
    Derive the document title from the first top-level heading

    Headings inside fenced code (e.g. shell comments) are skipped.

    Example:
        >>> title_extract("intro\\n# Annual Report \\n## Part")
        'Annual Report'
    """
    ranges = codeRanges_find(markdown_text)

    for match in TITLE_PATTERN.finditer(markdown_text):
        if position_isProtected(ranges, match.start()):
            continue
        title = match.group(1).strip()
        LOG(f"Found document title: {title}", level=2)
        return title

    return None
