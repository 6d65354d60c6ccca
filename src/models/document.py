"""
Document-level models

DocumentSettings carries the formatting directives found in a document;
TransformedContent and ProcessedDocument are the outputs of the
rewriting and orchestration stages.
"""

import dataclasses
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class InputFormat(Enum):
    """Kind of source document"""
    MARKDOWN = "markdown"
    HTML = "html"

    @classmethod
    def from_suffix(cls, suffix: str) -> "InputFormat":
        """Pick the format from a file extension (".html"/".htm" → HTML)"""
        if suffix.lower() in (".html", ".htm"):
            return cls.HTML
        return cls.MARKDOWN


@dataclass(frozen=True)
class DocumentSettings:
    """
    Formatting directives extracted from a document

    Every field defaults to None, meaning "unset": the styler falls back to
    CLI-supplied or theme defaults for those. A field set to a falsy value
    (False, "") is still set and still overrides.

    Attributes:
        theme_color: Accent color (hex or named)
        body_color: Body text color
        link_color: Link color
        link_underline: Whether links are underlined
        base_font_size: Base font size (CSS length)
        header_size: Header scale base (CSS length)
        body_size: Body text size (CSS length)
        line_height: Line height
        paragraph_spacing: Space after paragraphs
        header_spacing: Space above headers
        page_numbers: Whether page numbers are printed
        page_number_format: "X" or "X of Y"
        disclosure: Footer disclosure label
        document_title: First top-level heading (markdown only)
        version_number: NN.NN version used for sequential output
        sequential_output: Whether output names carry the version
    """
    theme_color: Optional[str] = None
    body_color: Optional[str] = None
    link_color: Optional[str] = None
    link_underline: Optional[bool] = None
    base_font_size: Optional[str] = None
    header_size: Optional[str] = None
    body_size: Optional[str] = None
    line_height: Optional[str] = None
    paragraph_spacing: Optional[str] = None
    header_spacing: Optional[str] = None
    page_numbers: Optional[bool] = None
    page_number_format: Optional[str] = None
    disclosure: Optional[str] = None
    document_title: Optional[str] = None
    version_number: Optional[str] = None
    sequential_output: Optional[bool] = None

    def overrides(self) -> Dict[str, Any]:
        """Return only the fields that were set"""
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if getattr(self, f.name) is not None
        }

    def with_title(self, title: Optional[str]) -> "DocumentSettings":
        """Return a copy carrying the given document title"""
        return dataclasses.replace(self, document_title=title)


@dataclass
class TransformedContent:
    """
    Result of special-content rewriting

    Attributes:
        text: Rewritten text; each print-only block is replaced by a
              sentinel pair around its index (markdown input only)
        print_only: Extracted print-only bodies, indexed to match sentinels

    Example:
        Input: "<!-- PDF-ONLY\\nHello\\n-->"
        Result: TransformedContent(
            text="\\n\\nPRINTONLY_START_0_PRINTONLY_END\\n\\n",
            print_only=["Hello"]
        )
    """
    text: str
    print_only: List[str] = field(default_factory=list)


@dataclass
class ProcessedDocument:
    """
    Output of the full transformation pipeline for one document

    Attributes:
        html: Final HTML fragment with all directives rewritten
        settings: Extracted document settings (title included for markdown)
        unresolved: Token names still unresolved after substitution
    """
    html: str
    settings: DocumentSettings
    unresolved: List[str] = field(default_factory=list)
