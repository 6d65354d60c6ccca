"""
Special content rewriting

Rewrites the four content directives into renderable markup:

1. Print-only blocks   <!-- PDF-ONLY          (or "PDF ONLY", any case)
                       ...markdown or HTML...
                       -->
2. Page breaks         <!-- PAGE-BREAK -->    (also <!--| pagebreak -->, <!-- ! PAGE-BREAK --> ...)
3. Shields             <!-- live-site-shield -->  / <!-- redaction-shield -->
                       followed by a paragraph, optionally "Label: value"
4. Column widths       <!-- col-widths: 30% 70% -->

Rewrites never touch fenced or inline code. Print-only comments are
matched on the whole text (their body may itself hold code) but skipped
when they start inside code; the other three rewrite only the non-code
segments of the text.

For markdown input, print-only bodies are lifted out and replaced by a
sentinel pair around their index, and shields leave a marker element; the
converter resolves both once the markdown has become HTML
(printOnly_resolve(), shields_structure()). For HTML input everything is
resolved in place.

Directive comments that do not match these shapes stay literal text.
"""

import re
from typing import Callable, List

from ..models.document import InputFormat, TransformedContent
from .codespans import codeRanges_find, position_isProtected, outsideCode_rewrite
from .log import LOG

PRINT_ONLY_PATTERN = re.compile(
    r'<!--[ \t]*PDF[-\s]+ONLY[ \t]*\n([\s\S]*?)\n[ \t]*-->',
    re.IGNORECASE,
)

PAGE_BREAK_PATTERN = re.compile(
    r'<!--[!?~/\\*|—^@#\[\s]*PAGE-?BREAK\s*-->',
    re.IGNORECASE,
)

SHIELD_COMMENT = r'<!--[ \t|]*(live-site|redaction)-shield[ \t]*-->'
SHIELD_MARKDOWN_PATTERN = re.compile(SHIELD_COMMENT + r'[ \t]*(?:\n|\Z)', re.IGNORECASE)
SHIELD_HTML_PARAGRAPH_PATTERN = re.compile(
    SHIELD_COMMENT + r'\s*<p>(.*?)</p>',
    re.IGNORECASE | re.DOTALL,
)
SHIELD_HTML_PATTERN = re.compile(SHIELD_COMMENT, re.IGNORECASE)

COLUMN_WIDTHS_PATTERN = re.compile(
    r'<!--[ \t]*col-widths[ \t]*:[ \t]*(\S[^\n]*?)[ \t]*-->',
    re.IGNORECASE,
)

LABEL_VALUE_PATTERN = re.compile(r'([^:<\n]+?):\s+(.+)', re.DOTALL)


def shield_build(kind: str, content: str) -> str:
    """
    Build the structured shield element for a paragraph

    Args:
        kind: "live-site" or "redaction"
        content: Inner HTML of the shielded paragraph

    Example:
        >>> shield_build("live-site", "Live Site: https://example.com")
        '<p class="live-site-shield"><span class="label">Live Site</span><span class="value">https://example.com</span></p>'
    """
    css_class = f"{kind.lower()}-shield"
    content = content.strip()

    match = LABEL_VALUE_PATTERN.fullmatch(content)
    if match:
        label, value = match.group(1).strip(), match.group(2).strip()
        return (
            f'<p class="{css_class}"><span class="label">{label}</span>'
            f'<span class="value">{value}</span></p>'
        )

    return f'<p class="{css_class}">{content}</p>'


def columnWidths_style(widths: str, separator: str = "\n") -> str:
    """
    Build a style block with one nth-child width rule per value

    Example:
        >>> columnWidths_style("30% 70%")
        '<style>\\ntable tr td:nth-child(1) { width: 30%; }\\ntable tr td:nth-child(2) { width: 70%; }\\n</style>'
    """
    rules = [
        f"table tr td:nth-child({index}) {{ width: {width}; }}"
        for index, width in enumerate(widths.split(), start=1)
    ]
    return separator.join(["<style>", *rules, "</style>"])


def shields_structure(html: str) -> str:
    """
    Turn shield marker elements plus their paragraph into shield elements

    Markers left without a following paragraph are removed.
    """
    from ..config import appsettings

    marker_class = re.escape(appsettings.shield_marker_class)
    paragraph_pattern = re.compile(
        r'<div class="' + marker_class + r'" data-shield="([\w-]+)"></div>\s*<p>(.*?)</p>',
        re.IGNORECASE | re.DOTALL,
    )
    html = paragraph_pattern.sub(
        lambda match: shield_build(match.group(1), match.group(2)), html
    )

    return re.sub(
        r'<div class="' + marker_class + r'" data-shield="[\w-]+"></div>\n?',
        '',
        html,
        flags=re.IGNORECASE,
    )


def printOnly_resolve(html: str, print_only: List[str], render: Callable[[str], str]) -> str:
    """
    Replace print-only sentinels with their rendered bodies

    Args:
        html: Converted HTML still holding sentinel pairs
        print_only: Bodies indexed to match sentinels
        render: Markdown-to-HTML function applied to each body

    Returns:
        HTML with every known sentinel replaced (a paragraph wrapping the
        sentinel is replaced along with it)
    """
    from ..config import appsettings

    sentinel_pattern = re.compile(
        r'(?:<p>\s*)?('
        + re.escape(appsettings.printonly_start) + r'\d+' + re.escape(appsettings.printonly_end)
        + r')(?:\s*</p>)?'
    )

    def expand_sentinel(match: re.Match[str]) -> str:
        index = appsettings.blockIndex_extract(match.group(1))
        if index is None or index >= len(print_only):
            return match.group(0)
        return render(print_only[index].strip())

    return sentinel_pattern.sub(expand_sentinel, html)


class ContentTransformer:
    """
    Rewrites special content directives for one input format

    Markdown input keeps print-only bodies aside for later rendering;
    HTML input passes them through in place.
    """

    def __init__(self, input_format: InputFormat = InputFormat.MARKDOWN) -> None:
        """
        Args:
            input_format: MARKDOWN (default) or HTML
        """
        self.input_format = input_format

    @property
    def is_markdown(self) -> bool:
        return self.input_format == InputFormat.MARKDOWN

    def block(self, html: str) -> str:
        """Surround an element with blank lines so markdown keeps it as raw HTML"""
        return f"\n\n{html}\n\n" if self.is_markdown else html

    def transform(self, text: str) -> TransformedContent:
        """
        Apply all four rewrites

        Args:
            text: Token-substituted document text

        Returns:
            TransformedContent with rewritten text and any print-only bodies
        """
        print_only: List[str] = []
        text = self.printOnly_extract(text, print_only)
        text = outsideCode_rewrite(text, self.segment_rewrite)
        return TransformedContent(text=text, print_only=print_only)

    def segment_rewrite(self, segment: str) -> str:
        """Rewrite page breaks, shields and column widths in a non-code segment"""
        segment = self.pageBreaks_rewrite(segment)
        segment = self.shields_rewrite(segment)
        segment = self.columnWidths_rewrite(segment)
        return segment

    def printOnly_extract(self, text: str, print_only: List[str]) -> str:
        """
        Rewrite print-only comments that do not start inside code

        Markdown: body (with its own directives rewritten) goes to print_only,
        comment becomes a sentinel paragraph. HTML: comment becomes the body.
        """
        from ..config import appsettings

        ranges = codeRanges_find(text)

        def replace_block(match: re.Match[str]) -> str:
            if position_isProtected(ranges, match.start()):
                return match.group(0)

            body = match.group(1)
            if not self.is_markdown:
                return body.strip()

            print_only.append(outsideCode_rewrite(body, self.segment_rewrite))
            return self.block(appsettings.placeHolder_make(len(print_only) - 1))

        text = PRINT_ONLY_PATTERN.sub(replace_block, text)
        if print_only:
            LOG(f"Extracted {len(print_only)} print-only block(s)", level=2)
        return text

    def pageBreaks_rewrite(self, segment: str) -> str:
        """Rewrite page break comments to the page break element"""
        from ..config import appsettings

        element = self.block(appsettings.page_break_html)
        return PAGE_BREAK_PATTERN.sub(lambda match: element, segment)

    def shields_rewrite(self, segment: str) -> str:
        """
        Rewrite shield comments

        Markdown: comment becomes a marker element resolved after conversion.
        HTML: comment plus following <p> becomes the shield element; a lone
        comment becomes an empty shield div.
        """
        from ..config import appsettings

        if self.is_markdown:
            return SHIELD_MARKDOWN_PATTERN.sub(
                lambda match: self.block(
                    f'<div class="{appsettings.shield_marker_class}" '
                    f'data-shield="{match.group(1).lower()}"></div>'
                ),
                segment,
            )

        segment = SHIELD_HTML_PARAGRAPH_PATTERN.sub(
            lambda match: shield_build(match.group(1), match.group(2)), segment
        )
        return SHIELD_HTML_PATTERN.sub(
            lambda match: f'<div class="{match.group(1).lower()}-shield"></div>', segment
        )

    def columnWidths_rewrite(self, segment: str) -> str:
        """Rewrite col-widths comments to a generated style block"""
        return COLUMN_WIDTHS_PATTERN.sub(
            lambda match: self.block(columnWidths_style(match.group(1))), segment
        )


def content_transform(
    text: str, input_format: InputFormat = InputFormat.MARKDOWN
) -> TransformedContent:
    """Convenience wrapper around ContentTransformer.transform()"""
    return ContentTransformer(input_format).transform(text)
