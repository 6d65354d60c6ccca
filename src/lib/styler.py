"""
Document styling

Wraps a converted HTML fragment into a complete, printable HTML document:

1. Theme CSS is loaded as opaque text
2. Override rules are prefixed for every document setting that is set
   (unset settings never override the theme)
3. A paged-media footer carries title, disclosure and page numbers
4. Single-page mode strips page rules and suppresses page breaks

Precedence for the theme color: document setting > CLI option > theme
default > application default. Color names are looked up as COLOR_<NAME>
config tokens before being read as 3- or 6-digit hex.
"""

import html
import re
from typing import List, Mapping, Optional

from ..models.document import DocumentSettings, InputFormat
from .log import LOG
from .theme import Theme

HEX_COLOR_PATTERN = re.compile(r'^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$')
PAGE_RULE_PATTERN = re.compile(r'@page\s*\{[^}]*\}')
EXISTING_CSS_PATTERN = re.compile(
    r'<style[^>]*>[\s\S]*?</style>|<link[^>]*rel=["\']stylesheet["\'][^>]*>',
    re.IGNORECASE,
)

HEADER_SCALE = (2.5, 2.0, 1.75, 1.5, 1.25, 1.1)

SINGLE_PAGE_CSS = """\
/* Single-page mode */
html, body { height: auto !important; overflow: visible !important; }
* {
  page-break-before: avoid !important;
  page-break-after: avoid !important;
  page-break-inside: avoid !important;
  break-before: avoid !important;
  break-after: avoid !important;
  break-inside: avoid !important;
}
.page-break { display: none !important; height: 0 !important; margin: 0 !important; }
"""


def color_resolve(color: str, config_tokens: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """
    Resolve a color name or hex value

    Args:
        color: Color name ("brand"), hex with or without '#'
        config_tokens: Token mapping holding COLOR_<NAME> entries

    Returns:
        Resolved color, or None if the value is neither a known name nor hex

    Example:
        >>> color_resolve("ff0000")
        '#ff0000'
        >>> color_resolve("brand", {"COLOR_BRAND": "#123456"})
        '#123456'
    """
    color = color.strip()
    if not color:
        return None

    named = (config_tokens or {}).get(f"COLOR_{color.upper()}")
    if named:
        LOG(f"Using predefined color '{color}': {named}", level=2)
        return named

    hex_color = color if color.startswith('#') else f"#{color}"
    if HEX_COLOR_PATTERN.match(hex_color):
        return hex_color

    return None


def color_toRgba(hex_color: str, alpha: float) -> str:
    """
    Convert a 3- or 6-digit hex color to an rgba() value

    Example:
        >>> color_toRgba("#808", 0.1)
        'rgba(136, 0, 136, 0.1)'
    """
    digits = hex_color.lstrip('#')
    if len(digits) == 3:
        digits = ''.join(char * 2 for char in digits)
    red, green, blue = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({red}, {green}, {blue}, {alpha})"


def cssString_quote(text: str) -> str:
    """Quote text as a CSS string literal"""
    escaped = text.replace('\\', '\\\\').replace('"', '\\"').replace('\n', ' ')
    return f'"{escaped}"'


class DocumentStyler:
    """
    Applies theme, document settings and CLI options to converted HTML

    Responsibilities:
    - Resolve the effective theme color
    - Build override CSS for set document settings
    - Build the page footer
    - Assemble the final HTML document
    """

    def __init__(
        self,
        theme: Theme,
        config_tokens: Optional[Mapping[str, str]] = None,
        theme_color: Optional[str] = None,
        single_page: bool = False,
        custom_css: Optional[str] = None,
    ) -> None:
        """
        Args:
            theme: Loaded theme
            config_tokens: Config tokens, used for COLOR_<NAME> lookups
            theme_color: Theme color given on the command line
            single_page: Render as one continuous page
            custom_css: Stylesheet text replacing the theme CSS
        """
        self.theme = theme
        self.config_tokens = config_tokens or {}
        self.theme_color = theme_color
        self.single_page = single_page
        self.custom_css = custom_css

    def themeColor_select(self, settings: DocumentSettings) -> str:
        """
        Pick the first valid theme color by precedence

        Candidates: document setting, CLI option, theme.yaml colors.theme,
        application default. Invalid candidates are skipped with a warning.
        """
        from ..config import appsettings

        candidates = [
            ("document", settings.theme_color),
            ("command line", self.theme_color),
            ("theme", self.theme.config_get('colors.theme')),
        ]
        for source, candidate in candidates:
            if candidate is None:
                continue
            resolved = color_resolve(str(candidate), self.config_tokens)
            if resolved:
                LOG(f"Theme color {resolved} (from {source})", level=2)
                return resolved
            LOG(f"Warning: invalid color '{candidate}' from {source}, ignoring", level=1, warning=True)

        return color_resolve(appsettings.default_theme_color) or '#808'

    def overrides_build(self, settings: DocumentSettings) -> List[str]:
        """Build one CSS override block per set document setting"""
        theme_color = self.themeColor_select(settings)
        rules: List[str] = [
            f":root {{ --theme-color: {theme_color} !important; "
            f"--theme-color-10: {color_toRgba(theme_color, 0.1)} !important; }}"
        ]

        if settings.base_font_size is not None:
            rules.append(f"html, body {{ font-size: {settings.base_font_size} !important; }}")

        if settings.body_color is not None:
            color = color_resolve(settings.body_color, self.config_tokens) or settings.body_color
            rules.append(f"body, p, li, td, th, blockquote {{ color: {color} !important; }}")

        if settings.link_color is not None:
            color = color_resolve(settings.link_color, self.config_tokens) or settings.link_color
            rules.append(f"a, a:link, a:visited, a:hover, a:active {{ color: {color} !important; }}")

        if settings.link_underline is not None:
            decoration = "underline" if settings.link_underline else "none"
            rules.append(f"a, a:link, a:visited {{ text-decoration: {decoration} !important; }}")

        if settings.header_size is not None:
            rules.extend(
                f"h{level} {{ font-size: calc({settings.header_size} * {scale}) !important; }}"
                for level, scale in enumerate(HEADER_SCALE, start=1)
            )

        if settings.body_size is not None:
            rules.append(f"p, li, td, th, blockquote {{ font-size: {settings.body_size} !important; }}")

        if settings.line_height is not None:
            rules.append(
                "body, p, li, td, th, blockquote, h1, h2, h3, h4, h5, h6, pre, code "
                f"{{ line-height: {settings.line_height} !important; }}"
            )

        if settings.paragraph_spacing is not None:
            rules.append(f"p {{ margin-bottom: {settings.paragraph_spacing} !important; }}")

        if settings.header_spacing is not None:
            rules.append(f"h1, h2, h3, h4, h5, h6 {{ margin-top: {settings.header_spacing} !important; }}")

        return rules

    def pageFooter_build(self, settings: DocumentSettings) -> str:
        """
        Build the @page footer rule, or "" when page numbers are off

        Example:
            With page numbers "X of Y" the bottom-right box reads
            content: counter(page) " of " counter(pages);
        """
        from ..config import appsettings

        if not settings.page_numbers:
            return ""

        number_format = settings.page_number_format or appsettings.default_page_number_format
        if number_format == 'X':
            page_content = 'counter(page)'
        else:
            page_content = 'counter(page) " of " counter(pages)'

        font_size = self.theme.config_get('page.footer_font_size', '8pt')
        color = self.theme.config_get('page.footer_color', '#666666')
        margin = self.theme.config_get('page.margin_bottom_with_footer', '0.75in')
        box_style = f"font-size: {font_size}; color: {color};"

        return "\n".join([
            "@page {",
            f"  margin-bottom: {margin};",
            f"  @bottom-left {{ content: {cssString_quote(settings.document_title or '')}; {box_style} }}",
            f"  @bottom-center {{ content: {cssString_quote(settings.disclosure or '')}; "
            f"text-transform: uppercase; {box_style} }}",
            f"  @bottom-right {{ content: {page_content}; {box_style} }}",
            "}",
        ])

    def css_build(self, settings: DocumentSettings) -> str:
        """Assemble the full stylesheet: overrides, theme CSS, footer"""
        theme_css = self.custom_css if self.custom_css is not None else self.theme.css_get()
        parts: List[str] = ["/* Overrides from document settings */", *self.overrides_build(settings)]

        if self.single_page:
            LOG("Applying single-page mode", level=2)
            parts.append(SINGLE_PAGE_CSS)
            parts.append(PAGE_RULE_PATTERN.sub('', theme_css))
        else:
            parts.append(theme_css)
            footer = self.pageFooter_build(settings)
            if footer:
                parts.append(footer)

        return "\n".join(parts)

    def document_build(
        self,
        fragment: str,
        settings: DocumentSettings,
        input_format: InputFormat = InputFormat.MARKDOWN,
    ) -> str:
        """
        Wrap an HTML fragment in a complete styled HTML document

        HTML input that already carries its own stylesheet keeps it; only
        the theme color is injected, unless a custom stylesheet was given.

        Args:
            fragment: Converted HTML
            settings: Extracted document settings
            input_format: Format of the source document

        Returns:
            Complete HTML document
        """
        if (
            self.custom_css is None
            and input_format == InputFormat.HTML
            and EXISTING_CSS_PATTERN.search(fragment)
        ):
            LOG("Using existing CSS from HTML input", level=1)
            return self.themeColor_inject(fragment, settings)

        LOG(f"Applying theme '{self.theme.name}'", level=1)
        title = html.escape(settings.document_title or "Document")
        css = self.css_build(settings)

        return (
            "<!DOCTYPE html>\n"
            '<html lang="en">\n'
            "<head>\n"
            '<meta charset="UTF-8">\n'
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
            f"<title>{title}</title>\n"
            f"<style>\n{css}\n</style>\n"
            "</head>\n"
            "<body>\n"
            f"{fragment}\n"
            "</body>\n"
            "</html>\n"
        )

    def themeColor_inject(self, document: str, settings: DocumentSettings) -> str:
        """Inject a theme color rule into an already styled HTML document"""
        theme_color = self.themeColor_select(settings)
        style = f"<style>:root {{ --theme-color: {theme_color}; }}</style>"

        if '</style>' in document:
            return document.replace('</style>', f"</style>\n{style}", 1)
        if '</head>' in document:
            return document.replace('</head>', f"{style}\n</head>", 1)
        return f"{style}\n{document}"
