"""
Markdown to HTML conversion

Thin wrapper around Python-Markdown configured like a GFM renderer
(tables, fenced code, footnotes, hard line breaks), with fenced code
highlighted by Pygments using inline styles so the output prints without
an extra stylesheet.

After conversion the HTML is finalised:
1. Print-only sentinels are replaced by their bodies rendered as markdown
2. Shield markers are structured into shield elements
3. Relative <img src> paths become absolute file:// URLs (when the input
   directory is known)
"""

import re
from pathlib import Path
from typing import List, Optional, Union

import markdown
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .log import LOG
from .transformer import printOnly_resolve, shields_structure

MARKDOWN_EXTENSIONS = ['extra', 'nl2br', 'sane_lists', 'codehilite']

IMAGE_SRC_PATTERN = re.compile(r'<img([^>]*)\ssrc=["\']([^"\']+)["\']', re.IGNORECASE)
ABSOLUTE_SRC_PATTERN = re.compile(r'^(?:https?:|file:|data:)', re.IGNORECASE)


def pygmentsStyle_resolve(style_name: str) -> str:
    """
    Validate a Pygments style name, falling back to 'default'

    Example:
        >>> pygmentsStyle_resolve("no-such-style")
        'default'
    """
    try:
        get_style_by_name(style_name)
        return style_name
    except ClassNotFound:
        LOG(f"Warning: unknown Pygments style '{style_name}', using 'default'", level=1, warning=True)
        return 'default'


def imagePaths_absolutize(html: str, input_dir: Union[str, Path]) -> str:
    """
    Rewrite relative <img src> paths to absolute file:// URLs

    http(s):, file: and data: sources are left alone.

    Example:
        For input_dir="/docs":
        '<img alt="x" src="img/a.png">' -> '<img alt="x" src="file:///docs/img/a.png">'
    """
    base_dir = Path(input_dir).resolve()

    def absolutize(match: re.Match[str]) -> str:
        attributes, src = match.group(1), match.group(2)
        if ABSOLUTE_SRC_PATTERN.match(src):
            return match.group(0)
        absolute_path = (base_dir / src).resolve()
        return f'<img{attributes} src="{absolute_path.as_uri()}"'

    return IMAGE_SRC_PATTERN.sub(absolutize, html)


class MarkdownConverter:
    """
    Converts rewritten markdown to an HTML fragment

    Responsibilities:
    - Run Python-Markdown with the GFM-like extension set
    - Render print-only bodies in place of their sentinels
    - Structure shield paragraphs
    - Absolutize relative image paths
    """

    def __init__(
        self,
        input_dir: Optional[Union[str, Path]] = None,
        pygments_style: str = 'default',
    ) -> None:
        """
        Args:
            input_dir: Directory of the source document, for image paths
            pygments_style: Pygments style for fenced code blocks
        """
        self.input_dir = Path(input_dir).resolve() if input_dir else None
        self.markdown = markdown.Markdown(
            extensions=MARKDOWN_EXTENSIONS,
            extension_configs={
                'codehilite': {
                    'noclasses': True,
                    'guess_lang': False,
                    'pygments_style': pygmentsStyle_resolve(pygments_style),
                },
            },
            output_format='html',
        )

    def markdown_render(self, text: str) -> str:
        """Render a markdown string to HTML with a fresh parser state"""
        self.markdown.reset()
        return self.markdown.convert(text)

    def html_convert(self, markdown_text: str, print_only: Optional[List[str]] = None) -> str:
        """
        Convert rewritten markdown to a finalised HTML fragment

        Args:
            markdown_text: Markdown with special content already rewritten
            print_only: Print-only bodies extracted by the transformer

        Returns:
            HTML fragment ready for styling
        """
        LOG("Converting markdown to HTML...", level=1)
        html = self.markdown_render(markdown_text)
        return self.html_finalize(html, print_only or [])

    def html_finalize(self, html: str, print_only: List[str]) -> str:
        """Resolve markers left by the transformer and fix image paths"""
        if print_only:
            html = printOnly_resolve(html, print_only, self.markdown_render)
        html = shields_structure(html)
        if self.input_dir:
            html = imagePaths_absolutize(html, self.input_dir)
        return html
