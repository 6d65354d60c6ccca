"""
Document transformation pipeline

Composes the transformation stages for a single document:

Markdown input:
    1. Token substitution (file pass ceiling)
    2. Settings extraction from the substituted text
    3. Special content rewriting
    4. Markdown to HTML conversion (print-only bodies, shields, images)
    5. Title attached to the settings

HTML input:
    1. Token substitution (inline pass ceiling)
    2. Settings extraction
    3. Special content rewriting in place
    4. Relative image paths made absolute

Settings extraction always sees the directive comments as written: it
runs after substitution (so a token may supply a setting value) but
before any rewriting.
"""

from pathlib import Path
from typing import Mapping, Optional, Union

from ..models.document import InputFormat, ProcessedDocument
from .converter import MarkdownConverter, imagePaths_absolutize
from .extractor import settings_extract, title_extract
from .log import LOG
from .tokens import tokens_substitute
from .transformer import content_transform


def document_process(
    text: str,
    input_format: InputFormat,
    config_tokens: Mapping[str, str],
    automatic_tokens: Optional[Mapping[str, str]] = None,
    input_dir: Optional[Union[str, Path]] = None,
    pygments_style: str = 'default',
) -> ProcessedDocument:
    """
    Run the full transformation for one document

    Args:
        text: Raw document text
        input_format: MARKDOWN or HTML
        config_tokens: Tokens from configuration (empty disables substitution)
        automatic_tokens: Tokens derived from time and environment
        input_dir: Directory of the source, for relative image paths
        pygments_style: Pygments style for fenced code (markdown only)

    Returns:
        ProcessedDocument with final HTML, settings and unresolved tokens

    Example:
        >>> doc = document_process("# T\\nHi {{N}}", InputFormat.MARKDOWN, {"N": "Bo"})
        >>> doc.settings.document_title
        'T'
    """
    from ..config import appsettings

    if input_format == InputFormat.MARKDOWN:
        max_passes = appsettings.file_max_passes
    else:
        max_passes = appsettings.inline_max_passes

    LOG(f"Processing {input_format.value} document ({len(text)} characters)", level=2)

    substitution = tokens_substitute(text, config_tokens, automatic_tokens, max_passes)
    settings = settings_extract(substitution.text)
    transformed = content_transform(substitution.text, input_format)

    if input_format == InputFormat.MARKDOWN:
        converter = MarkdownConverter(input_dir=input_dir, pygments_style=pygments_style)
        html = converter.html_convert(transformed.text, transformed.print_only)
        settings = settings.with_title(title_extract(substitution.text))
    else:
        html = transformed.text
        if input_dir:
            html = imagePaths_absolutize(html, input_dir)

    return ProcessedDocument(
        html=html,
        settings=settings,
        unresolved=substitution.unresolved,
    )
