"""
printdown - Print-ready HTML from markdown and HTML documents

Code-aware token substitution, comment-driven document settings and
special content rewriting for printable documents.
"""

__version__ = "1.0.0"
__author__ = "Rudolph Pienaar"
__email__ = "rudolph.pienaar@gmail.com"

from .log import LOG, state_connectToLogger
from .codespans import codeRanges_find, position_isProtected, segments_split
from .tokens import TokenProcessor, tokens_substitute
from .tokenconfig import TokenConfigError, tokens_loadFile, tokens_automatic
from .directives import DirectiveRegistry
from .extractor import SettingsExtractor, settings_extract, title_extract
from .transformer import ContentTransformer, content_transform
from .converter import MarkdownConverter
from .theme import Theme, ThemeError, themes_listAvailable
from .styler import DocumentStyler
from .versioning import version_next, versionComment_update
from .pipeline import document_process

__all__ = [
    "LOG",
    "state_connectToLogger",
    "codeRanges_find",
    "position_isProtected",
    "segments_split",
    "TokenProcessor",
    "tokens_substitute",
    "TokenConfigError",
    "tokens_loadFile",
    "tokens_automatic",
    "DirectiveRegistry",
    "SettingsExtractor",
    "settings_extract",
    "title_extract",
    "ContentTransformer",
    "content_transform",
    "MarkdownConverter",
    "Theme",
    "ThemeError",
    "themes_listAvailable",
    "DocumentStyler",
    "version_next",
    "versionComment_update",
    "document_process",
    "__version__",
]
