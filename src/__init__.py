"""
printdown - Print-ready HTML from markdown and HTML documents

Comment-driven token substitution, document settings and special content
rewriting for printable documents.
"""

__version__ = "1.0.0"
__author__ = "Rudolph Pienaar"
__email__ = "rudolph.pienaar@gmail.com"

from .lib import document_process, DocumentStyler, Theme, LOG, state_connectToLogger

__all__ = ["document_process", "DocumentStyler", "Theme", "LOG", "state_connectToLogger", "__version__"]
