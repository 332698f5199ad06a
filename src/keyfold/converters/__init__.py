"""
Markup parsing modules.
"""

from .markup_parser import MarkupParseError, MarkupParser

__all__ = ["MarkupParser", "MarkupParseError"]
