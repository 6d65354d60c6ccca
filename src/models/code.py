"""
Code span models

Protected ranges of source text (fenced blocks, inline code) that no
rewriting stage is allowed to touch.
"""

from enum import Enum
from dataclasses import dataclass


class CodeKind(Enum):
    """Kind of protected code range"""
    BLOCK = "block"      # ```fenced```
    INLINE = "inline"    # `inline`


@dataclass(frozen=True)
class CodeRange:
    """
    Half-open character range [start, end) covering a code sample

    Attributes:
        start: Offset of the first delimiter character
        end: Offset one past the last delimiter character
        kind: Whether the range is a fenced block or an inline span

    Example:
        For text "see `x` here":
        CodeRange(start=4, end=7, kind=CodeKind.INLINE)
    """
    start: int
    end: int
    kind: CodeKind

    def contains(self, position: int) -> bool:
        """Check if a character offset falls inside this range"""
        return self.start <= position < self.end


@dataclass(frozen=True)
class Segment:
    """
    Slice of text produced when splitting on protected ranges

    Attributes:
        text: Segment text, verbatim
        is_code: True when the segment is a protected code range
    """
    text: str
    is_code: bool
