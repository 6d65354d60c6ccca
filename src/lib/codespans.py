"""
Code span tracking

Finds the ranges of source text that hold code samples, so that token
substitution and directive rewriting never alter them.

Two kinds of range are protected:
1. Fenced blocks: ```...``` (an unterminated fence runs to end of text)
2. Inline spans: `...` on a single line, non-empty

Inline spans are searched only between fenced blocks, so a backtick inside
a fence is never reported as a separate range.

Example:
    >>> ranges = codeRanges_find("run `ls` now")
    >>> ranges[0].start, ranges[0].end
    (4, 8)
"""

import re
from bisect import bisect_right
from typing import List

from ..models.code import CodeKind, CodeRange, Segment

FENCE_PATTERN = re.compile(r'```[\s\S]*?(?:```|\Z)')
INLINE_PATTERN = re.compile(r'`[^`\n]+`')


def codeRanges_find(text: str) -> List[CodeRange]:
    """
    Locate all protected code ranges in text

    Fenced blocks are found first (first match wins, non-overlapping), then
    inline spans in the gaps between them.

    Args:
        text: Raw document text

    Returns:
        Ranges sorted by start offset; empty list when text holds no code
    """
    blocks = [
        CodeRange(match.start(), match.end(), CodeKind.BLOCK)
        for match in FENCE_PATTERN.finditer(text)
    ]

    ranges = list(blocks)
    gap_start = 0
    for block in blocks + [None]:
        gap_end = block.start if block else len(text)
        for match in INLINE_PATTERN.finditer(text, gap_start, gap_end):
            ranges.append(CodeRange(match.start(), match.end(), CodeKind.INLINE))
        if block:
            gap_start = block.end

    return sorted(ranges, key=lambda code_range: code_range.start)


def position_isProtected(ranges: List[CodeRange], position: int) -> bool:
    """
    Check whether a character offset lies inside any protected range

    Args:
        ranges: Sorted, non-overlapping ranges from codeRanges_find()
        position: Character offset to test

    Returns:
        True if position is inside a code range
    """
    index = bisect_right([code_range.start for code_range in ranges], position) - 1
    return index >= 0 and ranges[index].contains(position)


def segments_split(text: str) -> List[Segment]:
    """
    Split text into alternating non-code / code segments

    Joining the segment texts in order reproduces the input exactly.

    Example:
        Input: "a `b` c"
        Output: [Segment("a ", False), Segment("`b`", True), Segment(" c", False)]
    """
    segments: List[Segment] = []
    position = 0

    for code_range in codeRanges_find(text):
        if code_range.start > position:
            segments.append(Segment(text[position:code_range.start], False))
        segments.append(Segment(text[code_range.start:code_range.end], True))
        position = code_range.end

    if position < len(text):
        segments.append(Segment(text[position:], False))

    return segments


def outsideCode_rewrite(text: str, rewrite) -> str:
    """
    Apply a rewrite function to the non-code segments of text only

    Args:
        text: Text to rewrite
        rewrite: Callable (str) -> str applied to each non-code segment

    Returns:
        Rejoined text with code segments untouched
    """
    return ''.join(
        segment.text if segment.is_code else rewrite(segment.text)
        for segment in segments_split(text)
    )
