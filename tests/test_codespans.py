"""
Code span tracking tests

Tests detection of fenced blocks and inline spans, and segment-wise
rewriting that leaves code untouched.
"""

import pytest

from printdown.lib.codespans import (
    codeRanges_find,
    position_isProtected,
    segments_split,
    outsideCode_rewrite,
)
from printdown.models.code import CodeKind


class TestCodeRangesFind:
    """Test protected range detection"""

    def test_no_code(self):
        """Plain text has no protected ranges"""
        assert codeRanges_find("just some text") == []

    def test_inline_span(self):
        """Inline span covers both backticks"""
        ranges = codeRanges_find("run `ls` now")
        assert len(ranges) == 1
        assert (ranges[0].start, ranges[0].end) == (4, 8)
        assert ranges[0].kind == CodeKind.INLINE

    def test_fenced_block(self):
        """Fenced block covers fences and body"""
        text = "before\n```\ncode\n```\nafter"
        ranges = codeRanges_find(text)
        assert len(ranges) == 1
        assert ranges[0].kind == CodeKind.BLOCK
        assert text[ranges[0].start:ranges[0].end] == "```\ncode\n```"

    def test_backticks_inside_fence_not_inline(self):
        """Inline-looking spans inside a fence are part of the block"""
        text = "```\nuse `x` here\n```"
        ranges = codeRanges_find(text)
        assert len(ranges) == 1
        assert ranges[0].kind == CodeKind.BLOCK

    def test_unterminated_fence_runs_to_end(self):
        """A fence without closing marker protects the rest of the text"""
        text = "intro\n```\nnever closed {{X}}"
        ranges = codeRanges_find(text)
        assert ranges[-1].end == len(text)

    def test_inline_span_does_not_cross_lines(self):
        """Backticks on different lines do not form a span"""
        assert codeRanges_find("a `b\nc` d") == []

    def test_empty_backticks_ignored(self):
        """Empty inline span is not a code range"""
        assert codeRanges_find("a `` b") == []

    def test_ranges_sorted(self):
        """Mixed ranges come back in text order"""
        text = "`a` then\n```\nblock\n```\nthen `b`"
        ranges = codeRanges_find(text)
        assert [r.kind for r in ranges] == [CodeKind.INLINE, CodeKind.BLOCK, CodeKind.INLINE]
        assert ranges == sorted(ranges, key=lambda r: r.start)


class TestPositionIsProtected:
    """Test offset lookup against ranges"""

    def test_inside_and_outside(self):
        """Offsets inside a span are protected, neighbours are not"""
        ranges = codeRanges_find("run `ls` now")
        assert position_isProtected(ranges, 4)
        assert position_isProtected(ranges, 7)
        assert not position_isProtected(ranges, 3)
        assert not position_isProtected(ranges, 8)

    def test_empty_ranges(self):
        """Nothing is protected without ranges"""
        assert not position_isProtected([], 0)


class TestSegments:
    """Test segment splitting and rewriting"""

    def test_split_reassembles(self):
        """Joined segments reproduce the input"""
        text = "a `b` c\n```\nd\n```\ne"
        segments = segments_split(text)
        assert ''.join(s.text for s in segments) == text
        assert [s.is_code for s in segments] == [False, True, False, True, False]

    def test_rewrite_skips_code(self):
        """Rewrite applies to prose only"""
        text = "x `x` x"
        assert outsideCode_rewrite(text, lambda s: s.replace("x", "y")) == "y `x` y"
