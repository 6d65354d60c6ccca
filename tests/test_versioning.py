"""
Sequential output versioning tests
"""

import pytest

from printdown.lib.versioning import (
    version_parse,
    version_increment,
    version_format,
    version_next,
    versionComment_update,
)


class TestVersionNumbers:
    """Test NN.NN arithmetic"""

    @pytest.mark.parametrize("value,expected", [
        ("01.07", (1, 7)),
        (" 10.00 ", (10, 0)),
        ("1.7", (0, 0)),
        ("v1", (0, 0)),
    ])
    def test_parse(self, value, expected):
        """Only two-digit pairs parse"""
        assert version_parse(value) == expected

    def test_increment_rolls_minor(self):
        """Minor rolls into major after 99"""
        assert version_increment(0, 99) == (1, 0)

    def test_increment_wraps(self):
        """99.99 wraps to 00.00"""
        assert version_increment(99, 99) == (0, 0)

    def test_format(self):
        """Parts are zero padded"""
        assert version_format(3, 4) == "03.04"

    @pytest.mark.parametrize("current,following", [
        ("00.00", "00.01"),
        ("00.99", "01.00"),
        ("99.99", "00.00"),
        ("garbage", "00.01"),
    ])
    def test_next(self, current, following):
        """Next version"""
        assert version_next(current) == following


class TestVersionComment:
    """Test source comment updates"""

    def test_existing_comment_replaced(self):
        """Existing comment is rewritten in place"""
        text = "<!-- sequential-output: on -->\n<!-- version-number: 01.07 -->\n# Title"
        assert versionComment_update(text, "01.08") == (
            "<!-- sequential-output: on -->\n<!-- version-number: 01.08 -->\n# Title"
        )

    def test_inserted_after_leading_comments(self):
        """New comment goes after the leading comment block"""
        text = "<!-- sequential-output: on -->\n\n<!-- theme-color: 808 -->\n# Title\n<!-- later -->"
        assert versionComment_update(text, "00.01") == (
            "<!-- sequential-output: on -->\n\n<!-- theme-color: 808 -->\n"
            "<!-- version-number: 00.01 -->\n# Title\n<!-- later -->"
        )

    def test_inserted_at_top(self):
        """Without leading comments the comment goes first"""
        assert versionComment_update("# Title\n", "00.01") == "<!-- version-number: 00.01 -->\n# Title\n"
