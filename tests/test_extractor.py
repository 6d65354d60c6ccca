"""
Document settings extraction tests

Tests directive comments, first-occurrence semantics, value normalization
and title derivation.
"""

import pytest

from printdown.lib.directives import DirectiveRegistry
from printdown.lib.extractor import settings_extract, title_extract
from printdown.models.directives import DirectiveSpec, DirectiveCategory


class TestPageNumbers:
    """Test page-numbers normalization"""

    def test_x_format(self):
        """'x' enables numbering with format X"""
        settings = settings_extract("<!-- page-numbers: x -->")
        assert settings.page_numbers is True
        assert settings.page_number_format == "X"

    def test_off(self):
        """'off' disables numbering, format defaults to X of Y"""
        settings = settings_extract("<!-- page-numbers: off -->")
        assert settings.page_numbers is False
        assert settings.page_number_format == "X of Y"

    @pytest.mark.parametrize("value", ["on", "true", "yes", "X of Y", "x OF y"])
    def test_enabled_values(self, value):
        """Truthy values and 'X of Y' enable full format"""
        settings = settings_extract(f"<!-- page-numbers: {value} -->")
        assert settings.page_numbers is True
        assert settings.page_number_format == "X of Y"


class TestDirectives:
    """Test general directive extraction"""

    def test_no_directives(self):
        """Plain text yields all-unset settings"""
        assert settings_extract("Just text").overrides() == {}

    def test_theme_color(self):
        """Value is trimmed"""
        assert settings_extract("<!--  theme-color:   #ff0000  -->").theme_color == "#ff0000"

    def test_first_occurrence_wins(self):
        """Only the first matching comment counts"""
        text = "<!-- theme-color: #111111 -->\n<!-- theme-color: #222222 -->"
        assert settings_extract(text).theme_color == "#111111"

    def test_key_case_insensitive(self):
        """Directive keys match in any case"""
        assert settings_extract("<!-- FONT-SIZE: 12pt -->").base_font_size == "12pt"

    def test_value_with_hyphen(self):
        """Values may contain hyphens"""
        text = "<!-- disclosure: Internal - Use Only / CONFIDENTIAL -->"
        assert settings_extract(text).disclosure == "Internal - Use Only / CONFIDENTIAL"

    def test_empty_value(self):
        """Empty value is set, not absent"""
        assert settings_extract("<!-- disclosure: -->").disclosure == ""

    @pytest.mark.parametrize("value,expected", [("on", True), ("yes", True), ("off", False), ("nope", False)])
    def test_link_underline(self, value, expected):
        """Flag directives map truthy words to True"""
        assert settings_extract(f"<!-- link-underline: {value} -->").link_underline is expected

    def test_sizes_and_spacing(self):
        """Size and spacing keys map to their fields"""
        text = (
            "<!-- header-size: 10pt -->\n<!-- body-size: 11pt -->\n<!-- line-height: 1.4 -->\n"
            "<!-- paragraph-spacing: 0.5em -->\n<!-- header-spacing: 1em -->"
        )
        settings = settings_extract(text)
        assert settings.header_size == "10pt"
        assert settings.body_size == "11pt"
        assert settings.line_height == "1.4"
        assert settings.paragraph_spacing == "0.5em"
        assert settings.header_spacing == "1em"

    def test_multiline_comment_ignored(self):
        """Setting comments must sit on one line"""
        assert settings_extract("<!-- theme-color:\n#ff0000 -->").theme_color is None

    def test_version_and_sequential_output(self):
        """Output directives are extracted"""
        settings = settings_extract("<!-- version-number: 01.07 -->\n<!-- sequential-output: on -->")
        assert settings.version_number == "01.07"
        assert settings.sequential_output is True


class TestRegistry:
    """Test the directive table"""

    def test_rewrite_keys_not_registered(self):
        """Content rewrite comments are not settings"""
        registry = DirectiveRegistry()
        for key in ("col-widths", "page-break", "live-site-shield", "redaction-shield"):
            assert registry.get(key) is None

    def test_register_rewrite_key_refused(self):
        """Registering a rewrite key raises"""
        spec = DirectiveSpec(
            key="col-widths",
            category=DirectiveCategory.SIZE,
            description="clash",
            parse=lambda value: {},
        )
        with pytest.raises(ValueError):
            DirectiveRegistry().register(spec)

    def test_list_by_category(self):
        """Color directives are grouped"""
        keys = {spec.key for spec in DirectiveRegistry().directives_listByCategory(DirectiveCategory.COLOR)}
        assert keys == {"theme-color", "body-color", "link-color"}


class TestTitle:
    """Test title derivation"""

    def test_first_h1(self):
        """First top-level heading wins"""
        assert title_extract("intro\n# Annual Report \n## Part\n# Second") == "Annual Report"

    def test_no_heading(self):
        """No heading gives no title"""
        assert title_extract("Title\nno hashes") is None

    def test_heading_in_code_skipped(self):
        """Shell comments inside fences are not titles"""
        text = "```bash\n# install deps\n```\n# Real Title"
        assert title_extract(text) == "Real Title"

    def test_blank_heading_skipped(self):
        """A heading marker with only whitespace is not a title"""
        assert title_extract("#   \n# Real") == "Real"
