"""
Token substitution tests

Tests code-aware replacement, pass ceilings, nesting, ordering and
unresolved token reporting.
"""

import pytest

from printdown.lib.tokens import (
    TokenProcessor,
    tokens_substitute,
    tokens_findRemaining,
    token_replaceOutsideCode,
)
from printdown.models.tokens import Token, TokenOrigin


class TestBasicSubstitution:
    """Test single-pass replacement"""

    def test_simple_replacement(self):
        """Placeholder is replaced by its value"""
        result = tokens_substitute("Hello {{NAME}}!", {"NAME": "World"})
        assert result.text == "Hello World!"
        assert result.replacements == 1
        assert result.unresolved == []

    def test_absent_token_leaves_text_unchanged(self):
        """Text without the placeholder comes back byte-identical"""
        text = "Nothing to see {{OTHER}} here"
        result = tokens_substitute(text, {"NAME": "World"})
        assert result.text == text
        assert result.replacements == 0

    def test_all_occurrences_replaced(self):
        """Every occurrence is replaced"""
        result = tokens_substitute("{{A}} and {{A}}", {"A": "x"})
        assert result.text == "x and x"
        assert result.replacements == 2

    def test_value_is_literal(self):
        """Regex replacement syntax in a value is not interpreted"""
        result = tokens_substitute("{{A}}", {"A": r"$1 \g<0> \1"})
        assert result.text == r"$1 \g<0> \1"

    def test_empty_config_disables_substitution(self):
        """No config tokens means no substitution, automatic tokens included"""
        result = tokens_substitute("{{DATE}} {{X}}", {}, {"DATE": "2026-03-07"})
        assert result.text == "{{DATE}} {{X}}"
        assert result.unresolved == []
        assert result.passes == 0


class TestCodeProtection:
    """Test that code samples are never altered"""

    def test_fenced_block_untouched(self):
        """Placeholder in a fence stays, outside is replaced"""
        text = "```\n{{NAME}}\n```\nand {{NAME}}"
        result = tokens_substitute(text, {"NAME": "World"})
        assert result.text == "```\n{{NAME}}\n```\nand World"

    def test_inline_code_untouched(self):
        """Placeholder in inline code stays"""
        result = tokens_substitute("use `{{NAME}}` for {{NAME}}", {"NAME": "World"})
        assert result.text == "use `{{NAME}}` for World"

    def test_value_introducing_code_is_respected(self):
        """Ranges are recomputed, so a value adding backticks protects its content"""
        result = tokens_substitute("{{A}}", {"A": "`{{B}}`", "B": "x"})
        assert result.text == "`{{B}}`"
        assert result.unresolved == ["B"]

    def test_replace_outside_code_counts(self):
        """Helper reports only replaced occurrences"""
        token = Token("N", "v", TokenOrigin.CONFIG)
        text, count = token_replaceOutsideCode("{{N}} `{{N}}`", token)
        assert text == "v `{{N}}`"
        assert count == 1


class TestPassesAndOrdering:
    """Test multi-pass resolution"""

    def test_nested_tokens_resolve(self):
        """Token value referencing a later token resolves in one pass"""
        result = tokens_substitute("{{A}}", {"A": "{{B}}", "B": "x"})
        assert result.text == "x"
        assert result.passes == 2

    def test_nested_tokens_reverse_order(self):
        """Token value referencing an earlier token needs another pass"""
        result = tokens_substitute("{{A}}", {"B": "x", "A": "{{B}}"})
        assert result.text == "x"
        assert result.unresolved == []

    def test_config_before_automatic(self):
        """Config values may reference automatic tokens"""
        result = tokens_substitute(
            "{{GREETING}}", {"GREETING": "Today is {{DATE}}"}, {"DATE": "2026-03-07"}
        )
        assert result.text == "Today is 2026-03-07"

    def test_config_wins_over_automatic(self):
        """Config token shadows an automatic token of the same name"""
        result = tokens_substitute("{{DATE}}", {"DATE": "fixed"}, {"DATE": "auto"})
        assert result.text == "fixed"

    def test_self_reference_stops_at_file_ceiling(self):
        """Self-referencing value grows only up to the pass ceiling"""
        result = tokens_substitute("{{A}}", {"A": "x{{A}}"}, max_passes=3)
        assert result.text == "xxx{{A}}"
        assert result.passes == 3
        assert result.unresolved == ["A"]

    def test_self_reference_stops_at_inline_ceiling(self):
        """Inline ceiling allows five passes"""
        result = tokens_substitute("{{A}}", {"A": "x{{A}}"}, max_passes=5)
        assert result.text == "xxxxx{{A}}"

    def test_default_ceiling_is_file_ceiling(self):
        """Processor defaults to three passes"""
        processor = TokenProcessor({"A": "x"})
        assert processor.max_passes == 3

    def test_idempotent_on_resolved_output(self):
        """Second run over resolved output changes nothing"""
        config = {"NAME": "World", "PLACE": "Earth"}
        first = tokens_substitute("{{NAME}} on {{PLACE}}", config)
        second = tokens_substitute(first.text, config)
        assert second.text == first.text
        assert second.replacements == 0


class TestUnresolved:
    """Test unresolved placeholder reporting"""

    def test_unresolved_sorted_and_distinct(self):
        """Names are reported once, sorted"""
        result = tokens_substitute("{{Z}} {{A}} {{Z}}", {"B": "b"})
        assert result.unresolved == ["A", "Z"]

    def test_unresolved_includes_code(self):
        """Placeholders left inside code are reported too"""
        assert tokens_findRemaining("`{{X}}` {{Y}}") == ["X", "Y"]

    def test_unresolved_in_fence_reported(self):
        """Unresolved placeholder in a fence is reported, text untouched"""
        text = "```\n{{X}}\n```\n{{Y}}"
        result = tokens_substitute(text, {"A": "a"})
        assert result.unresolved == ["X", "Y"]
        assert result.text == text
