"""
End-to-end pipeline tests

Tests the full pipeline: source text → tokens → settings → rewriting →
HTML, and the CLI stages writing a styled document to disk.
"""

import pytest

from printdown.lib.extractor import settings_extract
from printdown.lib.pipeline import document_process
from printdown.lib.tokens import tokens_substitute
from printdown.models import ProgramState, InputFormat, pipeline
from printdown.__main__ import (
    env_check,
    tokens_load,
    source_read,
    document_build,
    output_write,
)


class TestDocumentProcess:
    """Test document_process() on markdown and HTML"""

    def test_theme_color_and_token(self):
        """Settings come from substituted text, tokens are replaced"""
        source = "Title\n<!-- theme-color: #ff0000 -->\nText with {{NAME}}."

        substituted = tokens_substitute(source, {"NAME": "World"})
        assert substituted.text == "Title\n<!-- theme-color: #ff0000 -->\nText with World."
        assert settings_extract(substituted.text).overrides() == {"theme_color": "#ff0000"}

        document = document_process(source, InputFormat.MARKDOWN, {"NAME": "World"})
        assert document.settings.theme_color == "#ff0000"
        assert document.settings.document_title is None
        assert "Text with World." in document.html
        assert document.unresolved == []

    def test_markdown_title(self):
        """Title comes from the first heading"""
        document = document_process("# Quarterly Report\n\nBody", InputFormat.MARKDOWN, {})
        assert document.settings.document_title == "Quarterly Report"
        assert "<h1>Quarterly Report</h1>" in document.html

    def test_token_supplies_setting(self):
        """A token may provide a directive value"""
        document = document_process(
            "<!-- theme-color: {{BRAND}} -->\nText", InputFormat.MARKDOWN, {"BRAND": "#336699"}
        )
        assert document.settings.theme_color == "#336699"

    def test_code_untouched_end_to_end(self):
        """Tokens and directives in code survive the whole pipeline"""
        source = "```\n{{NAME}} <!-- PAGE-BREAK -->\n```\n\n{{NAME}}"
        document = document_process(source, InputFormat.MARKDOWN, {"NAME": "World"})
        assert "{{NAME}}" in document.html
        assert "World" in document.html
        assert '<div class="page-break"></div>' not in document.html

    def test_unresolved_reported(self):
        """Unknown tokens are returned, not raised"""
        document = document_process("{{MISSING}}", InputFormat.MARKDOWN, {"NAME": "x"})
        assert document.unresolved == ["MISSING"]

    def test_html_uses_inline_ceiling(self):
        """HTML input gets five passes"""
        document = document_process("<p>{{A}}</p>", InputFormat.HTML, {"A": "x{{A}}"})
        assert document.html == "<p>xxxxx{{A}}</p>"
        assert document.unresolved == ["A"]

    def test_html_no_title(self):
        """Titles are only derived for markdown"""
        document = document_process("# Not a title\n<p>x</p>", InputFormat.HTML, {})
        assert document.settings.document_title is None


class TestCliStages:
    """Test the CLI pipeline stages on disk"""

    def stages_run(self, tmp_path, source, **options):
        (tmp_path / "report.md").write_text(source, encoding="utf-8")
        state = ProgramState(
            inputdir=tmp_path,
            outputdir=tmp_path / "out",
            inputFile="report.md",
            verbosity=0,
            **options,
        )
        return pipeline(state, env_check, tokens_load, source_read, document_build, output_write)

    def test_writes_styled_document(self, tmp_path):
        """Output file holds the full styled document"""
        (tmp_path / "printdown.config").write_text("NAME=World\n")
        state = self.stages_run(tmp_path, "# Report\n\nHello {{NAME}}", configFile="printdown.config")

        assert state.outputFilePath == tmp_path / "out" / "report.html"
        html = state.outputFilePath.read_text(encoding="utf-8")
        assert "<title>Report</title>" in html
        assert "Hello World" in html

    def test_no_config_disables_tokens(self, tmp_path):
        """Without a config file placeholders stay"""
        state = self.stages_run(tmp_path, "Hello {{NAME}} on {{DATE}}")
        assert "Hello {{NAME}} on {{DATE}}" in state.styledHtml

    def test_missing_config_exits(self, tmp_path):
        """Explicit missing config file is fatal"""
        with pytest.raises(SystemExit):
            self.stages_run(tmp_path, "text", configFile="missing.config")

    def test_missing_theme_exits(self, tmp_path):
        """Unknown theme is fatal"""
        with pytest.raises(SystemExit):
            self.stages_run(tmp_path, "text", theme="no-such-theme")

    def test_sequential_output(self, tmp_path):
        """Versioned file name and bumped source comment"""
        source = "<!-- sequential-output: on -->\n<!-- version-number: 01.99 -->\n# Report\n"
        state = self.stages_run(tmp_path, source)

        assert state.outputFilePath.name == "report-v01.99.html"
        assert state.outputFilePath.exists()
        updated = (tmp_path / "report.md").read_text(encoding="utf-8")
        assert "<!-- version-number: 02.00 -->" in updated

    def test_custom_stylesheet(self, tmp_path):
        """Stylesheet relative to the input directory replaces the theme CSS"""
        (tmp_path / "print.css").write_text("body { font-family: Georgia; }\n", encoding="utf-8")
        state = self.stages_run(tmp_path, "# Report\n\nBody", styleFile="print.css")

        assert "body { font-family: Georgia; }" in state.styledHtml
        assert ".live-site-shield" not in state.styledHtml
        assert "<title>Report</title>" in state.styledHtml

    def test_absolute_stylesheet(self, tmp_path):
        """Absolute stylesheet paths are used as given"""
        style_path = tmp_path / "styles" / "print.css"
        style_path.parent.mkdir()
        style_path.write_text("h1 { color: teal; }\n", encoding="utf-8")
        state = self.stages_run(tmp_path, "# Report", styleFile=str(style_path))
        assert "h1 { color: teal; }" in state.styledHtml

    def test_missing_stylesheet_exits(self, tmp_path, capsys):
        """Missing custom stylesheet is fatal"""
        with pytest.raises(SystemExit) as exc_info:
            self.stages_run(tmp_path, "text", styleFile="missing.css")
        assert exc_info.value.code == 1
        assert "Custom CSS file not found" in capsys.readouterr().err
