#!/usr/bin/env python3
"""
printdown - Print-ready HTML from markdown and HTML documents

Turns a markdown (or HTML) source into a single styled HTML document ready
for printing to PDF, driven by plain comments inside the source itself.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Philosophy:
    - Source-first: Documents stay readable markdown; all layout hints are
      HTML comments a normal renderer ignores
    - Code is sacred: Nothing inside fenced or inline code is ever rewritten
    - Single-file workflow: One source -> one standalone HTML output

Key Features:
    - {{TOKEN}} substitution from a config file plus automatic date,
      time and environment tokens
    - Document settings: <!-- theme-color: #ff6b35 -->, <!-- page-numbers: X -->, ...
    - Print-only blocks, page breaks, live-site/redaction shields,
      table column widths
    - Themes (theme.yaml + theme.css), paged-media footer
    - Sequential output with automatic version bumping

Usage:
    printdown inputdir/ outputdir/ --inputFile README.md

    The styled document is written to outputdir/ as a self-contained
    HTML file, ready to print.

Examples:
    # Basic conversion
    printdown . output/ --inputFile README.md

    # With tokens and a theme color override
    printdown . output/ --inputFile report.md --configFile printdown.config --themeColor 336699

    # Own stylesheet instead of the theme CSS
    printdown . output/ --inputFile report.md --styleFile print.css

    # Verbose output
    printdown . output/ --inputFile report.md -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import (
    __version__,
    LOG,
    state_connectToLogger,
    Theme,
    ThemeError,
    themes_listAvailable,
    TokenConfigError,
    tokens_loadFile,
    tokens_automatic,
    document_process,
    DocumentStyler,
    version_next,
    versionComment_update,
)
from .lib.versioning import DEFAULT_VERSION
from .models import ProgramState, InputFormat, pipeline


DISPLAY_TITLE = r"""
            _       _      _
  _ __  _ _(_)_ __ | |_ __| |_____ __ ___ _
 | '_ \| '_| | '  \|  _/ _` / _ \ V  V / ' \
 | .__/|_| |_|_||_| \__\__,_\___/\_/\_/|_||_|
 |_|

  Print-ready HTML from markdown
"""

# Define CLI arguments
parser = ArgumentParser(
    description="printdown - Print-ready HTML from markdown and HTML documents",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile",
    default="README.md",
    type=str,
    help="Input markdown (.md) or HTML (.html) file (relative to inputdir)",
)

parser.add_argument(
    "--configFile",
    default=None,
    type=str,
    help="Token config file (key=value or .yaml), relative to inputdir or absolute",
)

parser.add_argument(
    "--theme",
    default=None,
    type=str,
    help=f"Theme name (default: {appsettings.default_theme})",
)

parser.add_argument(
    "--themeColor",
    default=None,
    type=str,
    help="Theme color as hex (ff6b35) or COLOR_<NAME> token name; the document setting wins",
)

parser.add_argument(
    "--singlePage",
    action="store_true",
    help="Render as one continuous page without page breaks",
)

parser.add_argument(
    "--styleFile",
    default=None,
    type=str,
    help="Custom CSS file replacing the theme stylesheet, relative to inputdir or absolute",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment, resolve paths and load the theme.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the source document
            - inputFormat: MARKDOWN or HTML, from the file suffix
            - htmlOutputdir: Created output directory path
            - themeLoaded: Loaded Theme
            - customCss: Custom stylesheet text (None without --styleFile)
            - envOK: True if environment is valid

    Exits:
        1 if the input file, the theme or the custom stylesheet is not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile

    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    state.inputFormat = InputFormat.from_suffix(input_file.suffix)
    LOG(f"Input file: {input_file} ({state.inputFormat.value})", level=2)

    theme_name = state.theme or appsettings.default_theme
    try:
        state.themeLoaded = Theme(theme_name)
    except ThemeError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"Available themes: {', '.join(themes_listAvailable()) or '(none)'}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    LOG(f"Loaded theme: {state.themeLoaded.name}", level=2)

    if state.styleFile:
        style_path = Path(state.styleFile)
        if not style_path.is_absolute():
            style_path = state.inputdir / style_path
        if not style_path.is_file():
            print(f"Error: Custom CSS file not found: {style_path}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        try:
            state.customCss = style_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading custom CSS file: {e}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        LOG(f"Using custom CSS: {style_path}", level=1)

    state.htmlOutputdir = state.outputdir
    state.htmlOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.htmlOutputdir}", level=2)

    state.envOK = True
    return state


def tokens_load(inputstate: ProgramState) -> ProgramState:
    """
    Load config tokens and build the automatic tokens.

    Without --configFile the config mapping stays empty, which turns
    token substitution off for the run.

    Returns:
        ProgramState with added fields:
            - configTokens: Tokens from the config file
            - automaticTokens: Read-only automatic token mapping

    Exits:
        1 if an explicit config file is missing or cannot be parsed
    """

    state = inputstate.copy()

    if state.configFile:
        config_path = Path(state.configFile)
        if not config_path.is_absolute():
            config_path = state.inputdir / config_path
        try:
            state.configTokens = tokens_loadFile(config_path, current_dir=state.inputdir)
        except TokenConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        LOG("No config file given, token replacement disabled", level=2)
        state.configTokens = {}

    state.automaticTokens = tokens_automatic(current_dir=state.inputdir)
    LOG(f"{len(state.automaticTokens)} automatic tokens available", level=3)
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the source document.

    Returns:
        ProgramState with added field:
            - sourceText: Raw document text

    Exits:
        1 if the file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
        LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def document_build(inputstate: ProgramState) -> ProgramState:
    """
    Transform the source and wrap it into a styled HTML document.

    Returns:
        ProgramState with added fields:
            - processedDocument: ProcessedDocument (html, settings, unresolved)
            - styledHtml: Complete HTML document

    Exits:
        1 if no source text is available
    """

    state = inputstate.copy()

    if state.sourceText is None:
        print("Error: No source text available", file=sys.stderr)
        sys.exit(1)

    LOG("Transforming document...", level=1)
    state.processedDocument = document_process(
        state.sourceText,
        state.inputFormat,
        state.configTokens,
        state.automaticTokens,
        input_dir=state.inputSourceFile.parent,
        pygments_style=state.themeLoaded.pygmentsStyle_get(),
    )

    styler = DocumentStyler(
        state.themeLoaded,
        config_tokens=state.configTokens,
        theme_color=state.themeColor,
        single_page=state.singlePage,
        custom_css=state.customCss,
    )
    state.styledHtml = styler.document_build(
        state.processedDocument.html,
        state.processedDocument.settings,
        state.inputFormat,
    )
    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the styled document, honouring sequential output.

    With sequential output on, the file name carries "-v<version>" and the
    source's version-number comment is bumped afterwards.

    Returns:
        ProgramState with added field:
            - outputFilePath: Path of the written HTML file

    Exits:
        1 if the output file cannot be written
    """

    state = inputstate.copy()
    settings = state.processedDocument.settings

    stem = state.inputSourceFile.stem
    version = settings.version_number or DEFAULT_VERSION
    if settings.sequential_output:
        stem = f"{stem}-v{version}"

    state.outputFilePath = state.htmlOutputdir / f"{stem}.html"

    try:
        state.outputFilePath.write_text(state.styledHtml, encoding="utf-8")
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)
    LOG(f"Wrote {state.outputFilePath}", level=2)

    if settings.sequential_output:
        updated = versionComment_update(state.sourceText, version_next(version))
        try:
            state.inputSourceFile.write_text(updated, encoding="utf-8")
        except OSError as e:
            LOG(f"Warning: could not update version number in source: {e}", level=1, warning=True)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display conversion results to the user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if no output was written
    """
    state: ProgramState = inputstate.copy()
    if not state.outputFilePath:
        print("Error: Conversion failed", file=sys.stderr)
        sys.exit(1)

    document = state.processedDocument
    if state.verbosity >= 1:
        LOG("\n✓ Conversion successful!", level=1)
        LOG(f"  Output: {state.outputFilePath}", level=1)
        if document.settings.document_title:
            LOG(f"  Title: {document.settings.document_title}", level=1)
        if document.unresolved:
            LOG(f"  Unresolved tokens: {', '.join(document.unresolved)}", level=1, warning=True)
        LOG("\nTo print: open the file in a browser and print to PDF", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="printdown - Print-ready HTML from markdown",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - convert a markdown or HTML source to print-ready HTML.

    Orchestrates the full pipeline:
        1. env_check: Validate paths, load theme
        2. tokens_load: Config and automatic tokens
        3. source_read: Read the source document
        4. document_build: Transform and style
        5. output_write: Write output, bump version if sequential
        6. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing the source document
        outputdir: Directory where the HTML document will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(
        state,
        env_check,
        tokens_load,
        source_read,
        document_build,
        output_write,
        results_report,
    )


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
