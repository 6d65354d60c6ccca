"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from pathlib import Path
from argparse import Namespace
from functools import reduce
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the conversion pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the conversion progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, configFile,
          theme, themeColor, singlePage, styleFile
        - env_check: inputSourceFile, inputFormat, htmlOutputdir, themeLoaded,
          customCss, envOK
        - tokens_load: configTokens, automaticTokens
        - source_read: sourceText
        - document_build: processedDocument, styledHtml
        - output_write: outputFilePath
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the source document
        outputdir: Base output directory
        verbosity: Logging verbosity level (1-3)
        inputFile: Input filename (relative to inputdir)
        configFile: Optional token config file (relative to inputdir or absolute)
        theme: Theme name
        themeColor: CLI theme color (document setting wins over it)
        singlePage: Render as one continuous page
        styleFile: Optional stylesheet replacing the theme CSS (relative to inputdir or absolute)
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the source document
        inputFormat: InputFormat picked from the source file suffix
        htmlOutputdir: Final output directory
        themeLoaded: Theme loaded for styling
        customCss: Text of the custom stylesheet, if one was given
        configTokens: Tokens from the config file
        automaticTokens: Tokens derived from time and environment
        sourceText: Raw document text
        processedDocument: ProcessedDocument from the transformation pipeline
        styledHtml: Complete styled HTML document
        outputFilePath: Path of the written output file
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="README.md")
    configFile: Optional[str] = field(default=None)
    theme: Optional[str] = field(default=None)
    themeColor: Optional[str] = field(default=None)
    singlePage: bool = field(default=False)
    styleFile: Optional[str] = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    inputFormat: Optional[Any] = field(default=None)  # InputFormat at runtime
    htmlOutputdir: Path = field(default=Path("/"))
    themeLoaded: Optional[Any] = field(default=None)  # Theme at runtime
    customCss: Optional[str] = field(default=None)
    configTokens: Dict[str, str] = field(default_factory=dict)
    automaticTokens: Optional[Any] = field(default=None)  # read-only Mapping[str, str]
    sourceText: Optional[str] = field(default=None)
    processedDocument: Optional[Any] = field(default=None)  # ProcessedDocument at runtime
    styledHtml: Optional[str] = field(default=None)
    outputFilePath: Optional[Path] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, configFile, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for conversion output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        # Only keep options that are ProgramState fields
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            tokens_load,
            source_read,
            document_build,
            output_write,
            results_report
        )
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
