"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Callable, TextIO
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: path, verbosity
        - source_read: sourceFile, source
        - stav_compile: compiledHtml, documentTheme
        - output_create: outputFile, outputHandle
        - output_write: outputWritten
        - results_report: (no additions, terminal stage)

    Attributes:
        path: Source file path exactly as given on the command line
        verbosity: Logging verbosity level (1-3)
        sourceFile: Resolved path to the source file
        source: Source text read from sourceFile
        compiledHtml: Complete HTML document produced by the compiler
        documentTheme: Theme name the program selected, None if it chose none
        outputFile: Path of the generated .html file
        outputHandle: Open text handle on outputFile, consumed by output_write
        outputWritten: Number of characters written to outputFile
    """

    # CLI arguments
    path: str = field(default="")
    verbosity: int = field(default=1)

    # Pipeline state
    sourceFile: Path = field(default=Path("/"))
    source: Optional[str] = field(default=None)
    compiledHtml: Optional[str] = field(default=None)
    documentTheme: Optional[str] = field(default=None)
    outputFile: Path = field(default=Path("/"))
    outputHandle: Optional[TextIO] = field(default=None)
    outputWritten: int = field(default=0)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace
    ) -> "ProgramState":
        """
        Create ProgramState from an argparse Namespace.

        Options without a matching ProgramState field are ignored.

        Args:
            options: Parsed CLI arguments (path, verbosity)

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**filtered_options)

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
            source_read,
            stav_compile,
            output_create,
            output_write,
            results_report
        )

    This is equivalent to:
        results_report(output_write(output_create(stav_compile(source_read(initial_state)))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)


def state_describe(state: ProgramState) -> dict[str, Any]:
    """Summarize a state for debug logging, leaving out bulky text fields"""
    return {
        "path": state.path,
        "verbosity": state.verbosity,
        "source_chars": len(state.source) if state.source is not None else None,
        "html_chars": len(state.compiledHtml) if state.compiledHtml is not None else None,
        "outputFile": str(state.outputFile),
    }
