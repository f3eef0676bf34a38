#!/usr/bin/env python3
"""
stav - Stack-based composition system

Compiles a StaV program into a static HTML document written next to the
source file.

A StaV program is a sequence of whitespace-separated tokens run on a stack
machine: literals push values, commands pop typed operands and push results.
Whatever text fragments remain on the stack become the document body.

Usage:
    stav page.stav          # writes page.html

Examples:
    # Basic compilation
    stav site/index.stav

    # Show each pipeline stage
    stav site/index.stav -v

    # Trace every command against the stack
    stav site/index.stav -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from typing import List, Optional

from .config import appsettings
from .lib import Compiler, CompileError, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline
from .models.state import state_describe


def parser_build() -> ArgumentParser:
    """Build the command line parser"""
    parser = ArgumentParser(
        prog="stav",
        description="StaV - Stack-based composition system",
        formatter_class=ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("path", type=str, help="Source code file path")

    parser.add_argument(
        "-v",
        "--verbosity",
        action="count",
        default=1,
        help="Increase output verbosity (can be repeated: -v, -vv)",
    )

    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def fault(stage: str, error: Exception) -> None:
    """
    Report a failed stage and stop.

    Prints one "Failed to ..." line to stderr; the underlying error is only
    shown at debug verbosity.

    Exits:
        1 always
    """
    LOG(f"{type(error).__name__}: {error}", level=3)
    print(f"Failed to {stage}", file=sys.stderr)
    sys.exit(1)


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the whole source file into memory.

    Returns:
        ProgramState with added fields:
            - sourceFile: Path to the source
            - source: Source text

    Exits:
        1 if the file cannot be read or is not valid UTF-8
    """
    state = inputstate.copy()
    state.sourceFile = Path(state.path)

    LOG("Reading source file...", level=2)
    try:
        # newline="" keeps CRLF intact for the tokenizer
        with state.sourceFile.open(encoding="utf-8", newline="") as handle:
            state.source = handle.read()
    except (OSError, UnicodeDecodeError) as e:
        fault("read source file", e)

    LOG(f"Read {len(state.source)} characters from {state.sourceFile.name}", level=2)
    return state


def stav_compile(inputstate: ProgramState) -> ProgramState:
    """
    Compile the source text to an HTML document.

    Returns:
        ProgramState with added fields:
            - compiledHtml: Complete HTML document
            - documentTheme: Theme the program selected (or None)

    Exits:
        1 if compilation fails at any stage
    """
    state = inputstate.copy()

    LOG("Compiling StaV code...", level=2)
    compiler = Compiler(state.source or "")
    try:
        state.compiledHtml = compiler.compile()
    except CompileError as e:
        fault("compile StaV code", e)

    if compiler.stack is not None:
        state.documentTheme = compiler.stack.theme
    LOG(f"State after compile: {state_describe(state)}", level=3)
    return state


def output_create(inputstate: ProgramState) -> ProgramState:
    """
    Create (or truncate) the output file next to the source.

    Returns:
        ProgramState with added fields:
            - outputFile: Path of the .html file
            - outputHandle: Open handle for output_write

    Exits:
        1 if the file cannot be created
    """
    state = inputstate.copy()
    state.outputFile = appsettings.outputPath_make(state.sourceFile)

    try:
        state.outputHandle = state.outputFile.open("w", encoding="utf-8")
    except OSError as e:
        fault("create HTML file", e)

    LOG(f"Created {state.outputFile}", level=2)
    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the compiled document in one go and close the file.

    Returns:
        ProgramState with added field:
            - outputWritten: Characters written

    Exits:
        1 if writing fails
    """
    state = inputstate.copy()
    html = state.compiledHtml or ""

    try:
        with state.outputHandle as handle:
            state.outputWritten = handle.write(html)
    except OSError as e:
        fault("write out to the file", e)
    finally:
        state.outputHandle = None

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Report the written document.

    At verbose levels also checks that the stylesheet the document links to
    exists next to it.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()

    LOG(f"✓ Wrote {state.outputFile} ({state.outputWritten} characters)", level=1)

    if state.verbosity < 2:
        return state

    theme = state.documentTheme if state.documentTheme is not None else appsettings.default_theme
    stylesheet = state.outputFile.parent / appsettings.stylesheet_href(theme)
    try:
        found = stylesheet.is_file()
    except OSError as e:
        LOG(f"Warning: cannot check stylesheet {stylesheet}: {e}", level=2)
        return state
    if not found:
        LOG(f"Warning: stylesheet {stylesheet} not found", level=2)
    return state


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point - compile a StaV source file to HTML.

    Orchestrates the full pipeline:
        1. source_read: Read the source file
        2. stav_compile: Tokenize, parse, evaluate and generate
        3. output_create: Create the .html file next to the source
        4. output_write: Write the document
        5. results_report: Report the result

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])
    """
    options: Namespace = parser_build().parse_args(argv)
    state: ProgramState = ProgramState.state_createFromNamespace(options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, source_read, stav_compile, output_create, output_write, results_report)


if __name__ == "__main__":
    main()
