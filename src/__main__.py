#!/usr/bin/env python3
"""
hgrep - grep for HTML documents

Selects elements from HTML documents with a chain of CSS selectors and
text filters, and prints them as markup, text, or attribute values.

Philosophy:
    - Tree, not lines: matches are elements, printed one record per line
    - Pipelines: stages separated by '|' narrow the selection step by step
    - Existence tests: a stage after '!' filters without moving the selection
    - grep-like output modes: count, list, quiet, prefixes, NUL terminators

Usage:
    hgrep [options] [files...] [ '|' | '!' [options] [files...] ]...

Examples:
    # Every list item, as markup
    hgrep -c li index.html

    # Link targets inside the navigation
    hgrep -c nav | -c a -a href index.html

    # Tables that have a footer, as text
    hgrep -c table ! -c tfoot -t report.html

    # Paragraphs mentioning "Total"
    hgrep -c p | -s Total *.html

    # Which files contain a form at all
    hgrep -c form -l *.html
"""

import os
import sys
from typing import List, Optional, Sequence, TextIO

from . import __version__
from .config import appsettings
from .lib import LOG, state_connectToLogger
from .lib.arguments import (
    parser_create,
    segments_parse,
    stages_compile,
    globals_fold,
    options_create,
    sources_resolve,
)
from .lib.errors import ArgumentError, OutputWriteError
from .lib.evaluator import stages_evaluate
from .lib.loader import document_load, parser_check
from .lib.recorder import MatchRecorder
from .models import ProgramState, pipeline


EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_IO_ERROR = 2


def pipeline_build(inputstate: ProgramState) -> ProgramState:
    """
    Turn the raw argument list into the selection pipeline and options.

    Splits argv on '|' and '!', parses each segment once, compiles every
    CSS selector and regex, and folds the global flags.

    Args:
        inputstate: Initial program state with argv

    Returns:
        ProgramState with added fields:
            - verbosity: from -v flags
            - stages: compiled pipeline
            - options: output options
            - sources: input paths ("-" if none given)
            - output: -o path or None

    Exits:
        1 if a selector or regex does not compile, nothing is searched for,
        or the configured HTML parser is not installed
    """
    state = inputstate.copy()

    segments = segments_parse(parser_create(__version__), state.argv)
    merged = globals_fold(segments)

    state.verbosity = merged.verbosity
    state_connectToLogger(state)

    try:
        state.stages = stages_compile(segments)
        parser_check(appsettings)
    except ArgumentError as e:
        print(e, file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    state.options = options_create(merged)
    state.sources = sources_resolve(merged.files)
    state.output = merged.output

    LOG(f"Built {len(state.stages)} stage(s) for {len(state.sources)} source(s)", level=1)
    return state


def output_open(inputstate: ProgramState) -> ProgramState:
    """
    Open the output destination.

    The -o target must already exist: it is opened write-only, never
    created and never truncated.

    Returns:
        ProgramState with added fields:
            - out: output stream (stdout if no -o)
            - outOwned: True if out must be closed by this program

    Exits:
        2 if the -o target cannot be opened
    """
    state = inputstate.copy()

    if state.output is None:
        state.out = sys.stdout
        state.outOwned = False
        return state

    try:
        fd = os.open(state.output, os.O_WRONLY)
        state.out = os.fdopen(fd, "w", encoding="utf-8")
    except OSError as e:
        print(f"Could not open output file: {e}", file=sys.stderr)
        sys.exit(EXIT_IO_ERROR)

    state.outOwned = True
    LOG(f"Writing to {state.output}", level=1)
    return state


def sources_search(inputstate: ProgramState) -> ProgramState:
    """
    Run the pipeline over every source, in command-line order.

    Unreadable sources are skipped. In quiet mode the first match stops the
    whole run: no further source is read and the current recorder is not
    concluded.

    Returns:
        ProgramState with added fields:
            - matchTotal: leaf matches across all searched sources
            - halted: True if quiet mode stopped the run
            - exitCode: 2 if writing the output failed
    """
    state = inputstate.copy()

    try:
        for path in state.sources:
            document = document_load(path, appsettings)
            if document is None:
                continue

            recorder = MatchRecorder(state.options, path, state.out, appsettings)
            if not stages_evaluate(document, state.stages, recorder):
                state.matchTotal += recorder.count
                state.halted = True
                LOG(f"Match found in {path}, stopping", level=1)
                break

            state.matchTotal += recorder.conclude()
    except OutputWriteError as e:
        print(e, file=sys.stderr)
        state.exitCode = EXIT_IO_ERROR

    return state


def stream_discard(out: TextIO) -> None:
    """
    Point a failed stream's file descriptor at the null device.

    Whatever is still buffered (and the interpreter's final flush of
    stdout) then goes nowhere instead of raising BrokenPipeError again.
    Streams without a file descriptor are left alone.
    """
    try:
        fd = out.fileno()
    except (OSError, ValueError):
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fd)
    finally:
        os.close(devnull)


def status_report(inputstate: ProgramState) -> ProgramState:
    """
    Release the output destination and decide the exit status.

    Returns:
        ProgramState with exitCode set:
            - 2 if the output could not be written or flushed
            - 0 if quiet mode found a match
            - 1 if quiet mode found nothing
            - 0 otherwise
    """
    state = inputstate.copy()

    try:
        if state.out is not None:
            state.out.flush()
    except OSError as e:
        if state.exitCode != EXIT_IO_ERROR:
            print(f"Could not write output: {e}", file=sys.stderr)
        state.exitCode = EXIT_IO_ERROR
    finally:
        if state.outOwned and state.out is not None:
            try:
                state.out.close()
            except OSError:
                state.exitCode = EXIT_IO_ERROR

    if state.exitCode == EXIT_IO_ERROR:
        if not state.outOwned and state.out is not None:
            stream_discard(state.out)
        return state

    if state.halted:
        state.exitCode = EXIT_OK
    elif state.options.quiet and state.matchTotal == 0:
        state.exitCode = EXIT_FAILURE
    else:
        state.exitCode = EXIT_OK

    LOG(f"{state.matchTotal} match(es) in total, exit {state.exitCode}", level=1)
    return state


def run(argv: Sequence[str]) -> int:
    """
    Execute one hgrep invocation.

    Args:
        argv: Command-line arguments without the program name

    Returns:
        Process exit status

    Raises:
        SystemExit: on argument errors (and --help/--version)
    """
    state = ProgramState(argv=list(argv))
    state_connectToLogger(state)

    final = pipeline(state, pipeline_build, output_open, sources_search, status_report)
    return final.exitCode


def main(argv: Optional[List[str]] = None) -> None:
    """Console entry point"""
    sys.exit(run(sys.argv[1:] if argv is None else argv))


if __name__ == "__main__":
    main()
