"""
Command-line grammar and pipeline construction

The raw argument list is a chain of segments separated by the literal
tokens "|" and "!":

    hgrep -c table | -s Total ! -c tfoot report.html

Every segment is parsed once with the same flag grammar. Its -c/-s/-r/-p
flags become one Stage; the remaining (global) flags and positional files
are folded across all segments. A "!" separator, or -p inside a segment,
makes that segment's stage an existence test (Direction.DOCUMENT).
"""

import re
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter, Namespace
from typing import List, Sequence, Tuple

import soupsieve

from ..models.options import OutputOptions
from ..models.stage import Direction, Stage
from .errors import ArgumentError
from .loader import STDIN_PATH
from .log import LOG

SEPARATOR_CURRENT = "|"
SEPARATOR_DOCUMENT = "!"
SEPARATORS = (SEPARATOR_CURRENT, SEPARATOR_DOCUMENT)

EPILOG = """\
Selectors can be chained using '|' or '!'.

The first stage is applied to the document root, and each following stage
is applied to the results of the previous one. A stage after '!' (or with
--parent) keeps the input element instead of the matched children, acting
as an existence test.
"""


def parser_create(version: str = "") -> ArgumentParser:
    """
    Build the argparse grammar shared by every pipeline segment

    -h is taken by --prefix, so help is only available as --help.
    """
    parser = ArgumentParser(
        prog="hgrep",
        description="hgrep - search HTML documents with chained CSS selectors",
        formatter_class=ArgumentDefaultsHelpFormatter,
        epilog=EPILOG,
        add_help=False,
        allow_abbrev=False,
    )

    selectors = parser.add_argument_group("Selectors")
    selectors.add_argument(
        "-c", "--css", dest="css", action="append", default=[], help="CSS selector"
    )
    selectors.add_argument(
        "-s",
        "--search",
        dest="search",
        action="append",
        default=[],
        help="Search string (matches against element text)",
    )
    selectors.add_argument(
        "-r", "--regex", dest="regex", action="append", default=[], help="Search regex"
    )
    selectors.add_argument(
        "-p",
        "--parent",
        action="store_true",
        help="Select the current element rather than the matched child",
    )

    output = parser.add_argument_group("Output")
    output.add_argument(
        "-a", "--attr", dest="attr", action="append", default=[], help="Extract an attribute value"
    )
    output.add_argument("-t", "--text", action="store_true", help="Print text content only")
    output.add_argument("-h", "--prefix", action="store_true", help="Print file name prefix")
    output.add_argument(
        "-H", "--no-prefix", dest="no_prefix", action="store_true", help="Suppress file name prefix"
    )
    output.add_argument(
        "-l", "--list", action="store_true", help="Only print matching file names"
    )
    output.add_argument(
        "-T", "--trim", action="store_true", help="Trim leading and trailing whitespace"
    )
    output.add_argument(
        "-C", "--count", action="store_true", help="Print the number of matches"
    )
    output.add_argument("-q", "--quiet", action="store_true", help="Suppress output")
    output.add_argument(
        "-0", "--print0", action="store_true", help="Null-terminate records"
    )
    output.add_argument(
        "-o", "--output", default=None, help="Output file (must already exist)"
    )

    parser.add_argument("files", nargs="*", help="Input files ('-' for standard input)")

    parser.add_argument(
        "-v",
        "--verbosity",
        action="count",
        default=0,
        help="Log diagnostics to stderr (can be repeated: -v, -vv, -vvv)",
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {version}")
    parser.add_argument("--help", action="help", help="Show this help message and exit")

    return parser


def args_split(argv: Sequence[str]) -> List[Tuple[Direction, List[str]]]:
    """
    Split raw arguments into pipeline segments

    Args:
        argv: Arguments without the program name

    Returns:
        One (direction, tokens) pair per segment. The separator preceding
        a segment decides its direction; the first segment is CURRENT.

    Example:
        >>> args_split(["-c", "ul", "!", "-c", "li", "a.html"])
        [(Direction.CURRENT, ['-c', 'ul']),
         (Direction.DOCUMENT, ['-c', 'li', 'a.html'])]
    """
    segments: List[Tuple[Direction, List[str]]] = []
    direction = Direction.CURRENT
    tokens: List[str] = []

    for token in argv:
        if token in SEPARATORS:
            segments.append((direction, tokens))
            direction = Direction.DOCUMENT if token == SEPARATOR_DOCUMENT else Direction.CURRENT
            tokens = []
        else:
            tokens.append(token)

    segments.append((direction, tokens))
    return segments


def segments_parse(
    parser: ArgumentParser, argv: Sequence[str]
) -> List[Tuple[Direction, Namespace]]:
    """Parse every segment once; flags and files may be interleaved"""
    return [
        (direction, parser.parse_intermixed_args(tokens))
        for direction, tokens in args_split(argv)
    ]


def stage_compile(direction: Direction, namespace: Namespace) -> Stage:
    """
    Compile one segment's selector flags into a Stage

    Raises:
        ArgumentError: a CSS selector or regex does not compile
    """
    if namespace.parent:
        direction = Direction.DOCUMENT

    patterns = []
    for css in namespace.css:
        try:
            patterns.append(soupsieve.compile(css))
        except soupsieve.SelectorSyntaxError as e:
            raise ArgumentError(f"Invalid selector: {css}") from e

    regexes = []
    for pattern in namespace.regex:
        try:
            regexes.append(re.compile(pattern))
        except re.error as e:
            raise ArgumentError(f"Invalid regex: {pattern}") from e

    stage = Stage(
        direction=direction,
        patterns=tuple(patterns),
        substrings=tuple(namespace.search),
        regexes=tuple(regexes),
    )

    if stage.is_structural and stage.is_filtering:
        LOG("Search/regex filters next to -c are not applied; use a separate '|' stage", level=1)

    return stage


def stages_compile(segments: Sequence[Tuple[Direction, Namespace]]) -> Tuple[Stage, ...]:
    """
    Compile all segments into the selection pipeline

    Raises:
        ArgumentError: a pattern does not compile, or no segment has any
                       selector, search string, or regex
    """
    stages = tuple(stage_compile(direction, namespace) for direction, namespace in segments)
    if all(stage.is_empty for stage in stages):
        raise ArgumentError("You must have at least one selector.")
    return stages


def globals_fold(segments: Sequence[Tuple[Direction, Namespace]]) -> Namespace:
    """
    Merge the global flags of all segments

    Switches are OR'd, repeatable values and files are concatenated in
    command-line order, and the last -o wins.
    """
    merged = Namespace(
        attr=[],
        files=[],
        text=False,
        prefix=False,
        no_prefix=False,
        list=False,
        trim=False,
        count=False,
        quiet=False,
        print0=False,
        output=None,
        verbosity=0,
    )
    for _, namespace in segments:
        merged.attr.extend(namespace.attr)
        merged.files.extend(namespace.files)
        for switch in ("text", "prefix", "no_prefix", "list", "trim", "count", "quiet", "print0"):
            if getattr(namespace, switch):
                setattr(merged, switch, True)
        if namespace.output is not None:
            merged.output = namespace.output
        merged.verbosity += namespace.verbosity
    return merged


def options_create(merged: Namespace) -> OutputOptions:
    """Build the read-only output options from the folded flags"""
    prefix = (merged.prefix or len(merged.files) > 1) and not merged.no_prefix
    return OutputOptions(
        attributes=tuple(merged.attr),
        list=merged.list,
        quiet=merged.quiet,
        text=merged.text,
        prefix=prefix,
        trim=merged.trim,
        count=merged.count,
        terminator="\0" if merged.print0 else "\n",
    )


def sources_resolve(files: Sequence[str]) -> List[str]:
    """Positional files in order; standard input once if none were given"""
    return list(files) if files else [STDIN_PATH]

