"""
Document loader

Reads one input source and builds a BeautifulSoup tree from it. A source
that cannot be read (missing file, permission denied, undecodable bytes)
is skipped: the loader returns None and the driver moves on.
"""

import sys
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup, FeatureNotFound

from ..config import appsettings, AppSettings
from .errors import ArgumentError
from .log import LOG

STDIN_PATH = "-"


def source_read(path: str, settings: AppSettings = appsettings) -> Optional[str]:
    """
    Read a source's text

    Args:
        path: File path, or "-" for standard input
        settings: Application settings (source encoding)

    Returns:
        The source text, or None if the source could not be read
    """
    try:
        if path == STDIN_PATH:
            return sys.stdin.read()
        return Path(path).read_text(encoding=settings.encoding)
    except (OSError, UnicodeDecodeError) as e:
        LOG(f"Skipping unreadable source {path}: {e}", level=2)
        return None


def document_parse(markup: str, settings: AppSettings = appsettings) -> BeautifulSoup:
    """
    Build a document tree from markup text

    Multi-valued attributes (class, rel, ...) are kept as the raw strings
    found in the source so attribute extraction prints them verbatim.
    """
    return BeautifulSoup(markup, settings.parser, multi_valued_attributes=None)


def parser_check(settings: AppSettings = appsettings) -> None:
    """
    Make sure the configured tree builder is installed

    Raises:
        ArgumentError: no installed builder provides `settings.parser`
    """
    try:
        document_parse("", settings)
    except FeatureNotFound as e:
        raise ArgumentError(f"Unknown HTML parser: {settings.parser}") from e


def document_load(path: str, settings: AppSettings = appsettings) -> Optional[BeautifulSoup]:
    """Read and parse one source; None if it was skipped"""
    markup = source_read(path, settings)
    if markup is None:
        return None
    LOG(f"Read {len(markup)} characters from {path}", level=2)
    return document_parse(markup, settings)
