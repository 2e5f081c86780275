"""
Output options model

Process-wide, read-only settings that decide how leaf matches are reported.
Built once from the parsed command line.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class OutputOptions:
    """
    How the match recorder formats its output

    Attributes:
        attributes: Attribute names to extract, in request order (-a)
        list: Print only the path of sources with a match (-l)
        quiet: Print nothing; stop at the first match (-q)
        text: Print text content instead of markup (-t)
        prefix: Print the source path before every record
        trim: Strip leading/trailing whitespace from records (-T)
        count: Print only the number of matches per source (-C)
        terminator: Record terminator ("\\n" or "\\0" with -0)
    """
    attributes: Tuple[str, ...] = field(default_factory=tuple)
    list: bool = False
    quiet: bool = False
    text: bool = False
    prefix: bool = False
    trim: bool = False
    count: bool = False
    terminator: str = "\n"
