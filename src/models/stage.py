"""
Stage and pipeline models

A Stage is one link in the selection pipeline: a traversal direction plus
the structural (CSS) patterns and text filters that decide which elements
flow on to the next stage. A Pipeline is the ordered, non-empty chain of
Stages built once per invocation.
"""

import re
from enum import Enum
from dataclasses import dataclass, field
from typing import Tuple

from soupsieve import SoupSieve


class Direction(Enum):
    """
    Where evaluation continues after a structural match

    CURRENT continues from the matched element. DOCUMENT continues from the
    element the stage was evaluated against, so the stage acts purely as an
    existence test ("has a descendant matching this pattern").
    """
    CURRENT = "current"
    DOCUMENT = "document"


@dataclass(frozen=True)
class Stage:
    """
    One link of the selection pipeline

    Attributes:
        direction: Traversal direction for structural matches
        patterns: Compiled CSS selectors; matches are unioned, in
                  declaration order, without deduplication
        substrings: Literal, case-sensitive text filters
        regexes: Compiled regex text filters

    A Stage without patterns is a pass-through filter: it tests the
    substrings/regexes against the current element's text and never
    descends into the tree.

    Example:
        Stage(patterns=(soupsieve.compile("li"),))
        Stage(substrings=("Total",))
    """
    direction: Direction = Direction.CURRENT
    patterns: Tuple[SoupSieve, ...] = field(default_factory=tuple)
    substrings: Tuple[str, ...] = field(default_factory=tuple)
    regexes: Tuple[re.Pattern, ...] = field(default_factory=tuple)

    @property
    def is_structural(self) -> bool:
        """True if the stage descends into the tree via CSS patterns"""
        return len(self.patterns) > 0

    @property
    def is_filtering(self) -> bool:
        """True if the stage has any substring or regex criterion"""
        return len(self.substrings) > 0 or len(self.regexes) > 0

    @property
    def is_empty(self) -> bool:
        """True if the stage has no criteria at all (vacuously true)"""
        return not self.is_structural and not self.is_filtering


Pipeline = Tuple[Stage, ...]
