"""
Stage evaluator

Applies the selection pipeline to a document tree: stage 0 against the
document root, stage 1 against whatever stage 0 yields, and so on. An
element that survives the last stage is a leaf match and goes to the
recorder.

The walk is depth-first and follows document order within each pattern.
Stage patterns are OR'd: every pattern's matches are visited in turn, with
no deduplication, so an element matched by two patterns is handed on twice.

Example:
    >>> soup = BeautifulSoup("<ul><li>a</li><li>b</li></ul>", "html.parser")
    >>> stages = (Stage(patterns=(soupsieve.compile("li"),)),)
    >>> stages_evaluate(soup, stages, recorder)
    True          # recorder saw <li>a</li>, then <li>b</li>
"""

from typing import Sequence

from bs4 import Tag

from ..models.stage import Direction, Stage
from .filters import text_matches
from .recorder import MatchRecorder


def stage_evaluate(
    current: Tag,
    stages: Sequence[Stage],
    index: int,
    recorder: MatchRecorder,
) -> bool:
    """
    Evaluate `stages[index:]` against `current`

    Args:
        current: Element under consideration (the soup root for stage 0)
        stages: The whole pipeline
        index: Position of the stage to apply
        recorder: Receives leaf matches

    Returns:
        False as soon as the recorder asks to stop, True otherwise
    """
    if index >= len(stages):
        return recorder.record(current)

    stage = stages[index]

    if not stage.is_structural:
        if text_matches(current, stage):
            return stage_evaluate(current, stages, index + 1, recorder)
        return True

    for pattern in stage.patterns:
        for element in pattern.select(current):
            # DOCUMENT stages only test for existence; downstream stages
            # keep working on the element this stage was applied to.
            following = element if stage.direction is Direction.CURRENT else current
            if not stage_evaluate(following, stages, index + 1, recorder):
                return False

    return True


def stages_evaluate(root: Tag, stages: Sequence[Stage], recorder: MatchRecorder) -> bool:
    """Run the whole pipeline from the document root"""
    return stage_evaluate(root, stages, 0, recorder)
