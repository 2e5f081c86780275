"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing the driver's stages.
"""

from typing import Any, List, Optional, TextIO, Tuple, TypeVar, Callable
from dataclasses import dataclass, field

from .options import OutputOptions
from .stage import Stage


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for one hgrep run (state bus pattern).

    This dataclass carries all program state through the driver pipeline,
    with each stage filling in fields as the run progresses.

    Pipeline stages and their state additions:
        - Initial: argv, verbosity
        - pipeline_build: stages, options, sources, output
        - output_open: out, outOwned
        - sources_search: matchTotal, halted
        - status_report: exitCode

    Attributes:
        argv: Raw command-line arguments (without the program name)
        verbosity: Logging verbosity level (0-3)
        stages: Compiled selection pipeline
        options: Output formatting options
        sources: Input paths in command-line order ("-" is stdin)
        output: Path given with -o, or None for stdout
        out: Open output stream
        outOwned: True if `out` was opened here and must be closed
        matchTotal: Leaf matches summed across all searched sources
        halted: True once quiet mode found a match
        exitCode: Process exit status
    """

    # CLI arguments
    argv: List[str] = field(default_factory=list)
    verbosity: int = field(default=0)

    # Pipeline state
    stages: Tuple[Stage, ...] = field(default_factory=tuple)
    options: OutputOptions = field(default_factory=OutputOptions)
    sources: List[str] = field(default_factory=list)
    output: Optional[str] = field(default=None)
    out: Optional[TextIO] = field(default=None)
    outOwned: bool = field(default=False)
    matchTotal: int = field(default=0)
    halted: bool = field(default=False)
    exitCode: int = field(default=0)

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
            pipeline_build,
            output_open,
            sources_search,
            status_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
