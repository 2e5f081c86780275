"""
Models package for hgrep

Contains data structures and type definitions for the search pipeline.
"""

from .state import ProgramState, pipeline
from .stage import Direction, Stage, Pipeline
from .options import OutputOptions

__all__ = [
    "ProgramState",
    "pipeline",
    "Direction",
    "Stage",
    "Pipeline",
    "OutputOptions",
]
