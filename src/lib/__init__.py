"""
hgrep - grep for HTML documents

Stage-chain evaluation engine over BeautifulSoup trees.
"""

from .errors import ArgumentError, OutputWriteError
from .evaluator import stage_evaluate, stages_evaluate
from .filters import text_matches
from .loader import document_load
from .recorder import MatchRecorder
from .log import LOG, state_connectToLogger

__all__ = [
    "ArgumentError",
    "OutputWriteError",
    "stage_evaluate",
    "stages_evaluate",
    "text_matches",
    "document_load",
    "MatchRecorder",
    "LOG",
    "state_connectToLogger",
]
