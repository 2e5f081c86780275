"""
hgrep - grep for HTML documents

Selects elements from HTML documents with chained CSS selectors and text
filters.
"""

__version__ = "1.0.0"

from .lib import MatchRecorder, stages_evaluate, document_load, LOG, state_connectToLogger

__all__ = ["MatchRecorder", "stages_evaluate", "document_load", "LOG", "state_connectToLogger", "__version__"]
