"""
Exceptions raised by hgrep

ArgumentError is fatal and detected before any source is read.
OutputWriteError wraps a failure to open or write the output destination.
Unreadable sources are not errors: the loader skips them.
"""


class ArgumentError(ValueError):
    """Unusable command line: bad selector, bad regex, or nothing to search for"""


class OutputWriteError(OSError):
    """Output destination could not be opened or written"""
