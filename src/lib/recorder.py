"""
Match recorder

Turns the stream of leaf matches from one source into output records, a
count, or a stop signal, depending on the output mode.

Mode precedence:
    count > quiet > list > attribute (-a) > text (-t) > markup (default)

Every record is `<prefix><body><terminator>`, where the prefix is the
source path followed by a colon (colorized on a terminal) and only present
when prefixing is enabled.
"""

from typing import TextIO

from bs4 import Tag

from ..config import appsettings, AppSettings
from ..models.options import OutputOptions
from .errors import OutputWriteError
from .filters import text_content
from .log import LOG


class MatchRecorder:
    """
    Per-source recorder for leaf matches

    Created fresh for each input source and concluded once all of that
    source's matches have been delivered.

    Attributes:
        options: Output options shared by the whole run
        path: Source path used for prefixes and list output
        out: Output stream owned by the driver
        settings: Application settings (prefix colors)
        count: Leaf matches recorded so far, in every mode
        listed: True once list mode has printed this source's path
    """

    def __init__(
        self,
        options: OutputOptions,
        path: str,
        out: TextIO,
        settings: AppSettings = appsettings,
    ) -> None:
        self.options = options
        self.path = path
        self.out = out
        self.settings = settings
        self.count = 0
        self.listed = False
        self.colorize = settings.color_use(out)

    def write(self, text: str) -> None:
        """Write to the output stream, surfacing failures as OutputWriteError"""
        try:
            self.out.write(text)
        except OSError as e:
            raise OutputWriteError(f"Could not write output: {e}") from e

    def prefix_write(self) -> None:
        """Write the source-path prefix if prefixing is enabled"""
        if not self.options.prefix:
            return
        if self.colorize:
            self.write(f"{self.settings.prefix_color}{self.path}:{self.settings.color_reset}")
        else:
            self.write(f"{self.path}:")

    def line_write(self, body: str) -> None:
        """Write one complete record: prefix, body, terminator"""
        self.prefix_write()
        self.write(f"{body}{self.options.terminator}")

    def record(self, element: Tag) -> bool:
        """
        Handle one leaf match

        Args:
            element: Element that satisfied every stage

        Returns:
            False if the whole run should stop now (quiet mode found a
            match), True to keep searching
        """
        opts = self.options
        self.count += 1
        LOG(f"Leaf match <{element.name}> in {self.path}", level=3)

        if opts.count:
            return True

        if opts.quiet:
            return False

        if opts.list:
            if not self.listed:
                self.line_write(self.path)
                self.listed = True
            return True

        if opts.attributes:
            for name in opts.attributes:
                value = element.get(name) or ""
                if isinstance(value, list):
                    value = " ".join(value)
                self.line_write(value.strip() if opts.trim else value)
        elif opts.text:
            self.line_write(text_content(element, strip=opts.trim))
        else:
            markup = str(element)
            self.line_write(markup.strip() if opts.trim else markup)

        return True

    def conclude(self) -> int:
        """
        Finish this source: flush the count line in count mode

        Returns:
            Number of leaf matches recorded for this source
        """
        if self.options.count and self.count > 0:
            self.line_write(str(self.count))
        LOG(f"{self.path}: {self.count} match(es)", level=2)
        return self.count
