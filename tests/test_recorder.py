"""
Match recorder tests

Tests output modes, their precedence, prefixes, trimming, and record
terminators.
"""

import io

import pytest

from hgrep.config import AppSettings
from hgrep.lib.errors import OutputWriteError
from hgrep.lib.loader import document_parse
from hgrep.lib.recorder import MatchRecorder
from hgrep.models.options import OutputOptions

PLAIN = AppSettings(color="never")


class BrokenPipe(io.StringIO):
    def write(self, text):
        raise BrokenPipeError("reader went away")


def recorder_make(settings=PLAIN, path="doc.html", **options):
    out = io.StringIO()
    return MatchRecorder(OutputOptions(**options), path, out, settings), out


@pytest.fixture
def link():
    soup = document_parse('<a href="/x" class="nav  big">  Go <b> on </b> </a>', PLAIN)
    return soup.a


class TestDefaultMode:
    """Test outer markup serialization"""

    def test_outer_markup(self, link):
        """The element's full markup is one record"""
        recorder, out = recorder_make()
        assert recorder.record(link) is True
        assert out.getvalue() == '<a href="/x" class="nav  big">  Go <b> on </b> </a>\n'

    def test_trim(self):
        """Trim strips whitespace around the serialized markup"""
        soup = document_parse("\n <p> x </p>\n", PLAIN)
        recorder, out = recorder_make(trim=True)
        recorder.record(soup)
        assert out.getvalue() == "<p> x </p>\n"


class TestTextMode:
    """Test text extraction"""

    def test_text(self, link):
        """Text content, untouched"""
        recorder, out = recorder_make(text=True)
        recorder.record(link)
        assert out.getvalue() == "  Go  on  \n"

    def test_text_trim_strips_each_text_node(self, link):
        """With trim, every text node is stripped before joining"""
        recorder, out = recorder_make(text=True, trim=True)
        recorder.record(link)
        assert out.getvalue() == "Goon\n"


class TestAttributeMode:
    """Test attribute extraction"""

    def test_attributes_in_request_order(self, link):
        """One record per requested attribute"""
        recorder, out = recorder_make(attributes=("href", "class"))
        recorder.record(link)
        assert out.getvalue() == "/x\nnav  big\n"

    def test_missing_attribute_is_empty_record(self, link):
        """An absent attribute prints an empty line, not an error"""
        recorder, out = recorder_make(attributes=("title", "href"))
        recorder.record(link)
        assert out.getvalue() == "\n/x\n"

    def test_attribute_beats_text(self, link):
        """Attribute extraction takes precedence over text mode"""
        recorder, out = recorder_make(attributes=("href",), text=True)
        recorder.record(link)
        assert out.getvalue() == "/x\n"


class TestCountMode:
    """Test counting"""

    def test_count_printed_on_conclude(self, link):
        """Matches are only counted until the source is concluded"""
        recorder, out = recorder_make(count=True)
        recorder.record(link)
        recorder.record(link)
        assert out.getvalue() == ""
        assert recorder.conclude() == 2
        assert out.getvalue() == "2\n"

    def test_zero_count_prints_nothing(self):
        """No matches, no count line"""
        recorder, out = recorder_make(count=True)
        assert recorder.conclude() == 0
        assert out.getvalue() == ""

    def test_count_beats_quiet(self, link):
        """Count mode suppresses the quiet stop"""
        recorder, out = recorder_make(count=True, quiet=True)
        assert recorder.record(link) is True
        recorder.conclude()
        assert out.getvalue() == "1\n"


class TestListMode:
    """Test file listing"""

    def test_path_listed_once(self, link):
        """However many matches, the path is printed once"""
        recorder, out = recorder_make(list=True)
        recorder.record(link)
        recorder.record(link)
        recorder.conclude()
        assert out.getvalue() == "doc.html\n"
        assert recorder.count == 2


class TestPrefixAndTerminator:
    """Test record framing"""

    def test_plain_prefix(self, link):
        """Prefix is the path and a colon on the same line"""
        recorder, out = recorder_make(prefix=True, attributes=("href",))
        recorder.record(link)
        assert out.getvalue() == "doc.html:/x\n"

    def test_colored_prefix(self, link):
        """Colorized prefix wraps path and colon in the configured color"""
        recorder, out = recorder_make(settings=AppSettings(color="always"), prefix=True, attributes=("href",))
        recorder.record(link)
        assert out.getvalue() == "\x1b[35mdoc.html:\x1b[0m/x\n"

    def test_auto_color_off_for_non_terminal(self, link):
        """Auto color leaves in-memory streams uncolored"""
        recorder, out = recorder_make(settings=AppSettings(color="auto"), prefix=True, attributes=("href",))
        recorder.record(link)
        assert out.getvalue() == "doc.html:/x\n"

    def test_prefix_on_count_line(self, link):
        """Count lines carry the prefix too"""
        recorder, out = recorder_make(prefix=True, count=True)
        recorder.record(link)
        recorder.conclude()
        assert out.getvalue() == "doc.html:1\n"

    def test_nul_terminator(self, link):
        """print0 ends every record with NUL instead of newline"""
        recorder, out = recorder_make(attributes=("href", "class"), terminator="\0")
        recorder.record(link)
        assert out.getvalue() == "/x\0nav  big\0"


class TestWriteFailure:
    """Test output error propagation"""

    def test_broken_pipe_raises(self, link):
        """Write failures surface as OutputWriteError"""
        recorder, _ = recorder_make()
        recorder.out = BrokenPipe()
        with pytest.raises(OutputWriteError):
            recorder.record(link)


class TestRawTextOutput:
    """Test -t output for elements holding script and style text"""

    MARKUP = "<div><p>hi</p><script> var token = 1; </script><style>.x{}</style></div>"

    def test_text_includes_script_and_style(self):
        """Script and style contents are part of the text record"""
        recorder, out = recorder_make(text=True)
        recorder.record(document_parse(self.MARKUP, PLAIN).div)
        assert out.getvalue() == "hi var token = 1; .x{}\n"

    def test_trimmed_text_includes_script_and_style(self):
        """Trimmed text strips script text like any other text node"""
        recorder, out = recorder_make(text=True, trim=True)
        recorder.record(document_parse(self.MARKUP, PLAIN).div)
        assert out.getvalue() == "hivar token = 1;.x{}\n"
