"""
Text filter predicate for pass-through stages

A stage without CSS patterns decides whether the current element flows on
by testing the element's text content against the stage's substrings and
regexes.
"""

from bs4 import Tag
from bs4.element import (
    CData,
    NavigableString,
    RubyParenthesisString,
    RubyTextString,
    Script,
    Stylesheet,
    TemplateString,
)

from ..models.stage import Stage


# Every string type bs4 builds from document text; comments, doctypes and
# processing instructions are not text nodes.
TEXT_NODE_TYPES = (
    NavigableString,
    CData,
    Script,
    Stylesheet,
    TemplateString,
    RubyTextString,
    RubyParenthesisString,
)


def text_content(element: Tag, strip: bool = False) -> str:
    """
    Concatenated text of all text nodes under `element`, no separator

    With `strip`, every text node is stripped and empty ones are dropped
    before joining.
    """
    return element.get_text(strip=strip, types=TEXT_NODE_TYPES)


def text_matches(element: Tag, stage: Stage) -> bool:
    """
    Test an element's text against a stage's substring and regex filters

    The two filter kinds are OR'd: any regex that matches, or any substring
    contained literally (case-sensitive), is enough. A stage with neither
    is vacuously true.

    Args:
        element: Element (or soup root) whose text is tested
        stage: Stage holding the substrings/regexes

    Returns:
        True if the element passes the stage's filters

    Example:
        >>> soup = BeautifulSoup("<p>Total: 42</p>", "html.parser")
        >>> text_matches(soup.p, Stage(regexes=(re.compile(r"\\d+"),)))
        True
    """
    if not stage.is_filtering:
        return True

    text = text_content(element)

    if stage.regexes and any(regex.search(text) for regex in stage.regexes):
        return True

    if stage.substrings and any(substring in text for substring in stage.substrings):
        return True

    return False
