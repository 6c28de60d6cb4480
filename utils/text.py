"""Text helpers: XML escaping and word-bounded truncation."""

import re
from typing import Any

_XML_ESCAPES = (
    ('&', '&amp;'),
    ('<', '&lt;'),
    ('>', '&gt;'),
    ('"', '&quot;'),
    ("'", '&apos;'),
)

_WHITESPACE_RE = re.compile(r'\s+')
# characters XML 1.0 does not allow in a document
_INVALID_XML_CHARS_RE = re.compile('[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]')


def xml_escape(value: Any) -> str:
    """
    Escape the five XML special characters. None renders as an empty string.

    Control characters that XML 1.0 forbids are dropped.
    """
    if value is None:
        return ''
    text = strip_invalid_xml_chars(str(value))
    for char, entity in _XML_ESCAPES:
        text = text.replace(char, entity)
    return text


def xml_unescape(value: str) -> str:
    """Inverse of xml_escape."""
    # &amp; goes last so "&amp;lt;" decodes to "&lt;" and not "<"
    for char, entity in reversed(_XML_ESCAPES):
        value = value.replace(entity, char)
    return value


def strip_invalid_xml_chars(value: str) -> str:
    return _INVALID_XML_CHARS_RE.sub('', value)


def collapse_whitespace(value: str) -> str:
    """Collapse runs of whitespace into single spaces and strip the ends."""
    return _WHITESPACE_RE.sub(' ', strip_invalid_xml_chars(value or '')).strip()


def truncate_words(text: str, max_length: int, ellipsis: str = '…') -> str:
    """
    Shorten text to at most max_length characters without splitting a word.

    The cut happens at the last space before the limit and the ellipsis is
    appended; the ellipsis counts toward max_length. A single word longer
    than the limit is cut hard.

    Args:
        text: Text to shorten
        max_length: Maximum length of the result, ellipsis included
        ellipsis: Marker appended when the text was shortened

    Returns:
        The original text if it fits, otherwise the shortened text
    """
    if len(text) <= max_length:
        return text
    if max_length <= len(ellipsis):
        return text[:max(max_length, 0)]

    budget = max(max_length - len(ellipsis), 0)
    head = text[:budget + 1]
    cut = head.rfind(' ')
    if cut > 0:
        head = head[:cut]
    else:
        head = text[:budget]

    return head.rstrip() + ellipsis
