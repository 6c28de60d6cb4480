"""Utilities package initialization."""

from .logger import setup_logger, get_logger
from .file_utils import write_text_file, ensure_directory
from .text import xml_escape, xml_unescape, collapse_whitespace, truncate_words
from .dates import parse_timestamp, format_rfc822, format_w3c, utc_now

__all__ = [
    'setup_logger',
    'get_logger',
    'write_text_file',
    'ensure_directory',
    'xml_escape',
    'xml_unescape',
    'collapse_whitespace',
    'truncate_words',
    'parse_timestamp',
    'format_rfc822',
    'format_w3c',
    'utc_now'
]
