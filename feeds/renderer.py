"""Jinja2 environment for the XML feed templates."""

from functools import lru_cache
from pathlib import Path
from typing import Any
from jinja2 import Environment, FileSystemLoader, StrictUndefined
from utils.dates import format_rfc822, format_w3c
from utils.text import xml_escape

TEMPLATE_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=None)
def get_environment() -> Environment:
    # Escaping is explicit through the `x` filter: markupsafe's entities differ
    # from the &apos;/&quot; forms the feeds use.
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters['x'] = xml_escape
    env.filters['rfc822'] = format_rfc822
    env.filters['w3c'] = format_w3c
    return env


def render(template_name: str, **context: Any) -> str:
    """Render one of the bundled templates."""
    return get_environment().get_template(template_name).render(**context)
