"""Single-level unescape for the "step down one layer" action."""

from __future__ import annotations

import json
import logging

from .errors import UnescapeError
from .normalize import ParseResult, try_parse

_LOG = logging.getLogger(__name__)


def _as_quoted_string(text: str) -> ParseResult:
    """Rung 2: wrap verbatim in double quotes (``{\\"a\\":1}``)."""
    return try_parse(f'"{text}"')


def _as_raw_text(text: str) -> ParseResult:
    """Rung 3: escape the text so it becomes its own string literal."""
    return try_parse(json.dumps(text, ensure_ascii=False))


def unescape_once(raw: str) -> str:
    """Remove exactly one layer of string escaping from *raw*.

    Tries a direct parse, then the text as unquoted literal contents, then
    falls back to returning the text itself.
    """
    if not isinstance(raw, str):
        raise UnescapeError(f"cannot unescape {type(raw).__name__}")
    if not raw:
        return raw

    for rung, attempt in enumerate((try_parse, _as_quoted_string, _as_raw_text), 1):
        result = attempt(raw)
        if result.ok and isinstance(result.value, str):
            _LOG.debug("unescaped via rung %d", rung)
            return result.value

    raise UnescapeError("text could not be decoded as a string")
