"""Text-in/text-out editor actions built on the normalizer."""

from __future__ import annotations

import json

from .normalize import (
    DEFAULT_MAX_DEPTH,
    InputForm,
    JsonValue,
    classify,
    normalize,
    try_parse,
)
from .unescape import unescape_once

DEFAULT_INDENT = 2


def format_value(value: JsonValue, indent: int = DEFAULT_INDENT) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False)


def minify_document(raw: str) -> str:
    """Re-serialize JSON text without insignificant whitespace."""
    text = raw.strip()
    if not text:
        return ""
    result = try_parse(text)
    if not result.ok:
        raise result.error
    return json.dumps(result.value, separators=(",", ":"), ensure_ascii=False)


def escape_once(raw: str) -> str:
    """Minify JSON text and wrap it in one more layer of string escaping."""
    minified = minify_document(raw)
    if not minified:
        return ""
    return json.dumps(minified, ensure_ascii=False)


def unescape_step(raw: str, indent: int = DEFAULT_INDENT) -> str:
    """Step down one escape layer.

    If what is left is plain JSON it comes back pretty-printed, otherwise
    the unescaped text is returned as is.
    """
    text = raw.strip()
    if not text:
        return ""
    unescaped = unescape_once(text)
    if classify(unescaped).form is InputForm.JSON:
        return format_value(normalize(unescaped).value, indent)
    return unescaped


def format_document(
    raw: str, indent: int = DEFAULT_INDENT, max_depth: int = DEFAULT_MAX_DEPTH
) -> str:
    """Fully unwrap *raw* and pretty-print the resulting value."""
    return format_value(normalize(raw, max_depth).value, indent)


def char_status(text: str) -> str:
    count = len(text)
    return f"{count} {'char' if count == 1 else 'chars'}"
