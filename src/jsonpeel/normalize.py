"""Escape-depth aware JSON normalizer.

Pasted text is often JSON that has been serialized as a string one or more
times (log lines that JSON-encode their payload), or an escaped fragment that
lost its surrounding quotes.  :func:`normalize` peels those layers off until
it reaches a value that is not a string wrapping more JSON, and reports how
many layers it removed.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import DepthExhaustedError, JsonPeelError, JsonSyntaxError

_LOG = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 25
PROBE_MAX_ITERATIONS = 20

JsonValue = Union[
    dict[str, "JsonValue"], list["JsonValue"], str, int, float, bool, None
]

_BOM = "\ufeff"
_OUTER_QUOTES = ("'", "`")
_ESCAPE_RE = re.compile(r'\\(?:["\\/bfnrt]|u[0-9a-fA-F]{4})')


class InputForm(Enum):
    JSON = "json"
    ESCAPED = "escaped"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ParseResult:
    """Outcome of one parse attempt."""

    ok: bool
    value: JsonValue = None
    error: JsonSyntaxError | None = None


@dataclass(frozen=True)
class NormalizedOutcome:
    value: JsonValue
    escape_depth: int


@dataclass(frozen=True)
class Classification:
    form: InputForm
    escape_depth: int


def _reject_constant(name: str) -> None:
    raise ValueError(f"Invalid constant {name}")


def try_parse(text: str) -> ParseResult:
    """Parse *text* as a JSON document without raising."""
    try:
        value = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        return ParseResult(False, error=JsonSyntaxError.from_decode_error(exc))
    except ValueError as exc:
        return ParseResult(False, error=JsonSyntaxError(str(exc)))
    except RecursionError:
        return ParseResult(False, error=JsonSyntaxError("Nesting too deep"))
    return ParseResult(True, value)


def decode_string_literal(text: str) -> ParseResult:
    """Decode *text* as the contents of a JSON string literal.

    Raw CR/LF are illegal inside a literal, so they are escaped first.
    """
    escaped = text.replace("\r", "\\r").replace("\n", "\\n")
    result = try_parse(f'"{escaped}"')
    if result.ok and not isinstance(result.value, str):
        return ParseResult(False, error=JsonSyntaxError("Not a string literal"))
    return result


def strip_outer_quotes(text: str) -> str:
    """Remove one pair of wrapping ``'`` or backtick characters."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in _OUTER_QUOTES:
        return text[1:-1].strip()
    return text


def has_escape_sequence(text: str) -> bool:
    return _ESCAPE_RE.search(text) is not None


def _prepare(raw: str) -> str:
    if raw.startswith(_BOM):
        raw = raw[1:]
    return strip_outer_quotes(raw.strip())


def normalize(raw: str, max_depth: int = DEFAULT_MAX_DEPTH) -> NormalizedOutcome:
    """Parse *raw*, unwrapping string-encoded JSON layers.

    Each pass tries, in order: a direct parse, stripping wrapping quote
    characters, and decoding the text as string-literal contents.  A pass
    that turns a string into its inner JSON counts one escape layer;
    quote stripping does not.

    When no strategy makes progress after a string value has been parsed,
    that string is the result.  Running out of ``max_depth`` passes, or
    stalling before any value was parsed, raises
    :class:`DepthExhaustedError`.
    """
    if not isinstance(raw, str):
        raise TypeError(f"expected str, got {type(raw).__name__}")
    if max_depth < 0:
        raise ValueError("max_depth must be >= 0")

    current = _prepare(raw)
    depth = 0
    iterations = 0
    seen: set[str] = set()
    last_error: JsonSyntaxError | None = None
    best: NormalizedOutcome | None = None

    while iterations < max_depth:
        iterations += 1
        # Backstop: every step shortens the text, so this should not fire.
        if current in seen:
            _LOG.debug("cycle at depth %d after %d passes", depth, iterations)
            break
        seen.add(current)

        parsed = try_parse(current)
        if parsed.ok:
            value = parsed.value
            if not isinstance(value, str):
                return NormalizedOutcome(value, depth)
            best = NormalizedOutcome(value, depth)
            inner = value.strip()
            if inner and inner != current:
                if try_parse(inner).ok:
                    _LOG.debug("depth %d: string holds JSON, unwrapping", depth)
                    current = inner
                    depth += 1
                    continue
                if has_escape_sequence(inner):
                    _LOG.debug("depth %d: string holds escapes, unwrapping", depth)
                    current = inner
                    depth += 1
                    continue
            return best
        last_error = parsed.error

        stripped = strip_outer_quotes(current)
        if stripped != current:
            _LOG.debug("depth %d: stripped outer quotes", depth)
            current = stripped
            continue

        decoded = decode_string_literal(current)
        if not decoded.ok:
            last_error = decoded.error
            _LOG.debug("depth %d: no strategy applies", depth)
            break
        # Trimmed so quote wrappers inside the decoded text strip next pass.
        inner = decoded.value.strip()
        if not inner or inner == current:
            _LOG.debug("depth %d: literal decode made no progress", depth)
            break
        _LOG.debug("depth %d: decoded as string literal", depth)
        current = inner
        depth += 1
    else:
        raise DepthExhaustedError(last_error, max_depth, depth, iterations)

    if best is not None:
        _LOG.debug("stalled, keeping string value from depth %d", best.escape_depth)
        return best
    raise DepthExhaustedError(last_error, max_depth, depth, iterations)


def classify(raw: str) -> Classification:
    """Label *raw* as plain JSON, escaped JSON or unknown.  Never raises."""
    if not isinstance(raw, str) or not raw.strip():
        return Classification(InputForm.UNKNOWN, 0)
    try:
        outcome = normalize(raw)
    except JsonPeelError:
        return Classification(InputForm.UNKNOWN, 0)
    if outcome.escape_depth > 0:
        return Classification(InputForm.ESCAPED, outcome.escape_depth)
    return Classification(InputForm.JSON, 0)


def escape_depth(raw: str) -> int:
    """Number of escape layers wrapping *raw*, for display hints.

    Runs the normalizer's loop on a smaller budget and reports the depth it
    reached, even when no final value was found.
    """
    if not isinstance(raw, str) or not raw.strip():
        return 0
    try:
        return normalize(raw, PROBE_MAX_ITERATIONS).escape_depth
    except DepthExhaustedError as exc:
        return exc.escape_depth
