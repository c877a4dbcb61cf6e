"""Error types raised by the JSON unwrapping functions."""

from __future__ import annotations

import json


class JsonPeelError(ValueError):
    """Base class for every failure reported by jsonpeel."""


class JsonSyntaxError(JsonPeelError):
    """A single parse attempt hit a JSON grammar violation."""

    def __init__(
        self, msg: str, pos: int = 0, lineno: int = 1, colno: int = 1
    ) -> None:
        self.msg = msg
        self.pos = pos
        self.lineno = lineno
        self.colno = colno
        super().__init__(f"{msg}: line {lineno} column {colno} (char {pos})")

    @classmethod
    def from_decode_error(cls, exc: json.JSONDecodeError) -> JsonSyntaxError:
        return cls(exc.msg, exc.pos, exc.lineno, exc.colno)


class UnescapeError(JsonPeelError):
    """Single-level unescape could not produce a string."""


class DepthExhaustedError(JsonPeelError):
    """The unwrap loop stopped without reaching a final value.

    ``cause`` is the last parse error seen (``None`` when no attempt was
    made), ``escape_depth`` the number of layers unwrapped before giving up
    and ``iterations`` the loop passes consumed.
    """

    def __init__(
        self,
        cause: JsonSyntaxError | None,
        max_depth_tried: int,
        escape_depth: int,
        iterations: int = 0,
    ) -> None:
        self.cause = cause
        self.max_depth_tried = max_depth_tried
        self.escape_depth = escape_depth
        self.iterations = iterations
        detail = cause.msg if cause is not None else "no parse attempted"
        super().__init__(
            f"cannot parse input as JSON ({detail}; "
            f"unwrapped {escape_depth} of max {max_depth_tried} layers)"
        )
        self.__cause__ = cause
