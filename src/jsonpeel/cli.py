"""Command line front end for the unwrapping functions."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .actions import (
    DEFAULT_INDENT,
    escape_once,
    format_value,
    minify_document,
    unescape_step,
)
from .errors import JsonPeelError
from .normalize import DEFAULT_MAX_DEPTH, classify, escape_depth, normalize


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jsonpeel",
        description="Parse JSON that may be string-escaped any number of times",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="log each unwrap step to stderr",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_command(name: str, help_text: str) -> argparse.ArgumentParser:
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument(
            "file",
            nargs="?",
            default="-",
            help="input file (default: stdin)",
        )
        return cmd

    cmd = add_command("parse", "unwrap and pretty-print the value")
    cmd.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH)
    cmd.add_argument("--indent", type=int, default=DEFAULT_INDENT)
    add_command("classify", "report json / escaped / unknown and the depth")
    add_command("depth", "report how many escape layers wrap the input")
    cmd = add_command("unescape", "remove one escape layer")
    cmd.add_argument("--indent", type=int, default=DEFAULT_INDENT)
    add_command("escape", "add one escape layer to valid JSON")
    add_command("minify", "strip insignificant whitespace from valid JSON")
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _run(args: argparse.Namespace, out: Console, err: Console) -> None:
    text = _read_input(args.file)
    if args.command == "parse":
        outcome = normalize(text, args.max_depth)
        out.out(format_value(outcome.value, args.indent), highlight=False)
        err.out(f"escape depth: {outcome.escape_depth}", highlight=False)
    elif args.command == "classify":
        result = classify(text)
        out.out(f"{result.form.value} {result.escape_depth}", highlight=False)
    elif args.command == "depth":
        out.out(str(escape_depth(text)), highlight=False)
    elif args.command == "unescape":
        out.out(unescape_step(text, args.indent), highlight=False)
    elif args.command == "escape":
        out.out(escape_once(text), highlight=False)
    elif args.command == "minify":
        out.out(minify_document(text), highlight=False)


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    out = Console()
    err = Console(stderr=True)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err, show_path=False)],
        force=True,
    )

    if args.file != "-" and not Path(args.file).exists():
        err.out(f"jsonpeel: {args.file}: No such file", highlight=False)
        sys.exit(1)

    try:
        _run(args, out, err)
    except (JsonPeelError, OSError, UnicodeDecodeError) as exc:
        err.out(f"jsonpeel: {exc}", highlight=False)
        sys.exit(1)


if __name__ == "__main__":
    main()
