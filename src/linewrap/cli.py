"""Command-line interface for linewrap."""

from __future__ import annotations

import argparse
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from linewrap.errors import ConfigError, LexError
from linewrap.lexer import Lexer, decode_utf8
from linewrap.wrapper import MAX_COLUMNS, TAB_WIDTH, CommentStyle, WrapConfig

CONFIG_NAME = "linewrap.toml"

_LINE_BREAK_NAMES = {"lf": "\n", "crlf": "\r\n"}


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    output_file: Path | None
    config: WrapConfig
    unwrap: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="linewrap",
        description="Wrap text to a maximum line width, optionally as source comments",
    )
    p.add_argument("input", nargs="?", default="-", help="Input file (default: stdin)")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "-w",
        "--width",
        type=int,
        default=None,
        metavar="N",
        help=f"Maximum line width in columns (default: {MAX_COLUMNS})",
    )
    p.add_argument(
        "-t",
        "--tab-width",
        type=int,
        default=None,
        metavar="N",
        help=f"Columns counted per tab (default: {TAB_WIDTH})",
    )
    p.add_argument("--indent", default=None, metavar="TEXT", help="Text to indent new lines with")
    p.add_argument(
        "-c",
        "--comment",
        default=None,
        metavar="STYLE",
        help="Wrap as comments: none, c, cpp, or shell (default: none)",
    )
    p.add_argument(
        "--unwrappable",
        action="store_true",
        default=None,
        help="Mark inserted line breaks so that --unwrap can remove them",
    )
    p.add_argument(
        "--crlf",
        action="store_true",
        default=None,
        help="Write \\r\\n line breaks instead of \\n",
    )
    p.add_argument(
        "--unwrap",
        action="store_true",
        help="Remove marked line breaks instead of wrapping",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument("--debug", action="store_true", help="Dump tokens to stderr")
    return p


def parse_line_break(s: str) -> str:
    """Map a line break name (lf, crlf) to the break sequence."""
    try:
        return _LINE_BREAK_NAMES[s.lower()]
    except KeyError:
        raise argparse.ArgumentTypeError(
            f"invalid line break '{s}' (expected lf or crlf)"
        ) from None


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


_TYPE_NAMES = {int: "an integer", str: "a string", bool: "true or false"}


def _config_value(table: dict[str, Any], key: str, kind: type) -> Any:
    value = table.get(key)
    if value is None:
        return None
    # bool is a subclass of int
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(f"config: '{key}' must be {_TYPE_NAMES[kind]}, got {value!r}")
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    input_file = None if args.input == "-" else Path(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    wrap = config.get("wrap", {})
    if not isinstance(wrap, dict):
        raise ConfigError("config: [wrap] must be a table")

    max_columns = MAX_COLUMNS
    tab_width = TAB_WIDTH
    indent_text = ""
    comment = "none"
    unwrappable = False
    line_break = "\n"

    # Config file
    cfg_width = _config_value(wrap, "width", int)
    if cfg_width is not None:
        max_columns = cfg_width
    cfg_tab_width = _config_value(wrap, "tab_width", int)
    if cfg_tab_width is not None:
        tab_width = cfg_tab_width
    cfg_indent = _config_value(wrap, "indent", str)
    if cfg_indent is not None:
        indent_text = cfg_indent
    cfg_comment = _config_value(wrap, "comment", str)
    if cfg_comment is not None:
        comment = cfg_comment
    cfg_unwrappable = _config_value(wrap, "unwrappable", bool)
    if cfg_unwrappable is not None:
        unwrappable = cfg_unwrappable
    cfg_line_break = _config_value(wrap, "line_break", str)
    if cfg_line_break is not None:
        try:
            line_break = parse_line_break(cfg_line_break)
        except argparse.ArgumentTypeError as exc:
            raise ConfigError(f"config: {exc}") from None

    # CLI flags
    if args.width is not None:
        max_columns = args.width
    if args.tab_width is not None:
        tab_width = args.tab_width
    if args.indent is not None:
        indent_text = args.indent
    if args.comment is not None:
        comment = args.comment
    if args.unwrappable is not None:
        unwrappable = args.unwrappable
    if args.crlf is not None:
        line_break = "\r\n" if args.crlf else "\n"

    wrap_config = WrapConfig(
        max_columns=max_columns,
        tab_width=tab_width,
        indent_text=indent_text,
        comment_style=CommentStyle.parse(comment),
        unwrappable=unwrappable,
        line_break=line_break,
    )
    wrap_config.validate()

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        config=wrap_config,
        unwrap=args.unwrap,
        debug=args.debug,
    )


def _decode(data: bytes) -> str:
    text, message = decode_utf8(data)
    if message is not None:
        raise LexError(message, len(text), text)
    return text


def wrap_file(options: CliOptions) -> str:
    """Read the input, then wrap (or unwrap) it and return the result."""
    from linewrap.debug import dump_tokens
    from linewrap.unwrap import unwrap
    from linewrap.wrapper import Wrapper

    if options.input_file is None:
        data = sys.stdin.buffer.read()
    else:
        data = options.input_file.read_bytes()

    if options.debug:
        dump_tokens(Lexer(data), file=sys.stderr)

    if options.unwrap:
        return unwrap(_decode(data))
    return Wrapper(options.config).render(data)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except (ConfigError, argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    filename = str(options.input_file) if options.input_file is not None else "<stdin>"
    try:
        text = wrap_file(options)
    except LexError as exc:
        print(exc.format(filename), file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        if options.output_file:
            options.output_file.write_text(text, encoding="utf-8", newline="")
        else:
            sys.stdout.write(text)
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    return 0
