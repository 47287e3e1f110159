"""Command-line front door for qjp.

Parses flags, reads records from a file or stdin, and runs the interactive
picker on the controlling terminal. Chosen records are printed to stdout.
"""

from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
from pathlib import Path
from typing import TextIO

from . import config
from .display import DEFAULT_SEPARATOR, DisplaySpec
from .errors import InputError, NoInputError, OutputError, QjpError, UsageError
from .output import DEFAULT_STYLE, selected_output, write_output
from .records import LINE_FIELD, Record, all_attributes, parse_records
from .runtime import run_picker
from .terminal import TerminalController, open_tty
from .ui_theme import available_theme_names, resolve_theme

LOG_FILE_ENV = "QJP_LOG_FILE"

CONTROLS_EPILOG = """\
Input can be provided via stdin or filename, but not both.
If no display attribute is provided, the whole object is displayed.

Controls:
  Arrow Keys    Navigate up/down
  Ctrl+Space    Toggle selection (multi-select)
  Enter         Confirm selection
  ESC/Ctrl+C    Cancel

Examples:
  qjp yourfile.json -d display_attribute -o output_attribute
  qjp -d name -d id -T < data.json
  cat file.txt | qjp -l
"""

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qjp",
        description="Interactively pick objects from a JSON array (or lines of text).",
        epilog=CONTROLS_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("filename", nargs="?", default=None, help="JSON file to read instead of stdin.")
    parser.add_argument(
        "-d",
        dest="display_attrs",
        metavar="ATTR",
        action="append",
        default=[],
        help="Display specific attribute in list (can be used multiple times).",
    )
    parser.add_argument("-o", dest="output_attr", metavar="ATTR", default=None, help="Output specific attribute from selected object(s).")
    parser.add_argument(
        "-s",
        dest="separator",
        metavar="SEP",
        default=None,
        help=f"Separator for multiple display attributes (default: {DEFAULT_SEPARATOR!r}).",
    )
    parser.add_argument("-t", dest="truncate", action="store_true", help="Truncate long lines instead of wrapping.")
    parser.add_argument("-T", dest="table_mode", action="store_true", help="Table mode: align attributes in columns.")
    parser.add_argument("-l", dest="line_mode", action="store_true", help="Line mode: treat input as plain text lines.")
    parser.add_argument("-a", dest="all_attrs", action="store_true", help="Display all attributes (cannot be used with -d).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help=f"Pygments style for JSON output (default: {DEFAULT_STYLE}).")
    parser.add_argument("--no-color", action="store_true", help="Disable color in the picker and in output.")
    parser.add_argument("--log-file", default=None, help=f"Write debug log to this file (or set {LOG_FILE_ENV}).")
    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Reject flag combinations that have no meaning together."""
    if args.all_attrs and args.display_attrs:
        raise UsageError("cannot use both -a and -d")

    if not args.line_mode:
        return
    if args.display_attrs:
        raise UsageError("cannot use -d in line mode")
    if args.all_attrs:
        raise UsageError("cannot use -a in line mode")
    if args.output_attr is not None:
        raise UsageError("cannot use -o in line mode")
    if args.separator is not None:
        raise UsageError("cannot use -s in line mode")
    if args.truncate:
        raise UsageError("cannot use -t in line mode")
    if args.table_mode:
        raise UsageError("cannot use -T in line mode")


def decode_text(data: bytes) -> str:
    """Decode UTF-8 (with or without BOM), falling back to latin-1."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


def read_text(path: Path) -> str:
    return decode_text(path.read_bytes())


def read_input(filename: str | None, stdin: TextIO) -> str:
    """Return raw input text from ``filename`` or piped ``stdin``, never both."""
    has_stdin = not stdin.isatty()
    if has_stdin and filename:
        raise InputError("cannot use both stdin and filename input")
    if not has_stdin and not filename:
        raise NoInputError("no input provided")

    if filename:
        try:
            return read_text(Path(filename))
        except OSError as exc:
            raise InputError(f"cannot read {filename}: {exc.strerror or exc}") from exc
    buffer = getattr(stdin, "buffer", None)
    if buffer is None:
        return stdin.read()
    return decode_text(buffer.read())


def resolve_display(
    args: argparse.Namespace,
    records: tuple[Record, ...],
    settings: dict[str, object],
) -> tuple[DisplaySpec, str | None]:
    """Build the display spec and output attribute from flags and config."""
    if args.line_mode:
        return DisplaySpec(fields=(LINE_FIELD,)), LINE_FIELD

    if args.all_attrs:
        fields = all_attributes(records)
    else:
        fields = tuple(args.display_attrs)

    separator = args.separator
    if separator is None:
        separator = config.load_separator(settings)
    if separator is None:
        separator = DEFAULT_SEPARATOR

    spec = DisplaySpec(
        fields=fields,
        separator=separator,
        table_mode=args.table_mode,
        truncate=args.truncate or config.load_truncate(settings),
    )
    return spec, args.output_attr


def configure_logging(log_file: str | None) -> None:
    """Attach a debug file handler; the terminal itself is never logged to."""
    if not log_file:
        return
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    package_logger = logging.getLogger("qjp")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def _signal_exit(signum, _frame):
    """Convert SIGTERM/SIGHUP into SystemExit so raw mode is always undone."""
    raise SystemExit(128 + signum)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run one picker session, and print the chosen records.

    Every failure is reported as ``Error: <message>`` with exit status 1. A
    cancelled session prints nothing and exits normally.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    log_file = args.log_file or os.environ.get(LOG_FILE_ENV)
    try:
        configure_logging(log_file)
    except OSError as exc:
        raise SystemExit(f"Error: cannot open log file {log_file}: {exc.strerror or exc}") from exc

    try:
        validate_args(args)
        text = read_input(args.filename, sys.stdin)
        records = parse_records(text, line_mode=args.line_mode)
    except NoInputError as exc:
        parser.print_usage(sys.stderr)
        raise SystemExit(f"Error: {exc}") from exc
    except QjpError as exc:
        raise SystemExit(f"Error: {exc}") from exc

    settings = config.load_config()
    spec, output_attr = resolve_display(args, records, settings)
    theme = resolve_theme(args.theme or config.load_theme_name(settings), no_color=args.no_color)
    style = args.style or config.load_style(settings) or DEFAULT_STYLE

    signal.signal(signal.SIGTERM, _signal_exit)
    signal.signal(signal.SIGHUP, _signal_exit)

    try:
        with open_tty() as tty_fd:
            terminal = TerminalController(tty_fd)
            positions = run_picker(records, spec, terminal, theme)
    except (EOFError, OSError) as exc:
        logger.debug("session aborted: %s", exc)
        raise SystemExit(f"Error: {exc}") from exc

    if not positions:
        return

    try:
        lines = selected_output(records, positions, output_attr)
    except OutputError as exc:
        raise SystemExit(f"Error: {exc}") from exc
    write_output(lines, sys.stdout, colorize=sys.stdout.isatty() and not args.no_color, style=style)


if __name__ == "__main__":
    main()
