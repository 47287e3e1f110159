"""CLI argument, input selection, and output behavior tests.

Verifies how ``qjp.cli.main`` validates flags, chooses its input source,
builds the display spec, and prints the chosen records.
"""

from __future__ import annotations

import contextlib
import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from qjp import cli
from qjp.display import DisplaySpec
from qjp.errors import InputError, NoInputError, UsageError
from qjp.records import parse_records

PEOPLE = '[{"name": "Alpha", "id": 1}, {"name": "Beta", "id": 2.0}]'


class TtyStdin(io.StringIO):
    def isatty(self) -> bool:
        return True


class ValidateArgsTests(unittest.TestCase):
    def parse(self, *argv: str):
        return cli.build_parser().parse_args(list(argv))

    def test_valid_combinations_pass(self) -> None:
        cli.validate_args(self.parse("-d", "name", "-d", "id", "-o", "id", "-T", "-t"))
        cli.validate_args(self.parse("-a", "-s", ", "))
        cli.validate_args(self.parse("-l"))

    def test_all_and_display_attrs_conflict(self) -> None:
        with self.assertRaises(UsageError) as ctx:
            cli.validate_args(self.parse("-a", "-d", "name"))
        self.assertEqual(str(ctx.exception), "cannot use both -a and -d")

    def test_line_mode_rejects_record_flags(self) -> None:
        for extra in (("-d", "x"), ("-a",), ("-o", "x"), ("-s", ","), ("-t",), ("-T",)):
            with self.subTest(extra=extra), self.assertRaises(UsageError):
                cli.validate_args(self.parse("-l", *extra))


class ReadInputTests(unittest.TestCase):
    def test_reads_piped_stdin(self) -> None:
        self.assertEqual(cli.read_input(None, io.StringIO("[1]")), "[1]")

    def test_reads_file_when_stdin_is_terminal(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "data.json"
            path.write_text(PEOPLE, encoding="utf-8")
            self.assertEqual(cli.read_input(str(path), TtyStdin()), PEOPLE)

    def test_stdin_and_filename_together_is_an_error(self) -> None:
        with self.assertRaises(InputError) as ctx:
            cli.read_input("data.json", io.StringIO("[]"))
        self.assertEqual(str(ctx.exception), "cannot use both stdin and filename input")

    def test_no_input_is_an_error(self) -> None:
        with self.assertRaises(NoInputError):
            cli.read_input(None, TtyStdin())

    def test_piped_latin1_bytes_are_decoded(self) -> None:
        stdin = io.TextIOWrapper(io.BytesIO(b"caf\xe9\nok\n"), encoding="utf-8")
        self.assertEqual(cli.read_input(None, stdin), "café\nok\n")

    def test_piped_utf8_bom_is_stripped(self) -> None:
        stdin = io.TextIOWrapper(io.BytesIO(b"\xef\xbb\xbf[1]"), encoding="utf-8")
        self.assertEqual(cli.read_input(None, stdin), "[1]")

    def test_file_with_utf8_bom_parses(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bom.json"
            path.write_bytes(b'\xef\xbb\xbf[{"name": "a"}]')
            text = cli.read_input(str(path), TtyStdin())
        self.assertEqual(text, '[{"name": "a"}]')
        self.assertEqual(len(parse_records(text)), 1)

    def test_latin1_file_is_decoded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "names.txt"
            path.write_bytes(b"na\xefve\n")
            self.assertEqual(cli.read_input(str(path), TtyStdin()), "naïve\n")

    def test_unreadable_file_is_an_input_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(InputError):
                cli.read_input(str(Path(tmp) / "missing.json"), TtyStdin())


class ResolveDisplayTests(unittest.TestCase):
    def setUp(self) -> None:
        self.records = parse_records(PEOPLE)

    def resolve(self, *argv: str, settings: dict[str, object] | None = None):
        args = cli.build_parser().parse_args(list(argv))
        return cli.resolve_display(args, self.records, settings or {})

    def test_line_mode_uses_line_field(self) -> None:
        spec, output_attr = self.resolve("-l")
        self.assertEqual(spec, DisplaySpec(fields=("line",)))
        self.assertEqual(output_attr, "line")

    def test_all_attributes_are_sorted(self) -> None:
        spec, _output_attr = self.resolve("-a")
        self.assertEqual(spec.fields, ("id", "name"))

    def test_flags_override_config_defaults(self) -> None:
        settings = {"separator": " | ", "truncate": True}
        spec, _ = self.resolve("-d", "name", settings=settings)
        self.assertEqual(spec.separator, " | ")
        self.assertTrue(spec.truncate)
        spec, _ = self.resolve("-d", "name", "-s", ":", settings=settings)
        self.assertEqual(spec.separator, ":")

    def test_defaults(self) -> None:
        spec, output_attr = self.resolve("-d", "name", "-T", "-o", "id")
        self.assertEqual(spec, DisplaySpec(fields=("name",), separator=" - ", table_mode=True))
        self.assertEqual(output_attr, "id")


class MainTests(unittest.TestCase):
    def run_main(self, argv: list[str], stdin_text: str | io.TextIOBase, positions: tuple[int, ...]):
        stdout = io.StringIO()
        stdin = io.StringIO(stdin_text) if isinstance(stdin_text, str) else stdin_text

        @contextlib.contextmanager
        def fake_tty():
            yield 9

        with mock.patch("qjp.cli.sys.stdin", stdin), mock.patch(
            "qjp.cli.sys.stdout", stdout
        ), mock.patch("qjp.cli.open_tty", fake_tty), mock.patch("qjp.cli.TerminalController") as controller_cls, mock.patch(
            "qjp.cli.run_picker", return_value=positions
        ) as run_picker, mock.patch("qjp.cli.config.load_config", return_value={}), mock.patch(
            "qjp.cli.signal.signal"
        ):
            cli.main(argv)

        controller_cls.assert_called_once_with(9)
        return stdout.getvalue(), run_picker

    def test_prints_whole_records_as_json(self) -> None:
        output, run_picker = self.run_main([], PEOPLE, (0, 1))
        self.assertEqual(output, '{"id":1,"name":"Alpha"}\n{"id":2.0,"name":"Beta"}\n')
        records, spec, _terminal, theme = run_picker.call_args.args
        self.assertEqual(len(records), 2)
        self.assertEqual(spec, DisplaySpec())
        self.assertEqual(theme.name, "default")

    def test_prints_output_attribute(self) -> None:
        output, _ = self.run_main(["-d", "name", "-o", "id"], PEOPLE, (1,))
        self.assertEqual(output, "2\n")

    def test_line_mode_prints_lines(self) -> None:
        output, run_picker = self.run_main(["-l"], "first\nsecond\n", (1,))
        self.assertEqual(output, "second\n")
        self.assertEqual(run_picker.call_args.args[1], DisplaySpec(fields=("line",)))

    def test_line_mode_accepts_non_utf8_stdin(self) -> None:
        stdin = io.TextIOWrapper(io.BytesIO(b"caf\xe9\nok\n"), encoding="utf-8")
        output, _ = self.run_main(["-l"], stdin, (0,))
        self.assertEqual(output, "café\n")

    def test_unopenable_log_file_exits_with_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_file = str(Path(tmp) / "missing" / "qjp.log")
            with mock.patch("qjp.cli.run_picker") as run_picker, self.assertRaises(SystemExit) as ctx:
                cli.main(["--log-file", log_file, "-l"])
        self.assertTrue(ctx.exception.code.startswith(f"Error: cannot open log file {log_file}: "))
        run_picker.assert_not_called()

    def test_cancel_prints_nothing(self) -> None:
        output, _ = self.run_main(["-d", "name"], PEOPLE, ())
        self.assertEqual(output, "")

    def test_no_color_selects_plain_theme(self) -> None:
        _output, run_picker = self.run_main(["--no-color"], PEOPLE, ())
        self.assertEqual(run_picker.call_args.args[3].name, "plain")

    def test_missing_output_attribute_exits_with_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(["-o", "email"], PEOPLE, (0,))
        self.assertEqual(ctx.exception.code, "Error: attribute 'email' not found in selected object")

    def test_usage_error_exits_before_reading_terminal(self) -> None:
        with mock.patch("qjp.cli.run_picker") as run_picker, self.assertRaises(SystemExit) as ctx:
            cli.main(["-a", "-d", "name"])
        self.assertEqual(ctx.exception.code, "Error: cannot use both -a and -d")
        run_picker.assert_not_called()

    def test_no_input_prints_usage(self) -> None:
        stderr = io.StringIO()
        with mock.patch("qjp.cli.sys.stdin", TtyStdin()), mock.patch("qjp.cli.sys.stderr", stderr), self.assertRaises(
            SystemExit
        ) as ctx:
            cli.main([])
        self.assertEqual(ctx.exception.code, "Error: no input provided")
        self.assertIn("usage: qjp", stderr.getvalue())

    def test_read_failure_during_session_exits_with_error(self) -> None:
        @contextlib.contextmanager
        def fake_tty():
            yield 9

        with mock.patch("qjp.cli.sys.stdin", io.StringIO(PEOPLE)), mock.patch("qjp.cli.open_tty", fake_tty), mock.patch(
            "qjp.cli.TerminalController"
        ), mock.patch("qjp.cli.run_picker", side_effect=EOFError("input device closed")), mock.patch(
            "qjp.cli.config.load_config", return_value={}
        ), mock.patch("qjp.cli.signal.signal"), self.assertRaises(SystemExit) as ctx:
            cli.main([])
        self.assertEqual(ctx.exception.code, "Error: input device closed")

    def test_stdin_that_is_not_a_terminal_exits_with_error(self) -> None:
        @contextlib.contextmanager
        def fake_tty():
            yield 9

        not_a_tty = OSError(25, "Inappropriate ioctl for device")
        with mock.patch("qjp.cli.sys.stdin", io.StringIO(PEOPLE)), mock.patch("qjp.cli.open_tty", fake_tty), mock.patch(
            "qjp.cli.TerminalController", side_effect=not_a_tty
        ), mock.patch("qjp.cli.run_picker") as run_picker, mock.patch("qjp.cli.config.load_config", return_value={}), mock.patch(
            "qjp.cli.signal.signal"
        ), self.assertRaises(SystemExit) as ctx:
            cli.main([])
        self.assertEqual(ctx.exception.code, "Error: [Errno 25] Inappropriate ioctl for device")
        run_picker.assert_not_called()


if __name__ == "__main__":
    unittest.main()
