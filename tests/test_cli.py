"""
CLI tests for bfi.

Runs bfi.main() in-process with a temporary program file, a fake stdin
and pytest's capsys, checking exit status, program output and the
stderr diagnostics.
"""

import io

import pytest

import bfi
from bf_interpreter.log_setup import verbosity_to_level


@pytest.fixture
def program(tmp_path):
    """Write program text to a file and return its path as str."""
    def _write(code: str) -> str:
        path = tmp_path / "prog.bf"
        path.write_text(code, encoding="utf-8")
        return str(path)
    return _write


def _main(monkeypatch, args, stdin=""):
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    return bfi.main(args)


# ─── Successful runs ──────────────────────

class TestRun:
    def test_multiply(self, program, monkeypatch, capsys):
        assert _main(monkeypatch, [program("+++++[>+++++<-]>.")]) == 0
        assert capsys.readouterr().out == chr(25)

    def test_whitespace_stripped(self, program, monkeypatch, capsys):
        assert _main(monkeypatch, [program("+ + +\n\t.\n")]) == 0
        assert capsys.readouterr().out == chr(3)

    def test_reads_stdin(self, program, monkeypatch, capsys):
        assert _main(monkeypatch, [program(",+.")], stdin="64\n") == 0
        assert capsys.readouterr().out == "A"

    def test_stray_close_skipped_with_warning(self, program, monkeypatch, capsys):
        assert _main(monkeypatch, [program("]+.")]) == 0
        captured = capsys.readouterr()
        assert captured.out == chr(1)
        assert "stray" in captured.err

    def test_dump_tape(self, program, monkeypatch, capsys):
        assert _main(monkeypatch, [program("+>++"), "--dump-tape"]) == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "pointer=1 cells=2" in captured.err
        assert "[02]" in captured.err

    def test_deeply_nested_program(self, program, monkeypatch, capsys):
        code = "+" + "[" * 2000 + "-" + "]" * 2000 + "+."
        assert _main(monkeypatch, [program(code)]) == 0
        captured = capsys.readouterr()
        assert captured.out == chr(1)
        assert "Internal" not in captured.err

    def test_high_byte_on_ascii_stdout(self, program, monkeypatch):
        raw = io.BytesIO()
        stream = io.TextIOWrapper(raw, encoding="ascii")
        monkeypatch.setattr("sys.stdout", stream)
        assert _main(monkeypatch, [program("-.")]) == 0
        stream.flush()
        assert raw.getvalue() == chr(255).encode("utf-8")

    def test_log_file(self, program, monkeypatch, tmp_path):
        log_path = tmp_path / "logs" / "run.log"
        assert _main(monkeypatch, [program("+[-]"), "--log-file", str(log_path)]) == 0
        text = log_path.read_text(encoding="utf-8")
        assert "Run finished after 2 instruction(s)" in text


# ─── Debug dumps ──────────────────────────

class TestDumps:
    def test_tokens(self, program, monkeypatch, capsys):
        # Token dump happens before parsing, so brackets need not match.
        assert _main(monkeypatch, [program("+["), "--tokens"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["Token(INCREMENT, '+', @0)", "Token(BEGIN_LOOP, '[', @1)"]

    def test_ast(self, program, monkeypatch, capsys):
        assert _main(monkeypatch, [program("+[-]"), "--ast"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["INCREMENT @0", "Loop @1:", "  DECREMENT @2"]

    def test_ast_deep(self, program, monkeypatch, capsys):
        assert _main(monkeypatch, [program("[" * 1500 + "." + "]" * 1500), "--ast"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 1501
        assert out[-1] == "  " * 1500 + "OUTPUT @1500"


# ─── Failures ─────────────────────────────

class TestFailures:
    def test_missing_file(self, tmp_path, monkeypatch, capsys):
        assert _main(monkeypatch, [str(tmp_path / "nope.bf")]) == 1
        assert "Source error" in capsys.readouterr().err

    def test_undecodable_file(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "bad.bf"
        path.write_bytes(b"+\xff\xfe.")
        assert _main(monkeypatch, [str(path)]) == 1
        assert "Source error" in capsys.readouterr().err

    def test_unmatched_open_runs_nothing(self, program, monkeypatch, capsys):
        assert _main(monkeypatch, [program("+.[")]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Bracket error" in captured.err

    def test_strict_rejects_stray_close(self, program, monkeypatch, capsys):
        assert _main(monkeypatch, [program("]+."), "--strict"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Bracket error" in captured.err

    def test_input_error_after_partial_output(self, program, monkeypatch, capsys):
        assert _main(monkeypatch, [program("+++.,")], stdin="\n") == 1
        captured = capsys.readouterr()
        assert captured.out == chr(3)
        assert "Input error" in captured.err


# ─── Verbosity mapping ────────────────────

class TestVerbosity:
    def test_levels(self):
        import logging
        assert verbosity_to_level(0) == logging.WARNING
        assert verbosity_to_level(1) == logging.INFO
        assert verbosity_to_level(2) == logging.DEBUG
        assert verbosity_to_level(3, quiet=True) == logging.ERROR
