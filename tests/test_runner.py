from __future__ import annotations

import io
from pathlib import Path

import pytest

from tests.support.harness import EggReferenceError, EggSyntaxError, run_program
from egg_ref.runner import _load_source, main
from egg_ref.types import EggNumber
from egg_ref.utils import DEBUG_PY_TRACE_ENV


def test_run_joins_sources_with_newlines() -> None:
    assert run_program("do(define(x, 4),", "# square it", "*(x, x))") == EggNumber(16)


def test_run_rejects_two_programs() -> None:
    with pytest.raises(EggSyntaxError, match="unexpected trailing text"):
        run_program("1", "2")


def test_runs_do_not_share_definitions() -> None:
    run_program("define(leak, 1)")

    with pytest.raises(EggReferenceError, match="undefined variable: leak"):
        run_program("leak")


def test_main_evaluates_literal_source(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["print(+(1, 2))"]) == 0
    assert capsys.readouterr().out == "3\n"


def test_main_reads_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    script = tmp_path / "hello.egg"
    script.write_text('# greet\nprint("hello")\n', encoding="utf-8")

    assert main([str(script)]) == 0
    assert capsys.readouterr().out == "hello\n"


def test_main_reads_stdin(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO('print("piped")'))

    assert main(["-"]) == 0
    assert capsys.readouterr().out == "piped\n"


def test_main_empty_stdin_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    with pytest.raises(SystemExit):
        _load_source(None)


def test_main_reports_errors(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["nope"]) == 1

    err = capsys.readouterr().err
    assert err.startswith("Error: undefined variable: nope (line 1, col 1)")
    assert "Python traceback" not in err


def test_main_reports_syntax_errors(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["f(1"]) == 1
    assert "expected ',' or ')'" in capsys.readouterr().err


def test_main_py_traceback_flag(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv(DEBUG_PY_TRACE_ENV, "1")

    assert main(["nope"]) == 1
    assert "Python traceback:" in capsys.readouterr().err


def test_main_dumps_ast(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--ast", "f(1)"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("application\n")
    assert "identifier\tf" in out
    assert "literal\t1" in out


def test_main_ast_does_not_evaluate(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--ast", 'print("side effect")']) == 0
    lines = [line.strip() for line in capsys.readouterr().out.splitlines()]
    assert "side effect" not in lines


def test_main_rejects_unknown_flag() -> None:
    with pytest.raises(SystemExit):
        main(["--bogus", "1"])


def test_main_rejects_extra_arguments() -> None:
    with pytest.raises(SystemExit):
        main(["1", "2"])


def test_main_handles_deep_recursion(capsys: pytest.CaptureFixture[str]) -> None:
    source = "do(define(count, fun(n, if(==(n, 0), 0, +(1, count(-(n, 1)))))), print(count(300)))"

    assert main([source]) == 0
    assert capsys.readouterr().out == "300\n"


def test_main_reports_runaway_recursion(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["do(define(spin, fun(n, +(1, spin(n)))), spin(0))"]) == 1

    err = capsys.readouterr().err
    assert err.startswith("Error: maximum recursion depth exceeded")
    assert "Traceback" not in err
