# tests/test_cli.py
"""
End-to-end checks of the numpart command line (main(argv) → exit code + output).
"""

from __future__ import annotations

import sys

import pytest

from numpart import cli
from numpart.cli import main
from numpart.fmt import strip_ansi

# ---------- helpers -----------------------------------------------------------


def run(capsys, *argv: str) -> tuple[int, str, str]:
    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, strip_ansi(out), strip_ansi(err)


# ---------- single values -----------------------------------------------------


@pytest.mark.parametrize("n,expected", [("0", "p(0) = 1"), ("10", "p(10) = 42"), ("1_00", "p(100) = 190569292")])
def test_single_value(capsys, n, expected):
    code, out, _ = run(capsys, n)
    assert code == 0
    assert expected in out


def test_long_value_abbreviated_unless_full(capsys):
    code, out, _ = run(capsys, "5000")
    assert code == 0
    assert "…" in out and "digits)" in out

    code, out, _ = run(capsys, "5000", "--full")
    assert code == 0
    assert "…" not in out

    code, out, _ = run(capsys, "1000")
    assert code == 0
    assert "p(1000) = 24061467864032622473692149727991" in out


def test_gmpy2_backend(capsys):
    code, out, _ = run(capsys, "20", "--backend", "gmpy2")
    assert code == 0
    assert "p(20) = 627" in out


def test_explicit_packaged_profile(capsys):
    code, out, _ = run(capsys, "gmpy2", "5000")
    assert code == 0
    # the gmpy2 profile never abbreviates
    assert "p(5000) = " in out
    assert "…" not in out


# ---------- modes -------------------------------------------------------------


def test_upto_table(capsys):
    code, out, _ = run(capsys, "--upto", "5", "--quiet")
    assert code == 0
    lines = [ln.strip() for ln in out.strip().splitlines()]
    assert lines == ["p(0) = 1", "p(1) = 1", "p(2) = 2", "p(3) = 3", "p(4) = 5", "p(5) = 7"]


def test_pents(capsys):
    code, out, _ = run(capsys, "--pents", "10")
    assert code == 0
    assert out.strip() == "0, 1, 2, 5, 7, 12, 15, 22, 26, 35"


@pytest.mark.parametrize("m,expected", [
    ("42", "42 = p(10)"),
    ("1", "1 = p(0) = p(1)"),
    ("43", "43 is not a partition number."),
])
def test_index(capsys, m, expected):
    code, out, _ = run(capsys, "--index", m)
    assert code == 0
    assert expected in out


def test_upto_keeps_stdout_clean_when_progress_is_drawn(capsys, monkeypatch):
    # interactive stderr: the bar is drawn, but never into the table
    monkeypatch.setattr(sys.stderr, "isatty", lambda: True)
    code, out, err = run(capsys, "--upto", "3")
    assert code == 0
    assert "\r" not in out
    assert out.splitlines() == ["p(0) = 1", "p(1) = 1", "p(2) = 2", "p(3) = 3"]
    assert "%" in err


def test_upto_without_quiet_redirected(capsys):
    code, out, err = run(capsys, "--upto", "3")
    assert code == 0
    assert out.splitlines() == ["p(0) = 1", "p(1) = 1", "p(2) = 2", "p(3) = 3"]
    assert "%" not in err


def test_check_against_sympy(capsys):
    code, out, _ = run(capsys, "--upto", "60", "--check", "--quiet")
    assert code == 0
    assert "p(60) = 966467" in out

    code, out, _ = run(capsys, "250", "--check")
    assert code == 0
    assert "1 value(s) agree with sympy" in out


# ---------- errors ------------------------------------------------------------


@pytest.mark.parametrize("argv", [
    ["-5"],
    ["--upto", "x"],
    ["--index", "-1"],
    ["default", "ten"],
    [],
    ["a", "b", "c"],
    ["no_such_profile", "10"],
])
def test_user_errors_exit_2(capsys, argv):
    code, _, err = run(capsys, *argv)
    assert code == 2
    assert "Error:" in err


def test_number_and_mode_conflict(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["10", "--upto", "5"])
    assert exc.value.code == 2


def test_bad_backend_choice(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["10", "--backend", "float"])
    assert exc.value.code == 2


# ---------- commands ----------------------------------------------------------


def test_init_then_profiles(capsys, isolated_workspace):
    code, out, _ = run(capsys, "init")
    assert code == 0
    assert (isolated_workspace / "profiles" / "default.toml").exists()
    assert "Copied -> profiles: 2" in out

    code, out, _ = run(capsys, "profiles")
    assert code == 0
    assert "default" in out and "gmpy2" in out


def test_profiles_empty_workspace(capsys):
    code, out, _ = run(capsys, "profiles")
    assert code == 0
    assert "No profiles" in out


def test_where(capsys, isolated_workspace):
    code, out, _ = run(capsys, "where")
    assert code == 0
    assert str(isolated_workspace.resolve()) in out


def test_workspace_profile_overrides_packaged(capsys, isolated_workspace):
    pdir = isolated_workspace / "profiles"
    pdir.mkdir(parents=True)
    (pdir / "default.toml").write_text(
        '[FORMATTING]\nNUM_ABBR_THRESHOLD = 5\nNUM_ABBR_HEAD = 2\nNUM_ABBR_TAIL = 2\n',
        encoding="utf-8",
    )
    code, out, _ = run(capsys, "100")
    assert code == 0
    assert "p(100) = 19…92" in out


# ---------- unexpected errors -------------------------------------------------


class _Exploding:
    def __init__(self, backend):
        pass

    def value(self, n):
        raise RuntimeError("boom")


def test_unexpected_error_is_one_line_by_default(capsys, monkeypatch):
    monkeypatch.setattr(cli, "PartitionSequence", _Exploding)
    code, _, err = run(capsys, "10")
    assert code == 1
    assert "Unexpected error: RuntimeError: boom" in err


def test_profile_debug_shows_traceback(capsys, monkeypatch, isolated_workspace):
    pdir = isolated_workspace / "profiles"
    pdir.mkdir(parents=True)
    (pdir / "loud.toml").write_text("[BEHAVIOUR]\nDEBUG = true\n", encoding="utf-8")
    monkeypatch.setattr(cli, "PartitionSequence", _Exploding)
    with pytest.raises(RuntimeError, match="boom"):
        main(["loud", "10"])
