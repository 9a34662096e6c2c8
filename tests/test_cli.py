"""Tests for partialfn/load.py, partialfn/config.py and partialfn/cli.py."""

import io
import logging
import os
from pathlib import Path

import pytest

from partialfn import Clause, Matched, Unmatched, compile_clauses
from partialfn.cli import handle_probe, handle_show, main, parse_input
from partialfn.config import Settings
from partialfn.load import load_clauses_from_file

GOLDEN_DIR = Path(__file__).parent.parent / "golden"

# stem -> [(input, expected value or None for a domain-miss)]
GOLDEN_CASES = {
    "string-codes": [("foo", 1), ("bar", 2), ("baz", None)],
    "small-ints": [(1, "foo"), (2, "foo"), (3, "bar"), (4, None)],
    "parity-bands": [(1, None), (2, 1), (11, 11), (12, None), (22, 11), (31, 31), (32, None)],
    "http-status": [(204, "success"), (404, "client error"), (503, "server error"), (42, "unknown")],
    "tagged-pairs": [
        (["point", 1, 2], 3),
        (["scale", 2, [3, 4]], [6, 8]),
        (["neg", 5], -5),
        (["neg", "5"], None),
        (["point", 1], None),
    ],
}


def _golden(stem: str) -> str:
    return str(GOLDEN_DIR / f"{stem}.py")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("PARTIALFN_LOG_LEVEL", raising=False)
    monkeypatch.delenv("PARTIALFN_SHOW_BINDINGS", raising=False)
    # Keep a developer's .env out of the tests.
    monkeypatch.chdir(tmp_path)


# ===========================================================================
# Loading
# ===========================================================================


@pytest.mark.parametrize("stem", sorted(GOLDEN_CASES))
def test_golden_files_load_and_evaluate(stem: str) -> None:
    clauses = load_clauses_from_file(_golden(stem))
    assert isinstance(clauses, tuple), clauses
    assert all(isinstance(c, Clause) for c in clauses)

    pf = compile_clauses(clauses)
    for arg, expected in GOLDEN_CASES[stem]:
        if expected is None:
            assert pf.call(arg) == Unmatched(arg)
            assert not pf.is_defined_at(arg)
        else:
            assert pf.call(arg) == Matched(expected)
            assert pf.is_defined_at(arg)


def test_load_missing_file() -> None:
    result = load_clauses_from_file(str(GOLDEN_DIR / "does-not-exist.py"))
    assert isinstance(result, str)
    assert result.startswith("cannot open clause file")


def test_load_factory_with_wrong_return_type() -> None:
    result = load_clauses_from_file(_golden("broken"))
    assert result == "broken_clauses() gave a str, not a list of Clause"


def test_load_reports_execution_errors(tmp_path: Path) -> None:
    path = tmp_path / "bad.py"
    path.write_text("def oops_clauses(:\n")
    result = load_clauses_from_file(str(path))
    assert isinstance(result, str)
    assert result.startswith("clause file failed while running: SyntaxError")


def test_load_requires_factory(tmp_path: Path) -> None:
    path = tmp_path / "empty.py"
    path.write_text("x = 1\n")
    assert load_clauses_from_file(str(path)) == "clause file defines no _clauses() factory"


def test_load_skips_raising_factory(tmp_path: Path) -> None:
    path = tmp_path / "two.py"
    path.write_text(
        "def a_clauses():\n"
        "    raise RuntimeError('nope')\n"
        "\n"
        "def b_clauses():\n"
        "    return [case(1, then=lambda: 'one')]\n"
    )
    clauses = load_clauses_from_file(str(path))
    assert isinstance(clauses, tuple)
    assert len(clauses) == 1


def test_load_reports_raising_factory(tmp_path: Path) -> None:
    path = tmp_path / "one.py"
    path.write_text("def only_clauses():\n    raise RuntimeError('nope')\n")
    assert load_clauses_from_file(str(path)) == "only_clauses() raised RuntimeError: nope"


# ===========================================================================
# Configuration
# ===========================================================================


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings.from_env()
        assert settings == Settings(log_level="WARNING", show_bindings=False)
        assert settings.log_level_number == logging.WARNING

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PARTIALFN_LOG_LEVEL", "debug")
        monkeypatch.setenv("PARTIALFN_SHOW_BINDINGS", "yes")
        settings = Settings.from_env()
        assert settings.log_level == "DEBUG"
        assert settings.log_level_number == logging.DEBUG
        assert settings.show_bindings

    def test_from_dotenv_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / ".env").write_text("PARTIALFN_LOG_LEVEL=INFO\n")
        monkeypatch.chdir(tmp_path)
        try:
            assert Settings.from_env().log_level == "INFO"
        finally:
            os.environ.pop("PARTIALFN_LOG_LEVEL", None)

    def test_rejects_unknown_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PARTIALFN_LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError, match="LOUD"):
            Settings.from_env()


# ===========================================================================
# Command line
# ===========================================================================


@pytest.mark.parametrize(
    ("text", "expected"),
    [("3", 3), ('"foo"', "foo"), ("foo", "foo"), ("[1, 2]", [1, 2]), ("null", None)],
)
def test_parse_input(text: str, expected) -> None:
    assert parse_input(text) == expected


def test_show_renders_each_file() -> None:
    out = io.StringIO()
    code = handle_show([_golden("small-ints"), _golden("parity-bands")], out)
    assert code == 0
    text = out.getvalue()
    assert "  1  1 | 2 => <expr>" in text
    assert "  2  3 => <expr>" in text
    assert "a @ 1..=10 | a @ 21..=30 if is_even => halve" in text


def test_show_fails_on_bad_file(capsys: pytest.CaptureFixture[str]) -> None:
    out = io.StringIO()
    assert handle_show([_golden("broken")], out) == 1
    assert "not a list of Clause" in capsys.readouterr().err


def test_probe_table() -> None:
    out = io.StringIO()
    code = handle_probe(_golden("string-codes"), ['"foo"', "baz"], out, show_bindings=False)
    assert code == 0
    lines = out.getvalue().splitlines()
    assert lines[0].split("│")[0].strip() == "Input"
    assert [c.strip() for c in lines[2].split("│")] == ['"foo"', "yes", "Matched(value=1)"]
    assert [c.strip() for c in lines[3].split("│")] == ['"baz"', "no", "Unmatched(arg='baz')"]


def test_probe_with_bindings() -> None:
    out = io.StringIO()
    handle_probe(_golden("parity-bands"), ["22"], out, show_bindings=True)
    assert "[clause 1, {'a': 22}]" in out.getvalue()


def test_table_searches_once_per_input(monkeypatch: pytest.MonkeyPatch) -> None:
    import partialfn.cli as cli

    calls = []
    real = cli.find_satisfying

    def counting(clauses, arg):
        calls.append(arg)
        return real(clauses, arg)

    monkeypatch.setattr(cli, "find_satisfying", counting)
    out = io.StringIO()
    assert handle_probe(_golden("parity-bands"), ["22", "12"], out, show_bindings=True) == 0
    assert calls == [22, 12]


def test_raising_guard_shown_in_table_row(tmp_path: Path) -> None:
    path = tmp_path / "raising.py"
    path.write_text(
        "def _guard(x):\n"
        "    raise ZeroDivisionError('bad divisor')\n"
        "\n"
        "def raising_clauses():\n"
        "    return [\n"
        "        case(0, then=lambda: 'zero'),\n"
        "        case(bind('x'), when=_guard, then=lambda x: x),\n"
        "    ]\n"
    )
    out = io.StringIO()
    assert handle_probe(str(path), ["0", "5"], out, show_bindings=False) == 1
    lines = out.getvalue().splitlines()
    assert [c.strip() for c in lines[2].split("│")] == ["0", "yes", "Matched(value='zero')"]
    assert [c.strip() for c in lines[3].split("│")] == [
        "5",
        "error",
        "ZeroDivisionError: bad divisor",
    ]


def test_main_probe(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["probe", _golden("http-status"), "-i", "201", "-i", "999"])
    assert code == 0
    out = capsys.readouterr().out
    assert "Matched(value='success')" in out
    assert "Matched(value='unknown')" in out


def test_main_bindings_from_environment(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("PARTIALFN_SHOW_BINDINGS", "1")
    assert main(["probe", _golden("small-ints"), "-i", "2"]) == 0
    assert "[clause 1, {}]" in capsys.readouterr().out


def test_main_bad_configuration(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("PARTIALFN_LOG_LEVEL", "LOUD")
    assert main(["show", _golden("small-ints")]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_main_without_command(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert "usage:" in capsys.readouterr().out
