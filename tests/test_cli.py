"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from nbe_lang import __version__
from nbe_lang.cli import main
from nbe_lang.errors import get_trace
from nbe_lang.prelude import EXAMPLES


@pytest.fixture
def runner():
    return CliRunner()


def test_default_example(runner):
    """Test that the default run checks and normalizes the arithmetic example."""
    result = runner.invoke(main, [])
    assert result.exit_code == 0
    assert "-- pretty --" in result.output
    assert "OK" in result.output
    assert result.output.rstrip().endswith("42")


def test_output_order(runner):
    """Test that the type check runs before normalization."""
    result = runner.invoke(main, ["identity"])
    assert result.exit_code == 0
    output = result.output
    assert output.index("-- pretty --") < output.index("-- typecheck --") < output.index("-- normalized --")
    assert "λ x. x" in output


def test_sections_can_be_disabled(runner):
    """Test the --no-pretty and --no-normalize switches."""
    result = runner.invoke(main, ["identity", "--no-pretty", "--no-normalize"])
    assert result.exit_code == 0
    assert "-- pretty --" not in result.output
    assert "-- normalized --" not in result.output
    assert "OK" in result.output


def test_ill_typed_example(runner):
    """Test that a type error exits with status 1."""
    result = runner.invoke(main, ["ill-typed"])
    assert result.exit_code == 1
    assert "Expected a function" in result.output
    assert "-- normalized --" not in result.output


def test_verbose_shows_trace(runner):
    """Test that -v prints the derivation trace with the error."""
    result = runner.invoke(main, ["ill-typed", "-v"])
    assert result.exit_code == 1
    assert "Type Derivation Trace" in result.output
    assert not get_trace().enabled
    assert get_trace().steps == []


def test_no_check_reaches_evaluator(runner):
    """Test that skipping the check lets the evaluator fail with status 2."""
    result = runner.invoke(main, ["ill-typed", "--no-check"])
    assert result.exit_code == 2
    assert "Internal error" in result.output


def test_version(runner):
    """Test the --version flag."""
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert f"nbe-lang version {__version__}" in result.output


def test_list(runner):
    """Test that --list names every example."""
    result = runner.invoke(main, ["--list"])
    assert result.exit_code == 0
    for name in EXAMPLES:
        assert name in result.output


def test_unknown_example(runner):
    """Test that click rejects unknown example names."""
    result = runner.invoke(main, ["no-such-example"])
    assert result.exit_code == 2


def test_output_file(runner, tmp_path):
    """Test writing the normal form to a file."""
    target = tmp_path / "normal.txt"
    result = runner.invoke(main, ["--no-color", "-o", str(target)])
    assert result.exit_code == 0
    assert target.read_text() == "42\n"


def test_output_file_is_utf8(runner, tmp_path):
    """Test that normal forms with binders are written as UTF-8."""
    target = tmp_path / "identity.txt"
    result = runner.invoke(main, ["identity", "-o", str(target)])
    assert result.exit_code == 0
    assert target.read_bytes() == "λ x. x\n".encode("utf-8")


def test_timing(runner):
    """Test that --timing reports the phases that ran."""
    result = runner.invoke(main, ["cong", "--no-normalize", "--timing"])
    assert result.exit_code == 0
    assert "Type check time" in result.output
    assert "Normalize time" not in result.output
    assert "Total time" in result.output
