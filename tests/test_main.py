"""Test the calc-solver command-line entry point."""
from pathlib import Path

import pytest

from calc_solver.main import DEMO_EXPRESSION, CliArgs, main, parse_args


def test_parse_args_defaults() -> None:
    """Without arguments the demo expression is solved with two decimals."""
    args = parse_args([])
    assert args.expression is None
    assert args.file_path is None
    assert args.precision == 2
    assert args.log_level == "WARNING"


def test_parse_args_expression_and_options() -> None:
    """Positional expression and options are validated into CliArgs."""
    args = parse_args(["1 + 2", "--precision", "4", "--log-level", "debug"])
    assert args == CliArgs(expression="1 + 2", precision=4, log_level="DEBUG")


@pytest.mark.parametrize("argv", [
    ["--precision", "-1"],
    ["--log-level", "chatty"],
    ["--file", "does/not/exist.txt"],
    ["--output", "results.txt"],
    ["--workers", "0", "--file", "does/not/exist.txt"],
])
def test_parse_args_invalid(argv) -> None:
    """Invalid arguments exit with a usage error."""
    with pytest.raises(SystemExit) as exc_info:
        parse_args(argv)
    assert exc_info.value.code == 2


def test_parse_args_expression_and_file_are_exclusive(tmp_path: Path) -> None:
    """An expression cannot be combined with --file."""
    ops = tmp_path / "ops.txt"
    ops.write_text("1 + 1\n")
    with pytest.raises(SystemExit):
        parse_args(["1 + 2", "--file", str(ops)])


def test_main_demo_expression(capsys) -> None:
    """The demo expression is printed with its result rounded to two decimals."""
    assert main([]) == 0
    assert capsys.readouterr().out == f"{DEMO_EXPRESSION} = 420.69\n"


def test_main_single_expression(capsys) -> None:
    """A valid expression prints '<expression> = <result>'."""
    assert main(["(2 - 1) / (1 + 4 * 2 - 5)", "--precision", "3"]) == 0
    assert capsys.readouterr().out == "(2 - 1) / (1 + 4 * 2 - 5) = 0.250\n"


def test_main_single_expression_error(capsys) -> None:
    """A failing expression exits with 1 and reports its status on stderr."""
    assert main(["5 / 0"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "evaluation_error" in captured.err


def test_main_batch(tmp_path: Path, capsys) -> None:
    """--file writes the results file next to the input."""
    ops = tmp_path / "ops.txt"
    ops.write_text("1 + 2\n3 *\n")

    assert main(["--file", str(ops), "--workers", "1"]) == 0

    results = tmp_path / "ops_txt_results.txt"
    assert sorted(results.read_text().splitlines()) == [
        "1 + 2 = 3.0",
        "3 * -> ERROR: Cannot pop from an empty stack",
    ]
    assert "1 failed" in capsys.readouterr().out


def test_main_batch_unsupported_archive(tmp_path: Path, capsys) -> None:
    """An unreadable input file exits with 1."""
    ops = tmp_path / "ops.rar"
    ops.write_text("1 + 2\n")

    assert main(["--file", str(ops), "--output", str(tmp_path / "out.txt")]) == 1
    assert "Unsupported archive format" in capsys.readouterr().err
