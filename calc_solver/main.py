"""
Command-line entry point.

This script either:
- Solves a single expression given as argument (or the demo expression) and prints it
- Solves every expression of a file or archive and writes a results file

Examples
--------
calc-solver "2 + 3 * 4"
calc-solver --file resources/operations.7z --workers 4
"""

import argparse
from pathlib import Path
import sys
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, FilePath, ValidationError, model_validator

from calc_solver.batch.runner import BatchRunner, build_output_path
from calc_solver.common.logger import configure_logging, logger
from calc_solver.solver import try_solve


DEMO_EXPRESSION = "1 / 10 + (2 * 100.2 + 28 + 0.06) / 2 + 3 * 102.12"


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expression : str, optional
        Expression to solve, defaults to the demo expression.
    file_path : FilePath, optional
        Path to a file or archive containing arithmetic expressions.
    output_path : Path, optional
        Results file, derived from ``file_path`` when omitted.
    workers : int, optional
        Maximum number of simultaneous worker processes.
    precision : int
        Decimals printed for a single expression.
    log_level : str
        Logging level of the package logger.
    """

    model_config = ConfigDict(frozen=True)

    expression: Optional[str] = None
    file_path: Optional[FilePath] = None
    output_path: Optional[Path] = None
    workers: Optional[int] = Field(default=None, ge=1)
    precision: int = Field(default=2, ge=0, le=17)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"

    @model_validator(mode="after")
    def check_mode(self) -> "CliArgs":
        """Ensure a single expression and a file are not requested together."""
        if self.expression is not None and self.file_path is not None:
            raise ValueError("Give either an expression or --file, not both")
        if self.output_path is not None and self.file_path is None:
            raise ValueError("--output requires --file")
        return self


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments to parse, defaults to ``sys.argv[1:]``
    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="calc-solver",
        description="Solve infix arithmetic expressions with + - * / and parentheses",
    )

    parser.add_argument("expression", nargs="?", help="Expression to solve (defaults to a demo expression)")
    parser.add_argument("--file", dest="file_path", help="File or archive with one expression per line")
    parser.add_argument("--output", dest="output_path", help="Results file for --file")
    parser.add_argument("--workers", type=int, help="Maximum number of worker processes")
    parser.add_argument("--precision", type=int, default=2, help="Decimals printed for a single expression")
    parser.add_argument("--log-level", default="WARNING", type=str.upper, help="Logging level")

    args = parser.parse_args(argv)

    try:
        return CliArgs(**{key: value for key, value in vars(args).items() if value is not None})
    except ValidationError as exc:
        parser.error(str(exc))


def run_batch(cli_args: CliArgs) -> int:
    """
    Solve every expression of ``cli_args.file_path`` and write the results file.

    :return: Exit code
    """
    input_path = Path(cli_args.file_path)
    output_path = cli_args.output_path or build_output_path(input_path)

    try:
        runner = BatchRunner(input_file=input_path, output_file=output_path, max_workers=cli_args.workers)
        failures = runner.run()
    except ValueError as exc:
        logger.error(f"📄❌ Could not read {input_path}: {exc}")
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"Results written to {output_path} ({failures} failed)")
    return 0


def run_single(cli_args: CliArgs) -> int:
    """
    Solve one expression and print ``<expression> = <result>``.

    :return: Exit code
    """
    expression = cli_args.expression if cli_args.expression is not None else DEMO_EXPRESSION
    outcome = try_solve(expression)

    if not outcome.ok:
        print(f"{expression} -> ERROR ({outcome.status.value}): {outcome.error}", file=sys.stderr)
        return 1

    print(f"{expression} = {outcome.result:.{cli_args.precision}f}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function executed by the ``calc-solver`` console script.
    """
    cli_args = parse_args(argv)
    configure_logging(cli_args.log_level)

    if cli_args.file_path is not None:
        return run_batch(cli_args)
    return run_single(cli_args)


if __name__ == "__main__":
    sys.exit(main())
