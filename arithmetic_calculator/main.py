"""
Command-line entrypoint.

This script either:
- Evaluates the expressions given as arguments and prints one line each
- Batch-evaluates an expressions file (or archive) with worker processes
- Prints the built-in sample evaluations when called without arguments
"""

import argparse
from pathlib import Path
import sys
from typing import List, Optional

from pydantic import BaseModel, Field, FilePath, ValidationError, model_validator

from arithmetic_calculator.batch.runner import BatchEvaluator
from arithmetic_calculator.batch.sources import build_output_path, read_expressions
from arithmetic_calculator.batch.worker import evaluate_expression
from arithmetic_calculator.common.logger import configure_logging, logger
from arithmetic_calculator.common.models import EvaluationResult


SAMPLE_EXPRESSIONS: List[str] = [
    "2 + 3 * 4",
    "(2 + 3) * 4",
    "10 - 6 / 2",
    "3.5 * (2 - 0.5)",
    "5 / 0",
    "(2 + 3",
    "2 + @",
]

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    expressions : List[str]
        Expressions given inline.
    file_path : Optional[FilePath]
        Path to a file or archive containing one expression per line.
    output_path : Optional[Path]
        Where batch results are written, derived from file_path by default.
    workers : Optional[int]
        Upper bound on simultaneous worker processes.
    log_level : str
        Level of the package logger.
    """

    expressions: List[str] = Field(default_factory=list)
    file_path: Optional[FilePath] = None
    output_path: Optional[Path] = None
    workers: Optional[int] = Field(default=None, ge=1)
    log_level: str = "WARNING"

    @model_validator(mode="after")
    def file_or_expressions(self) -> "CliArgs":
        """Inline expressions and an input file cannot be combined."""
        if self.file_path is not None and self.expressions:
            raise ValueError("Give either expressions or --file, not both")
        if self.output_path is not None and self.file_path is None:
            raise ValueError("--output requires --file")
        return self


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments without the program name, sys.argv by default
    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="arithmetic-calculator",
        description="Evaluate arithmetic expressions with + - * /, decimals and parentheses",
    )

    parser.add_argument("expressions", nargs="*", help="Expressions to evaluate")
    parser.add_argument("--file", dest="file_path", help="File or archive with one expression per line")
    parser.add_argument("--output", dest="output_path", help="Where batch results are written")
    parser.add_argument("--workers", type=int, help="Maximum number of worker processes")
    parser.add_argument("--log-level", default="WARNING", choices=LOG_LEVELS, help="Logging level")

    args = parser.parse_args(argv)

    try:
        return CliArgs(**{key: value for key, value in vars(args).items() if value is not None})
    except ValidationError as exc:
        parser.error(str(exc))


def evaluate_inline(expressions: List[str]) -> List[EvaluationResult]:
    """
    Evaluate expressions in this process and print one line each.

    :param expressions: Expressions to evaluate
    :return: Results in input order
    """
    results: List[EvaluationResult] = []
    for line_number, expr in enumerate(expressions, start=1):
        outcome = evaluate_expression(expr, line_number)
        print(outcome.format_line())
        results.append(outcome)
    return results


def evaluate_file(cli_args: CliArgs) -> List[EvaluationResult]:
    """
    Batch-evaluate the input file and report where results were written.

    :param cli_args: Validated CLI arguments with file_path set
    :return: Results ordered by line number
    """
    input_path: Path = Path(cli_args.file_path)
    output_path: Path = cli_args.output_path or build_output_path(input_path)

    evaluator = BatchEvaluator(output_file=output_path, max_workers=cli_args.workers)
    results = evaluator.run(read_expressions(input_path))
    print(f"{len(results)} expressions evaluated, results written to {output_path}")
    return results


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function of the arithmetic-calculator command.

    :return: 0 when every expression evaluated (always 0 for the samples), 1 otherwise
    """
    cli_args = parse_args(argv)
    configure_logging(cli_args.log_level)

    if cli_args.file_path is not None:
        results = evaluate_file(cli_args)
    elif cli_args.expressions:
        logger.debug(f"Evaluating {len(cli_args.expressions)} inline expressions")
        results = evaluate_inline(cli_args.expressions)
    else:
        # The samples include rejected expressions on purpose
        evaluate_inline(SAMPLE_EXPRESSIONS)
        return 0

    return 0 if all(result.ok for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
