"""Worker process for evaluating arithmetic expressions."""
from multiprocessing.connection import Connection
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from arithmetic_calculator.common.errors import CalculatorError
from arithmetic_calculator.common.logger import logger
from arithmetic_calculator.common.models import EvaluationResult
from arithmetic_calculator.common.parser import calculate


def evaluate_expression(expression: str, line_number: int) -> EvaluationResult:
    """
    Evaluate one expression line into a result record.

    Rejections are reported in the record, anything else propagates.

    :param str expression: Arithmetic expression
    :param int line_number: Line number in the input

    :return: Result record, holding either the value or the rejection reason
    :rtype: EvaluationResult
    """
    try:
        value: float = calculate(expression)
    except CalculatorError as exc:
        logger.error(
            f"👷❌ Evaluation failed on line {line_number}: {exc}\n"
            f"Invalid arithmetic expression, could not evaluate: {expression!r}"
        )
        return EvaluationResult(line=line_number, expression=expression, error=str(exc))
    return EvaluationResult(line=line_number, expression=expression, result=value)


class WorkerProcess(BaseModel):
    """
    Worker process responsible for evaluating a single arithmetic expression.

    Lifecycle:
        - Spawned by the batch evaluator
        - Receives one expression only
        - Sends the serialized EvaluationResult through a Pipe
        - Terminates immediately after computation
    """

    # Immutable, and allow arbitrary types like multiprocessing.Connection
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    conn: Connection = Field(..., description="Connection object for sending results back")
    expression: str = Field(..., description="Single arithmetic expression to evaluate")
    line_number: int = Field(..., ge=1, description="Line number in the input")

    @field_validator("expression")
    def expression_must_not_be_empty(cls, v: str) -> str:
        """Ensure that the expression is not blank."""
        if not v.strip():
            raise ValueError("Expression cannot be empty")
        return v

    def run(self) -> None:
        """
        Evaluate the arithmetic expression and send the result or error through the pipe.

        :return: None
        """
        logger.info(f"👷🏁 Worker started on line {self.line_number}: {self.expression}")

        outcome: Optional[EvaluationResult] = None
        try:
            outcome = evaluate_expression(self.expression, self.line_number)
            self.conn.send(outcome.model_dump())
        finally:
            # Always close the connection
            self.conn.close()

            if outcome is not None and outcome.ok:
                logger.info(f"👷✅ Worker finished on line {self.line_number}: {outcome.result}")
