"""Pydantic model for the outcome of one evaluated expression."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EvaluationResult(BaseModel):
    """Result or error produced for a single expression line."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(..., ge=1, description="Line number in the input")
    expression: str = Field(..., description="Original arithmetic expression")
    result: Optional[float] = Field(default=None, description="Evaluated numeric result")
    error: Optional[str] = Field(default=None, description="Reason the expression was rejected")

    @model_validator(mode="after")
    def exactly_one_outcome(self) -> "EvaluationResult":
        """Ensure that either a result or an error is set, never both."""
        if (self.result is None) == (self.error is None):
            raise ValueError("Exactly one of 'result' or 'error' must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    def format_line(self) -> str:
        """
        Render the record the way it is written to result files.

        :return: ``"<expr> = <result>"`` or ``"<expr> -> ERROR: <error>"``
        :rtype: str
        """
        if self.ok:
            return f"{self.expression} = {self.result}"
        return f"{self.expression} -> ERROR: {self.error}"
