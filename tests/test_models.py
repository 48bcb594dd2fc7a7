"""Test class EvaluationResult."""
from pydantic import ValidationError
import pytest

from arithmetic_calculator.common.models import EvaluationResult


def test_result_valid() -> None:
    """A successful record renders as an equation."""
    res = EvaluationResult(line=1, expression="2 + 2 * 3", result=8.0)
    assert res.ok
    assert isinstance(res.result, float)
    assert res.format_line() == "2 + 2 * 3 = 8.0"


def test_error_valid() -> None:
    """A failed record renders the error message."""
    res = EvaluationResult(line=3, expression="5 / 0", error="Division by zero")
    assert not res.ok
    assert res.format_line() == "5 / 0 -> ERROR: Division by zero"


@pytest.mark.parametrize("kwargs", [
    {"result": 1.0, "error": "boom"},
    {},
])
def test_exactly_one_outcome(kwargs) -> None:
    """Both or neither of result and error is rejected."""
    with pytest.raises(ValidationError):
        EvaluationResult(line=1, expression="1", **kwargs)


def test_invalid_line_number() -> None:
    """Line numbers start at 1."""
    with pytest.raises(ValidationError):
        EvaluationResult(line=0, expression="1", result=1.0)


def test_invalid_result_type() -> None:
    """Non numeric results raise a validation error."""
    with pytest.raises(ValidationError):
        EvaluationResult(line=1, expression="2 + 2", result="not a float")


def test_round_trip_through_dict() -> None:
    """The dict sent through worker pipes validates back into the same record."""
    res = EvaluationResult(line=2, expression="1 + 1", result=2.0)
    assert EvaluationResult.model_validate(res.model_dump()) == res
