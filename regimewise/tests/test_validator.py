"""
Input validator tests.

Checks error ordering (income first), the error taxonomy, and whole-rupee
normalisation of accepted input.
"""
from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from regimewise.inputs.validator import (
    MAX_AMOUNT,
    ExcessiveDeductions,
    InvalidIncome,
    NegativeDeductions,
    TaxInputError,
    validate_inputs,
)


# ---------------------------------------------------------------------------
# Accepted input
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "income, deductions, expected",
    [
        (0, 0, (Decimal(0), Decimal(0))),
        (1_500_000, 200_000, (Decimal(1_500_000), Decimal(200_000))),
        (800_000, 800_000, (Decimal(800_000), Decimal(800_000))),
        (Decimal("1500000.50"), 0, (Decimal(1_500_001), Decimal(0))),
        (1_500_000.4, 99.5, (Decimal(1_500_000), Decimal(100))),
        (1_000_000, None, (Decimal(1_000_000), Decimal(0))),
    ],
    ids=["zero", "typical", "deductions_equal_income", "half_up_income",
         "float_input", "none_deductions"],
)
def test_valid_inputs_normalised(income, deductions, expected) -> None:
    assert validate_inputs(income, deductions) == expected


def test_deductions_default_to_zero() -> None:
    assert validate_inputs(500_000) == (Decimal(500_000), Decimal(0))


# ---------------------------------------------------------------------------
# InvalidIncome
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "income",
    [-1, Decimal("-0.6"), None, "1500000", float("nan"), float("inf"), Decimal("NaN"), True],
    ids=["negative", "negative_fraction", "none", "string", "nan", "inf", "decimal_nan", "bool"],
)
def test_invalid_income(income) -> None:
    with pytest.raises(InvalidIncome) as exc_info:
        validate_inputs(income, 0)
    assert exc_info.value.code == "INVALID_INCOME"
    assert exc_info.value.field == "income"
    assert exc_info.value.message == "Please enter a valid positive income amount."


def test_invalid_income_checked_before_deductions() -> None:
    with pytest.raises(InvalidIncome):
        validate_inputs(-5, -10)


# ---------------------------------------------------------------------------
# NegativeDeductions
# ---------------------------------------------------------------------------

def test_negative_deductions() -> None:
    with pytest.raises(NegativeDeductions) as exc_info:
        validate_inputs(1_000_000, -1)
    assert exc_info.value.code == "NEGATIVE_DEDUCTIONS"
    assert exc_info.value.field == "deductions"
    assert str(exc_info.value) == "Deductions cannot be negative."


@pytest.mark.parametrize("deductions", ["abc", float("nan"), float("-inf")], ids=["string", "nan", "neg_inf"])
def test_non_numeric_deductions(deductions) -> None:
    with pytest.raises(NegativeDeductions) as exc_info:
        validate_inputs(1_000_000, deductions)
    assert exc_info.value.message == "Deductions must be a valid non-negative amount."


# ---------------------------------------------------------------------------
# ExcessiveDeductions
# ---------------------------------------------------------------------------

def test_excessive_deductions() -> None:
    with pytest.raises(ExcessiveDeductions) as exc_info:
        validate_inputs(500_000, 500_001)
    assert exc_info.value.code == "EXCESSIVE_DEDUCTIONS"
    assert exc_info.value.message == "Deductions cannot be more than income."


def test_excessive_deductions_compared_after_rounding() -> None:
    # 500000.4 → 500000; 500000.3 → 500000 → equal, accepted
    assert validate_inputs(Decimal("500000.4"), Decimal("500000.3")) == (Decimal(500_000), Decimal(500_000))


# ---------------------------------------------------------------------------
# Taxonomy and logging
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("error_cls", [InvalidIncome, NegativeDeductions, ExcessiveDeductions])
def test_errors_are_value_errors(error_cls) -> None:
    assert issubclass(error_cls, TaxInputError)
    assert issubclass(error_cls, ValueError)


def test_failure_logs_code_without_amounts(caplog) -> None:
    with caplog.at_level(logging.INFO, logger="regimewise.inputs.validator"):
        with pytest.raises(ExcessiveDeductions):
            validate_inputs(123_456, 654_321)
    assert "EXCESSIVE_DEDUCTIONS" in caplog.text
    assert "123456" not in caplog.text
    assert "654321" not in caplog.text


# ---------------------------------------------------------------------------
# Upper bound
# ---------------------------------------------------------------------------

def test_max_amount_accepted() -> None:
    assert validate_inputs(MAX_AMOUNT, MAX_AMOUNT) == (MAX_AMOUNT, MAX_AMOUNT)


@pytest.mark.parametrize(
    "income",
    [MAX_AMOUNT + 1, Decimal("1e28"), 10**29, 1e30],
    ids=["just_above_max", "decimal_1e28", "int_1e29", "float_1e30"],
)
def test_income_above_max_rejected(income) -> None:
    with pytest.raises(InvalidIncome):
        validate_inputs(income, 0)


def test_huge_deductions_rejected_as_excessive() -> None:
    with pytest.raises(ExcessiveDeductions):
        validate_inputs(MAX_AMOUNT, Decimal("1e40"))
