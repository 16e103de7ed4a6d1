"""
Input validator — FY 2025-26

Validates (income, deductions) BEFORE any tax computation begins. All failures
are deterministic input errors: raised synchronously, never retried.

Error taxonomy (all subclasses of TaxInputError → ValueError):
  1. InvalidIncome        income missing, non-numeric, NaN/infinite, negative
                          or above MAX_AMOUNT
  2. NegativeDeductions   deductions < 0 (or not a finite number)
  3. ExcessiveDeductions  deductions > income

main.py maps TaxInputError to a 422 envelope carrying `code` and `field`.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional

logger = logging.getLogger(__name__)

# ₹100 lakh crore. Larger amounts exceed what the slab math carries exactly.
MAX_AMOUNT = Decimal(10) ** 15


# ---------------------------------------------------------------------------
# Error classes
# ---------------------------------------------------------------------------

class TaxInputError(ValueError):
    """Base class for rejected calculator input."""

    code = "VALIDATION_ERROR"
    field: Optional[str] = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidIncome(TaxInputError):
    code = "INVALID_INCOME"
    field = "income"


class NegativeDeductions(TaxInputError):
    code = "NEGATIVE_DEDUCTIONS"
    field = "deductions"


class ExcessiveDeductions(TaxInputError):
    code = "EXCESSIVE_DEDUCTIONS"
    field = "deductions"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _to_decimal(value: Any) -> Optional[Decimal]:
    """Finite Decimal for int/float/Decimal input; None for anything else."""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def _whole_rupees(amount: Decimal) -> Decimal:
    # to_integral_value ignores context precision; quantize would overflow it
    return amount.to_integral_value(rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def validate_inputs(income: Any, deductions: Any = 0) -> tuple[Decimal, Decimal]:
    """
    Validate and normalise calculator input.

    Args:
        income: Gross annual income (int, float or Decimal).
        deductions: Old-regime deductions claimed; None is treated as 0.

    Returns:
        (income, deductions) as whole-rupee Decimals (half-up rounding).

    Raises:
        InvalidIncome, NegativeDeductions, ExcessiveDeductions — checked in
        that order; the first violation wins.
    """
    try:
        gross = _to_decimal(income)
        if gross is None or gross < 0 or gross > MAX_AMOUNT:
            raise InvalidIncome("Please enter a valid positive income amount.")
        gross = _whole_rupees(gross)

        claimed = _to_decimal(0 if deductions is None else deductions)
        if claimed is None:
            raise NegativeDeductions("Deductions must be a valid non-negative amount.")
        if claimed < 0:
            raise NegativeDeductions("Deductions cannot be negative.")
        if claimed > MAX_AMOUNT:
            raise ExcessiveDeductions("Deductions cannot be more than income.")
        claimed = _whole_rupees(claimed)

        if claimed > gross:
            raise ExcessiveDeductions("Deductions cannot be more than income.")
    except TaxInputError as exc:
        # Log only the error code — no income values in logs
        logger.info("Input validation failed code=%s", exc.code)
        raise

    return gross, claimed


__all__ = [
    "TaxInputError",
    "InvalidIncome",
    "NegativeDeductions",
    "ExcessiveDeductions",
    "validate_inputs",
    "MAX_AMOUNT",
]
