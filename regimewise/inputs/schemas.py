"""
schemas.py — Input Pydantic v2 data contracts.

Defines:
  - TaxInput, IncomeInput  (request bodies for the calculation endpoints)
  - ErrorDetail, ErrorBody, ErrorResponse  (cross-cutting error envelope)

Request bodies are structurally typed only. Range rules (income >= 0,
0 <= deductions <= income) live in validator.py so every caller — HTTP
or library — gets the same InvalidIncome / NegativeDeductions /
ExcessiveDeductions errors.
"""
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

class IncomeInput(BaseModel):
    """Gross annual income only — new regime and break-even endpoints."""
    model_config = ConfigDict(extra="forbid")

    income: Decimal = Field(
        ...,
        description="Gross annual income in INR (whole rupees; fractions are rounded).",
    )


class TaxInput(IncomeInput):
    """Gross annual income plus old-regime deductions."""

    deductions: Decimal = Field(
        default=Decimal(0),
        description=(
            "Total old-regime deductions claimed (80C, 80D, HRA, 24(b), ...) in INR, "
            "excluding the ₹50,000 standard deduction. Ignored by the new regime."
        ),
    )


# ---------------------------------------------------------------------------
# Error response models — used by main.py exception handlers (cross-cutting)
# ---------------------------------------------------------------------------

class ErrorDetail(BaseModel):
    """Single field-level validation error."""
    model_config = ConfigDict(extra="forbid")

    field: Optional[str] = None   # Dot-notation field path, e.g. "deductions"
    issue: str                     # Human-readable description of the problem


class ErrorBody(BaseModel):
    """Error envelope body."""
    model_config = ConfigDict(extra="forbid")

    code: str                                      # VALIDATION_ERROR, INVALID_INCOME, etc.
    message: str                                   # High-level error description
    details: List[ErrorDetail] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """
    Standard error response format for all RegimeWise endpoints.

    Structure: {"error": {"code": "...", "message": "...", "details": [...]}}
    """
    model_config = ConfigDict(extra="forbid")

    error: ErrorBody


__all__ = [
    "IncomeInput",
    "TaxInput",
    "ErrorDetail",
    "ErrorBody",
    "ErrorResponse",
]
