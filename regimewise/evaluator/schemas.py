"""
schemas.py — Evaluator Pydantic v2 data contracts (FY 2025-26).

Defines:
  - Money / Rate       (Decimal aliases, serialised as JSON numbers)
  - TaxSlab, SlabTable (progressive bracket description per regime)
  - BreakdownLine      (signed ledger entry)
  - RegimeResult       (full tax computation for one regime)
  - BreakEvenHint      (deduction at which both regimes cost the same)
  - ComparisonReport   (dual-regime comparison — main Advisor output)

Every model is frozen: results are value objects built fresh per call.
Slab math runs on Decimal so that equality checks (rebate, ties) are exact.
"""
from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, model_validator

# ---------------------------------------------------------------------------
# Scalar aliases
# ---------------------------------------------------------------------------

# Rupee amount. Exact Decimal internally; plain number on the wire.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

# Marginal slab rate as a fraction in [0, 1], e.g. Decimal("0.05") for 5%.
Rate = Annotated[
    Decimal,
    Field(ge=0, le=1),
    PlainSerializer(float, return_type=float, when_used="json"),
]

RegimeName = Literal["new", "old"]

TAXABLE_INCOME_LABEL = "Taxable Income"


# ---------------------------------------------------------------------------
# Slab table
# ---------------------------------------------------------------------------

class TaxSlab(BaseModel):
    """One contiguous bracket. width=None marks the unbounded top slab."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_bound: Money = Field(ge=0)
    width: Optional[Money] = Field(default=None, gt=0)
    rate: Rate

    @property
    def upper_bound(self) -> Optional[Decimal]:
        if self.width is None:
            return None
        return self.lower_bound + self.width


class SlabTable(BaseModel):
    """
    Static progressive bracket description for one regime.

    Validated on construction:
      - first slab starts at 0
      - each slab starts where the previous one ends (no gaps, no overlaps)
      - exactly one slab is unbounded, and it is the last one
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    regime: RegimeName
    standard_deduction: Money = Field(ge=0)
    slabs: Tuple[TaxSlab, ...] = Field(min_length=1)
    # Section 87A: full rebate when taxable income <= ceiling. None = no rebate.
    rebate_ceiling: Optional[Money] = None

    @model_validator(mode="after")
    def _check_contiguous(self) -> "SlabTable":
        if self.slabs[0].lower_bound != 0:
            raise ValueError("first slab must start at 0")
        for prev, slab in zip(self.slabs, self.slabs[1:]):
            if prev.upper_bound is None:
                raise ValueError("only the last slab may be unbounded")
            if slab.lower_bound != prev.upper_bound:
                raise ValueError(
                    f"slab starting at {slab.lower_bound} does not follow "
                    f"slab ending at {prev.upper_bound}"
                )
        if self.slabs[-1].width is not None:
            raise ValueError("last slab must be unbounded")
        return self

    @property
    def exempt_limit(self) -> Decimal:
        """Upper bound of the leading 0% band (0 if the first slab is taxed)."""
        first = self.slabs[0]
        if first.rate == 0 and first.upper_bound is not None:
            return first.upper_bound
        return Decimal(0)


# ---------------------------------------------------------------------------
# RegimeResult — full tax calculation for one regime
# ---------------------------------------------------------------------------

class BreakdownLine(BaseModel):
    """
    Signed ledger entry. Deductions and rebates are negative;
    income and slab taxes are non-negative.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    label: str
    amount: Money


class RegimeResult(BaseModel):
    """
    Complete tax computation result for a single regime (old or new).

    Breakdown order (CRITICAL — breakdown_total() depends on it):
      Gross Income → Standard Deduction → [Other Deductions] → Taxable Income
      → slab lines ascending → [87A rebate]
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    regime: RegimeName
    gross_income: Money
    standard_deduction: Money
    other_deductions: Money = Decimal(0)    # Always 0 in the new regime
    taxable_income: Money
    total_tax: Money
    breakdown: Tuple[BreakdownLine, ...]

    def breakdown_total(self) -> Decimal:
        """
        Sum every line after "Taxable Income", floored at 0.
        Equals total_tax for every result the engine produces.
        """
        labels = [line.label for line in self.breakdown]
        start = labels.index(TAXABLE_INCOME_LABEL) + 1
        total = sum((line.amount for line in self.breakdown[start:]), Decimal(0))
        return max(Decimal(0), total)


# ---------------------------------------------------------------------------
# Comparison output
# ---------------------------------------------------------------------------

class RecommendedRegime(str, Enum):
    new = "new"
    old = "old"
    equal = "equal"


class BreakEvenStatus(str, Enum):
    not_needed = "not_needed"     # Old regime already as cheap as new at zero deductions
    reachable = "reachable"       # Deduction within [0, income] equalises both regimes
    unreachable = "unreachable"   # Old regime stays dearer for every valid deduction


class BreakEvenHint(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    status: BreakEvenStatus
    deduction: Optional[int] = None    # Set only when status == reachable
    message: str = ""


class ComparisonReport(BaseModel):
    """
    Output of evaluate() — the central Advisor response schema.

    Contains full calculations for both regimes, the recommendation (strictly
    lower tax, ties → equal), savings, effective rates and the break-even hint.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    income: Money
    deductions: Money

    new_regime: RegimeResult
    old_regime: RegimeResult

    recommended_regime: RecommendedRegime
    savings: Money                      # abs(new_tax - old_tax)

    effective_rate_new: Money           # % of gross income, 1 decimal place
    effective_rate_old: Money

    tax_free: bool                      # New-regime tax is 0 by the 87A rebate
    deductions_applicable: bool         # Old-regime deductions can change the outcome
    rationale: str
    break_even: BreakEvenHint


__all__ = [
    "Money",
    "Rate",
    "RegimeName",
    "TAXABLE_INCOME_LABEL",
    "TaxSlab",
    "SlabTable",
    "BreakdownLine",
    "RegimeResult",
    "RecommendedRegime",
    "BreakEvenStatus",
    "BreakEvenHint",
    "ComparisonReport",
]
