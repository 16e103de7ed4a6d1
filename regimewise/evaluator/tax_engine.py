"""
RegimeWise Tax Engine — FY 2025-26 (Budget 2025)
Pure Python, deterministic. Same input → same output.

Public API:
    compute_new_regime_tax(income)              -> RegimeResult
    compute_old_regime_tax(income, deductions)  -> RegimeResult

Both are caller-validated: income >= 0 and 0 <= deductions <= income
(see regimewise.inputs.validator). Once inputs are valid these functions
cannot fail.

Breakdown is a signed ledger. Lines after "Taxable Income" sum to total_tax.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Optional, Union

from regimewise.evaluator.formatting import format_inr, format_rate
from regimewise.evaluator.schemas import (
    TAXABLE_INCOME_LABEL,
    BreakdownLine,
    RegimeResult,
    SlabTable,
)
from regimewise.evaluator.slabs import NEW_REGIME, OLD_REGIME

Amount = Union[int, float, Decimal]

ZERO = Decimal(0)


# ===========================================================================
# INTERNAL HELPERS (pure functions — no side effects, no I/O)
# ===========================================================================

def _as_decimal(value: Amount) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _slab_label(portion: Decimal, rate: Decimal, lower: Decimal, upper: Optional[Decimal]) -> str:
    if upper is None:
        bracket = f"above {format_inr(lower)}"
    else:
        bracket = f"{format_inr(lower)} to {format_inr(upper)}"
    return f"Tax on {format_inr(portion)} @ {format_rate(rate)}% ({bracket})"


def _slab_lines(taxable_income: Decimal, table: SlabTable) -> tuple[Decimal, list[BreakdownLine]]:
    """
    Apply progressive slab tax to taxable_income, one line per entered taxed slab.
    Marginal: income inside a slab is taxed only at that slab's rate.
    The leading 0% band produces no line here.
    """
    tax = ZERO
    lines: list[BreakdownLine] = []
    for slab in table.slabs:
        if taxable_income <= slab.lower_bound:
            break
        if slab.rate == 0:
            continue
        upper = slab.upper_bound
        top = taxable_income if upper is None else min(taxable_income, upper)
        portion = top - slab.lower_bound
        slab_tax = portion * slab.rate
        lines.append(BreakdownLine(
            label=_slab_label(portion, slab.rate, slab.lower_bound, upper),
            amount=slab_tax,
        ))
        tax += slab_tax
    return tax, lines


def _compute(
    table: SlabTable,
    income: Amount,
    deductions: Optional[Amount] = None,
) -> RegimeResult:
    """
    Shared computation sequence (order determines correctness):
      1. taxable_income = max(0, gross - standard_deduction - other_deductions)
      2. taxable <= 0% band → single zero line, tax = 0, done
      3. slab lines ascending
      4. 87A: taxable <= rebate_ceiling → rebate line negates the running tax
    """
    gross = _as_decimal(income)
    other = ZERO if deductions is None else _as_decimal(deductions)
    std = table.standard_deduction

    # Step 1: Taxable income (never negative)
    taxable_income = max(ZERO, gross - std - other)

    breakdown: list[BreakdownLine] = [
        BreakdownLine(label="Gross Income", amount=gross),
        BreakdownLine(label="Standard Deduction", amount=-std),
    ]
    if deductions is not None:
        breakdown.append(BreakdownLine(label="Other Deductions", amount=-other))
    breakdown.append(BreakdownLine(label=TAXABLE_INCOME_LABEL, amount=taxable_income))

    # Step 2: Entirely inside the exempt band
    exempt_limit = table.exempt_limit
    if taxable_income <= exempt_limit:
        breakdown.append(BreakdownLine(
            label=f"Tax on income up to {format_inr(exempt_limit)} @ 0%",
            amount=ZERO,
        ))
        tax = ZERO
    else:
        # Step 3: Slab tax
        tax, lines = _slab_lines(taxable_income, table)
        breakdown.extend(lines)

        # Step 4: 87A rebate — full cancellation, result exactly 0
        ceiling = table.rebate_ceiling
        if ceiling is not None and taxable_income <= ceiling:
            breakdown.append(BreakdownLine(
                label=f"Rebate under Section 87A (income up to {format_inr(ceiling)})",
                amount=-tax,
            ))
            tax = ZERO

    return RegimeResult(
        regime=table.regime,
        gross_income=gross,
        standard_deduction=std,
        other_deductions=other,
        taxable_income=taxable_income,
        total_tax=tax,
        breakdown=tuple(breakdown),
    )


# ===========================================================================
# NEW REGIME CALCULATOR
# ===========================================================================

def compute_new_regime_tax(income: Amount) -> RegimeResult:
    """
    New regime tax calculation for FY 2025-26 (Budget 2025, Section 115BAC).

    Deductions allowed: std deduction ₹75K only.
    87A: full rebate if taxable <= ₹12L, so gross income up to ₹12.75L pays ₹0.
    Budget 2025 slabs: 0-4L/4-8L/8-12L/12-16L/16-20L/20-24L/>24L
    """
    return _compute(NEW_REGIME, income)


# ===========================================================================
# OLD REGIME CALCULATOR
# ===========================================================================

def compute_old_regime_tax(income: Amount, deductions: Amount = 0) -> RegimeResult:
    """
    Old regime tax calculation for FY 2025-26.

    Deductions: std deduction ₹50K plus the claimed total (80C, 80D, HRA, ...)
    as a single figure. Slabs 0-2.5L/2.5-5L/5-10L/>10L at 0/5/20/30%.
    No rebate rule applies.
    """
    return _compute(OLD_REGIME, income, deductions)


__all__ = [
    "compute_new_regime_tax",
    "compute_old_regime_tax",
]
