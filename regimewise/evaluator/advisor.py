"""
RegimeWise Advisor — validates input, runs both regimes, compares.

Public API:
    evaluate(income, deductions=0) -> ComparisonReport

Raises InvalidIncome / NegativeDeductions / ExcessiveDeductions before any
computation. Both regimes are always computed; for gross income up to
₹12.75L the new-regime tax is exactly 0 by the 87A rebate.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from regimewise.evaluator.break_even import BREAK_EVEN_TOLERANCE, build_break_even_hint
from regimewise.evaluator.formatting import format_inr
from regimewise.evaluator.schemas import ComparisonReport, RecommendedRegime
from regimewise.evaluator.slabs import NEW_87A_TAXABLE_CEILING, ZERO_TAX_GROSS_CEILING
from regimewise.evaluator.tax_engine import compute_new_regime_tax, compute_old_regime_tax
from regimewise.inputs.validator import validate_inputs


def effective_rate(total_tax: Decimal, income: Decimal) -> Decimal:
    """Tax as a percentage of gross income, one decimal place (0 for zero income)."""
    if income == 0:
        return Decimal("0.0")
    return (total_tax * 100 / income).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def _recommend(new_tax: Decimal, old_tax: Decimal) -> RecommendedRegime:
    if new_tax < old_tax:
        return RecommendedRegime.new
    if old_tax < new_tax:
        return RecommendedRegime.old
    return RecommendedRegime.equal


def _rationale(
    income: Decimal,
    new_tax: Decimal,
    old_tax: Decimal,
    recommended: RecommendedRegime,
    tax_free: bool,
) -> str:
    if tax_free:
        return (
            f"Your income of {format_inr(income)} is completely tax-free under the new regime. "
            f"There is no tax liability for taxable income up to "
            f"{format_inr(NEW_87A_TAXABLE_CEILING)} under the new tax regime."
        )
    if recommended is RecommendedRegime.equal:
        return f"Both tax regimes result in the same tax liability ({format_inr(new_tax)})."

    if recommended is RecommendedRegime.new:
        winner, loser, win_tax, lose_tax = "New", "Old", new_tax, old_tax
    else:
        winner, loser, win_tax, lose_tax = "Old", "New", old_tax, new_tax
    return (
        f"Choose the {winner} Tax Regime: you save {format_inr(lose_tax - win_tax)} annually. "
        f"{winner} Regime tax: {format_inr(win_tax)} vs {loser} Regime tax: {format_inr(lose_tax)}."
    )


def evaluate(
    income: Any,
    deductions: Any = 0,
    tolerance: Decimal = BREAK_EVEN_TOLERANCE,
) -> ComparisonReport:
    """
    Compare old and new regime tax for the given income and deductions.

    Recommends the strictly cheaper regime; ties → RecommendedRegime.equal.
    savings = |new_tax - old_tax|. `tolerance` is passed to the break-even search.
    """
    # Step 1: Validate (raises before any computation)
    gross, claimed = validate_inputs(income, deductions)

    # Step 2: Calculate both regimes
    new = compute_new_regime_tax(gross)
    old = compute_old_regime_tax(gross, claimed)

    # Step 3: Determine winner
    recommended = _recommend(new.total_tax, old.total_tax)
    savings = abs(new.total_tax - old.total_tax)

    # Step 4: Single canonical threshold for the tax-free view and deductions field
    tax_free = gross <= ZERO_TAX_GROSS_CEILING

    return ComparisonReport(
        income=gross,
        deductions=claimed,
        new_regime=new,
        old_regime=old,
        recommended_regime=recommended,
        savings=savings,
        effective_rate_new=effective_rate(new.total_tax, gross),
        effective_rate_old=effective_rate(old.total_tax, gross),
        tax_free=tax_free,
        deductions_applicable=not tax_free,
        rationale=_rationale(gross, new.total_tax, old.total_tax, recommended, tax_free),
        break_even=build_break_even_hint(gross, tolerance),
    )


__all__ = ["evaluate", "effective_rate"]
