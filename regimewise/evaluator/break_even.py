"""
RegimeWise break-even solver — FY 2025-26

Finds the old-regime deduction at which old-regime tax matches the
(deduction-independent) new-regime tax.

Search semantics are approximate:
the first integer midpoint within `tolerance` rupees is returned, which is not
necessarily the smallest such deduction. Relies on old-regime tax being
non-increasing in deductions.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Union

from regimewise.evaluator.formatting import format_inr
from regimewise.evaluator.schemas import BreakEvenHint, BreakEvenStatus
from regimewise.evaluator.slabs import ZERO_TAX_GROSS_CEILING
from regimewise.evaluator.tax_engine import compute_new_regime_tax, compute_old_regime_tax

logger = logging.getLogger(__name__)

BREAK_EVEN_TOLERANCE = Decimal(1)   # ₹1

UNREACHABLE_MESSAGE = "Old regime tax will always be higher for this income."


def find_break_even_deduction(
    income: Union[int, Decimal],
    tolerance: Decimal = BREAK_EVEN_TOLERANCE,
) -> int:
    """
    Binary search over integer deductions in [0, income].

    Returns the first midpoint whose old-regime tax is within `tolerance` of the
    new-regime tax. When the bracket empties without a hit, returns the final
    lower bound — which is income + 1 when no deduction in range is enough.
    Callers must treat a result > income as "old regime can never match".
    """
    new_tax = compute_new_regime_tax(income).total_tax
    left, right = 0, int(income)

    while left <= right:
        mid = (left + right) // 2
        old_tax = compute_old_regime_tax(income, mid).total_tax

        if abs(old_tax - new_tax) < tolerance:
            return mid

        if old_tax > new_tax:
            left = mid + 1     # Need more deductions
        else:
            right = mid - 1

    return left


def build_break_even_hint(
    income: Union[int, Decimal],
    tolerance: Decimal = BREAK_EVEN_TOLERANCE,
) -> BreakEvenHint:
    """
    Break-even hint for the comparison report.

    Only meaningful when the new regime is cheaper at zero deductions; otherwise
    the old regime is already at least as good and no deduction target exists.
    Income up to ₹12.75L is tax-free under the new regime, so no hint is given.
    """
    if income <= ZERO_TAX_GROSS_CEILING:
        return BreakEvenHint(status=BreakEvenStatus.not_needed)

    new_tax = compute_new_regime_tax(income).total_tax
    old_tax = compute_old_regime_tax(income, 0).total_tax

    if new_tax >= old_tax:
        return BreakEvenHint(status=BreakEvenStatus.not_needed)

    deduction = find_break_even_deduction(income, tolerance)
    if deduction > income:
        logger.debug("Break-even unreachable income=%s", income)
        return BreakEvenHint(status=BreakEvenStatus.unreachable, message=UNREACHABLE_MESSAGE)

    return BreakEvenHint(
        status=BreakEvenStatus.reachable,
        deduction=deduction,
        message=(
            f"You need deductions of {format_inr(deduction)} "
            "to have same tax in both regimes."
        ),
    )
