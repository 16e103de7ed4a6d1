"""
Break-even solver tests — FY 2025-26

The search returns the first midpoint within tolerance, so assertions on the
deduction itself are range checks; the tax equality it implies is exact.
"""
from __future__ import annotations

from decimal import Decimal

import pytest

from regimewise.evaluator import break_even
from regimewise.evaluator.break_even import (
    UNREACHABLE_MESSAGE,
    build_break_even_hint,
    find_break_even_deduction,
)
from regimewise.evaluator.schemas import BreakEvenStatus
from regimewise.evaluator.tax_engine import compute_new_regime_tax, compute_old_regime_tax


# ---------------------------------------------------------------------------
# find_break_even_deduction
# ---------------------------------------------------------------------------

def test_break_even_15L_near_exact_crossover() -> None:
    """New tax 93,750; old tax matches at taxable 1,450,000 - d = 906,250 → d = 543,750."""
    deduction = find_break_even_deduction(1_500_000)
    assert 543_745 < deduction < 543_755
    old_tax = compute_old_regime_tax(1_500_000, deduction).total_tax
    assert abs(old_tax - Decimal(93_750)) < 1


def test_break_even_tight_tolerance_converges_to_exact_value() -> None:
    assert find_break_even_deduction(1_500_000, Decimal("0.01")) == 543_750


@pytest.mark.parametrize("income", [1_500_000, 2_000_000, 3_000_000, 5_000_000])
def test_break_even_result_within_tolerance(income: int) -> None:
    deduction = find_break_even_deduction(income)
    assert 0 <= deduction <= income
    new_tax = compute_new_regime_tax(income).total_tax
    old_tax = compute_old_regime_tax(income, deduction).total_tax
    assert abs(old_tax - new_tax) < 1


def test_break_even_zero_income_returns_zero() -> None:
    # Both regimes are 0 at the first midpoint
    assert find_break_even_deduction(0) == 0


# ---------------------------------------------------------------------------
# build_break_even_hint
# ---------------------------------------------------------------------------

def test_hint_reachable_carries_deduction_and_message() -> None:
    hint = build_break_even_hint(1_500_000)
    assert hint.status == BreakEvenStatus.reachable
    assert 543_745 < hint.deduction < 543_755
    assert hint.message.startswith("You need deductions of ₹5,43,7")
    assert hint.message.endswith(" to have same tax in both regimes.")


@pytest.mark.parametrize("income", [500_000, 1_000_000, 1_200_000, 1_275_000])
def test_hint_not_needed_for_tax_free_income(income: int) -> None:
    """Up to ₹12.75L the new regime is already ₹0, even though old tax is positive."""
    assert compute_old_regime_tax(income, 0).total_tax > 0
    hint = build_break_even_hint(income)
    assert hint.status == BreakEvenStatus.not_needed
    assert hint.deduction is None


def test_hint_reachable_one_rupee_above_tax_free_ceiling() -> None:
    hint = build_break_even_hint(1_275_001)
    assert hint.status == BreakEvenStatus.reachable
    new_tax = compute_new_regime_tax(1_275_001).total_tax
    old_tax = compute_old_regime_tax(1_275_001, hint.deduction).total_tax
    assert abs(old_tax - new_tax) < 1


@pytest.mark.parametrize("income", [0, 100_000, 300_000])
def test_hint_not_needed_for_income_inside_old_exempt_band(income: int) -> None:
    hint = build_break_even_hint(income)
    assert hint.status == BreakEvenStatus.not_needed
    assert hint.deduction is None
    assert hint.message == ""


def test_hint_unreachable_when_search_overshoots_income(monkeypatch) -> None:
    # Real tables never get here: at deductions == income old tax is 0 <= new tax.
    monkeypatch.setattr(break_even, "find_break_even_deduction", lambda income, tolerance: income + 1)
    hint = build_break_even_hint(2_000_000)
    assert hint.status == BreakEvenStatus.unreachable
    assert hint.deduction is None
    assert hint.message == UNREACHABLE_MESSAGE
