"""
RegimeWise slab tables — FY 2025-26 (Budget 2025)

New regime slabs were COMPLETELY REVISED in Budget 2025 (Finance Act 2025):
  Old: 3L/6L/9L/12L/15L breakpoints
  New: 4L/8L/12L/16L/20L/24L breakpoints  ← use these
Old regime slabs are unchanged.

Tables are built once at import and validated by SlabTable (contiguous,
non-overlapping, single unbounded top slab).
"""
from __future__ import annotations

from decimal import Decimal

from regimewise.evaluator.schemas import SlabTable, TaxSlab

# ===========================================================================
# OLD REGIME SLAB BREAKPOINTS
# ===========================================================================

OLD_SLAB_2_5L = 250_000
OLD_SLAB_5L   = 500_000
OLD_SLAB_10L  = 1_000_000

# ===========================================================================
# NEW REGIME SLAB BREAKPOINTS — Budget 2025
# ===========================================================================

NEW_SLAB_4L  = 400_000
NEW_SLAB_8L  = 800_000
NEW_SLAB_12L = 1_200_000
NEW_SLAB_16L = 1_600_000
NEW_SLAB_20L = 2_000_000
NEW_SLAB_24L = 2_400_000

# ===========================================================================
# STANDARD DEDUCTIONS & 87A
# ===========================================================================

OLD_STD_DEDUCTION = 50_000
NEW_STD_DEDUCTION = 75_000

# Full rebate when new-regime taxable income <= ₹12L. No rebate in the old regime.
NEW_87A_TAXABLE_CEILING = 1_200_000

# Gross income up to which new-regime tax is always 0:
# ₹12L taxable ceiling + ₹75K standard deduction = ₹12.75L.
ZERO_TAX_GROSS_CEILING = NEW_87A_TAXABLE_CEILING + NEW_STD_DEDUCTION


def _slab(lower: int, upper: int | None, rate: str) -> TaxSlab:
    width = None if upper is None else Decimal(upper - lower)
    return TaxSlab(lower_bound=Decimal(lower), width=width, rate=Decimal(rate))


# ===========================================================================
# SLAB TABLES
# ===========================================================================

OLD_REGIME = SlabTable(
    regime="old",
    standard_deduction=Decimal(OLD_STD_DEDUCTION),
    slabs=(
        _slab(0,             OLD_SLAB_2_5L, "0.00"),   # 0–2.5L: 0%
        _slab(OLD_SLAB_2_5L, OLD_SLAB_5L,   "0.05"),   # 2.5–5L: 5%
        _slab(OLD_SLAB_5L,   OLD_SLAB_10L,  "0.20"),   # 5–10L: 20%
        _slab(OLD_SLAB_10L,  None,          "0.30"),   # >10L: 30%
    ),
)

NEW_REGIME = SlabTable(
    regime="new",
    standard_deduction=Decimal(NEW_STD_DEDUCTION),
    slabs=(
        _slab(0,            NEW_SLAB_4L,  "0.00"),   # 0–4L: 0%
        _slab(NEW_SLAB_4L,  NEW_SLAB_8L,  "0.05"),   # 4–8L: 5%
        _slab(NEW_SLAB_8L,  NEW_SLAB_12L, "0.10"),   # 8–12L: 10%
        _slab(NEW_SLAB_12L, NEW_SLAB_16L, "0.15"),   # 12–16L: 15%
        _slab(NEW_SLAB_16L, NEW_SLAB_20L, "0.20"),   # 16–20L: 20%
        _slab(NEW_SLAB_20L, NEW_SLAB_24L, "0.25"),   # 20–24L: 25%
        _slab(NEW_SLAB_24L, None,         "0.30"),   # >24L: 30%
    ),
    rebate_ceiling=Decimal(NEW_87A_TAXABLE_CEILING),
)

SLAB_TABLES: dict[str, SlabTable] = {
    "new": NEW_REGIME,
    "old": OLD_REGIME,
}
