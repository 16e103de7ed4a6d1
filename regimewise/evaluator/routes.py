"""
Evaluator HTTP routes — POST /api/calculate,
                        POST /api/regime/new,
                        POST /api/regime/old,
                        POST /api/break-even,
                        POST /api/export,
                        GET  /api/slabs

All handlers are thin adapters over the pure calculation core. Input errors
(TaxInputError) propagate to the handler registered in main.py.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse, StreamingResponse

from regimewise.config import settings
from regimewise.evaluator.advisor import evaluate
from regimewise.evaluator.break_even import build_break_even_hint
from regimewise.evaluator.pdf_generator import REPORT_FILENAME, generate_tax_report
from regimewise.evaluator.slabs import SLAB_TABLES
from regimewise.evaluator.tax_engine import compute_new_regime_tax, compute_old_regime_tax
from regimewise.inputs.schemas import ErrorResponse, IncomeInput, TaxInput
from regimewise.inputs.validator import validate_inputs

router = APIRouter(
    prefix="/api",
    tags=["evaluator"],
    responses={422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# POST /api/calculate
# ---------------------------------------------------------------------------

@router.post("/calculate")
async def calculate_tax(payload: TaxInput) -> JSONResponse:
    """
    Compare both regimes for {income, deductions}.

    Returns the full ComparisonReport: both breakdowns, recommendation,
    savings, effective rates, tax-free flag and break-even hint.
    """
    report = evaluate(
        payload.income,
        payload.deductions,
        tolerance=settings.break_even_tolerance,
    )
    logger.info(
        "Tax calculated recommended=%s savings=%s tax_free=%s break_even=%s",
        report.recommended_regime.value,
        report.savings,
        report.tax_free,
        report.break_even.status.value,
    )
    return JSONResponse(status_code=200, content=report.model_dump(mode="json"))


# ---------------------------------------------------------------------------
# Single-regime endpoints
# ---------------------------------------------------------------------------

@router.post("/regime/new")
async def new_regime_tax(payload: IncomeInput) -> JSONResponse:
    """New-regime RegimeResult for {income}."""
    income, _ = validate_inputs(payload.income)
    result = compute_new_regime_tax(income)
    return JSONResponse(status_code=200, content=result.model_dump(mode="json"))


@router.post("/regime/old")
async def old_regime_tax(payload: TaxInput) -> JSONResponse:
    """Old-regime RegimeResult for {income, deductions}."""
    income, deductions = validate_inputs(payload.income, payload.deductions)
    result = compute_old_regime_tax(income, deductions)
    return JSONResponse(status_code=200, content=result.model_dump(mode="json"))


# ---------------------------------------------------------------------------
# POST /api/break-even
# ---------------------------------------------------------------------------

@router.post("/break-even")
async def break_even(payload: IncomeInput) -> JSONResponse:
    """Deduction at which the old regime matches the new regime for {income}."""
    income, _ = validate_inputs(payload.income)
    hint = build_break_even_hint(income, settings.break_even_tolerance)
    logger.info("Break-even computed status=%s", hint.status.value)
    return JSONResponse(status_code=200, content=hint.model_dump(mode="json"))


# ---------------------------------------------------------------------------
# POST /api/export
# ---------------------------------------------------------------------------

@router.post("/export")
async def export_pdf(payload: TaxInput) -> StreamingResponse:
    """Generate and download a formatted PDF tax calculation."""
    report = evaluate(
        payload.income,
        payload.deductions,
        tolerance=settings.break_even_tolerance,
    )
    buffer = generate_tax_report(report)
    logger.info("PDF exported filename=%s", REPORT_FILENAME)

    return StreamingResponse(
        buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{REPORT_FILENAME}"'},
    )


# ---------------------------------------------------------------------------
# GET /api/slabs
# ---------------------------------------------------------------------------

@router.get("/slabs")
async def get_slabs() -> JSONResponse:
    """Slab tables for both regimes, keyed by regime name."""
    content = {name: table.model_dump(mode="json") for name, table in SLAB_TABLES.items()}
    return JSONResponse(status_code=200, content=content)
