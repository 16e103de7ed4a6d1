"""
pdf_generator.py — RegimeWise PDF report generator.

Builds a formatted PDF tax calculation using reportlab PLATYPUS.
Output is a BytesIO buffer (no temp file on disk).

Entry point:
    generate_tax_report(report) -> BytesIO

CRITICAL: buffer.seek(0) is called after doc.build(story) — mandatory because
reportlab leaves the buffer position at the end after writing. Skipping seek(0)
produces a 0-byte PDF response.

PDF sections:
  1. Header (title, financial year, income, deductions)
  2a. Tax-free callout (income up to ₹12.75L) — report ends here, or
  2b. Regime comparison table (recommended column highlighted)
  3. Recommendation callout
  4. New / old regime breakdown tables with "Total Tax Liability" row
  5. Break-even hint
  Footer on every page: generation date + "Page N of M"

Color palette:
  - #D5F5E3  GREEN_LIGHT  Recommended regime column, callouts
  - #F2F2F2  GREY_LIGHT   Table headers, non-recommended column
"""
from __future__ import annotations

import datetime
import logging
from io import BytesIO

from reportlab.lib.colors import HexColor, black
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas
from reportlab.platypus import (
    KeepTogether,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from regimewise.config import settings
from regimewise.evaluator.formatting import format_inr, format_percent
from regimewise.evaluator.schemas import (
    BreakEvenStatus,
    ComparisonReport,
    RecommendedRegime,
    RegimeResult,
)

logger = logging.getLogger(__name__)

REPORT_FILENAME = "tax-calculation.pdf"

# ---------------------------------------------------------------------------
# Colour constants
# ---------------------------------------------------------------------------

GREEN_LIGHT = HexColor("#D5F5E3")   # Recommended regime highlight
GREY_LIGHT  = HexColor("#F2F2F2")   # Headers / non-recommended column

_MARGIN = 20 * mm


# ---------------------------------------------------------------------------
# Footer canvas — two-pass so the total page count is known
# ---------------------------------------------------------------------------

class _NumberedCanvas(canvas.Canvas):
    """Defers page output until save() so each footer can print 'Page N of M'."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states: list[dict] = []
        self._generated_on = datetime.date.today().strftime("%d %B %Y")

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self._draw_footer(page_count)
            super().showPage()
        super().save()

    def _draw_footer(self, page_count: int) -> None:
        width, _ = self._pagesize
        self.setFont("Helvetica", 8)
        self.drawString(_MARGIN, 10 * mm, f"Generated on {self._generated_on}")
        self.drawRightString(width - _MARGIN, 10 * mm, f"Page {self._pageNumber} of {page_count}")


# ---------------------------------------------------------------------------
# Private section builders
# ---------------------------------------------------------------------------

def _callout(text: str, styles) -> Table:
    """Single-cell Table with GREEN_LIGHT background."""
    callout_style = ParagraphStyle(
        "callout",
        parent=styles["Normal"],
        fontSize=12,
        leading=16,
        fontName="Helvetica-Bold",
    )
    table = Table([[Paragraph(text, callout_style)]], colWidths=[170 * mm])
    table.setStyle(
        TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), GREEN_LIGHT),
            ("BOX", (0, 0), (-1, -1), 1, black),
            ("TOPPADDING", (0, 0), (-1, -1), 10),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 10),
            ("LEFTPADDING", (0, 0), (-1, -1), 12),
        ])
    )
    return table


def _build_comparison_table(report: ComparisonReport) -> Table:
    """
    Regime comparison table with 3 columns: label | New | Old.

    Recommended regime column header gets GREEN_LIGHT + bold. On a tie both
    headers stay GREY_LIGHT.
    """
    new = report.new_regime
    old = report.old_regime

    data = [
        ["", "New Regime", "Old Regime"],
        ["Taxable Income", format_inr(new.taxable_income), format_inr(old.taxable_income)],
        ["Effective Rate",
         format_percent(report.effective_rate_new),
         format_percent(report.effective_rate_old)],
        ["Total Tax Payable", format_inr(new.total_tax), format_inr(old.total_tax)],
    ]

    style_cmds = [
        ("BACKGROUND", (1, 0), (-1, 0), GREY_LIGHT),
        ("GRID", (0, 0), (-1, -1), 0.5, black),
        ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
        ("ALIGN", (0, 0), (0, -1), "LEFT"),
        ("TOPPADDING", (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
        ("LEFTPADDING", (0, 0), (0, -1), 6),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
    ]
    if report.recommended_regime is not RecommendedRegime.equal:
        rec_col = 1 if report.recommended_regime is RecommendedRegime.new else 2
        style_cmds += [
            ("BACKGROUND", (rec_col, 0), (rec_col, 0), GREEN_LIGHT),
            ("FONTNAME", (rec_col, 0), (rec_col, 0), "Helvetica-Bold"),
        ]

    t = Table(data, colWidths=[80 * mm, 45 * mm, 45 * mm])
    t.setStyle(TableStyle(style_cmds))
    return t


def _build_breakdown_table(result: RegimeResult) -> Table:
    """Signed breakdown lines plus the 'Total Tax Liability' row."""
    data = [["Item", "Amount"]]
    data += [[line.label, format_inr(line.amount)] for line in result.breakdown]
    data.append(["Total Tax Liability", format_inr(result.breakdown_total())])

    style_cmds = [
        ("BACKGROUND", (0, 0), (-1, 0), GREY_LIGHT),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.5, black),
        ("ALIGN", (1, 0), (1, -1), "RIGHT"),
        ("ALIGN", (0, 0), (0, -1), "LEFT"),
        ("FONTSIZE", (0, 1), (-1, -2), 9),
        ("TOPPADDING", (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
        ("LEFTPADDING", (0, 0), (0, -1), 6),
    ]

    t = Table(data, colWidths=[125 * mm, 45 * mm], repeatRows=1)
    t.setStyle(TableStyle(style_cmds))
    return t


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def generate_tax_report(report: ComparisonReport) -> BytesIO:
    """
    Generate a formatted PDF tax calculation.

    Args:
        report: ComparisonReport from evaluate().

    Returns:
        BytesIO buffer at position 0, ready for StreamingResponse.
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=_MARGIN,
        rightMargin=_MARGIN,
        topMargin=_MARGIN,
        bottomMargin=_MARGIN,
        title=f"Income Tax Calculation ({settings.financial_year})",
    )

    styles = getSampleStyleSheet()
    story = []

    # -----------------------------------------------------------------------
    # 1. Header block
    # -----------------------------------------------------------------------

    title_style = ParagraphStyle(
        "report_title",
        parent=styles["Heading1"],
        fontSize=16,
        fontName="Helvetica-Bold",
    )
    story.append(Paragraph(f"Income Tax Calculation ({settings.financial_year})", title_style))
    story.append(Spacer(1, 2 * mm))
    story.append(Paragraph(f"Annual Income: {format_inr(report.income)}", styles["Normal"]))
    if report.deductions > 0:
        story.append(
            Paragraph(f"Total Deductions: {format_inr(report.deductions)}", styles["Normal"])
        )
    story.append(Spacer(1, 6 * mm))

    # -----------------------------------------------------------------------
    # 2a. Tax-free income — callout only
    # -----------------------------------------------------------------------

    if report.tax_free:
        story.append(_callout("Good News! " + report.rationale, styles))
        doc.build(story, canvasmaker=_NumberedCanvas)
        buffer.seek(0)
        logger.info("PDF report built tax_free=True bytes=%d", len(buffer.getvalue()))
        return buffer

    # -----------------------------------------------------------------------
    # 2b. Regime comparison table
    # -----------------------------------------------------------------------

    comparison_heading = Paragraph("Tax Comparison", styles["Heading2"])
    story.append(
        KeepTogether([comparison_heading, Spacer(1, 2 * mm), _build_comparison_table(report)])
    )
    story.append(Spacer(1, 6 * mm))

    # -----------------------------------------------------------------------
    # 3. Recommendation callout
    # -----------------------------------------------------------------------

    story.append(_callout(report.rationale, styles))
    story.append(Spacer(1, 8 * mm))

    # -----------------------------------------------------------------------
    # 4. Breakdown tables
    # -----------------------------------------------------------------------

    for heading, result in (
        ("New Regime Breakdown", report.new_regime),
        ("Old Regime Breakdown", report.old_regime),
    ):
        story.append(
            KeepTogether([
                Paragraph(heading, styles["Heading2"]),
                Spacer(1, 2 * mm),
                _build_breakdown_table(result),
            ])
        )
        story.append(Spacer(1, 6 * mm))

    # -----------------------------------------------------------------------
    # 5. Break-even hint (only when the new regime is cheaper)
    # -----------------------------------------------------------------------

    if report.break_even.status is not BreakEvenStatus.not_needed:
        story.append(Paragraph("Break-even Deductions", styles["Heading2"]))
        story.append(Paragraph(report.break_even.message, styles["Normal"]))

    doc.build(story, canvasmaker=_NumberedCanvas)

    # CRITICAL: reset position so StreamingResponse reads from the start
    buffer.seek(0)
    logger.info("PDF report built tax_free=False bytes=%d", len(buffer.getvalue()))
    return buffer
