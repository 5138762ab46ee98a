# salesdesk/domain/services/document_pdf.py
"""
Default PDF renderer for sales documents.
Uses ReportLab; optional sections follow the tenant's print configuration.
"""

from __future__ import annotations

import io
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from salesdesk.domain.models.documents import DocumentType
from salesdesk.domain.services.document_totals import amount_in_words, compute_line, coerce_item, money
from salesdesk.domain.services.document_service import totals_from_record
from salesdesk.domain.services.print_config import merged_options

logger = logging.getLogger("document_pdf")

TITLES: dict[str, str] = {
    DocumentType.QUOTATION.value: "QUOTATION",
    DocumentType.PROFORMA.value: "PROFORMA INVOICE",
    DocumentType.ORDER.value: "SALES ORDER",
    DocumentType.INVOICE.value: "TAX INVOICE",
    DocumentType.PURCHASE_ORDER.value: "PURCHASE ORDER",
    DocumentType.DELIVERY_CHALLAN.value: "DELIVERY CHALLAN",
}

GRID_COLOR = colors.Color(0.8, 0.8, 0.8)
HEADER_COLOR = colors.Color(0.2, 0.3, 0.5)


def _fmt_amount(val: Any) -> str:
    if val is None:
        return "0.00"
    try:
        return f"{Decimal(str(val)):,.2f}"
    except (ArithmeticError, ValueError, TypeError):
        return str(val)


def _address(document: Any, prefix: str = "") -> str:
    parts = [
        getattr(document, f"{prefix}address_line1"),
        getattr(document, f"{prefix}address_line2"),
        getattr(document, f"{prefix}city"),
        getattr(document, f"{prefix}state"),
        getattr(document, f"{prefix}pincode"),
        getattr(document, f"{prefix}country"),
    ]
    return ", ".join(str(p) for p in parts if p)


def _party_rows(document: Any, options: dict[str, bool]) -> list[list[str]]:
    contact = " ".join(p for p in (document.contact_person_title, document.contact_person) if p)
    rows = []
    if options["company_before_poc"]:
        rows.append(["Company", document.customer_company or ""])
    if options["contact_person_name"] and contact:
        rows.append(["Contact", contact])
    if not options["company_before_poc"]:
        rows.append(["Company", document.customer_company or ""])
    if options["mobile"] and document.phone:
        rows.append(["Phone", document.phone])
    if options["email"] and document.email:
        rows.append(["Email", document.email])
    if options["party_gstin"] and document.gstin:
        rows.append(["GSTIN", document.gstin])
    rows.append(["Billing Address", _address(document)])
    rows.append(["Shipping Address", _address(document, "shipping_")])
    return rows


def _item_table(document: Any, options: dict[str, bool]) -> Table:
    header = ["#", "Description"]
    if options["hsn_sac"]:
        header.append("HSN/SAC")
    header += ["Qty", "Rate"]
    if options["discount_amt"]:
        header.append("Discount")
    if options["taxable_amount"]:
        header.append("Taxable")
    if options["gst_amounts"]:
        header.append("GST")
    if options["lead_time"]:
        header.append("Lead Time")
    header.append("Amount")

    rows = [header]
    for i, raw in enumerate(document.items or []):
        item = coerce_item(raw, i)
        line = compute_line(item)
        description = item.description
        if options["item_code"] and item.item_code:
            description = f"[{item.item_code}] {description}"
        row = [str(i + 1), description]
        if options["hsn_sac"]:
            row.append(item.hsn_sac or "")
        row += [f"{item.quantity} {item.unit}", _fmt_amount(item.rate)]
        if options["discount_amt"]:
            row.append(_fmt_amount(money(line.discount_amount)))
        if options["taxable_amount"]:
            row.append(_fmt_amount(money(line.taxable_amount)))
        if options["gst_amounts"]:
            row.append(_fmt_amount(money(line.cgst + line.sgst + line.igst)))
        if options["lead_time"]:
            row.append(item.lead_time or "")
        row.append(_fmt_amount(money(line.amount)))
        rows.append(row)

    table = Table(rows, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ]
        )
    )
    return table


def _totals_rows(document: Any, options: dict[str, bool]) -> list[list[str]]:
    totals = totals_from_record(document)
    rows = [["Description", "Amount (Rs)"], ["Subtotal", _fmt_amount(totals.subtotal)]]
    if options["gst_summary"]:
        if totals.cgst_total:
            rows.append(["CGST", _fmt_amount(totals.cgst_total)])
        if totals.sgst_total:
            rows.append(["SGST", _fmt_amount(totals.sgst_total)])
        if totals.igst_total:
            rows.append(["IGST", _fmt_amount(totals.igst_total)])
    for charge in document.extra_charges or []:
        rows.append([charge.get("description") or "Extra charge", _fmt_amount(charge.get("amount"))])
    for discount in document.discounts or []:
        rows.append([discount.get("description") or "Discount", "-" + _fmt_amount(discount.get("amount"))])
    if options["total_before_round_off"]:
        rows.append(["Total before round off", _fmt_amount(totals.total_amount)])
    rows.append(["TOTAL AMOUNT", _fmt_amount(totals.total_amount)])
    return rows


def render_document_pdf(
    document: Any,
    print_config: dict[str, Any] | None = None,
    title: str | None = None,
) -> bytes:
    """
    Render a document to PDF.

    ``title`` overrides the heading, e.g. printing a quotation as a proforma
    invoice or delivery challan without converting it.
    """
    options = merged_options(print_config)
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=f"{document.number}",
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "DocumentTitle",
        parent=styles["Heading1"],
        fontSize=16,
        alignment=1,
        spaceAfter=10,
    )
    small_style = ParagraphStyle(
        "Small",
        parent=styles["Normal"],
        fontSize=8,
        textColor=colors.grey,
    )

    elements = []
    heading = title or TITLES.get(document.document_type, document.document_type.upper())
    if options["header"]:
        elements.append(Paragraph(heading, title_style))

    header_data = [
        ["Number", document.number, "Date", str(document.document_date or "")],
        ["Reference", document.reference or "", "Valid Until", str(document.valid_until or "")],
    ]
    header_table = Table(header_data, colWidths=[80, 150, 80, 150])
    header_table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (0, -1), colors.Color(0.95, 0.95, 0.95)),
                ("BACKGROUND", (2, 0), (2, -1), colors.Color(0.95, 0.95, 0.95)),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
            ]
        )
    )
    elements.append(header_table)
    elements.append(Spacer(1, 10))

    if options["party_information"]:
        party = Table(_party_rows(document, options), colWidths=[100, 360])
        party.setStyle(TableStyle([("FONTSIZE", (0, 0), (-1, -1), 9), ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR)]))
        elements.append(party)
        elements.append(Spacer(1, 10))

    elements.append(_item_table(document, options))
    elements.append(Spacer(1, 10))

    totals = Table(_totals_rows(document, options), colWidths=[300, 160])
    totals.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_COLOR),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("BACKGROUND", (0, -1), (-1, -1), colors.Color(0.9, 0.95, 1.0)),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
                ("ALIGN", (1, 0), (1, -1), "RIGHT"),
            ]
        )
    )
    elements.append(totals)

    if options["amount_in_words"]:
        elements.append(Spacer(1, 6))
        elements.append(Paragraph(amount_in_words(document.total_amount) or "", styles["Normal"]))

    if options["notes"] and document.notes:
        elements.append(Spacer(1, 10))
        elements.append(Paragraph(f"<b>Notes:</b> {escape(document.notes)}", styles["Normal"]))

    if options["terms"] and document.terms:
        elements.append(Spacer(1, 10))
        elements.append(Paragraph("<b>Terms &amp; Conditions</b>", styles["Normal"]))
        for i, term in enumerate(document.terms, start=1):
            elements.append(Paragraph(f"{i}. {escape(str(term))}", small_style))

    bank = document.bank_details or {}
    if options["bank_details"] and bank:
        fields = {key: escape(str(bank.get(key) or "")) for key in ("bank_name", "branch", "account_no", "ifsc")}
        elements.append(Spacer(1, 10))
        elements.append(
            Paragraph(
                f"<b>Bank:</b> {fields['bank_name']} {fields['branch']} | "
                f"A/c {fields['account_no']} | IFSC {fields['ifsc']}",
                styles["Normal"],
            )
        )

    if options["disclaimer"]:
        elements.append(Spacer(1, 10))
        elements.append(Paragraph("Goods once sold will not be taken back.", small_style))

    if options["digital_signature"]:
        elements.append(Spacer(1, 20))
        elements.append(Paragraph("Authorised Signatory", styles["Normal"]))

    if options["footer"]:
        elements.append(Spacer(1, 20))
        elements.append(
            Paragraph(
                f"This is a computer-generated document. Generated on "
                f"{datetime.now().strftime('%d-%b-%Y %H:%M')}",
                ParagraphStyle("Footer", parent=small_style, alignment=1),
            )
        )

    doc.build(elements)
    logger.info("Rendered %s %s (%s)", document.document_type, document.number, heading)
    return buf.getvalue()
