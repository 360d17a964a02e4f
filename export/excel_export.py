"""Excel export functionality using openpyxl."""

from pathlib import Path
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter

from calculations import QuoteTotalsResult


# Styles
HEADER_FONT = Font(bold=True, color='FFFFFF')
HEADER_FILL = PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid')
HEADER_ALIGNMENT = Alignment(horizontal='center', vertical='center', wrap_text=True)

THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin')
)

LOSS_FILL = PatternFill(start_color='FFC7CE', end_color='FFC7CE', fill_type='solid')

MONEY_FORMAT = '"$"#,##0.00'
PERCENT_FORMAT = '0.0"%"'


def set_column_widths(ws, widths: dict):
    """Set column widths for a worksheet."""
    for col, width in widths.items():
        ws.column_dimensions[get_column_letter(col)].width = width


def style_header_row(ws, row: int, num_cols: int):
    """Apply header styling to a row."""
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=row, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGNMENT
        cell.border = THIN_BORDER


def _money(cell, value: float):
    cell.value = round(value, 2)
    cell.number_format = MONEY_FORMAT


def export_quote_to_excel(
    totals: QuoteTotalsResult,
    output_path: str | Path,
    quote_name: str = ""
) -> str:
    """Export a priced quote to an Excel file.

    Args:
        totals: QuoteTotalsResult of the quote
        output_path: Path to save Excel file
        quote_name: Name shown on the summary sheet

    Returns:
        Path to created Excel file
    """
    wb = Workbook()

    # Summary sheet
    ws_summary = wb.active
    ws_summary.title = "Summary"
    _write_summary_sheet(ws_summary, totals, quote_name)

    # Materials sheet
    ws_materials = wb.create_sheet("Materials")
    _write_materials_sheet(ws_materials, totals)

    # Save
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)

    return str(output_path)


def _write_summary_sheet(ws, totals: QuoteTotalsResult, quote_name: str):
    """Write labor, materials and grand totals."""
    ws['A1'] = "Quote Summary"
    ws['A1'].font = Font(bold=True, size=14)

    ws['A3'] = "Quote Name:"
    ws['B3'] = quote_name or "-"
    ws['A4'] = "Labor Hours:"
    ws['B4'] = totals.labor_hours

    headers = ["", "Cost", "Profit", "Price"]
    for col, header in enumerate(headers, 1):
        ws.cell(row=6, column=col, value=header)
    style_header_row(ws, 6, len(headers))

    rows = [
        ("Labor", totals.labor_cost, totals.labor_profit, totals.labor_price),
        ("Materials", totals.materials.cost, totals.material_profit, totals.materials.price),
        ("Total", totals.total_cost, totals.profit, totals.total_price),
    ]
    for row, (label, cost, profit, price) in enumerate(rows, 7):
        ws.cell(row=row, column=1, value=label)
        _money(ws.cell(row=row, column=2), cost)
        _money(ws.cell(row=row, column=3), profit)
        _money(ws.cell(row=row, column=4), price)
        if profit < 0:
            ws.cell(row=row, column=3).fill = LOSS_FILL
        for col in range(1, len(headers) + 1):
            ws.cell(row=row, column=col).border = THIN_BORDER
    ws.cell(row=9, column=1).font = Font(bold=True)

    ws['A11'] = "Margin:"
    ws['B11'] = round(totals.margin_percent, 1)
    ws['B11'].number_format = PERCENT_FORMAT

    set_column_widths(ws, {1: 18, 2: 14, 3: 14, 4: 14})


def _write_materials_sheet(ws, totals: QuoteTotalsResult):
    """Write one row per priced quote line."""
    headers = ["Item", "Quantity", "Unit Cost", "Markup (%)", "Cost", "Profit", "Price"]

    for col, header in enumerate(headers, 1):
        ws.cell(row=1, column=col, value=header)
    style_header_row(ws, 1, len(headers))

    for row, line in enumerate(totals.line_items, 2):
        ws.cell(row=row, column=1, value=line.name)
        ws.cell(row=row, column=2, value=line.quantity)
        _money(ws.cell(row=row, column=3), line.unit_cost)
        ws.cell(row=row, column=4, value=line.markup_percent)
        _money(ws.cell(row=row, column=5), line.cost)
        _money(ws.cell(row=row, column=6), line.profit)
        _money(ws.cell(row=row, column=7), line.price)

        # Apply borders
        for col in range(1, len(headers) + 1):
            ws.cell(row=row, column=col).border = THIN_BORDER

    set_column_widths(ws, {1: 30, 2: 10, 3: 12, 4: 12, 5: 12, 6: 12, 7: 12})


def export_saved_quotes_to_excel(
    quotes: Iterable,  # List of SavedQuote
    output_path: str | Path
) -> str:
    """Export the saved-quote history to Excel.

    Totals are the values frozen when each quote was saved.

    Args:
        quotes: SavedQuote instances
        output_path: Path to save Excel file

    Returns:
        Path to created Excel file
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "Saved Quotes"

    headers = ["Name", "Date", "Labor Hours", "Items", "Total Price", "Id"]

    for col, header in enumerate(headers, 1):
        ws.cell(row=1, column=col, value=header)
    style_header_row(ws, 1, len(headers))

    for row, quote in enumerate(quotes, 2):
        ws.cell(row=row, column=1, value=quote.name)
        ws.cell(row=row, column=2, value=quote.date or "-")
        ws.cell(row=row, column=3, value=quote.labor_hours)
        ws.cell(row=row, column=4, value=len(quote.items))
        _money(ws.cell(row=row, column=5), quote.total_price)
        ws.cell(row=row, column=6, value=quote.id)

        for col in range(1, len(headers) + 1):
            ws.cell(row=row, column=col).border = THIN_BORDER

    set_column_widths(ws, {1: 30, 2: 12, 3: 12, 4: 8, 5: 14, 6: 16})

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output_path)

    return str(output_path)
