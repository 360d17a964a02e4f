"""Plain-text quote summary for pasting into emails or messages."""

from datetime import datetime
from typing import Optional

from calculations import QuoteTotalsResult
from config import DATE_FORMAT


def format_money(value: float) -> str:
    return f"${value:.2f}"


def format_number(value: float) -> str:
    """Render whole numbers without decimals (2 -> '2', 2.5 -> '2.5')."""
    if value % 1 == 0:
        return f"{int(value)}"
    return f"{value:.2f}".rstrip('0').rstrip('.')


def build_quote_summary(totals: QuoteTotalsResult, quote_name: str = "",
                        date: Optional[datetime] = None) -> str:
    """Build the human-readable summary of a priced quote.

    Money is rounded to cents here only; the figures in totals are untouched.

    Args:
        totals: QuoteTotalsResult from calculate_quote_totals
        quote_name: Optional quote name shown in the header
        date: Date printed in the header (defaults to now)

    Returns:
        Multi-line summary text
    """
    date = date or datetime.now()

    lines = [f"--- QUOTE SUMMARY ({date.strftime(DATE_FORMAT)}) ---"]
    if quote_name:
        lines.append(f"QUOTE:        {quote_name}")
    lines += [
        f"TOTAL AMOUNT: {format_money(totals.total_price)}",
        f"NET PROFIT:   {format_money(totals.profit)} ({totals.margin_percent:.1f}%)",
        "",
        "--- LABOR & TIME ---",
        f"Hours:        {format_number(totals.labor_hours)}",
        f"Labor Cost:   {format_money(totals.labor_cost)}",
        f"Labor Profit: {format_money(totals.labor_profit)}",
        f"Labor Total:  {format_money(totals.labor_price)}",
        "",
        "--- MATERIALS ---",
    ]

    if totals.line_items:
        for line in totals.line_items:
            lines.append(f"[{format_number(line.quantity)}x] {line.name}")
            lines.append(
                f"    Unit: {format_money(line.unit_cost)} | Markup: {format_number(line.markup_percent)}%"
                f" | Cost: {format_money(line.cost)} | Profit: {format_money(line.profit)}"
                f" | Total: {format_money(line.price)}"
            )
    else:
        lines.append("No materials added.")

    lines += [
        "",
        f"Materials Cost:   {format_money(totals.materials.cost)}",
        f"Materials Profit: {format_money(totals.material_profit)}",
        f"Materials Total:  {format_money(totals.materials.price)}",
    ]
    return "\n".join(lines)
