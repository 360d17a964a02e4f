from .labor import calculate_labor_cost, calculate_labor_price
from .materials import (
    calculate_materials, calculate_line_items, effective_markup,
    MaterialTotals, LineItemResult
)
from .quote_totals import calculate_quote_totals, calculate_margin, QuoteTotalsResult

__all__ = [
    'calculate_labor_cost', 'calculate_labor_price',
    'calculate_materials', 'calculate_line_items', 'effective_markup',
    'MaterialTotals', 'LineItemResult',
    'calculate_quote_totals', 'calculate_margin', 'QuoteTotalsResult'
]
