"""Quote totals: combines labor and material figures into price, profit and margin."""

from dataclasses import dataclass, field
from typing import List

from .labor import calculate_labor_cost, calculate_labor_price
from .materials import LineItemResult, MaterialTotals, calculate_line_items


@dataclass
class QuoteTotalsResult:
    """All figures shown for a quote."""
    labor_hours: float
    labor_cost: float
    labor_price: float
    materials: MaterialTotals
    line_items: List[LineItemResult] = field(default_factory=list)

    @property
    def labor_profit(self) -> float:
        return self.labor_price - self.labor_cost

    @property
    def material_profit(self) -> float:
        return self.materials.profit

    @property
    def total_price(self) -> float:
        return self.labor_price + self.materials.price

    @property
    def total_cost(self) -> float:
        return self.labor_cost + self.materials.cost

    @property
    def profit(self) -> float:
        return self.total_price - self.total_cost

    @property
    def margin_percent(self) -> float:
        """Profit as a percentage of total price (0 when nothing is billed)."""
        return calculate_margin(self.total_price, self.total_cost)


def calculate_margin(total_price: float, total_cost: float) -> float:
    """Calculate margin in percent of price, guarding against zero revenue."""
    if total_price > 0:
        return (total_price - total_cost) / total_price * 100
    return 0.0


def calculate_quote_totals(settings, quote_items, labor_hours) -> QuoteTotalsResult:
    """Calculate every figure for a quote from the current settings.

    Args:
        settings: AppSettings instance (wages, target_hourly, global_markup, catalog)
        quote_items: QuoteItem instances of the quote being priced
        labor_hours: Labor hours on the quote

    Returns:
        QuoteTotalsResult; totals are derived properties, unrounded
    """
    hours = float(labor_hours or 0.0)
    line_items = calculate_line_items(quote_items, settings.persistent_items, settings.global_markup)

    materials = MaterialTotals(
        cost=sum((line.cost for line in line_items), 0.0),
        price=sum((line.price for line in line_items), 0.0)
    )

    return QuoteTotalsResult(
        labor_hours=hours,
        labor_cost=calculate_labor_cost(settings.wages, hours),
        labor_price=calculate_labor_price(hours, settings.target_hourly),
        materials=materials,
        line_items=line_items
    )
