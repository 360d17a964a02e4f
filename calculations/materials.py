"""Material (catalog item) cost and price calculations."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class MaterialTotals:
    """Summed cost and billable price of the materials on a quote."""
    cost: float
    price: float

    @property
    def profit(self) -> float:
        return self.price - self.cost


@dataclass
class LineItemResult:
    """Priced breakdown of a single quote line."""
    item_id: str
    name: str
    quantity: float
    unit_cost: float
    markup_percent: float
    cost: float
    price: float

    @property
    def profit(self) -> float:
        return self.price - self.cost


def effective_markup(item, global_markup: Optional[float]) -> float:
    """Return the markup percentage that applies to a catalog item.

    Args:
        item: PersistentItem instance
        global_markup: Markup used when the item has no custom markup

    Returns:
        Markup in percent
    """
    if item.use_custom_markup:
        return float(item.custom_markup or 0.0)
    return float(global_markup or 0.0)


def _index_catalog(catalog: Iterable) -> Dict[str, object]:
    index = {}
    for item in catalog:
        # First entry wins when ids collide
        index.setdefault(item.id, item)
    return index


def calculate_line_items(quote_items: Iterable, catalog: Iterable,
                         global_markup: Optional[float]) -> List[LineItemResult]:
    """Price each quote line against the catalog.

    Lines whose item_id has no catalog entry (the item was deleted) are
    skipped without error.

    Args:
        quote_items: QuoteItem instances (item_id + quantity)
        catalog: PersistentItem instances
        global_markup: Default markup percentage

    Returns:
        LineItemResult per resolved quote line, in quote order
    """
    index = _index_catalog(catalog)
    results = []

    for quote_item in quote_items:
        item = index.get(quote_item.item_id)
        if item is None:
            logger.debug("Skipping quote line with unknown item id %s", quote_item.item_id)
            continue

        quantity = float(quote_item.quantity or 0.0)
        unit_cost = float(item.cost or 0.0)
        markup = effective_markup(item, global_markup)
        cost = unit_cost * quantity
        price = cost * (1 + markup / 100)

        results.append(LineItemResult(
            item_id=item.id,
            name=item.name or "",
            quantity=quantity,
            unit_cost=unit_cost,
            markup_percent=markup,
            cost=cost,
            price=price
        ))

    return results


def calculate_materials(quote_items: Iterable, catalog: Iterable,
                        global_markup: Optional[float]) -> MaterialTotals:
    """Calculate material cost and billable price for a quote.

    Formula per resolved line:
        cost  = unit_cost x quantity
        price = cost x (1 + markup / 100)

    Where markup is the item's custom markup if enabled, otherwise the
    global markup. Dangling references contribute nothing.

    Args:
        quote_items: QuoteItem instances
        catalog: PersistentItem instances
        global_markup: Default markup percentage

    Returns:
        MaterialTotals with summed cost and price
    """
    cost = 0.0
    price = 0.0
    for line in calculate_line_items(quote_items, catalog, global_markup):
        cost += line.cost
        price += line.price

    return MaterialTotals(cost=cost, price=price)
