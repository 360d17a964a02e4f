"""Data model for the catalog, settings, saved quotes and the working quote.

All records are frozen; collections are tuples. Edits build a new record with
dataclasses.replace() so earlier snapshots stay valid.
"""

from dataclasses import dataclass, field
from typing import Tuple

from config import DEFAULT_TARGET_HOURLY, DEFAULT_WAGES, DEFAULT_GLOBAL_MARKUP


@dataclass(frozen=True)
class PersistentItem:
    """Catalog entry that can be added to quotes repeatedly."""
    id: str
    name: str = ""
    cost: float = 0.0
    use_custom_markup: bool = False
    custom_markup: float = 0.0


@dataclass(frozen=True)
class QuoteItem:
    """Reference to a catalog item by id, with a per-quote quantity."""
    item_id: str
    quantity: float = 0.0


@dataclass(frozen=True)
class SavedQuote:
    """Snapshot of a finished quote.

    total_price is frozen at save time and is never recomputed, even if the
    referenced catalog items change later.
    """
    id: str
    name: str
    date: str
    items: Tuple[QuoteItem, ...] = ()
    labor_hours: float = 0.0
    total_price: float = 0.0


@dataclass(frozen=True)
class AppSettings:
    """Root persisted aggregate."""
    target_hourly: float = DEFAULT_TARGET_HOURLY
    wages: Tuple[float, ...] = DEFAULT_WAGES
    global_markup: float = DEFAULT_GLOBAL_MARKUP
    persistent_items: Tuple[PersistentItem, ...] = ()
    saved_quotes: Tuple[SavedQuote, ...] = ()


@dataclass(frozen=True)
class WorkingQuote:
    """In-progress quote that has not been saved yet."""
    name: str = ""
    labor_hours: float = 0.0
    items: Tuple[QuoteItem, ...] = field(default_factory=tuple)


def default_settings() -> AppSettings:
    """Hard-coded settings used on first start and when the stored blob is unusable."""
    return AppSettings()
