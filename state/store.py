"""Settings/quote state container.

QuoteBuilder owns the durable settings (catalog, wages, markup, saved quotes)
and the transient working quote. Every mutation builds a new snapshot and
swaps it in, so a snapshot returned by get() is never changed afterwards.
Settings are persisted after every settings mutation, the working quote after
every working-quote mutation.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import List, Optional

from calculations import calculate_quote_totals, QuoteTotalsResult
from config import (
    SETTINGS_KEY, WORKING_QUOTE_KEY, DATE_FORMAT,
    NEW_ITEM_NAME, NEW_WAGE_VALUE, DEFAULT_ADD_QUANTITY
)
from exceptions import InvalidDataError, NotFoundError, ValidationError
from utils.ids import generate_id
from .models import AppSettings, PersistentItem, QuoteItem, SavedQuote, WorkingQuote
from .serialization import (
    dump_json, parse_json, settings_to_dict, settings_from_dict,
    saved_quotes_to_list, saved_quotes_from_list, working_quote_to_dict,
    load_settings_blob, load_working_quote_blob, validate_settings, validate_working_quote
)

logger = logging.getLogger(__name__)

# AppSettings fields whose values are sequences and are stored as tuples
_SEQUENCE_FIELDS = ('wages', 'persistent_items', 'saved_quotes')


def _as_number(value, what: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidDataError(f"{what} must be a number, got {value!r}")


def _check_index(index: int, size: int, what: str):
    if not 0 <= index < size:
        raise NotFoundError(f"{what} {index} not found")


def merge_saved_quotes(imported, existing) -> tuple:
    """Merge two saved-quote sequences by id.

    Entries are keyed in the order imported + existing; the first entry seen
    for an id is kept, so imported quotes win on collision. Order follows the
    first appearance of each id.
    """
    merged = {}
    for quote in list(imported) + list(existing):
        merged.setdefault(quote.id, quote)
    return tuple(merged.values())


class QuoteBuilder:
    """Application state controller.

    Args:
        storage: Object with read(key)/write(key, text), e.g. StateStorage
    """

    def __init__(self, storage):
        self.storage = storage
        self._settings = load_settings_blob(storage.read(SETTINGS_KEY))
        self._quote = load_working_quote_blob(storage.read(WORKING_QUOTE_KEY))

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def get(self) -> AppSettings:
        """Return the current settings snapshot."""
        return self._settings

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def working_quote(self) -> WorkingQuote:
        return self._quote

    def apply(self, **changes) -> AppSettings:
        """Shallow-merge top-level fields into the settings and persist.

        Only the given fields are replaced; passing persistent_items replaces
        the whole catalog. The merged snapshot must load back from storage,
        otherwise nothing changes.

        Raises:
            InvalidDataError: if a value would be rejected on the next load
                (non-numbers, NaN/infinity, wrongly typed fields)
        """
        for name in _SEQUENCE_FIELDS:
            if name in changes:
                changes[name] = tuple(changes[name])
        self._settings = validate_settings(replace(self._settings, **changes))
        self._persist_settings()
        return self._settings

    update_settings = apply

    def _set_quote(self, **changes) -> WorkingQuote:
        if 'items' in changes:
            changes['items'] = tuple(changes['items'])
        self._quote = validate_working_quote(replace(self._quote, **changes))
        self._persist_quote()
        return self._quote

    def _persist_settings(self):
        self.storage.write(SETTINGS_KEY, dump_json(settings_to_dict(self._settings)))

    def _persist_quote(self):
        self.storage.write(WORKING_QUOTE_KEY, dump_json(working_quote_to_dict(self._quote)))

    # ------------------------------------------------------------------
    # Pricing settings
    # ------------------------------------------------------------------

    def set_target_hourly(self, value: float) -> AppSettings:
        return self.apply(target_hourly=_as_number(value, "Rate"))

    def set_global_markup(self, value: float) -> AppSettings:
        return self.apply(global_markup=_as_number(value, "Markup"))

    def add_wage(self, value: float = NEW_WAGE_VALUE) -> AppSettings:
        return self.apply(wages=self._settings.wages + (_as_number(value, "Wage"),))

    def update_wage(self, index: int, value: float) -> AppSettings:
        """Replace the wage at index.

        Raises:
            NotFoundError: if there is no wage at index
        """
        _check_index(index, len(self._settings.wages), "Wage")
        wages = list(self._settings.wages)
        wages[index] = _as_number(value, "Wage")
        return self.apply(wages=wages)

    def delete_wage(self, index: int) -> AppSettings:
        return self.apply(wages=[w for i, w in enumerate(self._settings.wages) if i != index])

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    def add_item(self) -> PersistentItem:
        """Add a blank catalog item and return it."""
        item = PersistentItem(id=generate_id(), name=NEW_ITEM_NAME, cost=0.0,
                              use_custom_markup=False, custom_markup=0.0)
        self.apply(persistent_items=self._settings.persistent_items + (item,))
        logger.info("Added catalog item %s", item.id)
        return item

    def update_item(self, item_id: str, **changes) -> AppSettings:
        """Shallow-merge field changes into the catalog item with item_id."""
        return self.apply(persistent_items=[
            replace(item, **changes) if item.id == item_id else item
            for item in self._settings.persistent_items
        ])

    def delete_item(self, item_id: str) -> AppSettings:
        """Remove a catalog item.

        Quote lines that reference it are left in place and are skipped when
        pricing.
        """
        return self.apply(persistent_items=[
            item for item in self._settings.persistent_items if item.id != item_id
        ])

    def find_item(self, item_id: str) -> Optional[PersistentItem]:
        for item in self._settings.persistent_items:
            if item.id == item_id:
                return item
        return None

    def search_items(self, query: str = "") -> List[PersistentItem]:
        """Catalog items whose name contains query, case-insensitively."""
        needle = (query or "").lower()
        return [item for item in self._settings.persistent_items if needle in (item.name or "").lower()]

    # ------------------------------------------------------------------
    # Working quote
    # ------------------------------------------------------------------

    def set_quote_name(self, name: str) -> WorkingQuote:
        return self._set_quote(name=name or "")

    def set_labor_hours(self, hours: float) -> WorkingQuote:
        return self._set_quote(labor_hours=_as_number(hours, "Labor hours"))

    def add_to_quote(self, item_id: str, quantity: float = DEFAULT_ADD_QUANTITY) -> WorkingQuote:
        line = QuoteItem(item_id=item_id, quantity=_as_number(quantity, "Quantity"))
        return self._set_quote(items=self._quote.items + (line,))

    def set_quantity(self, index: int, quantity: float) -> WorkingQuote:
        """Change the quantity of the quote line at index.

        Raises:
            NotFoundError: if there is no quote line at index
        """
        _check_index(index, len(self._quote.items), "Quote line")
        items = list(self._quote.items)
        items[index] = replace(items[index], quantity=_as_number(quantity, "Quantity"))
        return self._set_quote(items=items)

    def remove_from_quote(self, index: int) -> WorkingQuote:
        return self._set_quote(items=[q for i, q in enumerate(self._quote.items) if i != index])

    def clear_quote(self) -> WorkingQuote:
        """Reset name, items and hours of the working quote."""
        self._quote = WorkingQuote()
        self._persist_quote()
        return self._quote

    def totals(self) -> QuoteTotalsResult:
        """Price the working quote against the current settings."""
        return calculate_quote_totals(self._settings, self._quote.items, self._quote.labor_hours)

    # ------------------------------------------------------------------
    # Saved quotes
    # ------------------------------------------------------------------

    def save_quote(self) -> SavedQuote:
        """Snapshot the working quote into the saved-quote history.

        The new quote is placed first. Only the working quote name is reset;
        items and hours stay so the quote can be tweaked and saved again.

        Raises:
            ValidationError: if the working quote has no name
        """
        if not self._quote.name:
            raise ValidationError("Please enter a quote name.")

        quote = SavedQuote(
            id=generate_id(),
            name=self._quote.name,
            date=datetime.now().strftime(DATE_FORMAT),
            items=tuple(self._quote.items),
            labor_hours=self._quote.labor_hours,
            total_price=self.totals().total_price
        )
        self.apply(saved_quotes=(quote,) + self._settings.saved_quotes)
        self._set_quote(name="")
        logger.info("Saved quote '%s' (%s)", quote.name, quote.id)
        return quote

    def find_saved_quote(self, quote_id: str) -> Optional[SavedQuote]:
        for quote in self._settings.saved_quotes:
            if quote.id == quote_id:
                return quote
        return None

    def load_quote(self, quote_id: str) -> WorkingQuote:
        """Copy a saved quote into the working quote.

        Raises:
            NotFoundError: if no saved quote has quote_id
        """
        quote = self.find_saved_quote(quote_id)
        if quote is None:
            raise NotFoundError(f"Saved quote {quote_id} not found")
        return self._set_quote(name=quote.name, labor_hours=quote.labor_hours, items=quote.items)

    def delete_saved_quote(self, quote_id: str) -> AppSettings:
        return self.apply(saved_quotes=[q for q in self._settings.saved_quotes if q.id != quote_id])

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_settings(self) -> str:
        """Serialize the full settings as JSON text."""
        return dump_json(settings_to_dict(self._settings))

    def export_saved_quotes(self) -> str:
        """Serialize only the saved quotes as a JSON array."""
        return dump_json(saved_quotes_to_list(self._settings.saved_quotes))

    def import_settings(self, text: str) -> AppSettings:
        """Replace all settings with an exported settings payload.

        The payload is fully parsed before anything changes.

        Raises:
            InvalidDataError: if text is not a settings export
        """
        try:
            settings = settings_from_dict(parse_json(text))
        except InvalidDataError as e:
            logger.warning("Rejected settings import: %s", e.message)
            raise
        self._settings = settings
        self._persist_settings()
        return self._settings

    def import_saved_quotes(self, text: str) -> AppSettings:
        """Merge an exported saved-quotes payload into the history by id.

        Raises:
            InvalidDataError: if text is not a saved-quotes export
        """
        try:
            imported = saved_quotes_from_list(parse_json(text))
        except InvalidDataError as e:
            logger.warning("Rejected saved quotes import: %s", e.message)
            raise
        return self.apply(saved_quotes=merge_saved_quotes(imported, self._settings.saved_quotes))
