"""JSON (de)serialization of settings, saved quotes and the working quote.

The stored/exported shape uses camelCase keys:

    {
        "targetHourly": 100,
        "wages": [25],
        "globalMarkup": 20,
        "persistentItems": [{"id", "name", "cost", "useCustomMarkup", "customMarkup"}],
        "savedQuotes": [{"id", "name", "date", "items": [{"itemId", "quantity"}],
                         "laborHours", "totalPrice"}]
    }

Parsing goes through the pydantic schemas in state.schemas: every recognized
field is type-checked and anything that does not fit raises InvalidDataError.
Unknown keys are ignored. Missing fields of nested records fall back to
zero/blank values; the only missing top-level field that is tolerated is
"savedQuotes" (older schema).
"""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from exceptions import InvalidDataError
from .models import (
    AppSettings, PersistentItem, QuoteItem, SavedQuote, WorkingQuote, default_settings
)
from .schemas import AppSettingsIn, SavedQuoteIn, WorkingQuoteIn

logger = logging.getLogger(__name__)

_SAVED_QUOTES = TypeAdapter(List[SavedQuoteIn])


def _describe(error: PydanticValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err['loc'])
        parts.append(f"{loc}: {err['msg']}" if loc else err['msg'])
    return "; ".join(parts)


def _validate(validator, data: Any, what: str):
    try:
        return validator(data)
    except PydanticValidationError as e:
        raise InvalidDataError(f"{what} invalid: {_describe(e)}")


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def persistent_item_to_dict(item: PersistentItem) -> Dict[str, Any]:
    return {
        'id': item.id,
        'name': item.name,
        'cost': item.cost,
        'useCustomMarkup': item.use_custom_markup,
        'customMarkup': item.custom_markup,
    }


def quote_item_to_dict(item: QuoteItem) -> Dict[str, Any]:
    return {'itemId': item.item_id, 'quantity': item.quantity}


def saved_quote_to_dict(quote: SavedQuote) -> Dict[str, Any]:
    return {
        'id': quote.id,
        'name': quote.name,
        'date': quote.date,
        'items': [quote_item_to_dict(item) for item in quote.items],
        'laborHours': quote.labor_hours,
        'totalPrice': quote.total_price,
    }


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

def settings_to_dict(settings: AppSettings) -> Dict[str, Any]:
    return {
        'targetHourly': settings.target_hourly,
        'wages': list(settings.wages),
        'globalMarkup': settings.global_markup,
        'persistentItems': [persistent_item_to_dict(item) for item in settings.persistent_items],
        'savedQuotes': saved_quotes_to_list(settings.saved_quotes),
    }


def migrate_settings_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Bring an older settings shape up to date without touching other fields.

    Returns a new dict; the input is not modified.
    """
    if 'savedQuotes' not in data:
        logger.info("Stored settings predate saved quotes; adding empty history")
        data = dict(data)
        data['savedQuotes'] = []
    return data


def settings_from_dict(data: Any) -> AppSettings:
    """Build AppSettings from a parsed JSON object.

    Raises:
        InvalidDataError: if the object does not have the settings shape
    """
    if not isinstance(data, dict):
        raise InvalidDataError("Settings must be an object")
    data = migrate_settings_dict(data)
    return _validate(AppSettingsIn.model_validate, data, "Settings").to_model()


def saved_quotes_to_list(quotes) -> List[Dict[str, Any]]:
    return [saved_quote_to_dict(quote) for quote in quotes]


def saved_quotes_from_list(data: Any):
    """Build a tuple of SavedQuote from a parsed JSON array.

    Raises:
        InvalidDataError: if the value is not an array of saved quotes
    """
    if not isinstance(data, list):
        raise InvalidDataError("Saved quotes must be a list")
    quotes = _validate(_SAVED_QUOTES.validate_python, data, "Saved quotes")
    return tuple(quote.to_model() for quote in quotes)


def working_quote_to_dict(quote: WorkingQuote) -> Dict[str, Any]:
    return {
        'name': quote.name,
        'laborHours': quote.labor_hours,
        'items': [quote_item_to_dict(item) for item in quote.items],
    }


def working_quote_from_dict(data: Any) -> WorkingQuote:
    if not isinstance(data, dict):
        raise InvalidDataError("Working quote must be an object")
    return _validate(WorkingQuoteIn.model_validate, data, "Working quote").to_model()


def validate_settings(settings: AppSettings) -> AppSettings:
    """Check that a settings snapshot would load back unchanged in shape.

    Raises:
        InvalidDataError: if any field would be rejected on the next load
    """
    settings_from_dict(settings_to_dict(settings))
    return settings


def validate_working_quote(quote: WorkingQuote) -> WorkingQuote:
    """Check that a working quote would load back; see validate_settings."""
    working_quote_from_dict(working_quote_to_dict(quote))
    return quote


# ---------------------------------------------------------------------------
# Text forms
# ---------------------------------------------------------------------------

def parse_json(text: Optional[str]) -> Any:
    """Parse JSON text, raising InvalidDataError instead of decoder errors."""
    if text is None or not str(text).strip():
        raise InvalidDataError("No data to import")
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise InvalidDataError(f"Data is not valid JSON: {e}")


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2)


def load_settings_blob(text: Optional[str]) -> AppSettings:
    """Load persisted settings, never failing.

    Returns default settings when nothing is stored or the stored blob is
    unusable; an older blob without saved quotes is migrated.
    """
    if text is None:
        return default_settings()
    try:
        return settings_from_dict(parse_json(text))
    except InvalidDataError as e:
        logger.warning("Stored settings are invalid (%s); using defaults", e.message)
        return default_settings()


def load_working_quote_blob(text: Optional[str]) -> WorkingQuote:
    """Load the persisted working quote, falling back to an empty one."""
    if text is None:
        return WorkingQuote()
    try:
        return working_quote_from_dict(parse_json(text))
    except InvalidDataError as e:
        logger.warning("Stored working quote is invalid (%s); starting empty", e.message)
        return WorkingQuote()
