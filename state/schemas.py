"""Pydantic schemas for the stored and exported JSON shapes.

Field names are snake_case in Python and camelCase on the wire. Numbers are
strict (no strings, no booleans) and must be finite. Missing fields of
nested records are allowed and become zero/blank in the model.
"""

from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr
from pydantic.alias_generators import to_camel

from .models import AppSettings, PersistentItem, QuoteItem, SavedQuote, WorkingQuote

Number = Annotated[float, Field(strict=True, allow_inf_nan=False)]
Id = Annotated[StrictStr, Field(min_length=1)]


class _Schema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='ignore')


class QuoteItemIn(_Schema):
    item_id: Id
    quantity: Optional[Number] = None

    def to_model(self) -> QuoteItem:
        return QuoteItem(item_id=self.item_id, quantity=self.quantity or 0.0)


class PersistentItemIn(_Schema):
    id: Id
    name: Optional[StrictStr] = None
    cost: Optional[Number] = None
    use_custom_markup: Optional[StrictBool] = None
    custom_markup: Optional[Number] = None

    def to_model(self) -> PersistentItem:
        return PersistentItem(
            id=self.id,
            name=self.name or "",
            cost=self.cost or 0.0,
            use_custom_markup=bool(self.use_custom_markup),
            custom_markup=self.custom_markup or 0.0,
        )


class SavedQuoteIn(_Schema):
    id: Id
    name: Optional[StrictStr] = None
    date: Optional[StrictStr] = None
    items: Optional[List[QuoteItemIn]] = None
    labor_hours: Optional[Number] = None
    total_price: Optional[Number] = None

    def to_model(self) -> SavedQuote:
        return SavedQuote(
            id=self.id,
            name=self.name or "",
            date=self.date or "",
            items=tuple(item.to_model() for item in self.items or ()),
            labor_hours=self.labor_hours or 0.0,
            total_price=self.total_price or 0.0,
        )


class AppSettingsIn(_Schema):
    """Full settings payload. saved_quotes must be present; migrate older blobs first."""
    target_hourly: Number
    wages: List[Number]
    global_markup: Number
    persistent_items: List[PersistentItemIn]
    saved_quotes: List[SavedQuoteIn]

    def to_model(self) -> AppSettings:
        return AppSettings(
            target_hourly=self.target_hourly,
            wages=tuple(self.wages),
            global_markup=self.global_markup,
            persistent_items=tuple(item.to_model() for item in self.persistent_items),
            saved_quotes=tuple(quote.to_model() for quote in self.saved_quotes),
        )


class WorkingQuoteIn(_Schema):
    name: Optional[StrictStr] = None
    labor_hours: Optional[Number] = None
    items: Optional[List[QuoteItemIn]] = None

    def to_model(self) -> WorkingQuote:
        return WorkingQuote(
            name=self.name or "",
            labor_hours=self.labor_hours or 0.0,
            items=tuple(item.to_model() for item in self.items or ()),
        )
