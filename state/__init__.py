from .models import (
    PersistentItem, QuoteItem, SavedQuote, AppSettings, WorkingQuote, default_settings
)
from .store import QuoteBuilder, merge_saved_quotes

__all__ = [
    'PersistentItem', 'QuoteItem', 'SavedQuote', 'AppSettings', 'WorkingQuote', 'default_settings',
    'QuoteBuilder', 'merge_saved_quotes'
]
