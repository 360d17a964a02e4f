"""Configuration settings for Quote Builder."""

import os
from pathlib import Path

# Default to local directory, can be pointed at a synced folder
# Example: QUOTE_BUILDER_DATA_PATH=~/Dropbox/quote_builder
DATA_PATH = Path(os.environ.get('QUOTE_BUILDER_DATA_PATH', Path(__file__).parent / 'data'))

# Database file name
DATABASE_NAME = 'quote_builder.db'

# Full database file path
DATABASE_FILE = DATA_PATH / DATABASE_NAME

# Keys of the persisted state blobs
SETTINGS_KEY = 'quote_builder_settings'
WORKING_QUOTE_KEY = 'quote_builder_working_quote'


def ensure_directories():
    """Create required directories if they don't exist."""
    DATA_PATH.mkdir(parents=True, exist_ok=True)


def get_database_url():
    """Get SQLAlchemy database URL."""
    override = os.environ.get('QUOTE_BUILDER_DATABASE_URL')
    if override:
        return override
    ensure_directories()
    return f"sqlite:///{DATABASE_FILE}"


# Application settings
APP_NAME = "Quote Builder"
APP_VERSION = "1.0.0"
LOG_LEVEL = os.environ.get('QUOTE_BUILDER_LOG_LEVEL', 'WARNING')

# Fallback settings used when nothing valid is persisted
DEFAULT_TARGET_HOURLY = 100.0
DEFAULT_WAGES = (25.0,)
DEFAULT_GLOBAL_MARKUP = 20.0

# Catalog / quote defaults
NEW_ITEM_NAME = "New Item"
NEW_WAGE_VALUE = 0.0
DEFAULT_ADD_QUANTITY = 1.0

# Identifiers and display
ID_LENGTH = 12
DATE_FORMAT = '%m/%d/%Y'
