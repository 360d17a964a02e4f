from .models import Base, AppStateEntry
from .connection import get_session, init_db, session_scope, dispose_engine
from .storage import StateStorage, MemoryStorage

__all__ = [
    'Base', 'AppStateEntry',
    'get_session', 'init_db', 'session_scope', 'dispose_engine',
    'StateStorage', 'MemoryStorage'
]
