"""Identifier generation shared by catalog items and saved quotes."""

import secrets
import string

from config import ID_LENGTH

_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(length: int = ID_LENGTH) -> str:
    """Return a random opaque token of fixed length.

    Ids are never parsed or reused; callers only compare them for equality.
    """
    return ''.join(secrets.choice(_ALPHABET) for _ in range(length))
