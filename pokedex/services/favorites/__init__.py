"""Favorite flag components split by responsibility.

``FavoritesPersistence`` isolates the SQLAlchemy access, while
``FavoriteStore`` owns the in-memory flags shared by both presenters.
"""

from .persistence import FavoritesPersistence
from .store import FavoriteListener, FavoriteStore

__all__ = [
    "FavoriteListener",
    "FavoriteStore",
    "FavoritesPersistence",
]
