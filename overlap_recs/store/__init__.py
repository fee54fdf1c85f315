"""In-memory catalog and user stores populated by the caller."""

from .catalog import Catalog, Item
from .users import User, UserNotFound, UserStore

__all__ = ["Catalog", "Item", "User", "UserNotFound", "UserStore"]
