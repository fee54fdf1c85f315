"""Item catalog: in-memory id -> Item lookup."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

import pandas as pd


@dataclass(frozen=True)
class Item:
    """A catalog entry. Two items are equal iff their ids match."""

    id: str
    name: str = field(default="", compare=False)


class Catalog:
    """Items keyed by id. Re-adding an id overwrites the previous item."""

    def __init__(self, items: Optional[list[Item]] = None) -> None:
        self._items: dict[str, Item] = {}
        for item in items or []:
            self.add_item(item)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "Catalog":
        """Build a catalog from a frame with `itemId` and `name` columns."""
        missing = [c for c in ("itemId", "name") if c not in df.columns]
        if missing:
            raise ValueError(f"item frame missing columns: {missing}")

        catalog = cls()
        names = df["name"].astype("string").fillna("").tolist()
        for item_id, name in zip(df["itemId"].astype("string").tolist(), names):
            catalog.add_item(Item(id=str(item_id), name=str(name)))
        return catalog

    def add_item(self, item: Item) -> None:
        """Insert `item`, replacing any item already stored under its id."""
        if not item.id:
            raise ValueError("item id must be non-empty")
        self._items[item.id] = item

    def get_item(self, item_id: str) -> Item | None:
        """Return the item stored under `item_id`, or None."""
        return self._items.get(item_id)

    def has_item(self, item_id: str) -> bool:
        return item_id in self._items

    def item_ids(self) -> list[str]:
        return list(self._items.keys())

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(list(self._items.values()))
