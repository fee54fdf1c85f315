from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

import pandas as pd

from .store.catalog import Catalog
from .store.users import DEFAULT_RATING, UserStore


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawData:
    items: pd.DataFrame
    preferences: pd.DataFrame


REQUIRED_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "items": ("itemId", "name"),
    "preferences": ("userId", "itemId"),
}


def load_raw_data(raw_dir: Path) -> RawData:
    """Load `items.csv` and `preferences.csv` from a directory.

    Notes
    -----
    Ids are read as strings so that values like "007" keep their leading
    zeros. `rating` is optional in preferences.csv; absent or blank ratings
    are stored as plain likes (1.0).
    """
    raw_dir = Path(raw_dir)
    for name in ("items.csv", "preferences.csv"):
        if not (raw_dir / name).exists():
            raise FileNotFoundError(f"{name} not found in {raw_dir}")

    items = pd.read_csv(
        raw_dir / "items.csv",
        dtype={"itemId": "string", "name": "string"},
    )
    preferences = pd.read_csv(
        raw_dir / "preferences.csv",
        dtype={"userId": "string", "itemId": "string", "rating": "float64"},
    )
    if "rating" not in preferences.columns:
        preferences["rating"] = DEFAULT_RATING
    preferences["rating"] = preferences["rating"].fillna(DEFAULT_RATING)

    data = RawData(items=items, preferences=preferences)
    validate_schema(data)
    return data


def validate_schema(data: RawData) -> None:
    """Validate that all required columns exist and basic constraints hold."""
    for name, cols in REQUIRED_COLUMNS.items():
        df = getattr(data, name)
        missing = [c for c in cols if c not in df.columns]
        if missing:
            raise ValueError(f"{name}.csv missing columns: {missing}")

    items = data.items
    if items["itemId"].isna().any() or (items["itemId"].astype("string").str.strip() == "").any():
        raise ValueError("items.csv contains empty itemId values")
    if items["itemId"].duplicated().any():
        raise ValueError("items.csv has duplicate itemId values")

    prefs = data.preferences
    for col in ("userId", "itemId"):
        if prefs[col].isna().any() or (prefs[col].astype("string").str.strip() == "").any():
            raise ValueError(f"preferences.csv contains empty {col} values")

    if prefs.duplicated(subset=["userId", "itemId"]).any():
        raise ValueError("preferences.csv contains duplicate (userId, itemId) rows")

    if "rating" in prefs.columns:
        bad_mask = ~(prefs["rating"].astype("float64") > 0.0)
        if bad_mask.any():
            bad_values = sorted(set(prefs.loc[bad_mask, "rating"].tolist()))
            raise ValueError(f"preferences.csv has non-positive rating values: {bad_values}")

    # Stale item references are legal; the recommender filters them out.
    unknown = set(prefs["itemId"].astype("string").tolist()) - set(items["itemId"].astype("string").tolist())
    if unknown:
        logger.warning("preferences.csv references %d itemIds not in items.csv", len(unknown))


def build_stores(data: RawData) -> tuple[Catalog, UserStore]:
    """Populate a fresh `Catalog` and `UserStore` from validated raw frames."""
    catalog = Catalog.from_frame(data.items)
    users = UserStore.from_frame(data.preferences)
    logger.info("Loaded stores: items=%d users=%d preferences=%d", len(catalog), len(users), len(data.preferences))
    return catalog, users


def load_stores(raw_dir: Path) -> tuple[Catalog, UserStore]:
    return build_stores(load_raw_data(raw_dir))
