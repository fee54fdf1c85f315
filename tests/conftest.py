from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import overlap_recs...` works when pytest uses importlib import mode.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from overlap_recs.store.catalog import Catalog, Item  # noqa: E402
from overlap_recs.store.users import User, UserStore  # noqa: E402


SAMPLE_PREFERENCES = {
    "U1": ["P001", "P002", "P003", "P007"],
    "U2": ["P001", "P004", "P005", "P008"],
    "U3": ["P001", "P002", "P006", "P007"],
    "U4": ["P004", "P005", "P003"],
    "U5": ["P001", "P007"],
}


@pytest.fixture
def catalog() -> Catalog:
    return Catalog([Item(id=f"P00{i}", name=f"Product {i}") for i in range(1, 9)])


@pytest.fixture
def users() -> UserStore:
    return UserStore(
        [User(id=uid, preferences={iid: 1.0 for iid in items}) for uid, items in SAMPLE_PREFERENCES.items()]
    )
