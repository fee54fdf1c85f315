from __future__ import annotations

import pytest

from overlap_recs.store.catalog import Catalog, Item
from overlap_recs.store.users import User, UserStore
from overlap_recs.user_cf.diagnostics import Diagnostic
from overlap_recs.user_cf.recommender import UserUserCFRecommender


def test_reference_scenario(catalog: Catalog, users: UserStore) -> None:
    rec = UserUserCFRecommender(catalog, users)
    result = rec.recommend("U5", 3, 5)

    assert [s.userId for s in result.similar_users] == ["U1", "U3", "U2"]
    assert [(r.itemId, r.score) for r in result.items] == [
        ("P002", 2),
        ("P003", 1),
        ("P004", 1),
        ("P005", 1),
        ("P006", 1),
    ]
    assert result.diagnostic is None

    items = rec.get_recommendations("U5", 3, 5)
    assert [i.id for i in items] == ["P002", "P003", "P004", "P005", "P006"]
    assert all(isinstance(i, Item) for i in items)


def test_recommendations_exclude_known_items(catalog: Catalog, users: UserStore) -> None:
    rec = UserUserCFRecommender(catalog, users)
    for user in users:
        for item in rec.get_recommendations(user.id, 4, 10):
            assert item.id not in user.preferences


@pytest.mark.parametrize("n", [0, 1, 3, 5, 50])
def test_recommendations_at_most_n(catalog: Catalog, users: UserStore, n: int) -> None:
    rec = UserUserCFRecommender(catalog, users)
    assert len(rec.get_recommendations("U5", 3, n)) <= n


def test_truncation_keeps_highest_scores(catalog: Catalog, users: UserStore) -> None:
    rec = UserUserCFRecommender(catalog, users)
    assert [i.id for i in rec.get_recommendations("U5", 3, 2)] == ["P002", "P003"]


def test_results_are_deterministic(catalog: Catalog, users: UserStore) -> None:
    rec = UserUserCFRecommender(catalog, users)
    first = rec.get_recommendations("U5", 3, 5)
    second = rec.get_recommendations("U5", 3, 5)
    assert [i.id for i in first] == [i.id for i in second]


def test_scores_are_unweighted() -> None:
    # N1 overlaps the target heavily and rates Z highly; N2 overlaps once.
    users = UserStore(
        [
            User(id="T", preferences={"A": 1.0, "B": 1.0, "C": 1.0}),
            User(id="N1", preferences={"A": 1.0, "B": 1.0, "C": 1.0, "Z": 5.0}),
            User(id="N2", preferences={"A": 1.0, "Y": 1.0}),
        ]
    )
    catalog = Catalog([Item(id=i) for i in "ABCYZ"])
    result = UserUserCFRecommender(catalog, users).recommend("T", 2, 5)

    # Both candidates score 1; Y wins on id.
    assert [(r.itemId, r.score) for r in result.items] == [("Y", 1), ("Z", 1)]


def test_unknown_catalog_ids_are_dropped_after_cut(users: UserStore) -> None:
    catalog = Catalog([Item(id=i) for i in ("P003", "P004", "P005", "P008")])
    rec = UserUserCFRecommender(catalog, users)

    # P002 tops the ranking but is not in the catalog.
    assert [i.id for i in rec.get_recommendations("U5", 3, 2)] == ["P003"]
    assert [i.id for i in rec.get_recommendations("U5", 3, 5)] == ["P003", "P004", "P005"]


def test_missing_target_returns_empty_with_diagnostic(catalog: Catalog, users: UserStore) -> None:
    rec = UserUserCFRecommender(catalog, users)
    result = rec.recommend("nonexistent", 3, 5)

    assert result.items == []
    assert result.diagnostic is Diagnostic.TARGET_NOT_FOUND
    assert rec.get_recommendations("nonexistent", 3, 5) == []


def test_no_similar_users_returns_empty_with_diagnostic(catalog: Catalog) -> None:
    users = UserStore([User(id="A", preferences={"P001": 1.0}), User(id="B", preferences={"P002": 1.0})])
    result = UserUserCFRecommender(catalog, users).recommend("A", 3, 5)

    assert result.items == []
    assert result.diagnostic is Diagnostic.NO_SIMILAR_USERS


def test_new_preferences_are_visible_to_next_call(catalog: Catalog, users: UserStore) -> None:
    rec = UserUserCFRecommender(catalog, users)
    users.add_preference("U5", "P002")

    items = [i.id for i in rec.get_recommendations("U5", 3, 5)]
    assert "P002" not in items


def test_negative_n_raises(catalog: Catalog, users: UserStore) -> None:
    with pytest.raises(ValueError):
        UserUserCFRecommender(catalog, users).get_recommendations("U5", 3, -1)


@pytest.mark.parametrize("target_id", ["U5", "nonexistent"])
def test_negative_k_raises_even_for_missing_target(catalog: Catalog, users: UserStore, target_id: str) -> None:
    with pytest.raises(ValueError):
        UserUserCFRecommender(catalog, users).recommend(target_id, -1, 5)


def test_reference_scenario_includes_p006_from_u3(catalog: Catalog, users: UserStore) -> None:
    # U3 contributes P006; it ties at score 1 and sorts ahead of U2's P008.
    items = [i.id for i in UserUserCFRecommender(catalog, users).get_recommendations("U5", 3, 6)]
    assert items == ["P002", "P003", "P004", "P005", "P006", "P008"]
    assert items.index("P006") == 4
