"""Lock-guarded stores + recommender shared by the HTTP handlers."""

from __future__ import annotations

from threading import Lock

from ..config import AppConfig
from ..store.catalog import Catalog, Item
from ..store.users import User, UserStore
from ..user_cf.recommender import Recommendations, UserUserCFRecommender
from ..user_cf.similarity import SimilarUsersResult


class RecommendationState:
    """Serialises store writes against recommendation reads with one lock.

    FastAPI runs sync handlers on a thread pool; the core reads the whole user
    set per request, so a half-applied write must never be observed.
    """

    def __init__(self, catalog: Catalog, users: UserStore, config: AppConfig) -> None:
        self.catalog = catalog
        self.users = users
        self.config = config
        self.recommender = UserUserCFRecommender(catalog, users)
        self._lock = Lock()

    def counts(self) -> tuple[int, int]:
        with self._lock:
            return len(self.users), len(self.catalog)

    def add_item(self, item: Item) -> None:
        with self._lock:
            self.catalog.add_item(item)

    def get_item(self, item_id: str) -> Item | None:
        with self._lock:
            return self.catalog.get_item(item_id)

    def add_user(self, user: User) -> None:
        with self._lock:
            self.users.add_user(user)

    def get_user_preferences(self, user_id: str) -> dict[str, float] | None:
        with self._lock:
            user = self.users.get_user(user_id)
            return None if user is None else dict(user.preferences)

    def add_preference(self, user_id: str, item_id: str, rating: float) -> dict[str, float]:
        with self._lock:
            self.users.add_preference(user_id, item_id, rating)
            return dict(self.users.get_user(user_id).preferences)

    def similar_users(self, user_id: str, top_n: int | None) -> tuple[int, SimilarUsersResult]:
        k = self.config.user_cf.num_similar_users if top_n is None else int(top_n)
        with self._lock:
            return k, self.recommender.scorer.rank_similar_users(user_id, k)

    def recommend(self, user_id: str, k: int | None, n: int | None) -> tuple[int, int, Recommendations]:
        k = self.config.user_cf.num_similar_users if k is None else int(k)
        n = self.config.user_cf.num_recommendations if n is None else int(n)
        with self._lock:
            return k, n, self.recommender.recommend(user_id, k, n)
