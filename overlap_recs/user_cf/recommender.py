from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..store.catalog import Catalog, Item
from ..store.users import UserStore
from .diagnostics import Diagnostic
from .similarity import SimilarityScorer, SimilarUser


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecommendedItem:
    item: Item
    score: int

    @property
    def itemId(self) -> str:
        return self.item.id


@dataclass(frozen=True)
class Recommendations:
    items: list[RecommendedItem] = field(default_factory=list)
    similar_users: list[SimilarUser] = field(default_factory=list)
    diagnostic: Diagnostic | None = None


class UserUserCFRecommender:
    """User-user CF recommender based on shared-item overlap.

    Holds references to caller-owned stores; nothing is copied, so later
    `add_user` / `add_preference` calls are visible to the next request.
    """

    def __init__(
        self,
        catalog: Catalog,
        users: UserStore,
        *,
        scorer: SimilarityScorer | None = None,
    ) -> None:
        self.catalog = catalog
        self.users = users
        self.scorer = scorer if scorer is not None else SimilarityScorer(users)

    def recommend(self, target_id: str, k: int, n: int) -> Recommendations:
        """Recommend items for `target_id` from items held by its `k` nearest users.

        Scoring:
        - Find the top-`k` users by shared-item count
        - Candidate items: held by a similar user, absent from the target's preferences
        - Score: number of similar users holding the item (rating and
          similarity strength are not used)
        - Order by score descending, then item id ascending; keep `n`
        - Ids missing from the catalog are dropped after the cut
        """
        if int(k) < 0:
            raise ValueError(f"k must be >= 0, got {k}")
        if int(n) < 0:
            raise ValueError(f"n must be >= 0, got {n}")

        target = self.users.get_user(target_id)
        if target is None:
            logger.info("Target user not found: %s", target_id)
            return Recommendations(diagnostic=Diagnostic.TARGET_NOT_FOUND)

        sims = self.scorer.rank_similar_users(target_id, int(k))
        if not sims.users:
            return Recommendations(diagnostic=sims.diagnostic or Diagnostic.NO_SIMILAR_USERS)

        seen = target.item_ids()
        scores: dict[str, int] = {}
        for s in sims.users:
            for item_id in s.user.preferences:
                if item_id in seen:
                    continue
                scores[item_id] = scores.get(item_id, 0) + 1

        ranked = sorted(scores.items(), key=lambda x: (-x[1], x[0]))[: int(n)]

        out: list[RecommendedItem] = []
        for item_id, score in ranked:
            item = self.catalog.get_item(item_id)
            if item is None:
                logger.debug("Dropping candidate %s: not in catalog", item_id)
                continue
            out.append(RecommendedItem(item=item, score=int(score)))

        logger.debug(
            "Recommendations for %s: neighbours=%d candidates=%d returned=%d",
            target_id,
            len(sims.users),
            len(scores),
            len(out),
        )
        return Recommendations(items=out, similar_users=sims.users)

    def get_recommendations(self, target_id: str, num_similar_users: int, num_recommendations: int) -> list[Item]:
        """Ordered items recommended for `target_id`; empty if there is no basis."""
        result = self.recommend(target_id, num_similar_users, num_recommendations)
        return [r.item for r in result.items]


Recommender = UserUserCFRecommender
