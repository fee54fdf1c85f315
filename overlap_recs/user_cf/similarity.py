from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..store.users import User, UserStore
from .diagnostics import Diagnostic


logger = logging.getLogger(__name__)


def similarity(user_a: User, user_b: User) -> int:
    """Number of item ids present in both users' preference maps."""
    return len(user_a.item_ids() & user_b.item_ids())


@dataclass(frozen=True)
class SimilarUser:
    user: User
    similarity: int

    @property
    def userId(self) -> str:
        return self.user.id


@dataclass(frozen=True)
class SimilarUsersResult:
    users: list[SimilarUser] = field(default_factory=list)
    diagnostic: Diagnostic | None = None


class SimilarityScorer:
    """Ranks the users of a `UserStore` by item overlap with a target user."""

    def __init__(self, users: UserStore) -> None:
        self.users = users

    def similarity(self, user_a: User, user_b: User) -> int:
        return similarity(user_a, user_b)

    def rank_similar_users(self, target_id: str, k: int) -> SimilarUsersResult:
        """Return up to `k` users sharing at least one item with `target_id`.

        Ordering: similarity descending, then user id ascending. The target
        itself is never scored. An unknown target or an empty neighbourhood
        yields an empty result carrying the matching diagnostic.
        """
        if int(k) < 0:
            raise ValueError(f"k must be >= 0, got {k}")

        target = self.users.get_user(target_id)
        if target is None:
            logger.info("Target user not found: %s", target_id)
            return SimilarUsersResult(diagnostic=Diagnostic.TARGET_NOT_FOUND)

        scored: list[SimilarUser] = []
        for other in self.users:
            if other.id == target.id:
                continue
            sim = self.similarity(target, other)
            if sim <= 0:
                continue
            scored.append(SimilarUser(user=other, similarity=sim))

        if not scored:
            logger.info("No users share an item with %s", target_id)
            return SimilarUsersResult(diagnostic=Diagnostic.NO_SIMILAR_USERS)

        scored.sort(key=lambda s: (-s.similarity, s.user.id))
        top = scored[: int(k)]
        logger.debug(
            "Similar users for %s: candidates=%d kept=%d",
            target_id,
            len(scored),
            len(top),
        )
        return SimilarUsersResult(users=top)

    def find_top_similar_users(self, target_id: str, k: int) -> list[User]:
        """Top-`k` most similar users to `target_id` (see `rank_similar_users`)."""
        return [s.user for s in self.rank_similar_users(target_id, k).users]
