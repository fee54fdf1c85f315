"""User store: in-memory id -> User lookup with per-user preference maps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

import pandas as pd


DEFAULT_RATING = 1.0


class UserNotFound(KeyError):
    """Raised by `UserStore.add_preference` for an unknown user id."""

    def __init__(self, user_id: str) -> None:
        super().__init__(user_id)
        self.user_id = user_id

    def __str__(self) -> str:
        return f"Unknown userId: {self.user_id}"


@dataclass
class User:
    """A user and the items they engaged with (item id -> rating).

    Only the presence of a key is read by the recommender; the rating value is
    carried along but never weighs a score.
    """

    id: str
    preferences: dict[str, float] = field(default_factory=dict)

    def item_ids(self) -> set[str]:
        return set(self.preferences)


class UserStore:
    """Users keyed by id. Re-adding an id overwrites the previous user."""

    def __init__(self, users: Optional[list[User]] = None) -> None:
        self._users: dict[str, User] = {}
        for user in users or []:
            self.add_user(user)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "UserStore":
        """Build a store from a long-format frame: `userId`, `itemId`[, `rating`].

        One user is created per distinct `userId`; a missing `rating` column
        means every row is stored as a plain like (1.0).
        """
        missing = [c for c in ("userId", "itemId") if c not in df.columns]
        if missing:
            raise ValueError(f"preference frame missing columns: {missing}")

        store = cls()
        user_ids = df["userId"].astype("string").tolist()
        item_ids = df["itemId"].astype("string").tolist()
        if "rating" in df.columns:
            ratings = df["rating"].astype("float64").fillna(DEFAULT_RATING).tolist()
        else:
            ratings = [DEFAULT_RATING] * len(df)

        for uid, iid, rating in zip(user_ids, item_ids, ratings):
            uid = str(uid)
            if uid not in store:
                store.add_user(User(id=uid))
            store.add_preference(uid, str(iid), float(rating))
        return store

    def add_user(self, user: User) -> None:
        """Insert `user`, replacing any user already stored under its id."""
        if not user.id:
            raise ValueError("user id must be non-empty")
        self._users[user.id] = user

    def get_user(self, user_id: str) -> User | None:
        """Return the user stored under `user_id`, or None."""
        return self._users.get(user_id)

    def has_user(self, user_id: str) -> bool:
        return user_id in self._users

    def add_preference(self, user_id: str, item_id: str, rating: float = DEFAULT_RATING) -> None:
        """Set (or overwrite) one preference entry of an existing user.

        Raises `UserNotFound` if `user_id` is not in the store; users are never
        created implicitly here.
        """
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFound(user_id)
        if not item_id:
            raise ValueError("item id must be non-empty")
        if not float(rating) > 0.0:
            raise ValueError(f"rating must be positive, got {rating!r}")
        user.preferences[item_id] = float(rating)

    def user_ids(self) -> list[str]:
        return list(self._users.keys())

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def __len__(self) -> int:
        return len(self._users)

    def __iter__(self) -> Iterator[User]:
        return iter(list(self._users.values()))
