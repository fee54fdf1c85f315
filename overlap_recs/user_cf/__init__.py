"""User-user collaborative filtering over shared items.

Core idea:
- Similarity between two users is the number of items both have in their
  preference maps
- The target's nearest users are ranked by that count (ties: user id ascending)
- Items held by those users that the target does not hold are scored by how
  many neighbours hold them (ties: item id ascending)
"""
from .diagnostics import Diagnostic
from .recommender import RecommendedItem, Recommendations, Recommender, UserUserCFRecommender
from .similarity import SimilarityScorer, SimilarUser, SimilarUsersResult, similarity

__all__ = [
    "Diagnostic",
    "RecommendedItem",
    "Recommendations",
    "Recommender",
    "SimilarityScorer",
    "SimilarUser",
    "SimilarUsersResult",
    "UserUserCFRecommender",
    "similarity",
]
