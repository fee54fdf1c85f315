"""HTTP surface over the stores and the recommender."""
