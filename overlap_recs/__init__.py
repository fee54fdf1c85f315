"""Shared-item user-user recommender."""
