"""Pydantic schemas for the online recommendation API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ItemIn(BaseModel):
    """Payload for adding (or overwriting) a catalog item."""

    itemId: str = Field(..., min_length=1)
    name: str = ""


class ItemOut(BaseModel):
    itemId: str
    name: str


class UserIn(BaseModel):
    """Payload for adding (or overwriting) a user and its preference map."""

    userId: str = Field(..., min_length=1)
    preferences: dict[str, float] = Field(default_factory=dict, description="itemId -> rating (> 0)")


class PreferenceIn(BaseModel):
    itemId: str = Field(..., min_length=1)
    rating: float = Field(1.0, gt=0.0, description="Stored but not used for scoring")


class UserOut(BaseModel):
    userId: str
    preferences: dict[str, float]


class SimilarUsersRequest(BaseModel):
    """Request for the similar-users endpoint."""

    userId: str = Field(..., min_length=1)
    top_n: Optional[int] = Field(None, ge=0, le=1000, description="Number of similar users to return")


class SimilarUserItem(BaseModel):
    userId: str
    similarity: int


class SimilarUsersResponse(BaseModel):
    userId: str
    top_n: int
    results: list[SimilarUserItem]
    diagnostic: Optional[str] = None


class UserCFRecommendRequest(BaseModel):
    """Request for user-user CF recommendations."""

    userId: str = Field(..., min_length=1)
    k: Optional[int] = Field(None, ge=0, le=1000, description="How many neighbours to consider")
    n: Optional[int] = Field(None, ge=0, le=1000, description="Number of item recommendations to return")


class UserCFRecommendationItem(BaseModel):
    itemId: str
    name: str
    score: int


class UserCFRecommendResponse(BaseModel):
    userId: str
    k: int
    n: int
    results: list[UserCFRecommendationItem]
    diagnostic: Optional[str] = None
