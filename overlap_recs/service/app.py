"""FastAPI service entrypoint for the shared-item user-user recommender."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, HTTPException

from ..config import load_config
from ..data import load_stores
from ..paths import get_repo_root, resolve_path
from ..store.catalog import Item
from ..store.users import User, UserNotFound
from ..utils import setup_logging
from .schemas import (
    ItemIn,
    ItemOut,
    PreferenceIn,
    SimilarUsersRequest,
    SimilarUsersResponse,
    UserCFRecommendRequest,
    UserCFRecommendResponse,
    UserIn,
    UserOut,
)
from .state import RecommendationState

logger = logging.getLogger(__name__)


def _get_env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or str(raw).strip() == "":
        return default
    return resolve_path(get_repo_root(), str(raw))


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    repo_root = get_repo_root()
    default_config = repo_root / "config.yaml"
    config_path = _get_env_path("CONFIG_PATH", default_config if default_config.is_file() else None)
    cfg = load_config(config_path)

    raw_dir = _get_env_path("RAW_DIR", resolve_path(repo_root, cfg.dataset.raw_dir))
    logger.info("Starting service with config=%s raw_dir=%s", config_path, raw_dir)

    catalog, users = load_stores(raw_dir)
    app.state.recs = RecommendationState(catalog, users, cfg)
    yield


app = FastAPI(title="Shared-Item User-User Recommender", lifespan=lifespan)


def _state(app_: FastAPI) -> RecommendationState:
    state = getattr(app_.state, "recs", None)
    if state is None:
        raise HTTPException(status_code=503, detail="Recommender not initialized")
    return state


@app.get("/health")
def health() -> dict:
    n_users, n_items = _state(app).counts()
    return {"status": "ok", "users": n_users, "items": n_items}


@app.get("/items/{item_id}", response_model=ItemOut)
def get_item(item_id: str) -> dict:
    item = _state(app).get_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"itemId not found: {item_id}")
    return {"itemId": item.id, "name": item.name}


@app.post("/items", response_model=ItemOut)
def add_item(req: ItemIn) -> dict:
    """Add a catalog item, overwriting any item with the same id."""
    _state(app).add_item(Item(id=req.itemId, name=req.name))
    return {"itemId": req.itemId, "name": req.name}


@app.post("/users", response_model=UserOut)
def add_user(req: UserIn) -> dict:
    """Add a user, overwriting any user with the same id."""
    bad = {k: v for k, v in req.preferences.items() if not k or not v > 0.0}
    if bad:
        raise HTTPException(status_code=400, detail=f"preferences need non-empty ids and positive ratings: {bad}")
    _state(app).add_user(User(id=req.userId, preferences=dict(req.preferences)))
    return {"userId": req.userId, "preferences": dict(req.preferences)}


@app.get("/users/{user_id}", response_model=UserOut)
def get_user(user_id: str) -> dict:
    prefs = _state(app).get_user_preferences(user_id)
    if prefs is None:
        raise HTTPException(status_code=404, detail=f"userId not found: {user_id}")
    return {"userId": user_id, "preferences": prefs}


@app.post("/users/{user_id}/preferences", response_model=UserOut)
def add_preference(user_id: str, req: PreferenceIn) -> dict:
    """Record one like/purchase for an existing user."""
    try:
        prefs = _state(app).add_preference(user_id, req.itemId, req.rating)
    except UserNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"userId": user_id, "preferences": prefs}


@app.post("/user_cf/similar_users", response_model=SimilarUsersResponse)
def user_cf_similar_users(req: SimilarUsersRequest) -> dict:
    """Return the users sharing the most items with `userId`."""
    top_n, result = _state(app).similar_users(req.userId, req.top_n)
    return {
        "userId": req.userId,
        "top_n": top_n,
        "results": [{"userId": s.userId, "similarity": s.similarity} for s in result.users],
        "diagnostic": None if result.diagnostic is None else result.diagnostic.value,
    }


@app.post("/user_cf/recommend", response_model=UserCFRecommendResponse)
def user_cf_recommend(req: UserCFRecommendRequest) -> dict:
    """Recommend items held by similar users that `userId` does not hold yet."""
    k, n, result = _state(app).recommend(req.userId, req.k, req.n)
    return {
        "userId": req.userId,
        "k": k,
        "n": n,
        "results": [{"itemId": r.itemId, "name": r.item.name, "score": r.score} for r in result.items],
        "diagnostic": None if result.diagnostic is None else result.diagnostic.value,
    }


def main() -> None:
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run("overlap_recs.service.app:app", host=host, port=port, log_level="info")


if __name__ == "__main__":
    main()
