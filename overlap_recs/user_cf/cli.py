from __future__ import annotations

import argparse
from pathlib import Path

import pandas as pd

from ..config import load_config
from ..data import load_stores
from ..paths import get_repo_root, resolve_path
from ..utils import setup_logging
from .diagnostics import Diagnostic
from .recommender import UserUserCFRecommender


_EMPTY_MESSAGES = {
    Diagnostic.TARGET_NOT_FOUND: "User not found: {user_id}",
    Diagnostic.NO_SIMILAR_USERS: "No similar users found (no other user shares an item with {user_id}).",
}


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="User-user collaborative filtering (shared-item overlap)")
    p.add_argument("--user-id", type=str, required=True, help="userId from preferences.csv")
    p.add_argument("--top-similar", type=int, default=None, help="How many similar users to consult")
    p.add_argument("--k", type=int, default=None, help="How many item recommendations to return")
    p.add_argument("--config", type=Path, default=None, help="Path to config YAML (default: <repo>/config.yaml if present)")
    p.add_argument("--raw-dir", type=Path, default=None, help="Directory holding items.csv and preferences.csv")
    p.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.log_level.upper())

    repo_root = get_repo_root()
    config_path = args.config
    if config_path is None and (repo_root / "config.yaml").is_file():
        config_path = repo_root / "config.yaml"
    cfg = load_config(resolve_path(repo_root, config_path) if config_path is not None else None)

    raw_dir = resolve_path(repo_root, args.raw_dir if args.raw_dir is not None else cfg.dataset.raw_dir)
    catalog, users = load_stores(raw_dir)

    top_similar = cfg.user_cf.num_similar_users if args.top_similar is None else int(args.top_similar)
    k = cfg.user_cf.num_recommendations if args.k is None else int(args.k)
    if top_similar < 0 or k < 0:
        raise SystemExit("--top-similar and --k must be >= 0")

    rec = UserUserCFRecommender(catalog, users)
    result = rec.recommend(args.user_id, top_similar, k)

    print("\n=== Similar Users ===")
    if result.similar_users:
        df_s = pd.DataFrame([{"userId": s.userId, "similarity": s.similarity} for s in result.similar_users])
        print(df_s.to_string(index=False))
    elif top_similar == 0 and result.diagnostic is not Diagnostic.TARGET_NOT_FOUND:
        print("No similar users requested (--top-similar 0).")
    elif result.diagnostic is not None:
        print(_EMPTY_MESSAGES[result.diagnostic].format(user_id=args.user_id))

    print("\n=== Recommended Items ===")
    if result.items:
        df_r = pd.DataFrame([{"itemId": r.itemId, "name": r.item.name, "score": r.score} for r in result.items])
        print(df_r.to_string(index=False))
    else:
        print("No recommendations found.")

    return 0 if result.diagnostic is not Diagnostic.TARGET_NOT_FOUND else 1


if __name__ == "__main__":
    raise SystemExit(main())
