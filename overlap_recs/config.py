"""YAML-backed configuration for the loader, CLI and service."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass(frozen=True)
class DatasetConfig:
    raw_dir: str = "data/raw"


@dataclass(frozen=True)
class UserCFConfig:
    num_similar_users: int = 3
    num_recommendations: int = 5

    def __post_init__(self) -> None:
        if self.num_similar_users < 0:
            raise ValueError(f"user_cf.num_similar_users must be >= 0, got {self.num_similar_users}")
        if self.num_recommendations < 0:
            raise ValueError(f"user_cf.num_recommendations must be >= 0, got {self.num_recommendations}")


@dataclass(frozen=True)
class AppConfig:
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    user_cf: UserCFConfig = field(default_factory=UserCFConfig)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    obj = yaml.safe_load(path.read_text())
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ValueError(f"Expected YAML mapping at {path}, got {type(obj)}")
    return obj


def config_from_dict(cfg: dict[str, Any]) -> AppConfig:
    """Build an `AppConfig`, falling back to defaults for missing sections/keys."""
    dataset_cfg = cfg.get("dataset", {}) if isinstance(cfg.get("dataset"), dict) else {}
    user_cf_cfg = cfg.get("user_cf", {}) if isinstance(cfg.get("user_cf"), dict) else {}

    return AppConfig(
        dataset=DatasetConfig(raw_dir=str(dataset_cfg.get("raw_dir", "data/raw"))),
        user_cf=UserCFConfig(
            num_similar_users=int(user_cf_cfg.get("num_similar_users", 3)),
            num_recommendations=int(user_cf_cfg.get("num_recommendations", 5)),
        ),
    )


def load_config(path: Path | None) -> AppConfig:
    """Load `config.yaml`; `None` means built-in defaults."""
    if path is None:
        return AppConfig()
    return config_from_dict(_load_yaml(Path(path)))
