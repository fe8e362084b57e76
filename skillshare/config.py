"""SkillShare configuration."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field


def _default_store_dir() -> Path:
    return Path(os.environ.get("SKILLSHARE_STORE_DIR", ".skillshare_store"))


class StoreKeys(BaseModel):
    index_key: str = "skill_keys"
    record_prefix: str = "skill_"

    def record_key(self, record_id: str) -> str:
        return f"{self.record_prefix}{record_id}"


class TimingConfig(BaseModel):
    success_dismiss_seconds: float = 2.0
    error_dismiss_seconds: float = 3.0


class SkillShareConfig(BaseModel):
    store_dir: Path = Field(default_factory=_default_store_dir)
    wallet_address: str = Field(default_factory=lambda: os.environ.get("SKILLSHARE_WALLET", ""))
    keys: StoreKeys = Field(default_factory=StoreKeys)
    timing: TimingConfig = Field(default_factory=TimingConfig)
    history_limit: int = 10
    id_attempts: int = 3


def load_config(path: str | Path | None = None) -> SkillShareConfig:
    """Load configuration, overlaying a YAML file on the defaults when given."""
    if path is None:
        return SkillShareConfig()

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return SkillShareConfig(**data.get("skillshare", data))
