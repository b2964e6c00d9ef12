"""Project configuration loaded from pyproject.toml."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from tweetstorm.splitter.models import SplitConfig


class TweetstormConfig(BaseModel):
    """Configuration for tweetstorm."""

    # Splitting parameters (characters)
    max_length: int = Field(default=280, gt=0)
    fuzz: int = Field(default=8, ge=0)
    accept_ratio: float = Field(default=0.5, gt=0.0, le=1.0)
    fill_column: int | None = Field(default=None, gt=0)

    # CLI logging
    log_dir: Path = Path("logs")

    def split_config(self) -> SplitConfig:
        return SplitConfig(
            max_length=self.max_length,
            fuzz=self.fuzz,
            accept_ratio=self.accept_ratio,
            fill_column=self.fill_column,
        )


@lru_cache(maxsize=1)
def load_config() -> TweetstormConfig:
    """Load configuration from pyproject.toml.

    Returns:
        TweetstormConfig with settings from [tool.tweetstorm] section,
        falling back to defaults if not found.
    """
    pyproject_path = _find_pyproject()
    if pyproject_path is None:
        return TweetstormConfig()
    return load_config_file(pyproject_path)


def load_config_file(pyproject_path: Path) -> TweetstormConfig:
    """Load the [tool.tweetstorm] section of a specific pyproject.toml."""
    with pyproject_path.open("rb") as f:
        data = tomllib.load(f)

    tool_config: dict[str, Any] = data.get("tool", {}).get("tweetstorm", {})
    return TweetstormConfig(**tool_config)


def _find_pyproject() -> Path | None:
    """Find pyproject.toml by walking up from current file."""
    current = Path(__file__).resolve().parent
    for _ in range(10):  # Max 10 levels up
        candidate = current / "pyproject.toml"
        if candidate.exists():
            return candidate
        if current.parent == current:
            break
        current = current.parent
    return None


# Convenience accessor
config = load_config()
