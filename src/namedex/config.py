"""Configuration loading for the name catalog browser."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

from namedex.debounce import DEBOUNCE_SECONDS
from namedex.pagination import DEFAULT_PAGE_SIZE
from namedex.selection import COMPARE_LIMIT, MIN_COMPARE

CATALOG_ENV_VAR = "NAMEDEX_CATALOG"


@dataclass
class BrowserConfig:
    """Browser configuration with defaults matching the web front end."""

    catalog_path: Path = field(default_factory=lambda: Path("resources/data-complete.json"))
    page_size: int = DEFAULT_PAGE_SIZE
    debounce_seconds: float = DEBOUNCE_SECONDS
    compare_limit: int = COMPARE_LIMIT
    handoff_dir: Path = field(default_factory=lambda: Path("data/handoff"))
    log_dir: Path = field(default_factory=lambda: Path("logs"))

    def __post_init__(self) -> None:
        """Ensure paths are Path objects and sizes are usable."""
        if isinstance(self.catalog_path, str):
            self.catalog_path = Path(self.catalog_path)
        if isinstance(self.handoff_dir, str):
            self.handoff_dir = Path(self.handoff_dir)
        if isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)
        if self.page_size < 1:
            raise ValueError(f"page_size must be positive, got {self.page_size}")
        if not MIN_COMPARE <= self.compare_limit <= COMPARE_LIMIT:
            raise ValueError(
                f"compare_limit must be between {MIN_COMPARE} and {COMPARE_LIMIT}, "
                f"got {self.compare_limit}"
            )


def load_config(config_path: Path | None = None) -> BrowserConfig:
    """Load browser configuration from JSON, merging with defaults.

    The ``NAMEDEX_CATALOG`` environment variable, when set, overrides the
    catalog path from the file.

    Args:
        config_path: Optional path to a JSON config file. Missing keys keep
            their defaults.

    Returns:
        BrowserConfig with file and environment values merged over defaults.
    """
    kwargs: dict[str, object] = {}

    if config_path is not None:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)

        if "catalog_path" in data:
            kwargs["catalog_path"] = Path(data["catalog_path"])
        if "page_size" in data:
            kwargs["page_size"] = int(data["page_size"])
        if "debounce_ms" in data:
            kwargs["debounce_seconds"] = data["debounce_ms"] / 1000
        if "compare_limit" in data:
            kwargs["compare_limit"] = int(data["compare_limit"])
        if "handoff_dir" in data:
            kwargs["handoff_dir"] = Path(data["handoff_dir"])
        if "log_dir" in data:
            kwargs["log_dir"] = Path(data["log_dir"])

    env_catalog = os.environ.get(CATALOG_ENV_VAR)
    if env_catalog:
        kwargs["catalog_path"] = Path(env_catalog)

    return BrowserConfig(**kwargs)  # type: ignore[arg-type]
