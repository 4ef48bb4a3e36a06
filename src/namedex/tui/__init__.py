"""namedex interactive TUI.

A Textual terminal interface for filtering, sorting, paging and comparing
the name catalog, with whole-catalog statistics alongside.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from namedex.config import BrowserConfig


def run_tui(
    catalog_path: Path | None = None,
    config_path: Path | None = None,
    config: BrowserConfig | None = None,
) -> None:
    """Load configuration and catalog, then launch the TUI application.

    Imports are deferred so ``import namedex.tui`` stays cheap.

    Args:
        catalog_path: Catalog JSON file; overrides the configured path.
        config_path: Optional JSON config file.
        config: Already-resolved configuration (e.g. from the CLI); wins over
            ``config_path``.
    """
    from namedex.catalog import CatalogStore
    from namedex.config import load_config
    from namedex.errors import DataIntegrityError
    from namedex.handoff import HandoffStore
    from namedex.tui.app import NamedexApp
    from namedex.tui.telemetry import configure_file_logging

    if config is None:
        config = load_config(config_path)
    if catalog_path is not None:
        config.catalog_path = catalog_path

    configure_file_logging(config.log_dir)

    store = CatalogStore()
    try:
        asyncio.run(store.load(config.catalog_path))
        app = NamedexApp(
            catalog=store.entries,
            config=config,
            handoff_store=HandoffStore(config.handoff_dir),
        )
    except DataIntegrityError as exc:
        print(f"Error: catalog {config.catalog_path} is malformed: {exc}")
        raise SystemExit(1)

    if store.used_fallback:
        print(f"Warning: could not load {config.catalog_path}; showing the built-in sample name.")

    app.run()
