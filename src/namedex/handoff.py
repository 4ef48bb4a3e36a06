"""Hand-off of selected entries to the detail and comparison views.

Each blob is a JSON file named after a fixed key inside a hand-off
directory. The browser only writes these; the consuming views read them.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from namedex.models import CatalogEntry
from namedex.schemas import entry_to_document

logger = logging.getLogger(__name__)

SELECTED_NAME_KEY = "selectedName"
COMPARE_LIST_KEY = "compareList"


def detail_payload(entry: CatalogEntry) -> dict:
    """Full entry in source document shape, for the detail view."""
    return entry_to_document(entry)


def compare_payload(ids: tuple[int, ...]) -> list[int]:
    """Id array for the comparison view."""
    return list(ids)


class HandoffStore:
    """Writes hand-off blobs as ``<directory>/<key>.json``."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def put(self, key: str, payload: object) -> Path:
        """Serialize ``payload`` under ``key``, replacing any previous blob."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.info("Hand-off written key=%s path=%s", key, path)
        return path
