"""Site loading from JSON documents.

Document structure:
    {
        "items": [
            {"id": 1, "title": "Home", "parent": 0, "url": "/"},
            {"id": 2, "title": "About", "parent": 1, "url": "/about", "flags": ["hidden"]}
        ]
    }
"""

import json
import logging
from pathlib import Path

from posttree.core.site import Site, SiteBuilder

logger = logging.getLogger(__name__)


class SiteLoader:
    """Loads Site structures from JSON files."""

    def __init__(self, source: Path) -> None:
        """Initialize loader.

        Args:
            source: Path to the JSON site document
        """
        self._source = source

    @property
    def source(self) -> Path:
        return self._source

    def load(self) -> Site:
        """Load and build the site.

        Raises:
            FileNotFoundError: If the source file doesn't exist
            ValueError: If the document is invalid
        """
        if not self._source.exists():
            raise FileNotFoundError(f"Site file not found: {self._source}")

        try:
            data = json.loads(self._source.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid site file {self._source}: {e}") from e

        site = parse_site(data)
        logger.info(f"Loaded {len(site)} items from {self._source}")
        return site


def parse_site(data: object) -> Site:
    """Build a Site from a decoded JSON document.

    Raises:
        ValueError: If the document is invalid
    """
    if not isinstance(data, dict):
        raise ValueError("Site document must be an object")

    raw_items = data.get("items")
    if not isinstance(raw_items, list):
        raise ValueError("items must be a list")

    builder = SiteBuilder()
    for position, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            raise ValueError(f"items[{position}] must be an object")

        item_id = raw.get("id")
        if not isinstance(item_id, int) or isinstance(item_id, bool) or item_id <= 0:
            raise ValueError(f"items[{position}].id must be a positive integer")

        title = raw.get("title", "")
        if not isinstance(title, str):
            raise ValueError(f"items[{position}].title must be a string")

        parent = raw.get("parent", 0)
        if parent is not None and (not isinstance(parent, int) or isinstance(parent, bool)):
            raise ValueError(f"items[{position}].parent must be an integer")

        url = raw.get("url", "")
        if not isinstance(url, str):
            raise ValueError(f"items[{position}].url must be a string")

        flags = raw.get("flags", [])
        if not isinstance(flags, list) or not all(isinstance(flag, str) for flag in flags):
            raise ValueError(f"items[{position}].flags must be a list of strings")

        builder.add_item(item_id, title, parent, url, flags)

    return builder.build()
