"""Shared test fixtures."""

from xml.etree import ElementTree as ET

import pytest
from posttree.core.items import Item
from posttree.core.site import Site, SiteBuilder
from posttree.core.types import ItemId


@pytest.fixture
def scenario_site() -> Site:
    """Root with children A and B, X below A."""
    builder = SiteBuilder()
    builder.add_item(1, "Root", 0, "/")
    builder.add_item(2, "A", 1, "/a")
    builder.add_item(3, "B", 1, "/b")
    builder.add_item(4, "X", 2, "/a/x")
    return builder.build()


@pytest.fixture
def docs_site() -> Site:
    """Three-level site with a hidden branch.

    Home
    ├── Guide
    │   ├── Install
    │   │   └── Linux
    │   └── Configure
    ├── About
    │   └── Team
    └── Secret (hidden)
        └── Vault
    """
    builder = SiteBuilder()
    builder.add_item(1, "Home", 0, "/")
    builder.add_item(2, "Guide", 1, "/guide")
    builder.add_item(3, "About", 1, "/about")
    builder.add_item(4, "Install", 2, "/guide/install")
    builder.add_item(5, "Configure", 2, "/guide/configure")
    builder.add_item(6, "Team", 3, "/about/team")
    builder.add_item(7, "Linux", 4, "/guide/install/linux")
    builder.add_item(8, "Secret", 1, "/secret", flags=["hidden"])
    builder.add_item(9, "Vault", 8, "/secret/vault")
    return builder.build()


def link_titles(markup: str) -> list[str]:
    """Titles of all rendered links, in document order."""
    return [link.text or "" for link in ET.fromstring(markup).iter("a")]


def marked_titles(markup: str, marker: str = "current") -> list[str]:
    """Titles of links carrying the marker class."""
    return [
        link.text or ""
        for link in ET.fromstring(markup).iter("a")
        if link.get("class") == marker
    ]


class CountingRepository:
    """Repository wrapper recording every call."""

    def __init__(self, site: Site) -> None:
        self._site = site
        self.calls: list[str] = []

    def get_item(self, item_id: ItemId) -> Item:
        self.calls.append("get_item")
        return self._site.get_item(item_id)

    def get_ancestor_ids(self, item_id: ItemId) -> list[ItemId]:
        self.calls.append("get_ancestor_ids")
        return self._site.get_ancestor_ids(item_id)

    def get_descendants(self, root_id: ItemId) -> list[Item]:
        self.calls.append("get_descendants")
        return self._site.get_descendants(root_id)

    def get_hidden_ids(self, filter_key: str) -> set[ItemId]:
        self.calls.append("get_hidden_ids")
        return self._site.get_hidden_ids(filter_key)

    def resolve_url(self, item_id: ItemId) -> str:
        self.calls.append("resolve_url")
        return self._site.resolve_url(item_id)
