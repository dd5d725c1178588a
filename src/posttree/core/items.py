"""Content items, navigation tree nodes and the repository interface.

The repository is the only way the pipeline reaches the content store.
Implementations are injected into the render entry point.
"""

from collections.abc import Collection, Iterator, Sequence
from dataclasses import dataclass
from typing import Protocol

from posttree.core.types import ItemId


@dataclass(frozen=True)
class Item:
    """Content item data."""

    id: ItemId
    title: str
    parent_id: ItemId | None = None
    url: str = ""

    @property
    def has_parent(self) -> bool:
        """Whether the item points at a parent (zero and None mean no parent)."""
        return bool(self.parent_id)


@dataclass(frozen=True)
class TreeNode:
    """Item paired with its child nodes, in discovery order."""

    item: Item
    children: tuple["TreeNode", ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def without_children(self) -> "TreeNode":
        """Return a collapsed copy of this node."""
        if self.is_leaf:
            return self
        return TreeNode(item=self.item)

    def walk(self) -> Iterator["TreeNode"]:
        """Iterate over this node and all its descendants in pre-order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def count(self) -> int:
        """Number of nodes in this subtree, including this node."""
        return sum(1 for _ in self.walk())

    def contains(self, item_id: ItemId) -> bool:
        """Check whether an item appears anywhere in this subtree."""
        return any(node.item.id == item_id for node in self.walk())


class ItemRepository(Protocol):
    """Protocol for content store access.

    Lookup methods raise ItemLookupError for unknown identifiers.
    """

    def get_item(self, item_id: ItemId) -> Item: ...

    def get_ancestor_ids(self, item_id: ItemId) -> Sequence[ItemId]:
        """Ancestor identifiers ordered from the parent up to the top-most item."""
        ...

    def get_descendants(self, root_id: ItemId) -> Sequence[Item]:
        """All items below root_id, flat. May or may not include the root."""
        ...

    def get_hidden_ids(self, filter_key: str) -> Collection[ItemId]:
        """Identifiers of items explicitly flagged with filter_key."""
        ...

    def resolve_url(self, item_id: ItemId) -> str: ...
