"""In-memory site structure implementing the item repository.

Stores items in a flat list with parent/children relationships tracked by
indices. Provides O(1) identifier lookups and O(d) ancestor walks where d
is the item depth.
"""

from collections.abc import Iterable

from posttree.core.errors import ItemLookupError
from posttree.core.items import Item
from posttree.core.types import ItemId


class Site:
    """Content site with efficient identifier lookups.

    Children lists keep insertion order, which is the order descendants are
    reported in.
    """

    __slots__ = ("_children", "_flags", "_id_index", "_items", "_parents")

    def __init__(
        self,
        items: list[Item],
        children: list[list[int]],
        parents: list[int | None],
        flags: dict[str, set[ItemId]] | None = None,
    ) -> None:
        """Initialize site structure.

        Args:
            items: Flat list of all items
            children: Children indices for each item
            parents: Parent index for each item (None for roots and orphans)
            flags: Item identifiers per flag name (e.g., "hidden")
        """
        self._items = items
        self._children = children
        self._parents = parents
        self._flags = flags or {}
        self._id_index = {item.id: i for i, item in enumerate(items)}

    def __len__(self) -> int:
        return len(self._items)

    def get_item(self, item_id: ItemId) -> Item:
        return self._items[self._index(item_id)]

    def get_ancestor_ids(self, item_id: ItemId) -> list[ItemId]:
        """Walk up the parent chain.

        Returns:
            Ancestor identifiers from the parent up to the top-most item

        Raises:
            ItemLookupError: If the item or one of its parents is unknown
        """
        idx = self._index(item_id)
        ancestors: list[ItemId] = []
        while True:
            item = self._items[idx]
            if not item.has_parent:
                return ancestors
            parent = self._parents[idx]
            if parent is None:
                raise ItemLookupError(
                    item.id, f"Parent {item.parent_id} of item {item.id} not found"
                )
            if len(ancestors) > len(self._items):
                raise ItemLookupError(item_id, f"Parent cycle above item {item_id}")
            ancestors.append(self._items[parent].id)
            idx = parent

    def get_descendants(self, root_id: ItemId) -> list[Item]:
        """Get all items below root_id in depth-first order, root excluded."""
        result: list[Item] = []
        stack = list(reversed(self._children[self._index(root_id)]))
        seen: set[int] = set()
        while stack:
            idx = stack.pop()
            if idx in seen:
                continue
            seen.add(idx)
            result.append(self._items[idx])
            stack.extend(reversed(self._children[idx]))
        return result

    def get_hidden_ids(self, filter_key: str) -> set[ItemId]:
        return set(self._flags.get(filter_key, ()))

    def resolve_url(self, item_id: ItemId) -> str:
        return self.get_item(item_id).url

    def _index(self, item_id: ItemId) -> int:
        idx = self._id_index.get(item_id)
        if idx is None:
            raise ItemLookupError(item_id)
        return idx


class SiteBuilder:
    """Builder for constructing Site instances.

    Items may be added in any order; parent links are resolved in build().
    """

    def __init__(self) -> None:
        self._items: list[Item] = []
        self._ids: set[ItemId] = set()
        self._flags: dict[str, set[ItemId]] = {}

    def add_item(
        self,
        item_id: int,
        title: str,
        parent_id: int | None = None,
        url: str = "",
        flags: Iterable[str] = (),
    ) -> Item:
        """Add an item to the site.

        Args:
            item_id: Unique item identifier
            title: Display title
            parent_id: Identifier of the parent item, 0 or None for top-level
            url: Permalink of the item
            flags: Flag names set on the item (e.g., "hidden")

        Returns:
            The added Item

        Raises:
            ValueError: If the identifier was already added
        """
        key = ItemId(item_id)
        if key in self._ids:
            raise ValueError(f"Duplicate item id: {item_id}")
        item = Item(
            id=key,
            title=title,
            parent_id=ItemId(parent_id) if parent_id else None,
            url=url,
        )
        self._ids.add(key)
        self._items.append(item)
        for flag in flags:
            self._flags.setdefault(flag, set()).add(key)
        return item

    def build(self) -> Site:
        """Build the Site instance."""
        id_index = {item.id: i for i, item in enumerate(self._items)}
        children: list[list[int]] = [[] for _ in self._items]
        parents: list[int | None] = []

        for idx, item in enumerate(self._items):
            parent = id_index.get(item.parent_id) if item.has_parent else None
            parents.append(parent)
            if parent is not None:
                children[parent].append(idx)

        return Site(
            items=list(self._items),
            children=children,
            parents=parents,
            flags={key: set(ids) for key, ids in self._flags.items()},
        )
