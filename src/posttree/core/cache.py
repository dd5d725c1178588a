"""Per-render memoization of repository lookups.

A RenderScopedRepository lives for exactly one render call. It is never
shared between renders, so changes in the content store are always picked
up by the next render.
"""

from collections.abc import Collection, Sequence

from posttree.core.items import Item, ItemRepository
from posttree.core.types import ItemId


class RenderScopedRepository:
    """Repository wrapper caching lookups for a single render.

    Failed lookups are not cached; the exception propagates to the caller.
    """

    def __init__(self, repository: ItemRepository) -> None:
        """Initialize wrapper.

        Args:
            repository: Underlying content store adapter
        """
        self._repository = repository
        self._items: dict[ItemId, Item] = {}
        self._ancestors: dict[ItemId, tuple[ItemId, ...]] = {}
        self._descendants: dict[ItemId, tuple[Item, ...]] = {}
        self._hidden: dict[str, frozenset[ItemId]] = {}
        self._urls: dict[ItemId, str] = {}

    def get_item(self, item_id: ItemId) -> Item:
        item = self._items.get(item_id)
        if item is None:
            item = self._repository.get_item(item_id)
            self._items[item_id] = item
        return item

    def get_ancestor_ids(self, item_id: ItemId) -> Sequence[ItemId]:
        ancestors = self._ancestors.get(item_id)
        if ancestors is None:
            ancestors = tuple(self._repository.get_ancestor_ids(item_id))
            self._ancestors[item_id] = ancestors
        return ancestors

    def get_descendants(self, root_id: ItemId) -> Sequence[Item]:
        descendants = self._descendants.get(root_id)
        if descendants is None:
            descendants = tuple(self._repository.get_descendants(root_id))
            self._descendants[root_id] = descendants
        return descendants

    def get_hidden_ids(self, filter_key: str) -> Collection[ItemId]:
        hidden = self._hidden.get(filter_key)
        if hidden is None:
            hidden = frozenset(self._repository.get_hidden_ids(filter_key))
            self._hidden[filter_key] = hidden
        return hidden

    def resolve_url(self, item_id: ItemId) -> str:
        url = self._urls.get(item_id)
        if url is None:
            url = self._repository.resolve_url(item_id)
            self._urls[item_id] = url
        return url
