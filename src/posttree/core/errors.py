"""Typed failures raised by the navigation pipeline."""

from posttree.core.types import ItemId


class PostTreeError(Exception):
    """Base class for navigation rendering failures."""


class ItemLookupError(PostTreeError, LookupError):
    """Repository could not resolve an item, its ancestors or descendants."""

    def __init__(self, item_id: ItemId, message: str | None = None) -> None:
        self.item_id = item_id
        super().__init__(message or f"Item not found: {item_id}")


class HiddenRootError(PostTreeError):
    """Resolved root item is flagged hidden and hidden roots are not allowed."""

    def __init__(self, item_id: ItemId) -> None:
        self.item_id = item_id
        super().__init__(f"Root item {item_id} is hidden")


class TreeDepthError(PostTreeError):
    """Tree assembly exceeded the maximum depth.

    Raised for parent cycles or duplicate identifiers in the item collection,
    which would otherwise recurse without bound.
    """

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(f"Navigation tree deeper than {max_depth} levels (parent cycle?)")
