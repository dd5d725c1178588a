"""Navigation tree construction.

Resolves the subtree root for the current item, collects the visible items
below it, nests them into a tree and optionally collapses branches that are
not on the path to the current item.
"""

import logging
from collections.abc import Callable, Sequence
from typing import Literal

from posttree.core.errors import HiddenRootError, ItemLookupError, TreeDepthError
from posttree.core.items import Item, ItemRepository, TreeNode
from posttree.core.types import ItemId

logger = logging.getLogger(__name__)

HiddenRootPolicy = Literal["show", "fail"]

# (ancestor_id, item_id) -> whether item_id lies below ancestor_id
DescendantLookup = Callable[[ItemId, ItemId], bool]


def resolve_root(
    current: Item,
    repository: ItemRepository,
    *,
    only_descendants: bool = False,
) -> Item:
    """Determine the root of the subtree to display.

    Args:
        current: Item the navigation is rendered for
        repository: Content store adapter
        only_descendants: Use the current item as root instead of ascending

    Returns:
        The current item, or its top-most ancestor

    Raises:
        ItemLookupError: If the ancestor chain cannot be resolved
    """
    if only_descendants or not current.has_parent:
        return current

    ancestors = repository.get_ancestor_ids(current.id)
    if not ancestors:
        raise ItemLookupError(current.id, f"No ancestors found for item {current.id}")
    return repository.get_item(ancestors[-1])


def collect_items(
    root: Item,
    repository: ItemRepository,
    *,
    hidden_filter_key: str = "hidden",
    hidden_root: HiddenRootPolicy = "show",
) -> list[Item]:
    """Collect the root and its visible descendants as a flat list.

    Only items flagged directly are removed. Descendants of a hidden item
    stay in the list but can no longer be attached to the tree.

    Args:
        root: Resolved subtree root
        repository: Content store adapter
        hidden_filter_key: Flag name identifying hidden items
        hidden_root: "show" keeps a hidden root, "fail" raises

    Returns:
        Root followed by the surviving descendants in repository order

    Raises:
        HiddenRootError: If the root is hidden and hidden_root is "fail"
    """
    descendants = repository.get_descendants(root.id)
    hidden = repository.get_hidden_ids(hidden_filter_key)

    if root.id in hidden:
        if hidden_root == "fail":
            raise HiddenRootError(root.id)
        logger.debug(f"Root item {root.id} is hidden, showing it anyway")

    items = [root]
    items.extend(item for item in descendants if item.id != root.id and item.id not in hidden)

    logger.debug(
        f"Collected {len(items)} items below {root.id} "
        f"({len(descendants) + 1 - len(items)} hidden or duplicate)"
    )
    return items


def build_tree(
    root: Item,
    items: Sequence[Item],
    *,
    max_depth: int | None = None,
) -> TreeNode:
    """Nest a flat parent-linked collection into a tree.

    Children keep the order in which they appear in items. Items whose
    parent is not part of the tree are never attached.

    Args:
        root: Item at the top of the tree (its own parent link is ignored)
        items: Flat collection, usually from collect_items()
        max_depth: Maximum nesting depth before giving up, defaults to the
            number of items (no valid tree nests deeper)

    Returns:
        Tree rooted at root

    Raises:
        TreeDepthError: If nesting exceeds max_depth (parent cycle)
    """
    children_index: dict[ItemId, list[Item]] = {}
    for item in items:
        if item.id == root.id or not item.has_parent:
            continue
        children_index.setdefault(item.parent_id, []).append(item)

    limit = max_depth if max_depth is not None else len(items)
    tree = _build_node(root, children_index, 0, limit)

    attached = tree.count()
    detached = len({item.id for item in items} - {root.id}) + 1 - attached
    if detached > 0:
        logger.debug(f"Dropped {detached} items not connected to root {root.id}")
    return tree


def _build_node(
    item: Item,
    children_index: dict[ItemId, list[Item]],
    depth: int,
    max_depth: int,
) -> TreeNode:
    """Recursively build a TreeNode from an item."""
    if depth > max_depth:
        raise TreeDepthError(max_depth)
    children = children_index.get(item.id, [])
    return TreeNode(
        item=item,
        children=tuple(
            _build_node(child, children_index, depth + 1, max_depth) for child in children
        ),
    )


def descendant_lookup(items: Sequence[Item]) -> DescendantLookup:
    """Create a descendant check over a flat collection.

    The check walks parent links within the collection only, so an item
    whose chain passes through a filtered-out item is not a descendant.
    """
    parents = {item.id: item.parent_id for item in items if item.has_parent}
    limit = len(items)

    def is_descendant(ancestor_id: ItemId, item_id: ItemId) -> bool:
        current = parents.get(item_id)
        steps = 0
        while current is not None and steps <= limit:
            if current == ancestor_id:
                return True
            current = parents.get(current)
            steps += 1
        return False

    return is_descendant


def should_collapse(node: TreeNode, current_id: ItemId, is_descendant: DescendantLookup) -> bool:
    """Decide whether a node's children are dropped.

    A node collapses unless it is the current item or one of its ancestors.
    """
    node_id = node.item.id
    return node_id != current_id and not is_descendant(node_id, current_id)


def prune_tree(tree: TreeNode, current_id: ItemId, is_descendant: DescendantLookup) -> TreeNode:
    """Collapse branches off the path to the current item.

    Keeps the ancestor chain of the current item, the siblings at every level
    of that chain and the direct children of the current item. Subtrees that
    need no change are shared with the input tree.
    """
    if tree.is_leaf:
        return tree
    if should_collapse(tree, current_id, is_descendant):
        return tree.without_children()

    children = tuple(prune_tree(child, current_id, is_descendant) for child in tree.children)
    if all(new is old for new, old in zip(children, tree.children, strict=True)):
        return tree
    return TreeNode(item=tree.item, children=children)
