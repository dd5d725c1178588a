"""Navigation rendering entry point.

Runs the full pipeline for one current item: resolve root, collect items,
build tree, prune, render markup. Every call starts from scratch; nothing is
kept between renders.
"""

import logging
from dataclasses import dataclass, replace

from posttree.core.cache import RenderScopedRepository
from posttree.core.items import Item, ItemRepository, TreeNode
from posttree.core.markup import render_markup
from posttree.core.tree import (
    HiddenRootPolicy,
    build_tree,
    collect_items,
    descendant_lookup,
    prune_tree,
    resolve_root,
)
from posttree.core.types import ItemId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderOptions:
    """Navigation rendering options."""

    only_descendants: bool = False
    full_tree: bool = False
    current_item_marker: str = "current"
    hidden_filter_key: str = "hidden"
    hidden_root: HiddenRootPolicy = "show"
    max_depth: int | None = None


@dataclass(frozen=True)
class RenderContext:
    """State of a single render, built once per call."""

    current: Item
    root: Item
    items: tuple[Item, ...]
    tree: TreeNode
    options: RenderOptions

    def with_tree(self, tree: TreeNode) -> "RenderContext":
        return replace(self, tree=tree)


def build_context(
    current: Item | ItemId,
    repository: ItemRepository,
    options: RenderOptions | None = None,
) -> RenderContext:
    """Build the (pruned) navigation tree for an item.

    Args:
        current: Current item, or its identifier
        repository: Content store adapter
        options: Rendering options, defaults when None

    Returns:
        RenderContext with the tree ready for markup rendering

    Raises:
        ItemLookupError: If the repository cannot resolve an item
        HiddenRootError: If the root is hidden and hidden_root is "fail"
        TreeDepthError: If the item collection contains a parent cycle
    """
    options = options or RenderOptions()
    if not isinstance(current, Item):
        current = repository.get_item(current)

    root = resolve_root(current, repository, only_descendants=options.only_descendants)
    logger.debug(f"Resolved root {root.id} for current item {current.id}")

    items = collect_items(
        root,
        repository,
        hidden_filter_key=options.hidden_filter_key,
        hidden_root=options.hidden_root,
    )
    tree = build_tree(root, items, max_depth=options.max_depth)
    context = RenderContext(
        current=current,
        root=root,
        items=tuple(items),
        tree=tree,
        options=options,
    )

    if options.full_tree:
        return context
    return context.with_tree(prune_tree(tree, current.id, descendant_lookup(items)))


def render(
    current: Item | ItemId,
    repository: ItemRepository,
    options: RenderOptions | None = None,
) -> str:
    """Render navigation markup relative to the current item.

    Args:
        current: Current item, or its identifier
        repository: Content store adapter
        options: Rendering options, defaults when None

    Returns:
        Nested <ul> markup with the current item's link marked
    """
    scoped = RenderScopedRepository(repository)
    context = build_context(current, scoped, options)
    return render_markup(
        context.tree,
        current_id=context.current.id,
        current_item_marker=context.options.current_item_marker,
        resolve_url=scoped.resolve_url,
    )


class PostTree:
    """Navigation tree for one current item.

    str() of an instance renders the markup.
    """

    def __init__(
        self,
        current: Item | ItemId,
        repository: ItemRepository,
        options: RenderOptions | None = None,
    ) -> None:
        self._repository = RenderScopedRepository(repository)
        self._context = build_context(current, self._repository, options)
        self._is_descendant = descendant_lookup(self._context.items)

    @property
    def current(self) -> Item:
        return self._context.current

    @property
    def root(self) -> Item:
        return self._context.root

    @property
    def tree(self) -> TreeNode:
        return self._context.tree

    @property
    def options(self) -> RenderOptions:
        return self._context.options

    def is_descendant(self, parent_id: ItemId, child_id: ItemId) -> bool:
        """Check whether child_id lies below parent_id among the visible items."""
        return self._is_descendant(parent_id, child_id)

    def __str__(self) -> str:
        return render_markup(
            self.tree,
            current_id=self.current.id,
            current_item_marker=self.options.current_item_marker,
            resolve_url=self._repository.resolve_url,
        )
