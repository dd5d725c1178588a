"""posttree - nested navigation lists for hierarchical content."""

from posttree.core.errors import (
    HiddenRootError,
    ItemLookupError,
    PostTreeError,
    TreeDepthError,
)
from posttree.core.items import Item, ItemRepository, TreeNode
from posttree.core.navigation import (
    PostTree,
    RenderContext,
    RenderOptions,
    build_context,
    render,
)
from posttree.core.site import Site, SiteBuilder
from posttree.core.types import ItemId

__all__ = [
    "HiddenRootError",
    "Item",
    "ItemId",
    "ItemLookupError",
    "ItemRepository",
    "PostTree",
    "PostTreeError",
    "RenderContext",
    "RenderOptions",
    "Site",
    "SiteBuilder",
    "TreeDepthError",
    "TreeNode",
    "build_context",
    "render",
]
