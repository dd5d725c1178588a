"""Navigation API endpoints.

Provides rendered navigation markup and the navigation tree as JSON.
The site is loaded again for every request.
"""

from collections.abc import Callable
from dataclasses import replace
from typing import TypedDict

from aiohttp import web

from posttree.app_keys import options_key, site_loader_key
from posttree.core.errors import PostTreeError, TreeDepthError
from posttree.core.items import TreeNode
from posttree.core.navigation import RenderOptions, build_context, render
from posttree.core.types import ItemId


class NavItemDict(TypedDict, total=False):
    """Dictionary representation of a navigation item."""

    id: int
    title: str
    url: str
    current: bool
    children: list["NavItemDict"]


def create_navigation_routes() -> list[web.RouteDef]:
    return [
        web.get(r"/api/navigation/{item_id:\d+}", get_navigation),
        web.get(r"/api/tree/{item_id:\d+}", get_tree),
    ]


async def get_navigation(request: web.Request) -> web.Response:
    item_id = ItemId(int(request.match_info["item_id"]))
    options = _request_options(request)
    site = request.app[site_loader_key].load()

    try:
        markup = render(item_id, site, options)
    except PostTreeError as e:
        return _error_response(e, item_id)

    return web.Response(text=markup, content_type="text/html")


async def get_tree(request: web.Request) -> web.Response:
    item_id = ItemId(int(request.match_info["item_id"]))
    options = _request_options(request)
    site = request.app[site_loader_key].load()

    try:
        context = build_context(item_id, site, options)
    except PostTreeError as e:
        return _error_response(e, item_id)

    return web.json_response(
        {
            "root": context.root.id,
            "items": [_to_dict(context.tree, context.current.id, site.resolve_url)],
        }
    )


def _request_options(request: web.Request) -> RenderOptions:
    """Apply full_tree and only_descendants query flags to the app options."""
    options = request.app[options_key]
    overrides: dict[str, bool] = {}
    for key in ("full_tree", "only_descendants"):
        value = request.query.get(key)
        if value is not None:
            overrides[key] = value.lower() in ("1", "true", "yes")
    return replace(options, **overrides)


def _to_dict(
    node: TreeNode,
    current_id: ItemId,
    resolve_url: Callable[[ItemId], str],
) -> NavItemDict:
    result: NavItemDict = {
        "id": node.item.id,
        "title": node.item.title,
        "url": resolve_url(node.item.id),
        "current": node.item.id == current_id,
    }
    if node.children:
        result["children"] = [_to_dict(child, current_id, resolve_url) for child in node.children]
    return result


def _error_response(error: PostTreeError, item_id: ItemId) -> web.Response:
    status = 500 if isinstance(error, TreeDepthError) else 404
    return web.json_response({"error": str(error), "item_id": item_id}, status=status)
