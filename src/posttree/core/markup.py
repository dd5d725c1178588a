"""Nested list markup for navigation trees.

Builds an ElementTree of ul/li/a elements and serializes it once, so every
title and attribute goes through the same escaping.
"""

from collections.abc import Callable
from xml.etree import ElementTree as ET

from posttree.core.items import TreeNode
from posttree.core.types import ItemId


def render_markup(
    tree: TreeNode,
    *,
    current_id: ItemId,
    current_item_marker: str = "current",
    resolve_url: Callable[[ItemId], str],
) -> str:
    """Render a navigation tree as a nested HTML list.

    Args:
        tree: Navigation tree, possibly pruned
        current_id: Identifier of the item whose link gets the marker class
        current_item_marker: Class added to the current item's link
        resolve_url: Permalink lookup by item identifier

    Returns:
        A single <ul> element containing one <li> per tree node
    """
    root = ET.Element("ul")
    root.append(_build_element(tree, current_id, current_item_marker, resolve_url))
    return ET.tostring(root, encoding="unicode", method="html")


def _build_element(
    node: TreeNode,
    current_id: ItemId,
    marker: str,
    resolve_url: Callable[[ItemId], str],
) -> ET.Element:
    """Recursively build the <li> element for a node."""
    item = node.item
    attrs = _link_attributes(
        href=resolve_url(item.id),
        css_class=marker if item.id == current_id else "",
    )

    li = ET.Element("li")
    li.tail = "\n"
    link = ET.SubElement(li, "a", attrs)
    link.text = item.title

    if node.children:
        ul = ET.SubElement(li, "ul")
        for child in node.children:
            ul.append(_build_element(child, current_id, marker, resolve_url))

    return li


def _link_attributes(*, href: str, css_class: str) -> dict[str, str]:
    """Link attributes with empty values left out."""
    pairs = (("href", href), ("class", css_class))
    return {name: value for name, value in pairs if value}
