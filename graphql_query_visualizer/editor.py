"""Non-mutating edits on a node tree."""

from dataclasses import replace
from typing import Iterator, Optional

from .nodes import Node


def delete_by_id(root: Node, target_id: str) -> Optional[Node]:
    """
    Remove the subtree rooted at ``target_id``.

    Args:
        root: Tree to edit; left untouched
        target_id: Id of the node to remove

    Returns:
        New tree without the target, or None if the root itself was the target.
        An unknown id yields an equivalent tree.
    """
    if root.id == target_id:
        return None
    children = []
    for child in root.children:
        kept = delete_by_id(child, target_id)
        if kept is not None:
            children.append(kept)
    return replace(root, children=tuple(children))


def rename_by_id(root: Node, target_id: str, new_name: str) -> Node:
    """
    Replace the name of the node with ``target_id``.

    Every other field of every node is carried over unchanged. An unknown
    id yields an equivalent tree.
    """
    name = new_name if root.id == target_id else root.name
    return replace(
        root,
        name=name,
        children=tuple(rename_by_id(child, target_id, new_name) for child in root.children),
    )


def iter_nodes(root: Node) -> Iterator[Node]:
    """Iterate over all nodes, depth-first in child order."""
    yield root
    for child in root.children:
        yield from iter_nodes(child)


def find_by_id(root: Node, target_id: str) -> Optional[Node]:
    """Find a node by id."""
    for node in iter_nodes(root):
        if node.id == target_id:
            return node
    return None
