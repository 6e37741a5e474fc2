"""Tree inspection and statistics collection."""

from dataclasses import dataclass

from .nodes import Node, NodeKind


@dataclass
class Stats:
    """Statistics collected from a node tree."""

    depth: int
    node_count: int
    field_count: int
    fragment_count: int
    argument_count: int
    variable_count: int  # Entries in the variables node, if any


def collect_stats(root: Node) -> Stats:
    """
    Collect statistics from a node tree.

    Depth counts field and fragment levels below the operation; the
    variables node does not add depth.

    Args:
        root: Operation node returned by the parser (or an edited copy)

    Returns:
        Stats object with collected metrics
    """
    depth = 0
    node_count = 0
    field_count = 0
    fragment_count = 0
    argument_count = 0
    variable_count = 0

    def visit(node: Node, current_depth: int):
        nonlocal depth, node_count, field_count, fragment_count, argument_count, variable_count

        node_count += 1
        if node.kind == NodeKind.FIELD:
            field_count += 1
            argument_count += len(node.arguments or {})
        elif node.kind == NodeKind.FRAGMENT:
            fragment_count += 1
        elif node.kind == NodeKind.VARIABLES:
            variable_count += len(node.variables_payload or {})
            return

        depth = max(depth, current_depth)
        for child in node.children:
            visit(child, current_depth + 1)

    visit(root, 0)

    return Stats(
        depth=depth,
        node_count=node_count,
        field_count=field_count,
        fragment_count=fragment_count,
        argument_count=argument_count,
        variable_count=variable_count,
    )
