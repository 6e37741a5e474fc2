"""Regenerate GraphQL query text from a node tree."""

from .nodes import Node, NodeKind, format_arguments

INDENT = "  "


def serialize(node: Node, depth: int = 0) -> str:
    """
    Render a node tree back into GraphQL text.

    The output is a re-rendering, not a byte-for-byte copy of the parsed
    source: formatting is regenerated and arguments are re-encoded from
    each field's ``arguments`` mapping. Variables nodes render as an empty
    string, and fragment nodes render only their spread line.

    Args:
        node: Tree (or subtree) to render
        depth: Indentation level of ``node``

    Returns:
        GraphQL text
    """
    indent = INDENT * depth

    if node.kind == NodeKind.OPERATION:
        return f"{node.name} {{\n{serialize_children(node, depth + 1)}\n}}"

    if node.kind == NodeKind.FRAGMENT:
        # Children were inlined at parse time; only the spread is emitted
        return f"{indent}{node.name}"

    if node.kind == NodeKind.VARIABLES:
        return ""

    args = format_arguments(node.arguments)
    head = f"{indent}{field_name(node, args)}{args}"
    if not node.children:
        return head
    return f"{head} {{\n{serialize_children(node, depth + 1)}\n{indent}}}"


def serialize_children(node: Node, depth: int) -> str:
    """Join rendered children, skipping those that produce no line."""
    lines = (serialize(child, depth) for child in node.children)
    return "\n".join(line for line in lines if line)


def field_name(node: Node, args: str) -> str:
    """
    Field name without the argument suffix baked in by the parser.

    A renamed node keeps whatever name it was given.
    """
    if args and node.name.endswith(args) and len(node.name) > len(args):
        return node.name[: -len(args)]
    return node.name
