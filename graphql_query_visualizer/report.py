"""Output formatting and reporting."""

from dataclasses import asdict
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from . import utils
from .inspector import Stats
from .nodes import Node, NodeKind

console = Console()

KIND_STYLES = {
    NodeKind.OPERATION: "bold magenta",
    NodeKind.FIELD: "cyan",
    NodeKind.FRAGMENT: "green",
    NodeKind.VARIABLES: "yellow",
}


def node_label(node: Node, show_ids: bool = True) -> str:
    """Rich markup label for a single node."""
    style = KIND_STYLES.get(node.kind, "white")
    label = f"[{style}]{escape(node.name)}[/{style}] [dim]{node.kind.value}"
    if show_ids:
        label += f" #{node.id}"
    label += "[/dim]"
    if node.kind == NodeKind.VARIABLES and node.variables_payload:
        label += f" [dim]{escape(utils.to_json(node.variables_payload))}[/dim]"
    return label


def rich_tree(node: Node, show_ids: bool = True, parent: Optional[Tree] = None) -> Tree:
    """Convert a node tree into a rich Tree."""
    label = node_label(node, show_ids)
    branch = parent.add(label) if parent is not None else Tree(label)
    for child in node.children:
        rich_tree(child, show_ids, branch)
    return branch


def emit_tree(root: Node, stats: Stats, fmt: str, show_ids: bool = True) -> None:
    """
    Output a parsed tree with its statistics.

    Args:
        root: Operation node
        stats: Statistics for the tree
        fmt: Output format ("json" or "console")
        show_ids: Whether console output shows node ids
    """
    if fmt == "json":
        print(utils.to_json({"tree": root.to_dict(), "stats": asdict(stats)}))
        return

    console.print("\n[bold cyan]Query Tree[/bold cyan]\n")
    console.print(rich_tree(root, show_ids))

    table = Table(show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Depth", str(stats.depth))
    table.add_row("Nodes", str(stats.node_count))
    table.add_row("Fields", str(stats.field_count))
    table.add_row("Fragments", str(stats.fragment_count))
    table.add_row("Arguments", str(stats.argument_count))
    if stats.variable_count:
        table.add_row("Variables", str(stats.variable_count))

    console.print()
    console.print(table)
    console.print()


def emit_query(text: str, fmt: str) -> None:
    """Output generated query text (or a JSON envelope)."""
    if fmt == "json" or not console.is_terminal:
        print(text)
    else:
        console.print(Syntax(text, "graphql", theme="ansi_dark", background_color="default"))


def print_kv(title: str, data: dict) -> None:
    """
    Print key-value pairs (for config init and similar status output).

    Args:
        title: Section title
        data: Key-value data
    """
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    for k, v in data.items():
        table.add_row(k, str(v))

    console.print(table)
    console.print()
