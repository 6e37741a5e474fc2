"""CLI for gqv."""

import sys
from dataclasses import dataclass, field
from typing import Any, Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import config, editor, envelope, inspector, parser, serializer, utils
from .nodes import Node
from .report import emit_query, emit_tree, print_kv

app = typer.Typer(help="GraphQL query visualizer")
config_app = typer.Typer(help="Configuration operations")
app.add_typer(config_app, name="config")

console = Console()


@dataclass
class QueryInput:
    """Query text and variables read from the user's input."""

    query: str
    operation_name: Optional[str] = None
    variables: dict[str, Any] = field(default_factory=dict)


@dataclass
class EditOptions:
    """Edits applied by the generate command, in order."""

    deletes: list[str] = field(default_factory=list)
    renames: list[tuple[str, str]] = field(default_factory=list)


@config_app.command("init")
def config_init(
    path: Optional[str] = typer.Option(None, help="Config file path"),
):
    """Write an example config file."""
    try:
        written = config.create_example_config(path)
        print_kv("Config written", {"path": written})
    except Exception as e:
        fail(e)


@app.command("show")
def show_cmd(
    query_file: str = typer.Argument(..., help="GraphQL query or JSON request file ('-' for stdin)"),
    variables: Optional[str] = typer.Option(None, help="Variables JSON file"),
    output: Optional[str] = typer.Option(None, help="Output format (console|json)"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Config file path"),
):
    """Parse a query and print its selection tree."""
    try:
        cfg = config.load(config_path)
        root = load_tree(query_file, variables, cfg)
        emit_tree(root, inspector.collect_stats(root), output or cfg.output, show_ids=cfg.show_ids)
    except typer.Exit:
        raise
    except Exception as e:
        fail(e)


@app.command("generate")
def generate_cmd(
    query_file: str = typer.Argument(..., help="GraphQL query or JSON request file ('-' for stdin)"),
    delete: Optional[list[str]] = typer.Option(None, "--delete", help="Node id to delete (repeatable)"),
    rename: Optional[list[str]] = typer.Option(None, "--rename", help="ID=NAME rename (repeatable)"),
    variables: Optional[str] = typer.Option(None, help="Variables JSON file"),
    as_envelope: bool = typer.Option(False, "--envelope", help="Wrap output in a JSON request body"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Config file path"),
):
    """Apply edits to a query tree and print the regenerated query."""
    try:
        cfg = config.load(config_path)
        data = read_input(query_file, variables, cfg)
        root = parser.parse_or_raise(data.query, data.variables)

        opts = EditOptions(deletes=list(delete or []), renames=[split_rename(r) for r in rename or []])
        text = serializer.serialize(apply_edits(root, opts))

        if as_envelope:
            emit_query(envelope.format_as_json(text, data.operation_name, data.variables), "json")
        else:
            emit_query(text, cfg.output)
    except typer.Exit:
        raise
    except Exception as e:
        fail(e)


def read_input(query_path: str, variables_path: Optional[str], cfg: config.Config) -> QueryInput:
    """
    Read query text, unwrapping a JSON request body when detected.

    Variables from a ``--variables`` file are merged over any variables
    found in the request body.
    """
    text = utils.read_text(query_path)

    data = QueryInput(query=text)
    body = envelope.detect(text) if cfg.detect_envelope else None
    if body is not None:
        data = QueryInput(query=body.query, operation_name=body.operation_name, variables=body.variables or {})

    if variables_path:
        extra = utils.read_json(variables_path)
        if not isinstance(extra, dict):
            raise ValueError(f"Variables file {variables_path} must contain a JSON object")
        data.variables.update(extra)

    return data


def load_tree(query_path: str, variables_path: Optional[str], cfg: config.Config) -> Node:
    """Read input and parse it into a tree."""
    data = read_input(query_path, variables_path, cfg)
    return parser.parse_or_raise(data.query, data.variables)


def split_rename(spec: str) -> tuple[str, str]:
    """Split an ``ID=NAME`` option value."""
    node_id, sep, name = spec.partition("=")
    if not sep or not node_id or not name:
        raise ValueError(f"Invalid rename '{spec}', expected ID=NAME")
    return node_id, name


def apply_edits(root: Node, opts: EditOptions) -> Node:
    """
    Apply deletes, then renames, to a tree.

    Raises:
        ValueError: If an id is unknown or the edit would delete the root
    """
    for node_id in opts.deletes:
        require_node(root, node_id)
        edited = editor.delete_by_id(root, node_id)
        if edited is None:
            raise ValueError(f"Cannot delete the operation root '{node_id}'")
        root = edited

    for node_id, name in opts.renames:
        require_node(root, node_id)
        root = editor.rename_by_id(root, node_id, name)

    return root


def require_node(root: Node, node_id: str) -> None:
    if editor.find_by_id(root, node_id) is None:
        raise ValueError(f"No node with id '{node_id}'")


def fail(e: Exception) -> None:
    console.print(f"[red]Error: {escape(str(e))}[/red]")
    if "--debug" in sys.argv:
        raise e
    raise typer.Exit(1)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
