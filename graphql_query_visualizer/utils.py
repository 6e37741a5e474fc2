"""Utility functions shared by the CLI and the parser."""

import json
import sys
from pathlib import Path
from typing import Any

from graphql import (
    DocumentNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    OperationDefinitionNode,
    TypeNode,
)


# File system utilities
def ensure_dir(path: str) -> None:
    """Ensure directory exists, creating it if necessary."""
    Path(path).mkdir(parents=True, exist_ok=True)


def exists(path: str) -> bool:
    """Check if file exists."""
    return Path(path).exists()


def dirname(path: str) -> str:
    """Get directory name from path."""
    return str(Path(path).parent)


def expand_path(path: str) -> str:
    """Expand ~ and environment variables in path."""
    return str(Path(path).expanduser())


# File I/O
def read_text(path: str) -> str:
    """Read text file, or stdin when path is "-"."""
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text()


def read_json(path: str) -> Any:
    """Read JSON file."""
    with open(path) as f:
        return json.load(f)


def to_json(data: Any) -> str:
    """Convert data to JSON string."""
    return json.dumps(data, indent=2)


# AST helpers
def iter_operations(doc: DocumentNode):
    """Iterate over all operations in document."""
    for definition in doc.definitions:
        if isinstance(definition, OperationDefinitionNode):
            yield definition


def format_type(type_node: TypeNode) -> str:
    """Render a type reference, e.g. ``[ID!]!``."""
    if isinstance(type_node, NonNullTypeNode):
        return format_type(type_node.type) + "!"
    if isinstance(type_node, ListTypeNode):
        return f"[{format_type(type_node.type)}]"
    if isinstance(type_node, NamedTypeNode):
        return type_node.name.value
    return str(type_node)
