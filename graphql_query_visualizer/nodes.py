"""Tree model produced by the parser and consumed by the serializer and editors."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class NodeKind(str, Enum):
    """Discriminates formatting and serialization rules for a node."""

    OPERATION = "operation"
    FIELD = "field"
    FRAGMENT = "fragment"
    VARIABLES = "variables"


@dataclass(frozen=True)
class Literal:
    """Scalar literal (string, int, float, boolean or null)."""

    value: Any

    def render(self) -> str:
        return json.dumps(self.value)


@dataclass(frozen=True)
class VariableReference:
    """Reference to an operation variable, e.g. ``$id``."""

    name: str

    def render(self) -> str:
        return f"${self.name}"


@dataclass(frozen=True)
class Unsupported:
    """
    Lossy fallback for enum, list and object literals.

    ``raw`` is the token's raw value where it has one (enum values),
    otherwise the syntactic kind tag (e.g. ``list_value``).
    """

    raw: str

    def render(self) -> str:
        return json.dumps(self.raw)


ArgumentValue = Union[Literal, VariableReference, Unsupported]


@dataclass(frozen=True)
class Node:
    """A single node of the query tree."""

    id: str
    name: str
    kind: NodeKind
    children: tuple["Node", ...] = ()
    arguments: Optional[dict[str, ArgumentValue]] = None
    variables_payload: Optional[dict[str, Any]] = None
    parent_id: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain JSON-compatible data."""
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "kind": self.kind.value,
        }
        if self.arguments is not None:
            data["arguments"] = {k: argument_to_dict(v) for k, v in self.arguments.items()}
        if self.variables_payload is not None:
            data["variablesPayload"] = self.variables_payload
        if self.parent_id is not None:
            data["parentId"] = self.parent_id
        data["children"] = [child.to_dict() for child in self.children]
        return data


def format_arguments(arguments: Optional[dict[str, ArgumentValue]]) -> str:
    """
    Render an argument mapping as a parenthesized suffix.

    Returns an empty string when there are no arguments, otherwise
    ``(key: value, ...)`` with each value rendered by its variant.
    """
    if not arguments:
        return ""
    rendered = ", ".join(f"{key}: {value.render()}" for key, value in arguments.items())
    return f"({rendered})"


def argument_to_dict(value: ArgumentValue) -> dict[str, Any]:
    """Tag an argument value for interchange."""
    if isinstance(value, VariableReference):
        return {"variable": value.name}
    if isinstance(value, Unsupported):
        return {"unsupported": value.raw}
    return {"literal": value.value}


def argument_from_dict(data: dict[str, Any]) -> ArgumentValue:
    """Inverse of :func:`argument_to_dict`."""
    if "variable" in data:
        return VariableReference(data["variable"])
    if "unsupported" in data:
        return Unsupported(data["unsupported"])
    if "literal" in data:
        return Literal(data["literal"])
    raise ValueError(f"Unknown argument encoding: {data!r}")


def node_from_dict(data: dict[str, Any]) -> Node:
    """
    Rebuild a node tree from the output of :meth:`Node.to_dict`.

    Raises:
        ValueError: If a node's kind or an argument encoding is unknown
        KeyError: If a required key is missing
    """
    arguments = data.get("arguments")
    return Node(
        id=data["id"],
        name=data["name"],
        kind=NodeKind(data["kind"]),
        children=tuple(node_from_dict(child) for child in data.get("children", [])),
        arguments=(
            {k: argument_from_dict(v) for k, v in arguments.items()} if arguments is not None else None
        ),
        variables_payload=data.get("variablesPayload"),
        parent_id=data.get("parentId"),
    )
