"""GraphQL parsing into the editable node tree."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from graphql import (
    BooleanValueNode,
    DocumentNode,
    FieldNode,
    FloatValueNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLError,
    InlineFragmentNode,
    IntValueNode,
    NullValueNode,
    OperationDefinitionNode,
    SelectionSetNode,
    StringValueNode,
    ValueNode,
    VariableNode,
    parse,
)

from . import utils
from .nodes import (
    ArgumentValue,
    Literal,
    Node,
    NodeKind,
    Unsupported,
    VariableReference,
    format_arguments,
)


class ParseErrorKind(str, Enum):
    """Reasons a parse can fail."""

    SYNTAX_ERROR = "SyntaxError"
    NO_DEFINITIONS = "NoDefinitions"
    NO_OPERATION = "NoOperation"


@dataclass
class ParseError:
    """Structural parse failure."""

    kind: ParseErrorKind
    message: str


@dataclass
class ParseResult:
    """Either a tree or a parse error, never both."""

    node: Optional[Node] = None
    error: Optional[ParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class QueryParseError(Exception):
    """Raised by :func:`parse_or_raise` when parsing fails."""

    def __init__(self, error: ParseError):
        super().__init__(error.message)
        self.error = error


@dataclass
class ParseContext:
    """Per-call parse state: the id counter and the fragment table."""

    fragments: dict[str, FragmentDefinitionNode] = field(default_factory=dict)
    counter: int = 0
    # Fragments currently being expanded, to stop self-referencing spreads
    expanding: set[str] = field(default_factory=set)

    def next_id(self) -> str:
        node_id = f"node_{self.counter}"
        self.counter += 1
        return node_id


def parse_query(source: str, variables: Optional[dict[str, Any]] = None) -> ParseResult:
    """
    Parse a GraphQL query string into a node tree.

    Args:
        source: GraphQL operation text
        variables: Optional variables mapping shown as a synthetic node

    Returns:
        ParseResult holding either the root operation node or a ParseError
    """
    try:
        doc = parse(source)
    except GraphQLError as e:
        return ParseResult(error=ParseError(ParseErrorKind.SYNTAX_ERROR, e.message))
    return build_tree(doc, variables)


def parse_or_raise(source: str, variables: Optional[dict[str, Any]] = None) -> Node:
    """
    Parse a GraphQL query string, raising on failure.

    Raises:
        QueryParseError: If the query cannot be turned into a tree
    """
    result = parse_query(source, variables)
    if result.error:
        raise QueryParseError(result.error)
    return result.node


def build_tree(doc: DocumentNode, variables: Optional[dict[str, Any]] = None) -> ParseResult:
    """
    Build the node tree for the first operation of an already parsed document.

    Fragment definitions anywhere in the document are indexed before any
    selection is walked, so spreads may reference fragments declared later.
    """
    if not doc.definitions:
        return ParseResult(error=ParseError(ParseErrorKind.NO_DEFINITIONS, "No query definitions found"))

    ctx = ParseContext()
    for definition in doc.definitions:
        if isinstance(definition, FragmentDefinitionNode):
            ctx.fragments[definition.name.value] = definition

    operation = next(utils.iter_operations(doc), None)
    if operation is None:
        return ParseResult(error=ParseError(ParseErrorKind.NO_OPERATION, "No operation definition found"))

    root_id = ctx.next_id()
    children = []
    if variables:
        children.append(
            Node(
                id=ctx.next_id(),
                name="Variables",
                kind=NodeKind.VARIABLES,
                variables_payload=dict(variables),
                parent_id=root_id,
            )
        )
    children.extend(parse_selection_set(operation.selection_set, ctx, root_id))

    return ParseResult(
        node=Node(
            id=root_id,
            name=operation_name(operation),
            kind=NodeKind.OPERATION,
            children=tuple(children),
        )
    )


def operation_name(operation: OperationDefinitionNode) -> str:
    """Display name: declared name (or keyword) plus variable definitions."""
    base = operation.name.value if operation.name else operation.operation.value
    return base + format_variable_definitions(operation)


def format_variable_definitions(operation: OperationDefinitionNode) -> str:
    """Render ``($name: Type!, ...)`` or an empty string."""
    if not operation.variable_definitions:
        return ""
    rendered = ", ".join(
        f"${var_def.variable.name.value}: {utils.format_type(var_def.type)}"
        for var_def in operation.variable_definitions
    )
    return f"({rendered})"


def parse_arguments(arguments) -> dict[str, ArgumentValue]:
    """Flatten field arguments into name -> value variant."""
    result: dict[str, ArgumentValue] = {}
    for arg in arguments or ():
        result[arg.name.value] = literal_value(arg.value)
    return result


def literal_value(value: ValueNode) -> ArgumentValue:
    """Classify one argument value node."""
    if isinstance(value, VariableNode):
        return VariableReference(value.name.value)
    if isinstance(value, StringValueNode):
        return Literal(value.value)
    if isinstance(value, IntValueNode):
        return Literal(int(value.value))
    if isinstance(value, FloatValueNode):
        return Literal(float(value.value))
    if isinstance(value, BooleanValueNode):
        return Literal(value.value)
    if isinstance(value, NullValueNode):
        return Literal(None)
    # Enum values keep their raw token; lists and objects collapse to the kind tag
    raw = getattr(value, "value", None)
    return Unsupported(raw if isinstance(raw, str) else value.kind)


def parse_selection_set(
    selection_set: Optional[SelectionSetNode], ctx: ParseContext, parent_id: Optional[str]
) -> list[Node]:
    """
    Walk a selection set, producing nodes in selection order.

    Inline fragments are flattened into the surrounding list. Fragment
    spreads become fragment nodes whose children are the inlined
    selections of the referenced definition; unknown names yield an
    empty fragment node.
    """
    if selection_set is None:
        return []

    nodes: list[Node] = []
    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            nodes.append(parse_field(selection, ctx, parent_id))
        elif isinstance(selection, InlineFragmentNode):
            nodes.extend(parse_selection_set(selection.selection_set, ctx, parent_id))
        elif isinstance(selection, FragmentSpreadNode):
            nodes.append(parse_fragment_spread(selection, ctx, parent_id))
    return nodes


def parse_field(selection: FieldNode, ctx: ParseContext, parent_id: Optional[str]) -> Node:
    node_id = ctx.next_id()
    arguments = parse_arguments(selection.arguments)
    return Node(
        id=node_id,
        name=selection.name.value + format_arguments(arguments),
        kind=NodeKind.FIELD,
        arguments=arguments,
        children=tuple(parse_selection_set(selection.selection_set, ctx, node_id)),
        parent_id=parent_id,
    )


def parse_fragment_spread(
    selection: FragmentSpreadNode, ctx: ParseContext, parent_id: Optional[str]
) -> Node:
    node_id = ctx.next_id()
    fragment_name = selection.name.value
    children: list[Node] = []

    fragment_def = ctx.fragments.get(fragment_name)
    if fragment_def is not None and fragment_name not in ctx.expanding:
        ctx.expanding.add(fragment_name)
        try:
            children = parse_selection_set(fragment_def.selection_set, ctx, node_id)
        finally:
            ctx.expanding.discard(fragment_name)

    return Node(
        id=node_id,
        name=f"...{fragment_name}",
        kind=NodeKind.FRAGMENT,
        children=tuple(children),
        parent_id=parent_id,
    )
