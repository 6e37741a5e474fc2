"""JSON request envelopes: ``{"query": ..., "variables": ...}``."""

import json
from dataclasses import dataclass
from typing import Any, Optional


class EnvelopeError(ValueError):
    """Input looked like JSON but held no usable query."""


@dataclass
class Envelope:
    """Query extracted from a JSON request body."""

    query: str
    operation_name: Optional[str] = None
    variables: Optional[dict[str, Any]] = None


def is_json_format(text: str) -> bool:
    """Check if text looks like a JSON object or array."""
    trimmed = text.strip()
    if not trimmed:
        return False
    return (trimmed.startswith("{") and trimmed.endswith("}")) or (
        trimmed.startswith("[") and trimmed.endswith("]")
    )


def extract_query(text: str) -> Envelope:
    """
    Extract the query from a JSON request body.

    Escaped newlines and quotes left inside the query string (e.g. from a
    body copied out of browser dev tools) are unescaped.

    Raises:
        EnvelopeError: If text is not JSON or has no string "query" field
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise EnvelopeError(str(e)) from e

    if not isinstance(data, dict) or not isinstance(data.get("query"), str):
        raise EnvelopeError('JSON must contain a "query" field')

    variables = data.get("variables")
    if variables is not None and not isinstance(variables, dict):
        raise EnvelopeError('"variables" must be a JSON object')

    query = data["query"].replace("\\n", "\n").replace('\\"', '"')
    return Envelope(query=query, operation_name=data.get("operationName"), variables=variables)


def format_as_json(
    query: str, operation_name: Optional[str] = None, variables: Optional[dict[str, Any]] = None
) -> str:
    """Wrap a query back into a JSON request body."""
    body: dict[str, Any] = {"query": query}
    if operation_name:
        body["operationName"] = operation_name
    if variables:
        body["variables"] = variables
    return json.dumps(body, indent=2)


def detect(text: str) -> Optional[Envelope]:
    """
    Extract an envelope if text is a JSON document, else return None.

    Shorthand queries such as ``{ user { id } }`` pass the cheap format
    check but are not JSON, so they come back as None.

    Raises:
        EnvelopeError: If text is valid JSON without a usable query
    """
    if not is_json_format(text):
        return None
    try:
        json.loads(text)
    except json.JSONDecodeError:
        return None
    return extract_query(text)
