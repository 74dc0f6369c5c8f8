"""
Message property lookup.

Resolves property expressions such as ``payload``, ``msg.payload.items[0]``
or ``headers["content-type"]`` against an inbound message.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any, List, Union

from flow_debug.debug.events import UNDEFINED

_NAME = re.compile(r"[^.\[\]]+")
_BRACKET = re.compile(r"""\[\s*(?:(-?\d+)|"([^"]*)"|'([^']*)')\s*\]""")

Segment = Union[str, int]


class PropertyPathError(ValueError):
    """Raised for malformed expressions and for reads through a missing value."""


def parse_property_path(expression: str) -> List[Segment]:
    """
    Split a property expression into its segments.

    >>> parse_property_path('msg.payload.items[0]["name"]')
    ['payload', 'items', 0, 'name']
    """
    if not isinstance(expression, str) or not expression.strip():
        raise PropertyPathError(f"Invalid property expression: {expression!r}")

    text = expression.strip()
    if text.startswith("msg."):
        text = text[4:]

    segments: List[Segment] = []
    pos = 0
    while pos < len(text):
        if text[pos] == "[":
            match = _BRACKET.match(text, pos)
            if not match:
                raise PropertyPathError(f"Invalid property expression: {expression!r}")
            index, double_quoted, single_quoted = match.groups()
            if index is not None:
                segments.append(int(index))
            else:
                segments.append(double_quoted if double_quoted is not None else single_quoted)
            pos = match.end()
            continue

        if segments:
            if text[pos] != ".":
                raise PropertyPathError(f"Invalid property expression: {expression!r}")
            pos += 1
        match = _NAME.match(text, pos)
        if not match:
            raise PropertyPathError(f"Invalid property expression: {expression!r}")
        segments.append(match.group(0))
        pos = match.end()

    return segments


def _read(container: Any, segment: Segment) -> Any:
    if isinstance(container, Mapping):
        if segment in container:
            return container[segment]
        if isinstance(segment, int) and str(segment) in container:
            return container[str(segment)]
        return UNDEFINED
    if isinstance(container, Sequence) and isinstance(segment, int):
        if -len(container) <= segment < len(container):
            return container[segment]
        return UNDEFINED
    if isinstance(segment, str):
        return getattr(container, segment, UNDEFINED)
    return UNDEFINED


def get_message_property(msg: Any, expression: str) -> Any:
    """
    Read a property of a message.

    A missing final segment yields UNDEFINED; reading through a missing
    or None intermediate value raises.

    Args:
        msg: The message (usually a dict)
        expression: Property expression, with or without a ``msg.`` prefix

    Returns:
        The property value, or UNDEFINED

    Raises:
        PropertyPathError: If the expression is malformed or an
            intermediate value is missing
    """
    current = msg
    for segment in parse_property_path(expression):
        if current is None or current is UNDEFINED:
            raise PropertyPathError(f"Cannot read property {segment!r} of {current!r}")
        current = _read(current, segment)
    return current
