"""
Debug Value Classification.

Assigns every runtime value exactly one ValueCategory. Classification is
shallow: it only looks at the value's type, never at its contents.
"""

from __future__ import annotations

import numbers
import re
from collections.abc import Sequence
from typing import Any

from .events import UNDEFINED, ValueCategory

PLAIN_OBJECT_NAME = "Object"

BINARY_TYPES = (bytes, bytearray, memoryview)

_ERROR_NAME = re.compile("error", re.IGNORECASE)


def resolve_type_name(value: Any) -> str:
    """
    Resolve the display type name of an object.

    Plain dictionaries resolve to "Object". Introspection can run user
    code (``__class__`` may be a property), so any failure resolves to
    "Object" as well.

    Args:
        value: Object to inspect

    Returns:
        Type name
    """
    try:
        cls = value.__class__
        if cls is dict:
            return PLAIN_OBJECT_NAME
        return cls.__name__ or PLAIN_OBJECT_NAME
    except Exception:
        return PLAIN_OBJECT_NAME


def is_error_like(type_name: str) -> bool:
    """Check if a type name looks like an error type."""
    return _ERROR_NAME.search(type_name) is not None


def is_array(value: Any) -> bool:
    """Check if a value is an ordered, indexable collection."""
    return isinstance(value, Sequence) and not isinstance(value, (str, *BINARY_TYPES))


def is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def is_object(value: Any) -> bool:
    """Check if a value is an object rather than a primitive (None, bool, number, str)."""
    return not (
        value is None
        or value is UNDEFINED
        or isinstance(value, (bool, str))
        or is_number(value)
    )


def classify(value: Any) -> ValueCategory:
    """
    Classify a value.

    Tests run in a fixed priority order because a value can satisfy more
    than one of them (a list is also an object).

    Args:
        value: Any runtime value

    Returns:
        The category of the value
    """
    if isinstance(value, BaseException):
        return ValueCategory.ERROR
    if isinstance(value, BINARY_TYPES):
        return ValueCategory.BINARY
    if is_object(value):
        type_name = resolve_type_name(value)
        if is_error_like(type_name):
            return ValueCategory.ERROR_LIKE
        if is_array(value):
            return ValueCategory.ARRAY
        if type_name == PLAIN_OBJECT_NAME:
            return ValueCategory.PLAIN_OBJECT
        return ValueCategory.OPAQUE_OBJECT
    if isinstance(value, bool):
        return ValueCategory.BOOLEAN
    if is_number(value):
        return ValueCategory.NUMBER
    if value is None:
        return ValueCategory.NULL
    if value is UNDEFINED:
        return ValueCategory.UNDEFINED
    return ValueCategory.STRING
