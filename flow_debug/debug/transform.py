"""
Debug Value Redaction.

This module provides the transform applied to arrays and plain objects
before they are JSON-encoded for the debug channel. It removes internal
request/response handles, flattens nested errors, truncates oversized
nested strings, arrays and objects, and replaces repeated references.
Every walk visits a bounded number of nodes, so the encoded result stays
bounded whatever the shape of the input.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Dict, FrozenSet, Hashable, Optional, Tuple

from flow_debug.util.safe_text import ELLIPSIS, safe_str, truncate_text

from .classify import is_array
from .config import DEFAULT_MAX_LENGTH, INTERNAL_KEYS

INTERNAL_MARKER = "[internal]"
ARRAY_DEPTH_MARKER = "[Array]"
OBJECT_DEPTH_MARKER = "[Object]"

MAX_DEPTH = 100
# Node budget of a walk, per unit of max_length
NODES_PER_LENGTH = 10
# Larger integers are rendered as text
MAX_INT_BITS = 64

Path = Tuple[Hashable, ...]


def _marker(kind: str, path: Path) -> str:
    return f"[{kind} ~" + "".join(f".{key}" for key in path) + "]"


def circular_marker(path: Path) -> str:
    """
    Placeholder for a reference back to an ancestor.

    ``path`` is the key path of the ancestor, ``~`` being the root value.
    """
    return _marker("Circular", path)


def repeated_marker(path: Path) -> str:
    """Placeholder for a container already rendered at ``path``."""
    return _marker("Repeated", path)


def _truncated(kind: str, data: Any, length: int) -> Dict[str, Any]:
    return {
        "truncated": True,
        "kind": kind,
        "data": data,
        "length": length,
    }


def truncated_array(data: list, length: int) -> Dict[str, Any]:
    """Wrapper recorded in place of a nested array that was cut short."""
    return _truncated("array", data, length)


def truncated_object(data: dict, length: int) -> Dict[str, Any]:
    """Wrapper recorded in place of a nested mapping that was cut short."""
    return _truncated("object", data, length)


class _Walk:
    """State of a single redaction call."""

    def __init__(self, budget: int):
        self.budget = budget
        self.ancestors: Dict[int, Path] = {}
        # The value is kept so its id cannot be reused during the walk
        self.seen: Dict[int, Tuple[Path, Any]] = {}

    def enter(self, value: Any, path: Path) -> None:
        self.seen[id(value)] = (path, value)
        self.ancestors[id(value)] = path

    def leave(self, value: Any) -> None:
        del self.ancestors[id(value)]


class Redactor:
    """
    Make a structured value safe to JSON-encode.

    Produces a new tree of dicts, lists and JSON leaves; the input is
    never modified. Per child value, in order:

    - keys in ``internal_keys`` get the "[internal]" marker
    - exceptions become their string form
    - arrays and mappings longer than ``max_length`` become a truncation
      wrapper holding their first ``max_length`` items
    - strings longer than ``max_length`` are cut and get an ellipsis
    - a container already on the path from the root becomes a
      "[Circular ~...]" marker, one rendered elsewhere a "[Repeated ~...]"
      marker naming where it was rendered
    - containers deeper than ``max_depth`` become "[Array]" or "[Object]"
    - other leaves that JSON cannot hold become their (cut) string form;
      NaN and infinities become null

    Once ``max_nodes`` children have been walked, the container being
    walked is closed with a truncation wrapper and nothing more is added.

    Example:
        redactor = Redactor(max_length=3)
        redactor.redact({"_req": request, "items": [1, 2, 3, 4]})
        # {"_req": "[internal]",
        #  "items": {"truncated": True, "kind": "array",
        #            "data": [1, 2, 3], "length": 4}}
    """

    def __init__(
        self,
        max_length: int = DEFAULT_MAX_LENGTH,
        internal_keys: FrozenSet[str] = INTERNAL_KEYS,
        ellipsis: str = ELLIPSIS,
        max_depth: int = MAX_DEPTH,
        max_nodes: Optional[int] = None,
    ):
        """
        Initialize the redactor.

        Args:
            max_length: Size bound for nested strings, arrays and mappings
            internal_keys: Keys whose values must never be serialised
            ellipsis: Marker appended to truncated strings
            max_depth: Nesting depth below which containers are elided
            max_nodes: Children walked per call, ``max_length * 10`` by default
        """
        self.max_length = max_length
        self.internal_keys = internal_keys
        self.ellipsis = ellipsis
        self.max_depth = max_depth
        self.max_nodes = max_nodes if max_nodes is not None else max_length * NODES_PER_LENGTH

    def redact(self, value: Any, original: Any = None) -> Any:
        """
        Redact a structured value.

        The root itself is not cut to ``max_length``; callers bound the
        root before handing it over.

        Args:
            value: Mapping or sequence to redact (other values pass through)
            original: Value ``value`` was cut from, treated as the same root
                when detecting cycles

        Returns:
            A JSON-friendly copy of the value
        """
        walk = _Walk(self.max_nodes)
        if original is not None and original is not value:
            walk.enter(original, ())
        return self._redact_container(value, (), 0, None, walk)

    def _redact_container(self, value: Any, path: Path, depth: int, limit: Optional[int], walk: _Walk) -> Any:
        if not (isinstance(value, Mapping) or is_array(value)):
            return value

        ident = id(value)
        if ident in walk.ancestors:
            return circular_marker(walk.ancestors[ident])
        if ident in walk.seen:
            return repeated_marker(walk.seen[ident][0])
        if depth > self.max_depth:
            return OBJECT_DEPTH_MARKER if isinstance(value, Mapping) else ARRAY_DEPTH_MARKER

        walk.enter(value, path)
        try:
            if isinstance(value, Mapping):
                return self._redact_mapping(value, path, depth, limit, walk)
            return self._redact_sequence(value, path, depth, limit, walk)
        finally:
            walk.leave(value)

    def _redact_mapping(self, value: Mapping, path: Path, depth: int, limit: Optional[int], walk: _Walk) -> Any:
        result = {}
        for index, (key, item) in enumerate(value.items()):
            if (limit is not None and index >= limit) or walk.budget <= 0:
                return truncated_object(result, len(value))
            walk.budget -= 1
            name = self._redact_key(key)
            if isinstance(key, str) and key in self.internal_keys:
                result[name] = INTERNAL_MARKER
            else:
                result[name] = self._redact_child(item, path + (name,), depth + 1, walk)
        return result

    def _redact_sequence(self, value: Any, path: Path, depth: int, limit: Optional[int], walk: _Walk) -> Any:
        result = []
        for index, item in enumerate(value):
            if (limit is not None and index >= limit) or walk.budget <= 0:
                return truncated_array(result, len(value))
            walk.budget -= 1
            result.append(self._redact_child(item, path + (index,), depth + 1, walk))
        return result

    def _redact_child(self, value: Any, path: Path, depth: int, walk: _Walk) -> Any:
        if isinstance(value, BaseException):
            return self._text(value)
        if isinstance(value, Mapping) or is_array(value):
            return self._redact_container(value, path, depth, self.max_length, walk)
        return self._redact_leaf(value)

    def _redact_key(self, key: Any) -> str:
        name = key if isinstance(key, str) else safe_str(key)
        return truncate_text(name, self.max_length, self.ellipsis)

    def _redact_leaf(self, value: Any) -> Any:
        if value is None or isinstance(value, bool):
            return value
        if isinstance(value, str):
            return truncate_text(value, self.max_length, self.ellipsis)
        if isinstance(value, float):
            return value if math.isfinite(value) else None
        if isinstance(value, int) and value.bit_length() <= MAX_INT_BITS:
            return value
        return self._text(value)

    def _text(self, value: Any) -> str:
        return truncate_text(safe_str(value), self.max_length, self.ellipsis)
