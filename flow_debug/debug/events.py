"""
Debug Value and Envelope Definitions.

This module defines the value categories recognised by the debug pipeline,
the encoded value produced for each of them, and the envelope that is
published to the debug channel.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class _Undefined:
    """
    Marker for a value that does not exist.

    Distinct from ``None``: a property lookup that finds nothing yields
    ``UNDEFINED``, while a property explicitly holding ``None`` yields ``None``.
    """

    _instance: Optional["_Undefined"] = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "undefined"

    def __copy__(self) -> "_Undefined":
        return self

    def __deepcopy__(self, memo) -> "_Undefined":
        return self


UNDEFINED = _Undefined()


class ValueCategory(Enum):
    """
    Categories a debug value can be classified into.

    Listed in classification priority order: a value that satisfies
    more than one test takes the first matching category.
    """

    ERROR = "error"
    BINARY = "binary"
    ERROR_LIKE = "error_like"
    ARRAY = "array"
    PLAIN_OBJECT = "plain_object"
    OPAQUE_OBJECT = "opaque_object"
    BOOLEAN = "boolean"
    NUMBER = "number"
    NULL = "null"
    UNDEFINED = "undefined"
    STRING = "string"


@dataclass(frozen=True)
class EncodedValue:
    """
    Display-safe encoding of a single value.

    Attributes:
        format: Format tag describing the original value (e.g. ``array[2000]``)
        payload: Bounded string rendering of the value
    """

    format: str
    payload: str


@dataclass
class NodeControlState:
    """
    Switch deciding whether a debug node publishes.

    Written by the admin endpoint, read on every publish. A publish that
    races with a toggle may see either value.
    """

    active: bool = True


@dataclass(frozen=True)
class DebugContext:
    """
    Where a debug value came from.

    Attributes:
        id: ID of the node publishing the value
        name: Display name of the node
        topic: Topic of the inbound message
        property: Message property the value was taken from
        path: Flow path of the inbound message
    """

    id: str
    name: Optional[str] = None
    topic: Optional[Any] = None
    property: Optional[str] = None
    path: Optional[Any] = None


@dataclass(frozen=True)
class DebugEnvelope:
    """
    Message published on the debug channel.

    Created once per value and handed to the comms layer; never mutated.

    Attributes:
        id: ID of the node (or logger) that produced the value
        format: Format tag of the encoded value
        payload: Encoded value
        name: Display name of the producer
        topic: Topic of the inbound message
        property: Message property the value was taken from
        path: Flow path of the inbound message
        level: Log level name, only set for forwarded log records
    """

    id: str
    format: str
    payload: str
    name: Optional[str] = None
    topic: Optional[Any] = None
    property: Optional[str] = None
    path: Optional[Any] = None
    level: Optional[str] = None

    @classmethod
    def from_encoded(
        cls,
        context: DebugContext,
        encoded: EncodedValue,
        level: Optional[str] = None,
    ) -> DebugEnvelope:
        """
        Build an envelope from a context and an encoded value.

        Args:
            context: Where the value came from
            encoded: The encoded value
            level: Log level name for forwarded log records

        Returns:
            DebugEnvelope instance
        """
        return cls(
            id=context.id,
            name=context.name,
            topic=context.topic,
            property=context.property,
            path=context.path,
            format=encoded.format,
            payload=encoded.payload,
            level=level,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a dictionary for publishing.

        Fields that are not set are left out.

        Returns:
            Dictionary representation of the envelope
        """
        data = {
            "id": self.id,
            "name": self.name,
            "topic": self.topic,
            "property": self.property,
            "format": self.format,
            "payload": self.payload,
            "path": self.path,
            "level": self.level,
        }
        return {key: value for key, value in data.items() if value is not None}
