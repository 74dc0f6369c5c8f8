"""
Debug Comms Layer.

This module provides the publish primitive the debug pipeline hands its
envelopes to. Publishing is fire-and-forget: no acknowledgement, no
retry, and no implementation may block the caller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

DEBUG_TOPIC = "debug"


@runtime_checkable
class DebugComms(Protocol):
    """
    Protocol for publish primitives.

    Comms deliver published messages to their final destination
    (a websocket hub, a queue, a callback, etc.).
    """

    @property
    def name(self) -> str:
        """Unique name for this comms."""
        ...

    def publish(self, topic: str, message: Dict[str, Any]) -> None:
        """
        Publish a message.

        Args:
            topic: Topic to publish on
            message: The message to publish
        """
        ...


class CommsRegistry:
    """
    Registry fanning published messages out to several comms.

    Errors in individual comms don't affect others.

    Example:
        registry = CommsRegistry()
        registry.register(QueueComms(output_queue))
        registry.register(CallbackComms(print))

        registry.publish("debug", message)  # Publishes to both
    """

    name = "registry"

    def __init__(self):
        """Initialize an empty registry."""
        self._comms: Dict[str, DebugComms] = {}

    def register(self, comms: DebugComms) -> "CommsRegistry":
        """
        Register a comms.

        Args:
            comms: Comms to register

        Returns:
            Self for chaining
        """
        self._comms[comms.name] = comms
        return self

    def unregister(self, name: str) -> "CommsRegistry":
        """
        Unregister a comms by name.

        Args:
            name: Name of the comms to remove

        Returns:
            Self for chaining
        """
        self._comms.pop(name, None)
        return self

    def get(self, name: str) -> Optional[DebugComms]:
        """Get a comms by name, or None if not registered."""
        return self._comms.get(name)

    @property
    def comms(self) -> List[DebugComms]:
        """Get all registered comms."""
        return list(self._comms.values())

    def publish(self, topic: str, message: Dict[str, Any]) -> None:
        """
        Publish a message to all registered comms.

        Exceptions are caught and logged, but don't prevent other
        comms from receiving the message.
        """
        for comms in list(self._comms.values()):
            try:
                comms.publish(topic, message)
            except Exception as e:
                logger.warning("Comms %s failed: %s", comms.name, e)


class QueueComms:
    """
    Publish messages to an async queue.

    This is the primary comms for streaming debug output to a consumer
    running on an event loop. Messages are put without waiting; when the
    queue is full the message is dropped.

    Example:
        queue = asyncio.Queue()
        comms = QueueComms(queue)
        comms.publish("debug", envelope.to_dict())

        # Consumer
        item = await queue.get()  # {"topic": "debug", "data": {...}}
    """

    name = "queue"

    def __init__(self, queue: asyncio.Queue):
        """
        Initialize the queue comms.

        Args:
            queue: The async queue to publish to
        """
        self._queue = queue
        self.dropped = 0

    def publish(self, topic: str, message: Dict[str, Any]) -> None:
        """Put a message on the queue."""
        try:
            self._queue.put_nowait({"topic": topic, "data": message})
        except asyncio.QueueFull:
            self.dropped += 1
            logger.debug("Debug queue full, dropped message on %s (%d dropped)", topic, self.dropped)


class CallbackComms:
    """
    Publish messages to registered callbacks.

    Useful for custom handling of debug messages, like forwarding
    to a websocket hub or collecting them in tests.

    Example:
        received = []
        comms = CallbackComms(lambda topic, message: received.append(message))
        comms.publish("debug", envelope.to_dict())
    """

    name = "callback"

    def __init__(self, *callbacks: Callable[[str, Dict[str, Any]], None]):
        """
        Initialize the callback comms.

        Args:
            *callbacks: Functions to call with each topic and message
        """
        self._callbacks: List[Callable[[str, Dict[str, Any]], None]] = list(callbacks)

    def add_callback(self, callback: Callable[[str, Dict[str, Any]], None]) -> "CallbackComms":
        """
        Add a callback.

        Returns:
            Self for chaining
        """
        self._callbacks.append(callback)
        return self

    def remove_callback(self, callback: Callable) -> "CallbackComms":
        """
        Remove a callback.

        Returns:
            Self for chaining
        """
        if callback in self._callbacks:
            self._callbacks.remove(callback)
        return self

    def publish(self, topic: str, message: Dict[str, Any]) -> None:
        """Call every callback with the message."""
        for callback in list(self._callbacks):
            try:
                callback(topic, message)
            except Exception as e:
                logger.warning("Debug callback failed: %s", e)


class NullComms:
    """
    Comms that discards all messages.

    Useful for running flows without a debug consumer attached.
    """

    name = "null"

    def publish(self, topic: str, message: Dict[str, Any]) -> None:
        """Discard the message."""
        pass
