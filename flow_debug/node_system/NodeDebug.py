import logging
from collections.abc import Mapping
from typing import Any, Optional

from flow_debug.debug import UNDEFINED, DebugContext, DebugPublisher, NodeControlState
from flow_debug.debug.classify import is_object
from flow_debug.models.factory.Nodes import DebugNodeModel
from flow_debug.node_system.Node import Node
from flow_debug.util.message_property import get_message_property
from flow_debug.util.pretty import inspect_value

logger = logging.getLogger(__name__)

CONSOLE_DEPTH = 10


def _message_field(msg: Any, key: str) -> Any:
    if isinstance(msg, Mapping):
        return msg.get(key)
    return None


class NodeDebug(Node):
    """
    Debug node - publishes what flows through it to the debug channel.

    Either the whole inbound message or one of its properties is sent,
    depending on the ``complete`` setting. Publishing can be switched
    on and off at runtime through ``active``.
    """

    def __init__(self, data: DebugNodeModel, publisher: DebugPublisher, **kwargs) -> None:
        super().__init__(**kwargs)
        self.name = data.name
        self.complete = data.complete
        self.console = data.echo_to_console
        self.whole_message = data.whole_message
        self.control = NodeControlState(active=data.active)
        self.publisher = publisher

    @property
    def active(self) -> bool:
        return self.control.active

    @active.setter
    def active(self, value: bool) -> None:
        self.control.active = bool(value)

    def process(self, msg):
        if self.whole_message:
            value = msg
            prop: Optional[str] = None
        else:
            prop = self.complete
            try:
                value = get_message_property(msg, prop)
            except Exception as e:
                logger.debug("NodeDebug:%s cannot read %s: %s", self.node_id, prop, e)
                value = UNDEFINED

        if self.console:
            self._echo(value)

        context = DebugContext(
            id=self.node_id,
            name=self.name,
            topic=_message_field(msg, 'topic'),
            property=prop,
            path=_message_field(msg, '_path'),
        )
        self.publisher.publish(value, context, control=self.control)

    def _echo(self, value):
        """Log a value to the console the way a user reads it."""
        use_colors = self.publisher.config.use_colors
        if isinstance(value, str):
            text = ("\n" if "\n" in value else "") + value
        elif is_object(value):
            text = "\n" + inspect_value(value, colors=use_colors, max_depth=CONSOLE_DEPTH)
        else:
            text = inspect_value(value, colors=use_colors)
        logger.info("NodeDebug:%s %s", self.node_id, text)
