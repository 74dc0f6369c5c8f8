"""
Debug Publisher.

Runs a value through classification and encoding, wraps the result in a
DebugEnvelope and hands it to the comms layer on the "debug" topic.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .config import DebugConfig, default_config
from .emitter import DEBUG_TOPIC, DebugComms, NullComms
from .encode import DebugEncoder
from .events import DebugContext, DebugEnvelope, NodeControlState

logger = logging.getLogger(__name__)


class DebugPublisher:
    """
    Publish debug values.

    Each call is independent: the publisher keeps no per-value state, so
    it can be shared by every debug node and the log bridge.

    Example:
        publisher = DebugPublisher(CallbackComms(on_message))
        publisher.publish(msg["payload"], DebugContext(id="n1", property="payload"))
    """

    def __init__(
        self,
        comms: Optional[DebugComms] = None,
        config: Optional[DebugConfig] = None,
    ):
        """
        Initialize the publisher.

        Args:
            comms: Publish primitive (discards messages if None)
            config: Debug configuration (uses defaults if None)
        """
        self.config = config or default_config()
        self.comms = comms if comms is not None else NullComms()
        self.encoder = DebugEncoder(self.config)

    def publish(
        self,
        value: Any,
        context: DebugContext,
        control: Optional[NodeControlState] = None,
        level: Optional[str] = None,
    ) -> None:
        """
        Encode a value and publish it.

        Args:
            value: Any runtime value
            context: Where the value came from
            control: Switch of the publishing node; nothing is published
                while it is inactive
            level: Log level name, for forwarded log records
        """
        if control is not None and not control.active:
            return
        encoded = self.encoder.encode(value)
        self.send(DebugEnvelope.from_encoded(context, encoded, level=level))

    def send(self, envelope: DebugEnvelope) -> None:
        """
        Hand an assembled envelope to the comms layer.

        Comms failures are logged and dropped; delivery is not guaranteed.
        """
        try:
            self.comms.publish(DEBUG_TOPIC, envelope.to_dict())
        except Exception as e:
            logger.warning("Publishing debug message from %s failed: %s", envelope.id, e)
