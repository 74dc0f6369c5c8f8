from typing import Any, Optional

from pydantic import field_validator

from flow_debug.models.factory.Nodes.BaseNodeModel import BaseNodeModel

COMPLETE_PAYLOAD = 'payload'
COMPLETE_MESSAGE = 'true'


class DebugNodeModel(BaseNodeModel):
    """
    Debug node model.

    complete: "payload" (default), "true" for the whole message, or a
        property expression such as "payload.items[0]".
    console: "true" to also echo values to the node's log.
    active: whether the node publishes to the debug channel.
    """
    complete: str = COMPLETE_PAYLOAD
    console: Optional[str] = None
    active: bool = True

    @field_validator('complete', mode='before')
    @classmethod
    def resolve_complete(cls, value: Any) -> str:
        """Normalise the complete flag; older flows store booleans or "false"."""
        if value is None or value is False:
            return COMPLETE_PAYLOAD
        if value is True:
            return COMPLETE_MESSAGE
        value = str(value).strip()
        if value in ('', 'false'):
            return COMPLETE_PAYLOAD
        return value

    @field_validator('console', mode='before')
    @classmethod
    def resolve_console(cls, value: Any) -> Optional[str]:
        if isinstance(value, bool):
            return 'true' if value else None
        return value

    @field_validator('active', mode='before')
    @classmethod
    def resolve_active(cls, value: Any) -> bool:
        # Missing or null means active
        return True if value is None else value

    @property
    def whole_message(self) -> bool:
        return self.complete == COMPLETE_MESSAGE

    @property
    def echo_to_console(self) -> bool:
        return self.console == 'true'
