"""
Debug System Module

Turns arbitrary runtime values into small, display-safe debug messages
and publishes them on the "debug" channel.

Key Components:
- events: Value categories, encoded values and envelopes
- classify: Shallow classification of runtime values
- transform: Redaction of structured values before JSON encoding
- encode: Bounded encoding per value category
- emitter: Publish primitives (comms)
- publisher: Envelope assembly and publishing
- log_bridge: Forwarding of warning/error log records
- config: Debug configuration options
"""

from .events import (
    UNDEFINED,
    DebugContext,
    DebugEnvelope,
    EncodedValue,
    NodeControlState,
    ValueCategory,
)
from .classify import (
    classify,
    resolve_type_name,
)
from .transform import (
    INTERNAL_MARKER,
    Redactor,
)
from .encode import (
    DebugEncoder,
    encode,
)
from .emitter import (
    DEBUG_TOPIC,
    CallbackComms,
    CommsRegistry,
    DebugComms,
    NullComms,
    QueueComms,
)
from .publisher import (
    DebugPublisher,
)
from .log_bridge import (
    DebugLogHandler,
    install_log_bridge,
)
from .config import (
    DebugConfig,
    default_config,
)

__all__ = [
    # Events
    "UNDEFINED",
    "DebugContext",
    "DebugEnvelope",
    "EncodedValue",
    "NodeControlState",
    "ValueCategory",
    # Classify
    "classify",
    "resolve_type_name",
    # Transform
    "INTERNAL_MARKER",
    "Redactor",
    # Encode
    "DebugEncoder",
    "encode",
    # Emitter
    "DEBUG_TOPIC",
    "CallbackComms",
    "CommsRegistry",
    "DebugComms",
    "NullComms",
    "QueueComms",
    # Publisher
    "DebugPublisher",
    # Log bridge
    "DebugLogHandler",
    "install_log_bridge",
    # Config
    "DebugConfig",
    "default_config",
]
