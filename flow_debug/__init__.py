"""
Flow Debug

Debug node for flow engines: publishes display-safe renderings of the
values flowing through a flow, and of warning/error log records, on the
"debug" channel.
"""

from flow_debug.debug import (
    UNDEFINED,
    DebugConfig,
    DebugContext,
    DebugEncoder,
    DebugPublisher,
    encode,
    install_log_bridge,
)
from flow_debug.flow import NodeRegistry, build_nodes, create_node

__all__ = [
    'UNDEFINED',
    'DebugConfig',
    'DebugContext',
    'DebugEncoder',
    'DebugPublisher',
    'encode',
    'install_log_bridge',
    'NodeRegistry',
    'build_nodes',
    'create_node',
]
