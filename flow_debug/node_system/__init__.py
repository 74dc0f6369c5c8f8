from flow_debug.node_system.Node import Node
from flow_debug.node_system.NodeDebug import NodeDebug

__all__ = [
    'Node',
    'NodeDebug',
]
