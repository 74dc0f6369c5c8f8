"""
Flow Debug Node Factory

This module creates node instances from their JSON definitions and keeps
track of the live nodes so the admin endpoint can look them up by id.
"""

import logging
from typing import Dict, Iterator, List, Optional

from flow_debug.debug import DebugPublisher
from flow_debug.models.factory.Nodes import DebugNodeModel, ModelFlowNodeTypesModel
from flow_debug.node_system import Node, NodeDebug

logger = logging.getLogger(__name__)


class NodeRegistry:
    """
    Live nodes by id.

    Example:
        registry = build_nodes(flow['nodes'], publisher)
        registry.get('debug-1').active = False
    """

    def __init__(self):
        self._nodes: Dict[str, Node] = {}

    def add(self, node: Node) -> Node:
        if node.node_id in self._nodes:
            logger.warning("NodeRegistry: replacing node %s", node.node_id)
        self._nodes[node.node_id] = node
        return node

    def get(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def remove(self, node_id: str) -> Optional[Node]:
        return self._nodes.pop(node_id, None)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[Node]:
        return iter(list(self._nodes.values()))

    def __len__(self) -> int:
        return len(self._nodes)


def create_node(node: dict, publisher: DebugPublisher, debug: bool = False) -> Node:
    """
    Factory method to create node instances.

    JSON is the source of truth - all node configuration comes from JSON,
    either under ``data`` or as top-level fields of the definition.

    Args:
        node (dict): Node definition from JSON.
        publisher (DebugPublisher): Publisher shared by the debug nodes.
        debug (bool): Debug mode. Defaults to False.

    Returns:
        Node: Node instance.

    Raises:
        ValueError: If the node type is not supported.
    """
    node_id = node['id']
    node_type = node.get('type')
    extra = {'debug': debug, 'node_id': node_id, 'node_type': node_type}

    node_data = {k: v for k, v in node.items() if k not in ('id', 'type', 'data')}
    node_data.update(node.get('data') or {})

    logger.debug("Creating node %s of type %s with data %s", node_id, node_type, node_data)

    # Mapping of node types to (constructor, model)
    node_map = {
        ModelFlowNodeTypesModel.DEBUG: (NodeDebug, DebugNodeModel),
    }

    if node_type not in node_map:
        error_msg = f"Unsupported node type: {node_type}"
        logger.error("create_node: %s (node_id=%s)", error_msg, node_id)
        raise ValueError(error_msg)

    constructor, model_cls = node_map[node_type]
    return constructor(data=model_cls(**node_data), publisher=publisher, **extra)


def build_nodes(nodes: List[dict], publisher: DebugPublisher, debug: bool = False) -> NodeRegistry:
    """Create every node of a flow and register it."""
    registry = NodeRegistry()
    for node in nodes:
        registry.add(create_node(node, publisher, debug=debug))
    logger.info("Built %d nodes", len(registry))
    return registry
