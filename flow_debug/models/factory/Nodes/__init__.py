from flow_debug.models.factory.Nodes.BaseNodeModel import BaseNodeModel, ModelFlowNodeType, ModelFlowNodeTypesModel
from flow_debug.models.factory.Nodes.DebugNodeModel import DebugNodeModel

__all__ = [
    'BaseNodeModel',
    'ModelFlowNodeType',
    'ModelFlowNodeTypesModel',
    'DebugNodeModel',
]
