from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

ModelFlowNodeType = Literal[
    'debug',
]


class ModelFlowNodeTypesModel:
    DEBUG = 'debug'


class BaseNodeModel(BaseModel):
    """
    Base model for all node types.
    Configured to accept extra fields from JSON without raising errors.
    The JSON definition is the source of truth.
    """
    model_config = ConfigDict(extra='allow')  # Editor-only fields (x, y, wires, ...) are kept, not validated

    name: Optional[str] = None
