import abc

from flow_debug.util.telemetry import node_telemetry


class Node(abc.ABC):
    def __init__(self,
                 node_id=None,
                 node_type=None,
                 debug: bool = False,
                 **kwargs):
        self.node_id = node_id
        self.node_type = node_type
        self.debug = debug

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        # Automatically decorate the `process` method of the subclass
        if 'process' in cls.__dict__:
            cls.process = node_telemetry(cls.process)

    def __call__(self, msg: dict):
        """Deliver an inbound message to the node."""
        return self.process(msg)

    @abc.abstractmethod
    def process(self, msg: dict):
        pass

    def get_debug(self):
        return self.debug
