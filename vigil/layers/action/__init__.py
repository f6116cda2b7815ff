"""Action Layer - polling engine and operation dispatch."""

from vigil.layers.action.polling import PollingEngine
from vigil.layers.action.dispatcher import OperationDispatcher
from vigil.layers.action.element import VirtualElement

__all__ = ["PollingEngine", "OperationDispatcher", "VirtualElement"]
