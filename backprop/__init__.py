"""
Momentum Backprop Network Package

A fully connected feedforward network trained one sample at a time, with a
learning rate and momentum that tune themselves from the smoothed error.
"""

from .network import Network
from .layer import Layer, LayerKind, InputLayer, HiddenLayer, OutputLayer, connect
from .neuron import Neuron
from .connection import Connection
from .training_data import TrainingData
from .training import TrainingHandle
from .exceptions import NetworkError, ShapeMismatchError, UninitializedNetworkError, TopologyMismatchError

__all__ = [
    'Network',
    'Layer',
    'LayerKind',
    'InputLayer',
    'HiddenLayer',
    'OutputLayer',
    'connect',
    'Neuron',
    'Connection',
    'TrainingData',
    'TrainingHandle',
    'NetworkError',
    'ShapeMismatchError',
    'UninitializedNetworkError',
    'TopologyMismatchError',
]
