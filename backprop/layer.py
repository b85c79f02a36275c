from enum import Enum
from typing import List, Sequence

import numpy as np

from .connection import Connection
from .exceptions import ShapeMismatchError, TopologyMismatchError
from .helpers import get_random_number, sigmoid
from .neuron import Neuron


class LayerKind(Enum):
    """Role of a layer in the stack."""
    INPUT = "input"
    HIDDEN = "hidden"
    OUTPUT = "output"


class Layer:
    """
    An ordered, fixed-size group of neurons.

    Subclasses are the closed set InputLayer, HiddenLayer and OutputLayer; the
    ``kind`` tag tells which forward and gradient formula a layer applies.
    Operations called out of order (e.g. gradients before a forward pass) work
    on stale or zero values rather than raising.

    Attributes:
        neurons: Neurons of this layer, in positional order
    """

    kind: LayerKind

    def __init__(self, neuron_count: int):
        """
        Initialize a layer.

        Args:
            neuron_count: Number of neurons, fixed for the layer's lifetime
        """
        if neuron_count < 1:
            raise ValueError(f"A layer needs at least one neuron, got {neuron_count}")
        self.neurons: List[Neuron] = [Neuron() for _ in range(neuron_count)]

    def __len__(self):
        return len(self.neurons)

    @property
    def incoming_connections(self) -> List[Connection]:
        """Incoming connections, ordered by neuron then by source."""
        return [connection for neuron in self.neurons for connection in neuron.incoming]

    @property
    def outgoing_connections(self) -> List[Connection]:
        return [connection for neuron in self.neurons for connection in neuron.outgoing]

    @property
    def connection_count(self) -> int:
        """Number of incoming connections."""
        return sum(len(neuron.incoming) for neuron in self.neurons)

    def get_output_values(self) -> List[float]:
        return [neuron.output for neuron in self.neurons]

    def calculate_values(self):
        """Set every neuron's output to sigmoid(sum of source output * weight)."""
        for neuron in self.neurons:
            total = 0.0
            for connection in neuron.incoming:
                total += connection.source.output * connection.weight
            neuron.output = sigmoid(total)

    def calculate_gradients(self, targets: Sequence[float]):
        raise NotImplementedError

    def update_weights(self, alpha: float, eta: float):
        """
        Apply the momentum update to every incoming connection.

        Args:
            alpha: Momentum factor
            eta: Learning rate
        """
        for connection in self.incoming_connections:
            connection.update(alpha, eta)

    def export_weights(self) -> List[float]:
        """Incoming weights in serialization order."""
        return [connection.weight for connection in self.incoming_connections]

    def import_weights(self, weights: Sequence[float]):
        """
        Overwrite incoming weights positionally.

        Args:
            weights: One value per incoming connection, in export order

        Raises:
            TopologyMismatchError: If the count differs from the connection count
        """
        connections = self.incoming_connections
        if len(weights) != len(connections):
            raise TopologyMismatchError(
                f"{self.kind.value} layer has {len(connections)} incoming connections, "
                f"got {len(weights)} weights"
            )
        for connection, weight in zip(connections, weights):
            connection.weight = float(weight)
            connection.previous_delta = 0.0

    def __str__(self):
        lines = [f"{self.kind.value.capitalize()} layer ({len(self.neurons)} neurons)"]
        for i, neuron in enumerate(self.neurons):
            line = f"  N{i}: output={neuron.output:.5f}, gradient={neuron.gradient:.5f}"
            if neuron.incoming:
                weights = ", ".join(f"{c.weight:+.5f}" for c in neuron.incoming)
                line += f", weights=[{weights}]"
            lines.append(line)
        return "\n".join(lines)

    def __repr__(self):
        return f"{type(self).__name__}(neurons={len(self.neurons)}, connections={self.connection_count})"


class InputLayer(Layer):
    """First layer: outputs are set from the input sample, never computed."""

    kind = LayerKind.INPUT

    def set_output_values(self, values: Sequence[float]):
        """
        Assign values[i] to neuron i.

        Raises:
            ShapeMismatchError: If len(values) differs from the neuron count
        """
        if len(values) != len(self.neurons):
            raise ShapeMismatchError("Input vector", len(self.neurons), len(values))
        for neuron, value in zip(self.neurons, values):
            neuron.output = float(value)

    def calculate_values(self):
        pass

    def calculate_gradients(self, targets: Sequence[float]):
        pass


class HiddenLayer(Layer):
    kind = LayerKind.HIDDEN

    def calculate_gradients(self, targets: Sequence[float]):
        """Backpropagate downstream gradients through the sigmoid derivative."""
        for neuron in self.neurons:
            downstream = 0.0
            for connection in neuron.outgoing:
                downstream += connection.destination.gradient * connection.weight
            neuron.gradient = neuron.output * (1.0 - neuron.output) * downstream


class OutputLayer(Layer):
    """Last layer: the only one compared against targets."""

    kind = LayerKind.OUTPUT

    def _check_targets(self, targets: Sequence[float]):
        if len(targets) != len(self.neurons):
            raise ShapeMismatchError("Target vector", len(self.neurons), len(targets))

    def get_error(self, targets: Sequence[float]) -> float:
        """
        Mean half-squared error of the current outputs.

        Args:
            targets: Expected output per neuron

        Returns:
            mean(0.5 * (target - output)^2)
        """
        self._check_targets(targets)
        errors = [0.5 * (target - neuron.output) ** 2 for neuron, target in zip(self.neurons, targets)]
        return float(np.mean(errors))

    def calculate_gradients(self, targets: Sequence[float]):
        self._check_targets(targets)
        for neuron, target in zip(self.neurons, targets):
            neuron.gradient = (target - neuron.output) * neuron.output * (1.0 - neuron.output)


def connect(layer_a: Layer, layer_b: Layer, weight_range: float, rng: np.random.Generator):
    """
    Fully connect two adjacent layers.

    Creates one connection per (neuron in layer_a, neuron in layer_b) pair with
    a weight drawn uniformly from [-weight_range, weight_range].

    Args:
        layer_a: Upstream layer
        layer_b: Downstream layer
        weight_range: Half-width of the initial weight interval
        rng: Random generator used for the weights
    """
    for destination in layer_b.neurons:
        for source in layer_a.neurons:
            weight = get_random_number(rng, -weight_range, weight_range)
            connection = Connection(source, destination, weight)
            source.outgoing.append(connection)
            destination.incoming.append(connection)
