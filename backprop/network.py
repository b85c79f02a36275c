import os
from typing import List, Optional, Sequence

import numpy as np

from .exceptions import TopologyMismatchError, UninitializedNetworkError
from .helpers import approach, round_to_int
from .layer import HiddenLayer, InputLayer, Layer, OutputLayer, connect
from .serialization import format_weights, parse_weights
from .training import TrainingHandle
from .training_data import TrainingData


class Network:
    """
    Fully connected feedforward network trained one sample at a time.

    Layers are [Input, Hidden x N, Output]. Every training step runs a forward
    pass, smooths the raw error into error_approximation, backpropagates
    gradients and applies a momentum update whose learning rate (eta) and
    momentum (alpha) are both derived from the smoothed error:

        alpha = 1 - error_approximation
        eta   = error_approximation ** 2

    Training is considered done once the smoothed error drops below 1 %.

    No locking is done: at most one training operation may run at a time, and
    reads during training may observe a partially applied step. Weights are
    not bounded, so an unstable run can overflow to NaN.

    Attributes:
        layers: Layer stack, input first
        epoch: Completed training steps
        error: Most recent raw error
        error_approximation: Exponentially smoothed error
        input_layer_length: Width of the input layer
        hidden_layer_length: Width of every hidden layer
        hidden_layer_amount: Number of hidden layers
        output_layer_length: Width of the output layer
        initial_weight_range: Initial weights are drawn from [-range, range]
        error_smoothing: Fraction of the gap to the new error closed per step
        rng: Random generator for weight initialization
    """

    def __init__(self,
                 initial_weight_range: float = 0.5,
                 input_layer_length: int = 1,
                 hidden_layer_length: int = 0,
                 hidden_layer_amount: int = 0,
                 output_layer_length: int = 1,
                 error_smoothing: float = 0.01,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None):
        """
        Create an empty network; call initialize() to build the layers.

        Args:
            initial_weight_range: Half-width of the initial weight interval
            input_layer_length: Input layer width
            hidden_layer_length: Hidden layer width
            hidden_layer_amount: Number of hidden layers
            output_layer_length: Output layer width
            error_smoothing: Approach factor for the smoothed error
            rng: Random generator (takes precedence over seed)
            seed: Seed for a new generator when rng is not given
        """
        self.initial_weight_range = initial_weight_range
        self.input_layer_length = input_layer_length
        self.hidden_layer_length = hidden_layer_length
        self.hidden_layer_amount = hidden_layer_amount
        self.output_layer_length = output_layer_length
        self.error_smoothing = error_smoothing
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.layers: List[Layer] = []
        self.epoch = 0
        self.error = 0.5
        self.error_approximation = 0.5

    # ------------------------------------------------------------------
    # Derived training state
    # ------------------------------------------------------------------

    @property
    def alpha(self) -> float:
        """Momentum factor."""
        return 1 - self.error_approximation

    @property
    def eta(self) -> float:
        """Learning rate."""
        return self.error_approximation ** 2

    @property
    def error_percentage(self) -> float:
        return self.error_approximation * 100

    @property
    def has_learned_enough(self) -> bool:
        """True once the smoothed error is below 1 %."""
        return self.error_percentage < 1

    @property
    def outputs(self) -> List[float]:
        """Raw output-layer activations from the last forward pass."""
        if not self.layers:
            return []
        return self.layers[-1].get_output_values()

    @property
    def results(self) -> List[int]:
        """Output activations rounded to the nearest integer."""
        return [round_to_int(value) for value in self.outputs]

    @property
    def result_max_index(self) -> int:
        """Index of the largest output (first one on ties)."""
        outputs = self.outputs
        if not outputs:
            raise UninitializedNetworkError("read results")
        return int(np.argmax(outputs))

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    def initialize(self):
        """Rebuild all layers and connections from the configured widths."""
        self._build(
            self.input_layer_length,
            [self.hidden_layer_length] * self.hidden_layer_amount,
            self.output_layer_length,
        )

    def initialize_from(self, data: TrainingData, hidden_layers: int = 2):
        """
        Rebuild the layers with widths inferred from a training set.

        Hidden layers get floor(input_length * 2 / 3) + output_length neurons.
        The configured widths are updated to match.

        Args:
            data: Training set whose vector lengths size the input and output layers
            hidden_layers: Number of hidden layers
        """
        if len(data) == 0:
            raise ValueError("Cannot infer layer widths from an empty training set")

        self.input_layer_length = data.input_length
        self.output_layer_length = data.output_length
        self.hidden_layer_length = data.input_length * 2 // 3 + data.output_length
        self.hidden_layer_amount = hidden_layers
        self.initialize()

    def _build(self, input_length: int, hidden_lengths: Sequence[int], output_length: int):
        self.layers = []
        self.layers.append(InputLayer(input_length))
        for length in hidden_lengths:
            self.layers.append(HiddenLayer(length))
        self.layers.append(OutputLayer(output_length))

        for layer_a, layer_b in zip(self.layers[:-1], self.layers[1:]):
            connect(layer_a, layer_b, self.initial_weight_range, self.rng)

    def _require_layers(self, operation: str):
        if not self.layers:
            raise UninitializedNetworkError(operation)

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def feed_forward(self, inputs: Sequence[float]):
        """
        Propagate an input vector to the output layer.

        Raises:
            UninitializedNetworkError: If initialize() has not run
            ShapeMismatchError: If len(inputs) differs from the input width
        """
        self._require_layers("run a forward pass")
        self.layers[0].set_output_values(inputs)
        for layer in self.layers[1:]:
            layer.calculate_values()

    def back_propagation(self, targets: Sequence[float]):
        """
        Update the weights toward a target vector, using the last forward pass.

        Raises:
            UninitializedNetworkError: If initialize() has not run
            ShapeMismatchError: If len(targets) differs from the output width
        """
        self._require_layers("backpropagate")

        output_layer = self.layers[-1]
        self.error = output_layer.get_error(targets)
        self.error_approximation = approach(self.error_approximation, self.error, self.error_smoothing)

        for layer in reversed(self.layers):
            layer.calculate_gradients(targets)

        # alpha/eta are read once so every layer uses the same coefficients
        alpha, eta = self.alpha, self.eta
        for layer in reversed(self.layers):
            layer.update_weights(alpha, eta)

        self.epoch += 1

    def train_once(self, data: TrainingData):
        """Run one forward and backward pass on a randomly drawn sample."""
        self._require_layers("train")
        inputs, targets = data.sample()
        self.feed_forward(inputs)
        self.back_propagation(targets)

    def train_full(self,
                   data: TrainingData,
                   sleep_per_epoch: float = 0.0,
                   verbose: bool = False,
                   print_interval: int = 1000) -> TrainingHandle:
        """
        Train in the background until has_learned_enough or stop().

        Args:
            data: Sample provider
            sleep_per_epoch: Delay between steps in seconds
            verbose: Print status lines while training
            print_interval: Steps between status lines

        Returns:
            Started TrainingHandle
        """
        self._require_layers("train")
        handle = TrainingHandle(self, data, sleep_per_epoch=sleep_per_epoch,
                                verbose=verbose, print_interval=print_interval)
        return handle.start()

    def predict(self, inputs: Sequence[float]) -> List[float]:
        """Forward pass without training; returns the raw outputs."""
        self.feed_forward(inputs)
        return self.outputs

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def export(self) -> str:
        """Serialize the weights (not the topology) to text."""
        self._require_layers("export weights")
        return format_weights([layer.export_weights() for layer in self.layers])

    def import_text(self, data: str):
        """
        Load weights exported by a network with the same topology.

        Raises:
            UninitializedNetworkError: If initialize() has not run
            TopologyMismatchError: If the layer or weight counts differ
        """
        self._require_layers("import weights")
        layer_weights = parse_weights(data)
        if len(layer_weights) != len(self.layers):
            raise TopologyMismatchError(
                f"Network has {len(self.layers)} layers, data describes {len(layer_weights)}"
            )
        # Check every layer before touching any weight
        for i, (layer, weights) in enumerate(zip(self.layers, layer_weights)):
            if len(weights) != layer.connection_count:
                raise TopologyMismatchError(
                    f"Layer {i} has {layer.connection_count} incoming connections, "
                    f"data has {len(weights)} weights"
                )
        for layer, weights in zip(self.layers, layer_weights):
            layer.import_weights(weights)

    def export_to_file(self, path: str):
        """Write export() to path, creating missing parent directories."""
        data = self.export()
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, 'w', newline='') as f:
            f.write(data)

    def import_from_file(self, path: str) -> bool:
        """
        Load weights from a file written by export_to_file.

        A missing file is not an error: nothing is loaded and False is returned,
        so an optional checkpoint can be resumed unconditionally.

        Returns:
            True if weights were loaded
        """
        if not os.path.exists(path):
            return False
        with open(path, 'r', newline='') as f:
            data = f.read()
        self.import_text(data)
        return True

    def __str__(self):
        layers = "\n\n".join(str(layer) for layer in self.layers)
        return (f"{layers}\n\n"
                f"Epoch: {self.epoch}\n"
                f"Alpha: {self.alpha:.5f}\n"
                f"Eta: {self.eta:.5f}\n"
                f"Error: {self.error:.5f}\n"
                f"ErrorApproximation: {self.error_approximation:.5f}")

    def __repr__(self):
        widths = [len(layer) for layer in self.layers]
        return f"Network(layers={widths}, epoch={self.epoch}, error={self.error_percentage:.3f}%)"
