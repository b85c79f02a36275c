from .neuron import Neuron


class Connection:
    """
    Directed weighted edge between two neurons.

    The connection only references its endpoints; the layers own the neurons.

    Attributes:
        source: Neuron whose output is read
        destination: Neuron whose input is fed
        weight: Current weight
        previous_delta: Last weight change, carried into the next update as momentum
    """

    def __init__(self, source: Neuron, destination: Neuron, weight: float):
        self.source = source
        self.destination = destination
        self.weight = weight
        self.previous_delta = 0.0

    def update(self, alpha: float, eta: float):
        """
        Apply one gradient step with momentum.

        Args:
            alpha: Momentum factor applied to the previous delta
            eta: Learning rate
        """
        delta = eta * self.destination.gradient * self.source.output + alpha * self.previous_delta
        self.weight += delta
        self.previous_delta = delta

    def __repr__(self):
        return f"Connection(weight={self.weight:+.5f}, previous_delta={self.previous_delta:+.5f})"
