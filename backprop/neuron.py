from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .connection import Connection


class Neuron:
    """
    A single unit of a layer.

    Attributes:
        output: Last computed activation (0.0 until a forward pass has run)
        gradient: Last computed local gradient (0.0 until a backward pass has run)
        incoming: Connections that feed this neuron
        outgoing: Connections this neuron feeds
    """

    def __init__(self):
        self.output = 0.0
        self.gradient = 0.0
        self.incoming: List['Connection'] = []
        self.outgoing: List['Connection'] = []

    def __repr__(self):
        return f"Neuron(output={self.output:.5f}, gradient={self.gradient:.5f})"
