class NetworkError(Exception):
    """Base class for errors raised by the network classes."""


class ShapeMismatchError(NetworkError, ValueError):
    """
    A vector does not have the length the receiving layer or dataset expects.

    Attributes:
        expected: Expected vector length
        actual: Length that was supplied
    """

    def __init__(self, what: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what} has length {actual}, expected {expected}")


class UninitializedNetworkError(NetworkError, RuntimeError):
    """The network was used before initialize() built its layers."""

    def __init__(self, operation: str):
        super().__init__(f"Cannot {operation}: network has no layers, call initialize() first")


class TopologyMismatchError(NetworkError, ValueError):
    """Imported weight text does not fit the layers the network was built with."""
