import json
from typing import Dict, Optional

from backprop.network import Network


class NetworkConfig:
    """Topology and training settings for a Network."""

    FIELDS = (
        'input_layer_length',
        'hidden_layer_length',
        'hidden_layer_amount',
        'output_layer_length',
        'initial_weight_range',
        'error_smoothing',
        'seed',
    )

    def __init__(self,
                 input_layer_length: int = 2,
                 hidden_layer_length: int = 3,
                 hidden_layer_amount: int = 1,
                 output_layer_length: int = 1,
                 initial_weight_range: float = 0.5,
                 error_smoothing: float = 0.01,
                 seed: Optional[int] = None,
                 verbose: bool = False):
        """
        Initialize network configuration.

        Args:
            input_layer_length: Input layer width
            hidden_layer_length: Width of each hidden layer
            hidden_layer_amount: Number of hidden layers
            output_layer_length: Output layer width
            initial_weight_range: Initial weights are drawn from [-range, range]
            error_smoothing: Approach factor for the smoothed error
            seed: Seed for weight initialization (None for a fresh seed)
            verbose: Print the configuration banner on creation
        """
        self.input_layer_length = input_layer_length
        self.hidden_layer_length = hidden_layer_length
        self.hidden_layer_amount = hidden_layer_amount
        self.output_layer_length = output_layer_length
        self.initial_weight_range = initial_weight_range
        self.error_smoothing = error_smoothing
        self.seed = seed
        self._validate()
        if verbose:
            self.print_info()

    def _validate(self):
        for name in ('input_layer_length', 'output_layer_length'):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.hidden_layer_amount < 0:
            raise ValueError(f"hidden_layer_amount must not be negative, got {self.hidden_layer_amount}")
        if self.hidden_layer_amount > 0 and self.hidden_layer_length < 1:
            raise ValueError("hidden_layer_length must be at least 1 when hidden layers are used")
        if not 0 < self.error_smoothing <= 1:
            raise ValueError(f"error_smoothing must be in (0, 1], got {self.error_smoothing}")

    def to_dict(self) -> Dict:
        return {name: getattr(self, name) for name in self.FIELDS}

    @classmethod
    def from_dict(cls, values: Dict, verbose: bool = False) -> 'NetworkConfig':
        unknown = set(values) - set(cls.FIELDS)
        if unknown:
            raise ValueError(f"Unknown network config keys: {sorted(unknown)}")
        return cls(verbose=verbose, **values)

    @classmethod
    def from_json(cls, path: str, verbose: bool = False) -> 'NetworkConfig':
        with open(path, 'r') as f:
            return cls.from_dict(json.load(f), verbose=verbose)

    def build_network(self) -> Network:
        """Create and initialize a network with these settings."""
        network = Network(
            initial_weight_range=self.initial_weight_range,
            input_layer_length=self.input_layer_length,
            hidden_layer_length=self.hidden_layer_length,
            hidden_layer_amount=self.hidden_layer_amount,
            output_layer_length=self.output_layer_length,
            error_smoothing=self.error_smoothing,
            seed=self.seed,
        )
        network.initialize()
        return network

    @property
    def layer_widths(self):
        hidden = [self.hidden_layer_length] * self.hidden_layer_amount
        return [self.input_layer_length] + hidden + [self.output_layer_length]

    def print_info(self):
        """Print the configuration."""
        print("="*60)
        print("NETWORK CONFIGURATION")
        print("="*60)
        print(f"Layers: {' -> '.join(str(w) for w in self.layer_widths)}")
        print(f"Initial Weight Range: +/-{self.initial_weight_range}")
        print(f"Error Smoothing: {self.error_smoothing}")
        print(f"Seed: {self.seed if self.seed is not None else 'random'}")
        print("="*60)

    def __repr__(self):
        return f"NetworkConfig({self.to_dict()})"


# Global network configuration
_network_config = None


def get_network_config(path: Optional[str] = None, verbose: bool = False, **overrides) -> NetworkConfig:
    """
    Get or create the global network configuration.

    Args:
        path: Optional JSON file with config values (read on first call only)
        verbose: Print the configuration banner when it is created
        **overrides: Values that replace the defaults or the file's values

    Returns:
        NetworkConfig instance
    """
    global _network_config
    if _network_config is None:
        values = {}
        if path is not None:
            with open(path, 'r') as f:
                values.update(json.load(f))
        values.update(overrides)
        _network_config = NetworkConfig.from_dict(values, verbose=verbose)
    return _network_config


def reset_network_config():
    """Forget the global configuration so the next get_network_config() rebuilds it."""
    global _network_config
    _network_config = None
