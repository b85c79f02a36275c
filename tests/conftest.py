import matplotlib

matplotlib.use("Agg")

import pytest

from backprop import Network, TrainingData
from settings.network_config import reset_network_config


@pytest.fixture(autouse=True)
def _fresh_network_config():
    reset_network_config()
    yield
    reset_network_config()


@pytest.fixture
def mixing_data():
    """Samples a network without hidden layers can fit: targets sigmoid(2.2a - 2.2b)."""
    return TrainingData.from_pairs([
        ([1, 0], [0.9]),
        ([0, 1], [0.1]),
        ([1, 1], [0.5]),
    ], seed=7)


@pytest.fixture
def mixing_network():
    network = Network(input_layer_length=2, output_layer_length=1, seed=0)
    network.initialize()
    return network
