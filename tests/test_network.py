import math

import numpy as np
import pytest

from backprop import (
    HiddenLayer,
    InputLayer,
    Network,
    OutputLayer,
    ShapeMismatchError,
    TrainingData,
    UninitializedNetworkError,
)
from backprop.helpers import approach


def _sigmoid(x):
    return 1.0 / (1.0 + math.exp(-x))


def _network(input_length, hidden_length, hidden_amount, output_length, seed=0):
    network = Network(input_layer_length=input_length, hidden_layer_length=hidden_length,
                      hidden_layer_amount=hidden_amount, output_layer_length=output_length, seed=seed)
    network.initialize()
    return network


def test_new_network_state():
    network = Network()
    assert network.layers == []
    assert network.epoch == 0
    assert network.error_approximation == 0.5
    assert network.alpha == pytest.approx(0.5)
    assert network.eta == pytest.approx(0.25)
    assert network.error_percentage == pytest.approx(50.0)
    assert not network.has_learned_enough


def test_single_weight_forward_pass():
    network = _network(1, 0, 0, 1)
    network.import_text("\n1.0\n")

    network.feed_forward([1.0])

    assert network.outputs[0] == pytest.approx(0.7310586, abs=1e-7)


def test_hidden_layer_forward_pass_matches_hand_computation():
    network = _network(2, 2, 1, 1)
    network.layers[1].import_weights([0.5, -1.0, 1.0, 2.0])
    network.layers[2].import_weights([1.0, -1.0])

    outputs = network.predict([1.0, 0.5])

    h0 = _sigmoid(0.5 * 1.0 - 1.0 * 0.5)
    h1 = _sigmoid(1.0 * 1.0 + 2.0 * 0.5)
    assert network.layers[1].get_output_values() == pytest.approx([h0, h1])
    assert outputs == pytest.approx([_sigmoid(h0 - h1)])


@pytest.mark.parametrize("hidden_amount", [0, 1, 2, 3])
def test_topology(hidden_amount):
    network = _network(3, 4, hidden_amount, 2)

    assert len(network.layers) == hidden_amount + 2
    assert isinstance(network.layers[0], InputLayer)
    assert isinstance(network.layers[-1], OutputLayer)
    assert all(isinstance(layer, HiddenLayer) for layer in network.layers[1:-1])
    for layer_a, layer_b in zip(network.layers[:-1], network.layers[1:]):
        assert layer_b.connection_count == len(layer_a) * len(layer_b)
    assert network.layers[0].connection_count == 0


def test_initialize_replaces_previous_layers():
    network = _network(2, 3, 2, 1)
    network.hidden_layer_amount = 0
    network.initialize()
    assert [len(layer) for layer in network.layers] == [2, 1]


def test_initial_weights_respect_range():
    network = Network(initial_weight_range=0.1, input_layer_length=5, hidden_layer_length=5,
                      hidden_layer_amount=1, output_layer_length=5, seed=3)
    network.initialize()
    weights = [w for layer in network.layers for w in layer.export_weights()]
    assert all(-0.1 <= w <= 0.1 for w in weights)


def test_initialize_from_training_data():
    data = TrainingData.from_pairs([([0, 1, 0], [1, 0]), ([1, 1, 0], [0, 1])], seed=0)
    network = Network(seed=0)
    network.initialize_from(data)

    # floor(3 * 2 / 3) + 2 = 4 neurons per hidden layer, two hidden layers by default
    assert [len(layer) for layer in network.layers] == [3, 4, 4, 2]
    assert network.hidden_layer_length == 4
    assert network.hidden_layer_amount == 2


def test_initialize_from_rejects_empty_data():
    with pytest.raises(ValueError):
        Network().initialize_from(TrainingData())


def test_same_seed_gives_same_weights():
    assert _network(2, 3, 1, 1, seed=5).export() == _network(2, 3, 1, 1, seed=5).export()
    assert _network(2, 3, 1, 1, seed=5).export() != _network(2, 3, 1, 1, seed=6).export()


def test_uninitialized_network_fails_fast(mixing_data):
    network = Network()
    with pytest.raises(UninitializedNetworkError):
        network.feed_forward([1.0])
    with pytest.raises(UninitializedNetworkError):
        network.train_once(mixing_data)
    with pytest.raises(UninitializedNetworkError):
        network.train_full(mixing_data)
    with pytest.raises(UninitializedNetworkError):
        network.result_max_index
    assert network.results == []


def test_shape_mismatch_in_training(mixing_network):
    wrong_inputs = TrainingData.from_pairs([([1, 0, 1], [1])])
    with pytest.raises(ShapeMismatchError):
        mixing_network.train_once(wrong_inputs)

    wrong_targets = TrainingData.from_pairs([([1, 0], [1, 0])])
    with pytest.raises(ShapeMismatchError):
        mixing_network.train_once(wrong_targets)
    assert mixing_network.epoch == 0


def test_back_propagation_updates_error_state(mixing_network):
    mixing_network.feed_forward([1, 0])
    output = mixing_network.outputs[0]

    mixing_network.back_propagation([0.9])

    expected_error = 0.5 * (0.9 - output) ** 2
    assert mixing_network.error == pytest.approx(expected_error)
    assert mixing_network.error_approximation == pytest.approx(approach(0.5, expected_error, 0.01))
    assert mixing_network.alpha == pytest.approx(1 - mixing_network.error_approximation)
    assert mixing_network.eta == pytest.approx(mixing_network.error_approximation ** 2)
    assert mixing_network.epoch == 1


def test_back_propagation_moves_output_toward_target(mixing_network):
    before = mixing_network.predict([1, 0])[0]
    mixing_network.back_propagation([0.9])
    after = mixing_network.predict([1, 0])[0]
    assert abs(0.9 - after) < abs(0.9 - before)


def test_train_once_increments_epoch(mixing_network, mixing_data):
    for _ in range(5):
        mixing_network.train_once(mixing_data)
    assert mixing_network.epoch == 5


def test_has_learned_enough_threshold(mixing_network):
    mixing_network.error_approximation = 0.0101
    assert not mixing_network.has_learned_enough
    mixing_network.error_approximation = 0.0099
    assert mixing_network.has_learned_enough


def test_convergence(mixing_network, mixing_data):
    for _ in range(50000):
        if mixing_network.has_learned_enough:
            break
        mixing_network.train_once(mixing_data)

    assert mixing_network.has_learned_enough
    assert mixing_network.predict([1, 0])[0] > 0.6
    assert mixing_network.predict([0, 1])[0] < 0.4


def test_smoothed_error_trends_down(mixing_data):
    network = _network(2, 2, 1, 1, seed=1)
    history = []
    for _ in range(3000):
        network.train_once(mixing_data)
        history.append(network.error_approximation)

    assert np.mean(history[-500:]) < np.mean(history[:500])
    assert history[-1] < 0.5


def test_results_round_outputs(mixing_network):
    mixing_network.import_text("\n5.0 -5.0\n")
    mixing_network.feed_forward([1, 0])
    assert mixing_network.results == [1]
    mixing_network.feed_forward([0, 1])
    assert mixing_network.results == [0]


def test_result_max_index_matches_argmax():
    network = _network(3, 5, 1, 4, seed=2)
    rng = np.random.default_rng(0)
    for _ in range(20):
        outputs = network.predict(rng.uniform(-2, 2, size=3).tolist())
        assert network.result_max_index == outputs.index(max(outputs))
        assert len(network.results) == 4


def test_str_reports_training_state(mixing_network, mixing_data):
    mixing_network.train_once(mixing_data)
    text = str(mixing_network)
    assert "Input layer (2 neurons)" in text
    assert "Output layer (1 neurons)" in text
    assert "Epoch: 1" in text
    assert "ErrorApproximation: " in text
