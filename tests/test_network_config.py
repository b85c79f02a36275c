import json

import pytest

from settings.network_config import NetworkConfig, get_network_config


def test_build_network_uses_config():
    config = NetworkConfig(input_layer_length=3, hidden_layer_length=5, hidden_layer_amount=2,
                           output_layer_length=2, initial_weight_range=0.2, seed=4)
    network = config.build_network()

    assert [len(layer) for layer in network.layers] == config.layer_widths == [3, 5, 5, 2]
    assert network.initial_weight_range == 0.2
    assert config.build_network().export() == network.export()


def test_round_trip_through_dict_and_json(tmp_path):
    config = NetworkConfig(input_layer_length=4, seed=1)
    path = tmp_path / "config.json"
    path.write_text(json.dumps(config.to_dict()))

    loaded = NetworkConfig.from_json(str(path))

    assert loaded.to_dict() == config.to_dict()


def test_unknown_keys_are_rejected():
    with pytest.raises(ValueError):
        NetworkConfig.from_dict({'learning_rate': 0.1})


@pytest.mark.parametrize("values", [
    {'input_layer_length': 0},
    {'hidden_layer_amount': -1},
    {'hidden_layer_amount': 1, 'hidden_layer_length': 0},
    {'error_smoothing': 0},
])
def test_invalid_values_are_rejected(values):
    with pytest.raises(ValueError):
        NetworkConfig(**values)


def test_global_config_is_cached(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({'input_layer_length': 6}))

    config = get_network_config(str(path), output_layer_length=3)

    assert config.input_layer_length == 6
    assert config.output_layer_length == 3
    assert get_network_config(input_layer_length=1) is config


def test_verbose_config_prints_banner(capsys):
    NetworkConfig(input_layer_length=2, hidden_layer_length=3, verbose=True)
    out = capsys.readouterr().out
    assert "NETWORK CONFIGURATION" in out
    assert "2 -> 3 -> 1" in out
