import pytest

from backprop import ShapeMismatchError, TrainingData


def test_lengths_come_from_first_sample():
    data = TrainingData()
    assert (data.input_length, data.output_length) == (0, 0)
    data.add([1, 2, 3], [0, 1])
    assert (data.input_length, data.output_length) == (3, 2)
    assert len(data) == 1


def test_add_rejects_inconsistent_lengths():
    data = TrainingData.from_pairs([([1, 2], [1])])
    with pytest.raises(ShapeMismatchError):
        data.add([1, 2, 3], [1])
    with pytest.raises(ShapeMismatchError) as exc_info:
        data.add([1, 2], [1, 0])
    assert exc_info.value.expected == 1
    assert exc_info.value.actual == 2


def test_add_rejects_empty_vectors():
    with pytest.raises(ValueError):
        TrainingData().add([], [1])


def test_sample_from_empty_set_fails():
    with pytest.raises(ValueError):
        TrainingData().sample()


def test_sampling_is_reproducible_and_covers_all_samples():
    pairs = [([i], [i % 2]) for i in range(4)]
    first = TrainingData.from_pairs(pairs, seed=11)
    second = TrainingData.from_pairs(pairs, seed=11)

    draws = [first.sample()[0][0] for _ in range(200)]
    assert draws == [second.sample()[0][0] for _ in range(200)]
    assert set(draws) == {0.0, 1.0, 2.0, 3.0}


def test_values_are_stored_as_floats():
    data = TrainingData.from_pairs([((1, 0), (1,))])
    inputs, targets = next(iter(data))
    assert inputs == [1.0, 0.0]
    assert all(isinstance(x, float) for x in inputs + targets)
