from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .exceptions import ShapeMismatchError

Sample = Tuple[List[float], List[float]]


class TrainingData:
    """
    A set of (input, target) pairs with uniform random sampling.

    The first pair added fixes input_length and output_length; later pairs
    must match them.

    Attributes:
        samples: Stored (input, target) pairs
        rng: Random generator used by sample()
    """

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        """
        Initialize an empty training set.

        Args:
            rng: Random generator for sampling (takes precedence over seed)
            seed: Seed for a new generator when rng is not given
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.samples: List[Sample] = []

    @classmethod
    def from_pairs(cls,
                   pairs: Iterable[Tuple[Sequence[float], Sequence[float]]],
                   rng: Optional[np.random.Generator] = None,
                   seed: Optional[int] = None) -> 'TrainingData':
        data = cls(rng=rng, seed=seed)
        for inputs, targets in pairs:
            data.add(inputs, targets)
        return data

    @property
    def input_length(self) -> int:
        return len(self.samples[0][0]) if self.samples else 0

    @property
    def output_length(self) -> int:
        return len(self.samples[0][1]) if self.samples else 0

    def add(self, inputs: Sequence[float], targets: Sequence[float]):
        """
        Append a sample.

        Args:
            inputs: Input vector
            targets: Target vector

        Raises:
            ShapeMismatchError: If a vector length differs from earlier samples
            ValueError: If either vector is empty
        """
        inputs = [float(x) for x in inputs]
        targets = [float(y) for y in targets]
        if not inputs or not targets:
            raise ValueError("Input and target vectors must not be empty")
        if self.samples:
            if len(inputs) != self.input_length:
                raise ShapeMismatchError("Input vector", self.input_length, len(inputs))
            if len(targets) != self.output_length:
                raise ShapeMismatchError("Target vector", self.output_length, len(targets))
        self.samples.append((inputs, targets))

    def sample(self) -> Sample:
        """Return one (input, target) pair drawn uniformly at random."""
        if not self.samples:
            raise ValueError("Cannot sample from an empty training set")
        index = int(self.rng.integers(len(self.samples)))
        return self.samples[index]

    def __len__(self):
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self.samples)

    def __repr__(self):
        return f"TrainingData(samples={len(self.samples)}, inputs={self.input_length}, outputs={self.output_length})"
