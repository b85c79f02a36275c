"""
Text format for network weights.

One line per layer, input layer first. A line holds that layer's incoming
weights separated by single spaces; the input layer has no incoming
connections, so its line is empty. Weights are written with repr() so that a
re-import is bit-identical. Only weights travel: the importing network must
already have the same topology.

Older checkpoints used CRLF between weights and three CRLFs between layers;
those are recognised by the triple CRLF, which a current export never holds,
and are still readable. Current exports re-saved with CRLF line endings
import like the LF original.
"""

from typing import List, Sequence

from .exceptions import TopologyMismatchError

LEGACY_SEPARATOR = "\r\n"
LEGACY_LAYER_SEPARATOR = LEGACY_SEPARATOR * 3


def format_weights(layer_weights: Sequence[Sequence[float]]) -> str:
    """
    Render per-layer weights as text.

    Args:
        layer_weights: One weight list per layer, in network order

    Returns:
        Newline-terminated text, one line per layer
    """
    return "".join(" ".join(repr(float(w)) for w in weights) + "\n" for weights in layer_weights)


def _parse_tokens(tokens: Sequence[str], layer_index: int) -> List[float]:
    try:
        return [float(token) for token in tokens]
    except ValueError as e:
        raise TopologyMismatchError(f"Layer {layer_index}: unreadable weight ({e})") from e


def parse_weights(text: str) -> List[List[float]]:
    """
    Parse text produced by format_weights (or the legacy CRLF layout).

    Args:
        text: Serialized weights

    Returns:
        One weight list per layer, in network order

    Raises:
        TopologyMismatchError: If a token is not a number
    """
    if LEGACY_LAYER_SEPARATOR in text:
        return _parse_legacy(text)
    return [_parse_tokens(line.split(), i) for i, line in enumerate(text.splitlines())]


def _parse_legacy(text: str) -> List[List[float]]:
    layers = []
    for i, chunk in enumerate(text.split(LEGACY_LAYER_SEPARATOR)):
        tokens = [token.strip() for token in chunk.split(LEGACY_SEPARATOR) if token.strip()]
        layers.append(_parse_tokens(tokens, i))
    return layers
