import sys
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt

from backprop import Network, TrainingData
from settings.network_config import NetworkConfig


# Logic gate truth tables. The third input is a constant 1 so the network,
# which has no bias term, can still shift its decision boundary.
LOGIC_TABLES = {
    'and': [0, 0, 0, 1],
    'or': [0, 1, 1, 1],
    'xor': [0, 1, 1, 0],
}


def generate_logic_data(gate: str = 'xor', seed: Optional[int] = None) -> TrainingData:
    """
    Build a training set for a two-input logic gate.

    Args:
        gate: One of 'and', 'or', 'xor'
        seed: Seed for sample selection

    Returns:
        TrainingData with inputs (a, b, 1) and a single target
    """
    if gate not in LOGIC_TABLES:
        raise ValueError(f"Unknown gate '{gate}', choose from {sorted(LOGIC_TABLES)}")

    data = TrainingData(seed=seed)
    for (a, b), target in zip([(0, 0), (0, 1), (1, 0), (1, 1)], LOGIC_TABLES[gate]):
        data.add([a, b, 1], [target])
    return data


def generate_mixing_data(seed: Optional[int] = None) -> TrainingData:
    """
    Build a small dataset a network without hidden layers can fit exactly.

    Targets are sigmoid(2.2 * a - 2.2 * b), rounded to one decimal.
    """
    data = TrainingData(seed=seed)
    data.add([1, 0], [0.9])
    data.add([0, 1], [0.1])
    data.add([1, 1], [0.5])
    return data

def train(network: Network, data: TrainingData, max_steps: int = 200000,
          record_every: int = 100, print_every: int = 0) -> List[Tuple[int, float]]:
    """
    Train with train_once() until the network has learned enough.

    Args:
        network: Initialized network
        data: Training samples
        max_steps: Upper bound on steps
        record_every: Steps between recorded error values
        print_every: Steps between status lines (0 for silent)

    Returns:
        (epoch, smoothed error percentage) pairs, taken every record_every
        steps and once more at the epoch where training stopped
    """
    history = []
    for step in range(1, max_steps + 1):
        if network.has_learned_enough:
            break
        network.train_once(data)

        if step % record_every == 0:
            history.append((network.epoch, network.error_percentage))

        if print_every and step % print_every == 0:
            print(f"Step {step:7d}: Error={network.error:.5f}, "
                  f"Approx={network.error_percentage:.3f}%, "
                  f"Alpha={network.alpha:.4f}, Eta={network.eta:.5f}")

    if not history or history[-1][0] != network.epoch:
        history.append((network.epoch, network.error_percentage))
    return history

def evaluate(network: Network, data: TrainingData):
    """Print the network's answer for every sample."""
    print("\nResults:")
    for inputs, targets in data:
        outputs = network.predict(inputs)
        rounded = network.results
        status = "✓" if rounded == [int(round(t)) for t in targets] else "✗"
        print(f"  {inputs} -> {[f'{o:.3f}' for o in outputs]} "
              f"(rounded {rounded}, target {targets}) {status}")


def visualize_training(history: List[Tuple[int, float]],
                       output_path: str = 'training_results.png', show: bool = True):
    """Plot the smoothed error against the epoch it was recorded at."""
    fig, ax = plt.subplots(figsize=(10, 6))

    epochs, errors = zip(*history)
    ax.plot(epochs, errors, 'r-', linewidth=2)
    ax.axhline(1.0, color='gray', linestyle='--', label='Convergence threshold (1%)')
    ax.set_xlabel('Epoch')
    ax.set_ylabel('Smoothed Error (%)')
    ax.set_yscale('log')
    ax.set_title('Error Progress')
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    print(f"\nVisualization saved as '{output_path}'")
    if show:
        plt.show()
    plt.close(fig)


def train_logic_gate(gate: str = 'xor', seed: int = 0, show: bool = True) -> Network:
    """Train a network on a logic gate and report the outcome."""
    print(f"\nInitializing Network for {gate.upper()}")
    print("="*60)

    data = generate_logic_data(gate, seed=seed)
    config = NetworkConfig(
        input_layer_length=data.input_length,
        hidden_layer_length=4,
        hidden_layer_amount=1,
        output_layer_length=data.output_length,
        seed=seed,
        verbose=True,
    )
    network = config.build_network()

    history = train(network, data, print_every=10000)

    print("\n" + "="*60)
    if network.has_learned_enough:
        print(f"Converged after {network.epoch} epochs")
    else:
        print(f"Stopped after {network.epoch} epochs without converging")
    print(network)
    evaluate(network, data)
    visualize_training(history, show=show)
    return network


if __name__ == "__main__":
    print("\n" + "="*60)
    print("MOMENTUM BACKPROP NETWORK - TRAINING DEMO")
    print("="*60)

    gate = sys.argv[1] if len(sys.argv) > 1 else 'xor'
    train_logic_gate(gate, show="--no-show" not in sys.argv)
