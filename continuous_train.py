import os
import sys
import time
from typing import Optional

from backprop import Network, NetworkError, TrainingData
from settings.network_config import NetworkConfig, get_network_config
from train import evaluate, generate_logic_data


# ============================================================================
# CONFIGURATION
# ============================================================================

CHECKPOINT_DIR = "checkpoints"
NETWORK_CHECKPOINT = os.path.join(CHECKPOINT_DIR, "network_weights.txt")
CONFIG_FILE = "network_config.json"  # Optional, defaults are used when missing

GATE = 'xor'
SLEEP_PER_EPOCH = 0.0  # Seconds between training steps
POLL_INTERVAL = 2.0  # Seconds between status lines
SAVE_INTERVAL_POLLS = 15  # Auto-save every N status lines


# ============================================================================
# SAVE/LOAD FUNCTIONS
# ============================================================================

def load_config(path: str = CONFIG_FILE) -> NetworkConfig:
    """Load the network configuration, falling back to defaults for the gate data."""
    if os.path.exists(path):
        return get_network_config(path)
    return get_network_config(input_layer_length=3, hidden_layer_length=4,
                              hidden_layer_amount=1, output_layer_length=1)


def save_network(network: Network, filepath: str = NETWORK_CHECKPOINT):
    """Save the network weights to disk."""
    network.export_to_file(filepath)
    print(f"  💾 Network saved (epoch: {network.epoch})")


def load_network(config: NetworkConfig, filepath: str = NETWORK_CHECKPOINT) -> Optional[Network]:
    """
    Build a network from config and load saved weights into it.

    Returns:
        The network, or None if there is no checkpoint or it does not fit the config
    """
    network = config.build_network()
    try:
        if not network.import_from_file(filepath):
            return None
    except (NetworkError, OSError) as e:
        print(f"  ✗ Failed to load network: {e}")
        return None

    print(f"  ✓ Network loaded from checkpoint ({filepath})")
    return network


# ============================================================================
# CONTINUOUS TRAINING LOOP
# ============================================================================

class ContinuousTrainer:
    """Runs Network.train_full() in the background and reports on it."""

    def __init__(self, network: Network, data: TrainingData, checkpoint: str = NETWORK_CHECKPOINT):
        self.network = network
        self.data = data
        self.checkpoint = checkpoint
        self.handle = None
        self.poll_count = 0

    def print_status(self):
        """Print current training status."""
        handle = self.handle
        print(f"[Poll {self.poll_count:4d}] "
              f"Epoch={self.network.epoch:8d} | "
              f"Error={self.network.error:.5f} | "
              f"Approx={self.network.error_percentage:.3f}% | "
              f"Alpha={self.network.alpha:.4f} | "
              f"Eta={self.network.eta:.5f} | "
              f"Steps this run={handle.epochs_run if handle else 0}")

    def run_continuous(self, poll_interval: float = POLL_INTERVAL,
                       sleep_per_epoch: float = SLEEP_PER_EPOCH) -> bool:
        """
        Train until convergence or Ctrl+C, saving periodically.

        Returns:
            True if the network converged
        """
        print("\n" + "="*70)
        print("CONTINUOUS TRAINING MODE - Press Ctrl+C to stop")
        print("="*70)

        self.handle = self.network.train_full(self.data, sleep_per_epoch=sleep_per_epoch)

        try:
            while not self.handle.join(timeout=poll_interval):
                self.poll_count += 1
                self.print_status()

                if self.poll_count % SAVE_INTERVAL_POLLS == 0:
                    save_network(self.network, self.checkpoint)

        except KeyboardInterrupt:
            print("\n\n⚠ Training stopped by user")
            self.handle.stop()
            self.handle.join()

        if self.handle.error is not None:
            print(f"\n✗ Training failed: {self.handle.error}")
        elif self.handle.converged:
            print(f"\n✓ Converged at epoch {self.network.epoch} "
                  f"(error {self.network.error_percentage:.3f}%)")

        save_network(self.network, self.checkpoint)
        return self.handle.converged

    def test_network(self):
        """Show the network's answers for the training samples."""
        print("\n" + "="*70)
        print(f"TESTING NETWORK (after {self.network.epoch} epochs)")
        print("="*70)
        evaluate(self.network, self.data)
        print("="*70 + "\n")


# ============================================================================
# MAIN
# ============================================================================

if __name__ == "__main__":
    use_existing_brain = "--new" not in sys.argv
    if not use_existing_brain:
        print("\n⚠ Starting with NEW network (ignoring saved checkpoint)")

    config = load_config()
    data = generate_logic_data(GATE)

    if "--test" in sys.argv:
        network = load_network(config)
        if network is None:
            print("No saved network found!")
            sys.exit(1)

        ContinuousTrainer(network, data).test_network()
        sys.exit(0)

    print("\n" + "="*70)
    print("MOMENTUM BACKPROP NETWORK - CONTINUOUS LEARNING")
    print("="*70)
    print("Training runs in the background until the error drops below 1%")
    print("\nUsage:")
    print("  python continuous_train.py         - Continue training")
    print("  python continuous_train.py --new   - Start fresh")
    print("  python continuous_train.py --test  - Test only (no training)")
    print("="*70)

    network = load_network(config) if use_existing_brain else None
    if network is None:
        print("\n  Creating new network...")
        config.print_info()
        network = config.build_network()

    trainer = ContinuousTrainer(network, data)
    started = time.time()
    trainer.run_continuous()
    print(f"Session length: {time.time() - started:.1f}s")

    trainer.test_network()
