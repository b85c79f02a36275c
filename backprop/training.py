import threading
import time
from typing import TYPE_CHECKING, Optional

from .training_data import TrainingData

if TYPE_CHECKING:
    from .network import Network


class TrainingHandle:
    """
    Background training loop for a network.

    Runs train_once() on a daemon thread until the network has learned enough
    or stop() is called. The stop request is checked once per training step
    and also cuts the optional sleep between steps short. The network is not
    locked: reads from other threads may see a step half applied.

    Attributes:
        network: Network being trained
        training_data: Sample provider
        sleep_per_epoch: Seconds to wait between steps
        epochs_run: Steps completed by this handle
        converged: Whether the loop ended because the network converged
        error: Exception that ended the loop, if any
    """

    def __init__(self,
                 network: 'Network',
                 training_data: TrainingData,
                 sleep_per_epoch: float = 0.0,
                 verbose: bool = False,
                 print_interval: int = 1000):
        """
        Prepare (but do not start) a training loop.

        Args:
            network: Initialized network to train
            training_data: Sample provider
            sleep_per_epoch: Delay between steps in seconds (0 for none)
            verbose: Print status lines while training
            print_interval: Steps between status lines when verbose
        """
        self.network = network
        self.training_data = training_data
        self.sleep_per_epoch = sleep_per_epoch
        self.verbose = verbose
        self.print_interval = max(1, print_interval)

        self.epochs_run = 0
        self.converged = False
        self.error: Optional[BaseException] = None

        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._run, name="network-training", daemon=True)

    def start(self) -> 'TrainingHandle':
        self._thread.start()
        return self

    def _run(self):
        start_time = time.time()
        try:
            while not self._stop_event.is_set():
                if self.network.has_learned_enough:
                    self.converged = True
                    break

                self.network.train_once(self.training_data)
                self.epochs_run += 1

                if self.verbose and self.epochs_run % self.print_interval == 0:
                    self._print_status()

                if self.sleep_per_epoch > 0:
                    self._stop_event.wait(self.sleep_per_epoch)
        except Exception as e:
            self.error = e
            if self.verbose:
                print(f"[Epoch {self.network.epoch}] Training failed: {e}")
            raise

        if self.verbose:
            elapsed = time.time() - start_time
            outcome = "Converged" if self.converged else "Stopped"
            print(f"[Epoch {self.network.epoch}] {outcome} after {self.epochs_run} steps "
                  f"({elapsed:.1f}s, error={self.network.error_percentage:.3f}%)")

    def _print_status(self):
        print(f"[Epoch {self.network.epoch:7d}] "
              f"Error={self.network.error:.5f} | "
              f"Approx={self.network.error_approximation:.5f} | "
              f"Alpha={self.network.alpha:.4f} | "
              f"Eta={self.network.eta:.5f}")

    def stop(self):
        """Ask the loop to end after the current step."""
        self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the loop to end.

        Args:
            timeout: Seconds to wait (None waits indefinitely)

        Returns:
            True if the loop has ended
        """
        self._thread.join(timeout)
        return not self._thread.is_alive()

    @property
    def is_running(self) -> bool:
        return self._thread.is_alive()

    @property
    def stop_requested(self) -> bool:
        return self._stop_event.is_set()

    def __repr__(self):
        state = "running" if self.is_running else ("converged" if self.converged else "stopped")
        return f"TrainingHandle({state}, epochs_run={self.epochs_run})"
