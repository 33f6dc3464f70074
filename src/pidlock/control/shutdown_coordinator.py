# src/pidlock/control/shutdown_coordinator.py
import signal
from dataclasses import dataclass, field
from types import FrameType
from typing import Any


@dataclass
class ShutdownCoordinator:
    """
    Turns SIGINT/SIGTERM into SystemExit so that the lock release in
    LockManager.with_lock runs before the process exits.
    """

    signals: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)
    _previous: dict[signal.Signals, Any] = field(default_factory=dict)

    def install_signal_handlers(self) -> None:
        for sig in self.signals:
            self._previous[sig] = signal.signal(sig, self._on_signal)

    def restore_signal_handlers(self) -> None:
        for sig, handler in self._previous.items():
            signal.signal(sig, handler)
        self._previous.clear()

    def _on_signal(self, signum: int, _: FrameType | None) -> None:
        raise SystemExit(128 + signum)
