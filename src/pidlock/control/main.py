# src/pidlock/control/main.py
import threading
from typing import Any, Callable, TypeVar
from pathlib import Path
from returns.result import Result

from .dependency_container import Container
from .shutdown_coordinator import ShutdownCoordinator
from ..domain.lock_manager import LockManager

T = TypeVar("T")

DEFAULT_CONFIG: dict[str, Any] = {
    "dotenv_path": Path(".env"),
    "lock_config_file": None,
    "log_dir": None,
    "logfile_size_limit_MB": 10,
    "handle_signals": True,
}


def build_container(config: dict[str, Any]) -> Container:
    container = Container()
    container.config.from_dict({**DEFAULT_CONFIG, **config})
    return container


def build_lock_manager(config: dict[str, Any]) -> LockManager:
    return build_container(config).lock_manager()


def run_locked(config: dict[str, Any], work: Callable[[], T]) -> Result[T, Exception]:
    """
    Run work under the lock described by config.

    config needs "pid_filename" (or "lock_config_file"); the lock directory
    and error policy come from PIDLOCK_* variables when not set in a YAML
    lock config.
    """
    container = build_container(config)
    job = container.locked_job()

    if not container.config.handle_signals():
        return job.run(work)

    # signal.signal() only works in the main thread
    if threading.current_thread() is not threading.main_thread():
        container.logger().warning(
            "Not in the main thread, running %s without signal handlers",
            job.manager.lock_path,
        )
        return job.run(work)

    shutdown = ShutdownCoordinator()
    shutdown.install_signal_handlers()
    try:
        return job.run(work)
    finally:
        shutdown.restore_signal_handlers()
