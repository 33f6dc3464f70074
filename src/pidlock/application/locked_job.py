# src/pidlock/application/locked_job.py
import logging
from dataclasses import dataclass
from typing import Callable, TypeVar
from returns.result import Result, safe

from ..domain.lock_manager import LockManager

T = TypeVar("T")


@dataclass(frozen=True)
class LockedJob:
    manager: LockManager
    logger: logging.Logger

    def run(self, work: Callable[[], T]) -> Result[T, Exception]:
        """
        Run work under the lock.
        Returns a Failure for a refused lock as well as for an error in work.
        """

        @safe
        def _run() -> T:
            return self.manager.with_lock(work)

        self.logger.info("Running job under %s", self.manager.lock_path)
        return _run().alt(self._log_failure)

    def _log_failure(self, error: Exception) -> Exception:
        self.logger.error("Job under %s failed: %s", self.manager.lock_path, error)
        return error
