# src/pidlock/domain/lock_manager.py
import logging
from pathlib import Path
from dataclasses import dataclass, field
from typing import Callable, TypeVar
from returns.result import Failure, Result, Success

from .errors import AlreadyLockedError, NotLockedError, UnsupportedPlatformError
from .models import DEFAULT_BASE_PATH, LOGGER_NAME, NO_PID, LockStatus
from .pid_codec import format_pid, parse_pid
from ..infrastructure.fs import ILockFileSystem, LockFileSystem
from ..infrastructure.process_info import IProcessInfo, ProcessInfo

T = TypeVar("T")

UNLOCK_FAILED_MESSAGE = "Lock file does not exist. Unable to unlock."


@dataclass(frozen=True)
class LockManager:
    """
    PID lock file guarding a recurring job against overlapping runs.

    The lock is the file at ``base_path / pid_filename`` holding a non-zero
    pid. Nothing is cached: every call reads the file again.

    ``fail_on_error`` picks the policy for ``lock()`` and ``unlock()``: raise
    the error (strict) or return False (lenient). Unlocking an absent lock is
    an error under that same policy. ``unlock()`` never checks ownership, any
    caller can remove any process's lock.
    """

    pid_filename: str
    base_path: Path | str = DEFAULT_BASE_PATH
    fail_on_error: bool = True
    exclusive_create: bool = field(default=True, kw_only=True)
    fs: ILockFileSystem = field(default_factory=LockFileSystem, kw_only=True)
    process_info: IProcessInfo = field(default_factory=ProcessInfo, kw_only=True)
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger(LOGGER_NAME), kw_only=True
    )
    lock_path: Path = field(init=False)

    def __post_init__(self) -> None:
        name = self.pid_filename
        if not name or name == ".." or Path(name).name != name:
            raise ValueError(f"pid_filename must be a file base name: {name!r}")

        object.__setattr__(self, "base_path", Path(self.base_path))
        object.__setattr__(self, "lock_path", Path(self.base_path) / name)

    # ------------------------ Queries ------------------------

    def read_pid(self) -> int:
        return parse_pid(self.fs.read_text(self.lock_path))

    def is_locked(self) -> bool:
        return self.read_pid() != NO_PID

    def is_lock_owner(self) -> bool:
        """
        Whether the recorded pid is this process's pid.
        Raises UnsupportedPlatformError under either policy when the platform
        cannot report the current pid.
        """
        if not self.process_info.supports_ownership_check():
            raise UnsupportedPlatformError(
                "Unable to use is_lock_owner(): this platform cannot report the current process id"
            )

        return self.read_pid() == self.process_info.current_pid()

    def status(self) -> LockStatus:
        pid = self.read_pid()
        owned: bool | None = None
        if self.process_info.supports_ownership_check():
            owned = pid != NO_PID and pid == self.process_info.current_pid()

        return LockStatus(
            lock_path=self.lock_path,
            pid=pid,
            locked=pid != NO_PID,
            owned=owned,
        )

    # ------------------------ Result-typed core ------------------------

    def try_lock(self) -> Result[int, Exception]:
        content = self.fs.read_text(self.lock_path)
        if parse_pid(content) != NO_PID:
            return Failure(self._already_locked())

        pid = self.process_info.current_pid()
        try:
            # A file holding no pid is not a lock and gets overwritten.
            if self.exclusive_create and content is None:
                self.fs.create_exclusive(self.lock_path, format_pid(pid))
            else:
                self.fs.write_text(self.lock_path, format_pid(pid))
        except FileExistsError:
            return Failure(self._already_locked())
        except OSError as e:
            return Failure(e)

        self.logger.info("Acquired lock %s for pid %s", self.lock_path, pid)
        return Success(pid)

    def try_unlock(self) -> Result[None, Exception]:
        if not self.is_locked():
            return Failure(NotLockedError(UNLOCK_FAILED_MESSAGE))

        try:
            self.fs.remove(self.lock_path)
        except FileNotFoundError:
            return Failure(NotLockedError(UNLOCK_FAILED_MESSAGE))
        except OSError as e:
            return Failure(e)

        self.logger.info("Released lock %s", self.lock_path)
        return Success(None)

    # ------------------------ Policy wrappers ------------------------

    def lock(self) -> bool:
        return self._handle_result(self.try_lock())

    def unlock(self) -> bool:
        return self._handle_result(self.try_unlock())

    def with_lock(self, work: Callable[[], T]) -> T:
        """
        Run work while holding the lock and release it afterwards.

        Acquisition is always strict: if the lock is taken, AlreadyLockedError
        is raised and work does not run. The release happens whether work
        returns or raises; a release failure never hides an error from work.
        """
        self._acquire()
        succeeded = False
        try:
            result = work()
            succeeded = True
            return result
        finally:
            self._release(suppress_errors=not succeeded)

    def __enter__(self) -> "LockManager":
        self._acquire()
        return self

    def __exit__(self, exc_type: type[BaseException] | None, *_: object) -> None:
        self._release(suppress_errors=exc_type is not None)

    # ------------------------ Helpers ------------------------

    def _already_locked(self) -> AlreadyLockedError:
        return AlreadyLockedError(f"Lock file ({self.lock_path}) exists already. Unable to lock.")

    def _handle_result(self, result: Result[object, Exception]) -> bool:
        match result:
            case Success(_):
                return True
            case Failure(error):
                if self.fail_on_error:
                    raise error
                self.logger.warning("%s", error)
                return False
            case _:
                raise TypeError(f"Unexpected result: {result!r}")

    def _acquire(self) -> None:
        match self.try_lock():
            case Failure(error):
                self.logger.warning("%s", error)
                raise error
            case _:
                pass

    def _release(self, *, suppress_errors: bool) -> None:
        match self.try_unlock():
            case Failure(NotLockedError()):
                # work removed the lock itself
                self.logger.info("Lock %s already released", self.lock_path)
            case Failure(error) if suppress_errors:
                self.logger.error(
                    "Failed to release lock %s", self.lock_path, exc_info=error
                )
            case Failure(error):
                raise error
            case _:
                pass
