# src/pidlock/domain/errors.py


class PidLockError(RuntimeError):
    pass


class AlreadyLockedError(PidLockError):
    pass


class NotLockedError(PidLockError):
    pass


class UnsupportedPlatformError(PidLockError):
    """Raised when the running platform cannot report the caller's own pid."""
