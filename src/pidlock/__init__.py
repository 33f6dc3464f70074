from .domain.errors import (
    AlreadyLockedError,
    NotLockedError,
    PidLockError,
    UnsupportedPlatformError,
)
from .domain.lock_config import LockConfig
from .domain.lock_manager import LockManager
from .domain.models import LockStatus

__all__ = [
    "AlreadyLockedError",
    "LockConfig",
    "LockManager",
    "LockStatus",
    "NotLockedError",
    "PidLockError",
    "UnsupportedPlatformError",
]
