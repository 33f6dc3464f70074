# src/pidlock/infrastructure/process_info.py
import os
from dataclasses import dataclass, field
from typing import Callable, Protocol


class IProcessInfo(Protocol):
    def current_pid(self) -> int:
        ...

    def supports_ownership_check(self) -> bool:
        """Whether this platform reports the calling process's own pid reliably."""
        ...


@dataclass(frozen=True)
class ProcessInfo:
    getpid: Callable[[], int] | None = field(default=getattr(os, "getpid", None))

    def current_pid(self) -> int:
        if self.getpid is None:
            raise OSError("Process id is not available on this platform")
        return self.getpid()

    def supports_ownership_check(self) -> bool:
        if self.getpid is None:
            return False
        try:
            return self.getpid() > 0
        except OSError:
            return False
