from pathlib import Path
from typing import Final
from pydantic import BaseModel, ConfigDict

DEFAULT_BASE_PATH: Final[str] = "."
NO_PID: Final[int] = 0
LOGGER_NAME: Final[str] = "pidlock"


class LockStatus(BaseModel):
    model_config = ConfigDict(frozen=True)
    lock_path: Path
    pid: int
    locked: bool
    owned: bool | None  # None when the ownership check is unsupported
