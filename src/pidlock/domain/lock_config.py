from dataclasses import dataclass
from pathlib import Path
import yaml

from .models import DEFAULT_BASE_PATH
from ..infrastructure.env import Env

TRUE_SPELLINGS = frozenset({"1", "true", "yes", "on"})
FALSE_SPELLINGS = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True)
class LockConfig:
    pid_filename: str
    base_path: Path = Path(DEFAULT_BASE_PATH)
    fail_on_error: bool = True
    exclusive_create: bool = True

    @staticmethod
    def load(path: Path) -> "LockConfig":
        data = yaml.safe_load(path.read_text()) or {}
        return LockConfig(
            pid_filename=str(data["pid_filename"]),
            base_path=Path(str(data.get("base_path", DEFAULT_BASE_PATH))),
            fail_on_error=parse_bool("fail_on_error", data.get("fail_on_error", True)),
            exclusive_create=parse_bool("exclusive_create", data.get("exclusive_create", True)),
        )

    @staticmethod
    def from_env(env: Env, pid_filename: str) -> "LockConfig":
        return LockConfig(
            pid_filename=pid_filename,
            base_path=Path(str(env.get("BASE_PATH", DEFAULT_BASE_PATH))),
            fail_on_error=parse_bool("PIDLOCK_FAIL_ON_ERROR", env.get("FAIL_ON_ERROR", True)),
            exclusive_create=parse_bool("PIDLOCK_EXCLUSIVE_CREATE", env.get("EXCLUSIVE_CREATE", True)),
        )


def parse_bool(key: str, value: object) -> bool:
    """Accept real booleans, 0/1 and the usual spellings; reject anything else."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        spelling = value.strip().lower()
        if spelling in TRUE_SPELLINGS:
            return True
        if spelling in FALSE_SPELLINGS:
            return False
    raise ValueError(f"{key} must be a boolean, got {value!r}")
