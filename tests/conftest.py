import logging
from dataclasses import dataclass

import pytest

from pidlock import LockManager

ENV_KEYS = ("PIDLOCK_BASE_PATH", "PIDLOCK_FAIL_ON_ERROR", "PIDLOCK_EXCLUSIVE_CREATE")


@dataclass
class FakeProcessInfo:
    pid: int = 4242
    supported: bool = True

    def current_pid(self) -> int:
        return self.pid

    def supports_ownership_check(self) -> bool:
        return self.supported


@pytest.fixture(autouse=True)
def _isolate_pidlock_env(monkeypatch):
    """Keep PIDLOCK_* variables (including ones a .env file sets) out of other tests."""
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


@pytest.fixture
def test_logger():
    return logging.getLogger("tests.pidlock")


@pytest.fixture
def manager_factory(tmp_path, test_logger):
    def factory(pid_filename: str = "job.lock", **kwargs) -> LockManager:
        base_path = kwargs.pop("base_path", tmp_path)
        kwargs.setdefault("logger", test_logger)
        return LockManager(pid_filename, base_path, **kwargs)

    return factory
