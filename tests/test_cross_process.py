import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

from pidlock import AlreadyLockedError, LockManager

SRC_DIR = str(Path(__file__).resolve().parent.parent / "src")


def _run_child(script: str, lock_dir: Path, timeout: int = 10) -> subprocess.CompletedProcess:
    """Run a Python snippet in a subprocess that has LockManager available."""
    full_script = textwrap.dedent(f"""
import os, sys
sys.path.insert(0, {SRC_DIR!r})
from pidlock import LockManager
manager = LockManager("job.lock", {str(lock_dir)!r}, fail_on_error=False)
""") + textwrap.dedent(script)
    return subprocess.run(
        [sys.executable, "-c", full_script],
        capture_output=True, text=True, timeout=timeout
    )


def test_lock_left_by_other_process_is_not_ours(tmp_path):
    result = _run_child("""
print(manager.lock())
print(os.getpid())
""", tmp_path)
    assert result.returncode == 0, result.stderr
    acquired, child_pid = result.stdout.split()
    assert acquired == "True"

    manager = LockManager("job.lock", tmp_path)
    assert manager.is_locked()
    assert manager.read_pid() == int(child_pid)
    assert manager.is_lock_owner() is False
    with pytest.raises(AlreadyLockedError):
        manager.lock()


def test_other_process_cannot_lock_while_we_hold(tmp_path):
    manager = LockManager("job.lock", tmp_path)

    with manager:
        result = _run_child("""
print(manager.lock())
print(manager.is_lock_owner())
""", tmp_path)
        assert result.returncode == 0, result.stderr
        assert result.stdout.split() == ["False", "False"]
        assert manager.is_lock_owner()

    result = _run_child("""
print(manager.lock())
print(manager.unlock())
""", tmp_path)
    assert result.stdout.split() == ["True", "True"]
