import os
import signal
import sys
import threading

import pytest

from pidlock import AlreadyLockedError, LockManager
from pidlock.control.dependency_container import Container
from pidlock.control.main import build_lock_manager, run_locked


@pytest.fixture
def base_config(tmp_path, monkeypatch):
    monkeypatch.setenv("PIDLOCK_BASE_PATH", str(tmp_path))
    return {
        "pid_filename": "job.lock",
        "dotenv_path": tmp_path / ".env",
        "handle_signals": False,
    }


def test_build_lock_manager_from_env(tmp_path, base_config, monkeypatch):
    monkeypatch.setenv("PIDLOCK_FAIL_ON_ERROR", "false")

    manager = build_lock_manager(base_config)

    assert isinstance(manager, LockManager)
    assert manager.lock_path == tmp_path / "job.lock"
    assert manager.fail_on_error is False
    assert manager.exclusive_create is True


def test_build_lock_manager_from_yaml(tmp_path, base_config):
    config_file = tmp_path / "lock.yaml"
    config_file.write_text(f"pid_filename: from_yaml.lock\nbase_path: {tmp_path / 'run'}\n")

    manager = build_lock_manager({**base_config, "lock_config_file": config_file})

    assert manager.lock_path == tmp_path / "run" / "from_yaml.lock"


def test_container_hands_out_fresh_managers(base_config):
    container = Container()
    container.config.from_dict({**base_config, "log_dir": None, "logfile_size_limit_MB": 1})

    assert container.lock_manager() is not container.lock_manager()
    assert container.lock_manager().lock_path == container.lock_manager().lock_path


def test_run_locked_returns_work_result(tmp_path, base_config):
    seen = []

    def work():
        seen.append((tmp_path / "job.lock").read_text())
        return 42

    result = run_locked(base_config, work)

    assert result.unwrap() == 42
    assert seen == [str(os.getpid())]
    assert not (tmp_path / "job.lock").exists()


def test_run_locked_fails_when_already_locked(tmp_path, base_config):
    (tmp_path / "job.lock").write_text("99999")

    result = run_locked(base_config, lambda: pytest.fail("work must not run"))

    assert isinstance(result.failure(), AlreadyLockedError)
    assert (tmp_path / "job.lock").read_text() == "99999"


def test_run_locked_wraps_work_error(tmp_path, base_config):
    def work():
        raise ValueError("bad input")

    result = run_locked(base_config, work)

    assert isinstance(result.failure(), ValueError)
    assert not (tmp_path / "job.lock").exists()


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
def test_sigterm_during_work_releases_lock(tmp_path, base_config):
    previous = signal.getsignal(signal.SIGTERM)

    def work():
        os.kill(os.getpid(), signal.SIGTERM)

    with pytest.raises(SystemExit) as exc_info:
        run_locked({**base_config, "handle_signals": True}, work)

    assert exc_info.value.code == 128 + signal.SIGTERM
    assert not (tmp_path / "job.lock").exists()
    assert signal.getsignal(signal.SIGTERM) == previous


def test_run_locked_from_worker_thread(tmp_path, base_config):
    outcome = {}

    def target():
        try:
            outcome["result"] = run_locked({**base_config, "handle_signals": True}, lambda: 1)
        except Exception as e:
            outcome["error"] = e

    worker = threading.Thread(target=target)
    worker.start()
    worker.join(timeout=10)

    assert "error" not in outcome
    assert outcome["result"].unwrap() == 1
    assert not (tmp_path / "job.lock").exists()


def test_run_locked_with_log_dir(tmp_path, base_config):
    result = run_locked({**base_config, "log_dir": tmp_path / "logs"}, lambda: "ok")

    assert result.unwrap() == "ok"
