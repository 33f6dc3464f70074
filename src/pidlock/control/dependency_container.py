# src/pidlock/control/dependency_container.py
import logging
from pathlib import Path
from dependency_injector import containers, providers

from ..infrastructure.env import Env
from ..infrastructure.logging import create_logger
from ..infrastructure.fs import ILockFileSystem, LockFileSystem
from ..infrastructure.process_info import IProcessInfo, ProcessInfo
from ..domain.lock_config import LockConfig
from ..domain.lock_manager import LockManager
from ..application.locked_job import LockedJob

# ------------------------ Factory / Provider functions ------


def env_provider_func(path: str | Path) -> Env:
    return Env().load(path).unwrap()


def lock_config_provider_func(
    env: Env,
    pid_filename: str,
    config_file: str | Path | None = None,
) -> LockConfig:
    if config_file:
        return LockConfig.load(Path(config_file))
    return LockConfig.from_env(env, pid_filename)


def lock_manager_provider_func(
    config: LockConfig,
    fs: ILockFileSystem,
    process_info: IProcessInfo,
    logger: logging.Logger,
) -> LockManager:
    return LockManager(
        config.pid_filename,
        config.base_path,
        config.fail_on_error,
        exclusive_create=config.exclusive_create,
        fs=fs,
        process_info=process_info,
        logger=logger,
    )


# ------------------------ Dependency Container ------------------------


class Container(containers.DeclarativeContainer):
    config = providers.Configuration()

    # -------------------- Infrastructure --------------------

    env: providers.Singleton[Env] = providers.Singleton(
        env_provider_func,
        path=config.dotenv_path,
    )

    fs: providers.Singleton[ILockFileSystem] = providers.Singleton(LockFileSystem)

    process_info: providers.Singleton[IProcessInfo] = providers.Singleton(ProcessInfo)

    logger = providers.Singleton(
        create_logger,
        log_dir=config.log_dir,
        logfile_size_limit_mb=config.logfile_size_limit_MB,
    )

    # -------------------- Domain --------------------

    lock_config: providers.Singleton[LockConfig] = providers.Singleton(
        lock_config_provider_func,
        env=env,
        pid_filename=config.pid_filename,
        config_file=config.lock_config_file,
    )

    lock_manager: providers.Factory[LockManager] = providers.Factory(
        lock_manager_provider_func,
        config=lock_config,
        fs=fs,
        process_info=process_info,
        logger=logger,
    )

    # -------------------- Application --------------------

    locked_job: providers.Factory[LockedJob] = providers.Factory(
        LockedJob,
        manager=lock_manager,
        logger=logger,
    )
