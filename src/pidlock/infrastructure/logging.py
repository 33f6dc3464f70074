import logging
from dataclasses import dataclass
from pathlib import Path

from ..domain.models import LOGGER_NAME

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


# Handlers live in logging's fork-reinit WeakSet, so they must stay hashable.
@dataclass(eq=False)
class TruncatingFileHandler(logging.FileHandler):
    """File handler for long-lived cron hosts: once the log reaches max_bytes
    it starts over from an empty file instead of rotating."""

    filename: Path
    max_bytes: int
    encoding: str | None = "utf-8"
    delay: bool = False

    def __post_init__(self) -> None:
        if self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be positive: {self.max_bytes}")
        self.filename.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(
            filename=self.filename,
            mode="a",
            encoding=self.encoding,
            delay=self.delay,
        )

    def _at_limit(self) -> bool:
        return self.stream is not None and self.stream.tell() >= self.max_bytes

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if self._at_limit():
                self.stream.seek(0)
                self.stream.truncate()
            super().emit(record)
        except Exception:
            self.handleError(record)


def create_logger(
    *,
    name: str = LOGGER_NAME,
    log_dir: Path | None = None,
    logfile_size_limit_mb: int = 10,
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    if logger.handlers:
        return logger  # singleton safety

    handler: logging.Handler
    if log_dir is None:
        handler = logging.StreamHandler()
    else:
        handler = TruncatingFileHandler(
            filename=log_dir / "pidlock.log",
            max_bytes=logfile_size_limit_mb * 1024 * 1024,
        )

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
