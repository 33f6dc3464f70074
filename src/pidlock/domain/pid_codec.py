# src/pidlock/domain/pid_codec.py
import re

from .models import NO_PID

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_pid(content: str | None) -> int:
    """
    Parse the pid recorded in a lock file.

    Only the leading integer counts; anything after it is ignored. Empty or
    non-numeric content reads as NO_PID.
    """
    if not content:
        return NO_PID

    match = _LEADING_INT.match(content)
    if match is None:
        return NO_PID
    return int(match.group(1))


def format_pid(pid: int) -> str:
    return str(pid)
