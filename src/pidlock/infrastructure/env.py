from dataclasses import dataclass, field
from pathlib import Path
from dotenv import load_dotenv
from returns.result import safe
import os

ENV_PREFIX = "PIDLOCK_"
# Paths keep their exact spelling ("0700" is not 700).
RAW_KEYS = frozenset({ENV_PREFIX + "BASE_PATH"})


@dataclass(frozen=True)
class Env:
    vars: dict[str, str | bool | int | float] = field(default_factory=dict)

    @safe
    def load(self, path_to_dotenv: str | Path = ".env") -> "Env":
        # Variables already set in the process win over the .env file.
        load_dotenv(dotenv_path=path_to_dotenv, override=False)
        loaded_vars = {
            k: v if k in RAW_KEYS else self._parse_value(v)
            for k, v in os.environ.items()
            if v and k.startswith(ENV_PREFIX)
        }
        return Env(vars=loaded_vars)

    def get(self, key: str, default: str | bool | int | float | None = None) -> str | bool | int | float | None:
        return self.vars.get(ENV_PREFIX + key, default)

    @staticmethod
    def _parse_value(value: str) -> str | bool | int | float:
        if value.lower() in {"true", "false"}:
            return value.lower() == "true"
        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            return value
