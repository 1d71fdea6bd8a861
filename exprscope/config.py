"""
Configuration for exprscope.

By default outlines indent by two spaces and the history keeps the 20 most
recent analyses in a JSON file under the user's cache directory.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

HISTORY_ENV_VAR = "EXPRSCOPE_HISTORY"
HISTORY_LIMIT_ENV_VAR = "EXPRSCOPE_HISTORY_LIMIT"

DEFAULT_HISTORY_LIMIT = 20


def default_history_path() -> Path:
    return Path.home() / ".cache" / "exprscope" / "history.json"


@dataclass
class AnalyzerConfig:
    """
    Settings shared by the analyzer, the history store and the CLI.

    Attributes:
        history_limit: Number of history records kept, newest first
        history_path: JSON file backing the history store
        indent_unit: Indentation per outline depth level
    """
    history_limit: int = DEFAULT_HISTORY_LIMIT
    history_path: Path = field(default_factory=default_history_path)
    indent_unit: str = "  "

    def __post_init__(self):
        if self.history_limit < 1:
            raise ValueError(f"history_limit must be at least 1, got {self.history_limit}")
        self.history_path = Path(self.history_path)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AnalyzerConfig":
        """
        Build a config, letting environment variables override defaults.

        EXPRSCOPE_HISTORY sets the history file, EXPRSCOPE_HISTORY_LIMIT
        its size.
        """
        env = os.environ if environ is None else environ
        config = cls()

        path = env.get(HISTORY_ENV_VAR)
        if path:
            config.history_path = Path(path).expanduser()

        limit = env.get(HISTORY_LIMIT_ENV_VAR)
        if limit:
            try:
                config.history_limit = int(limit)
            except ValueError:
                raise ValueError(f"{HISTORY_LIMIT_ENV_VAR} must be an integer, got {limit!r}")
            if config.history_limit < 1:
                raise ValueError(f"{HISTORY_LIMIT_ENV_VAR} must be at least 1, got {limit!r}")

        return config
