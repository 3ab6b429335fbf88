"""Global configuration and constants for the power rankings scraper."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from typing import Final, Mapping, Optional

BASE_URL: Final = "http://www.espn.com"
DEFAULT_USER_AGENT: Final = (
    "Mozilla/5.0 (Windows NT 6.1; WOW64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/56.0.2924.87 Safari/537.36"
)
DEFAULT_TIMEOUT: Final = 15.0  # seconds
DATA_DIR_ENV: Final = "POWERRANKINGS_DATA_DIR"
TIMESTAMP_FORMAT: Final = "%Y-%m-%d %H:%M:%S"


def default_data_dir(env: Mapping[str, str], platform: str = sys.platform) -> str:
    if platform.startswith("win") and env.get("LOCALAPPDATA"):
        return os.path.join(env["LOCALAPPDATA"], "powerrankings")
    home = env.get("HOME") or os.path.expanduser("~")
    return os.path.join(home, ".config", "powerrankings")


@dataclass(frozen=True, slots=True)
class Settings:
    """Run configuration, built once at the entry point and passed down."""

    data_dir: str
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(
        cls, env: Optional[Mapping[str, str]] = None, *, data_dir: Optional[str] = None
    ) -> "Settings":
        env = os.environ if env is None else env
        resolved = data_dir or env.get(DATA_DIR_ENV) or default_data_dir(env)
        return cls(data_dir=resolved)
