"""Centralized filename and path naming utilities."""

from __future__ import annotations

import os
import re

_SANITIZE_PATTERN = re.compile(r"[^\w\s-]")
_WS_PATTERN = re.compile(r"[-\s]+")


def sanitize(value: str) -> str:
    value = _SANITIZE_PATTERN.sub("", value).strip()
    return _WS_PATTERN.sub("_", value)


def season_db_path(data_dir: str, league: str) -> str:
    return os.path.join(data_dir, "db", f"{sanitize(league)}.json")


def fetch_log_path(data_dir: str, league: str) -> str:
    return os.path.join(data_dir, "httpcache", f"{sanitize(league)}.txt")
