"""Filesystem utility helpers."""

from __future__ import annotations
import os
import tempfile


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def ensure_parent(path: str) -> None:
    dir_part = os.path.dirname(path)
    if dir_part:
        ensure_dir(dir_part)


def write_bytes(path: str, content: bytes) -> None:
    ensure_parent(path)
    with open(path, "wb") as fh:
        fh.write(content)


def append_line(path: str, line: str, encoding: str = "utf-8") -> None:
    ensure_parent(path)
    with open(path, "a", encoding=encoding) as fh:
        fh.write(line)
        fh.write("\n")


def read_text(path: str, encoding: str = "utf-8") -> str:
    with open(path, "r", encoding=encoding) as fh:
        return fh.read()


def write_text_atomic(path: str, content: str, encoding: str = "utf-8") -> None:
    """Write ``content`` to a sibling temp file and rename it over ``path``."""
    ensure_parent(path)
    fd, tmp = tempfile.mkstemp(dir=os.path.dirname(path) or ".", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding=encoding) as fh:
            fh.write(content)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise
