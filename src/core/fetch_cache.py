"""Record/replay cache for raw page payloads.

In record mode every successful live fetch is appended to a newline-delimited
log, one JSON object per fetch::

    {"seq": 0, "url": "http://www.espn.com/nba/", "body": "<base64>"}

In replay mode the log is loaded up front and consumed front-to-back, one entry
per ``get`` call. Replay is positional: the requested URL is only compared
against the recorded one when ``strict`` is enabled. Lines holding a bare JSON
base64 string (older logs) are accepted and carry no URL.
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
import os
from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

import httpx

from core import filesystem, http_client

_log = logging.getLogger(__name__)

SNAPSHOT_NAME = "current.htm"


class ReplayError(RuntimeError):
    """Replay could not supply the payload for a fetch."""


class ReplayExhaustedError(ReplayError):
    pass


class ReplayMismatchError(ReplayError):
    pass


@dataclass(frozen=True, slots=True)
class LogEntry:
    seq: int
    url: Optional[str]
    body: bytes

    def to_line(self) -> str:
        return json.dumps(
            {"seq": self.seq, "url": self.url, "body": base64.b64encode(self.body).decode("ascii")}
        )

    @classmethod
    def from_line(cls, line: str, default_seq: int) -> "LogEntry":
        try:
            raw = json.loads(line)
            if isinstance(raw, str):
                return cls(seq=default_seq, url=None, body=base64.b64decode(raw, validate=True))
            return cls(
                seq=int(raw.get("seq", default_seq)),
                url=raw.get("url"),
                body=base64.b64decode(raw["body"], validate=True),
            )
        except (ValueError, KeyError, TypeError, AttributeError, binascii.Error) as e:
            raise ReplayError(f"Corrupt fetch log entry #{default_seq}: {e}") from e


class FetchCache:
    """Fetch pages live (recording them) or replay a previously recorded run."""

    def __init__(
        self,
        log_path: str,
        *,
        replay: bool = False,
        strict: bool = False,
        user_agent: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
        snapshot_path: Optional[str] = None,
    ):
        self.log_path = log_path
        self.replay = replay
        self.strict = strict
        self.user_agent = user_agent
        self.timeout = timeout
        self._client = client
        self.snapshot_path = snapshot_path or os.path.join(
            os.path.dirname(log_path), SNAPSHOT_NAME
        )
        self._seq = 0
        self._history: Deque[LogEntry] = deque()
        if replay:
            self._history.extend(self._load_history())
            _log.info("Replaying %d recorded fetches from %s", len(self._history), log_path)
        else:
            filesystem.ensure_parent(log_path)
            with open(log_path, "w", encoding="utf-8"):
                pass

    def _load_history(self) -> list[LogEntry]:
        if not os.path.exists(self.log_path):
            return []
        text = filesystem.read_text(self.log_path)
        lines = [ln for ln in text.split("\n") if ln.strip()]
        return [LogEntry.from_line(ln, idx) for idx, ln in enumerate(lines)]

    @property
    def remaining(self) -> int:
        return len(self._history)

    def get(self, url: str, user_agent: Optional[str] = None) -> bytes:
        if self.replay:
            body = self._replay_next(url)
        else:
            body = http_client.fetch(
                url,
                user_agent=user_agent or self.user_agent,
                timeout=self.timeout,
                client=self._client,
            )
            entry = LogEntry(seq=self._seq, url=url, body=body)
            filesystem.append_line(self.log_path, entry.to_line())
        self._seq += 1
        filesystem.write_bytes(self.snapshot_path, body)
        return body

    def _replay_next(self, url: str) -> bytes:
        if not self._history:
            raise ReplayExhaustedError(
                f"Replay log {self.log_path} exhausted after {self._seq} fetches (requested {url})"
            )
        entry = self._history.popleft()
        if entry.url is not None and entry.url != url:
            if self.strict:
                raise ReplayMismatchError(
                    f"Replay entry #{entry.seq} was recorded for {entry.url}, requested {url}"
                )
            _log.warning("Replay entry #%d recorded for %s, requested %s", entry.seq, entry.url, url)
        return entry.body
