"""Load/save the per-league season history (JSON persistence).

Document layout::

    {"league": "NBA",
     "weeks": [{"week": "Camp", "modified": "2017-10-16 09:30:00",
                "rankings": [{"team": "Golden State Warriors", "rank": 1}, ...]}]}
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Dict, List, Optional, Tuple

from core import filesystem
from domain.models import RankEntry, SeasonRecord, WeekRecord

_log = logging.getLogger(__name__)

_NUMERIC_WEEK = re.compile(r"[+-]?\d+")


class StoreError(RuntimeError):
    """Reading or writing the persisted season failed."""


def week_sort_key(week_id: str) -> Tuple[int, str, int]:
    """Non-numeric ids (e.g. ``Camp``) sort before numeric ones; numeric ids sort by value."""
    if _NUMERIC_WEEK.fullmatch(week_id):
        return (1, "", int(week_id))
    return (0, week_id, 0)


def season_to_dict(season: SeasonRecord) -> Dict[str, Any]:
    return {
        "league": season.league,
        "weeks": [
            {
                "week": w.week_id,
                "modified": w.scraped_at,
                "rankings": [{"team": r.team, "rank": r.rank} for r in w.rankings],
            }
            for w in season.weeks
        ],
    }


def season_from_dict(raw: Dict[str, Any]) -> SeasonRecord:
    if not isinstance(raw, dict):
        raise TypeError(f"season document must be an object, got {type(raw).__name__}")
    # Later entries win when a week id is repeated.
    weeks: Dict[str, WeekRecord] = {}
    for wobj in raw.get("weeks") or []:
        if not isinstance(wobj, dict):
            raise TypeError(f"week entry must be an object, got {type(wobj).__name__}")
        rankings = []
        for robj in wobj.get("rankings") or []:
            if not isinstance(robj, dict):
                raise TypeError(f"ranking entry must be an object, got {type(robj).__name__}")
            rankings.append(RankEntry(team=robj["team"], rank=int(robj["rank"])))
        week_id = str(wobj["week"])
        if week_id in weeks:
            _log.warning("Duplicate week %s in season document, keeping the last one", week_id)
        weeks[week_id] = WeekRecord(
            week_id=week_id, scraped_at=wobj.get("modified", ""), rankings=rankings
        )
    return SeasonRecord(league=raw.get("league", ""), weeks=list(weeks.values()))


class SeasonStore:
    """In-memory season for one league, persisted as a single JSON document."""

    def __init__(self, league: str, path: str):
        self.league = league
        self.path = path
        self._season = SeasonRecord.empty(league)

    @property
    def season(self) -> SeasonRecord:
        return self._season

    @property
    def week_ids(self) -> List[str]:
        return [w.week_id for w in self._season.weeks]

    def __len__(self) -> int:
        return len(self._season.weeks)

    def _index(self, week_id: str) -> int:
        for idx, week in enumerate(self._season.weeks):
            if week.week_id == week_id:
                return idx
        return -1

    def lookup(self, week_id: str) -> Optional[WeekRecord]:
        idx = self._index(week_id)
        return self._season.weeks[idx] if idx >= 0 else None

    def has_week(self, week_id: str) -> bool:
        return self._index(week_id) >= 0

    def upsert(self, week: WeekRecord) -> None:
        week.sort_rankings()
        idx = self._index(week.week_id)
        if idx >= 0:
            self._season.weeks[idx] = week
        else:
            self._season.weeks.append(week)
        self._season.weeks.sort(key=lambda w: week_sort_key(w.week_id))

    def load(self) -> SeasonRecord:
        if not os.path.exists(self.path):
            _log.info("No season file at %s, creating empty %s season", self.path, self.league)
            self._season = SeasonRecord.empty(self.league)
            self.save()
            return self._season
        try:
            raw = json.loads(filesystem.read_text(self.path))
            season = season_from_dict(raw)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise StoreError(f"Failed to load season from {self.path}: {e}") from e
        if not season.league:
            season.league = self.league
        season.weeks.sort(key=lambda w: week_sort_key(w.week_id))
        self._season = season
        _log.debug("Loaded %d weeks for %s from %s", len(season.weeks), self.league, self.path)
        return season

    def save(self) -> None:
        try:
            payload = json.dumps(season_to_dict(self._season), indent=2, ensure_ascii=False)
            filesystem.write_text_atomic(self.path, payload)
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Failed to write season to {self.path}: {e}") from e
        _log.debug("Saved %d weeks for %s to %s", len(self), self.league, self.path)
