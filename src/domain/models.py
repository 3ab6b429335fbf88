"""Domain models for the power rankings scraper."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True, slots=True)
class RankEntry:
    team: str
    rank: int


@dataclass(slots=True)
class WeekRecord:
    week_id: str
    scraped_at: str
    rankings: List[RankEntry] = field(default_factory=list)

    def sort_rankings(self) -> None:
        self.rankings.sort(key=lambda r: r.rank)


@dataclass(slots=True)
class SeasonRecord:
    league: str
    weeks: List[WeekRecord] = field(default_factory=list)

    @classmethod
    def empty(cls, league: str) -> "SeasonRecord":
        return cls(league=league, weeks=[])
