"""CSV export of one week's rankings.

Rows are ``league,week,team,rank`` in the store's ascending rank order.
"""

from __future__ import annotations

import csv
from io import StringIO
from typing import List

from tracking.season_store import SeasonStore

HEADER = ["league", "week", "team", "rank"]


class WeekNotFoundError(LookupError):
    def __init__(self, league: str, week_id: str):
        super().__init__(f"week not found: '{week_id}' ({league})")
        self.league = league
        self.week_id = week_id


def export_rows(store: SeasonStore, week_id: str) -> List[List[str]]:
    week = store.lookup(week_id)
    if week is None:
        raise WeekNotFoundError(store.league, week_id)
    rows = [list(HEADER)]
    for entry in week.rankings:
        rows.append([store.league, week_id, entry.team, str(entry.rank)])
    return rows


def export_csv(store: SeasonStore, week_id: str) -> str:
    rows = export_rows(store, week_id)
    buf = StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(rows)
    return buf.getvalue()
