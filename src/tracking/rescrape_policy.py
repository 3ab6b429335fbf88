"""Logic to determine whether a week's ranking page needs re-parsing."""

from __future__ import annotations

from tracking.season_store import SeasonStore


def should_rescrape(week_id: str, current_week: str, store: SeasonStore, *, force: bool) -> bool:
    # The current week is always re-parsed, rankings may still change.
    if force or week_id == current_week:
        return True
    return not store.has_week(week_id)
