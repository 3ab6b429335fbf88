"""High-level orchestration: load, scrape and export one league."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from config.settings import Settings
from core.fetch_cache import FetchCache
from parsing.league_rules import get_rules
from scraping.league_scraper import LeagueScraper
from services import report_exporter
from tracking.season_store import SeasonStore
from utils import naming

_log = logging.getLogger(__name__)


@dataclass
class RunResult:
    league: str
    current_week: str
    week_id: str
    csv: str


def run(
    league: str,
    config: Settings,
    *,
    week_id: Optional[str] = None,
    force_update: bool = False,
    replay: bool = False,
    strict_replay: bool = False,
    client: Optional[httpx.Client] = None,
) -> RunResult:
    """Scrape ``league`` and export ``week_id`` (default: the current week)."""
    rules = get_rules(league)
    cache = FetchCache(
        naming.fetch_log_path(config.data_dir, rules.league),
        replay=replay,
        strict=strict_replay,
        user_agent=config.user_agent,
        timeout=config.timeout,
        client=client,
    )
    store = SeasonStore(rules.league, naming.season_db_path(config.data_dir, rules.league))
    store.load()

    scraper = LeagueScraper(
        rules, cache, store, force_update=force_update, user_agent=config.user_agent
    )
    scraper.scrape()

    target = week_id or scraper.current_week
    _log.info("Exporting %s week %s", rules.league, target)
    return RunResult(
        league=rules.league,
        current_week=scraper.current_week,
        week_id=target,
        csv=report_exporter.export_csv(store, target),
    )
