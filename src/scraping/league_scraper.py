"""Weekly power-ranking scraping for one league.

One algorithm serves every league; the differences live in
:class:`parsing.league_rules.ExtractionRules`:

1. Fetch the league landing page and find the current rankings link.
2. Scrape the current week's ranking page. While only the current week is
   known, the page's table of contents (if the league has one) is harvested for
   earlier weeks.
3. Scrape every other known week, skipping weeks already stored unless forced.
4. Persist the merged season. Nothing is written if any step fails.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, Optional

from bs4 import BeautifulSoup

from config import settings
from core.fetch_cache import FetchCache
from domain.models import WeekRecord
from parsing import link_extractor, ranking_parser
from parsing.league_rules import ExtractionRules
from tracking import rescrape_policy
from tracking.season_store import SeasonStore, week_sort_key

_log = logging.getLogger(__name__)


class ScrapeError(RuntimeError):
    """A scrape step failed; ``step`` and ``context`` locate it, ``__cause__`` holds the reason."""

    def __init__(self, step: str, context: str, cause: Optional[BaseException] = None):
        message = f"{step}: {context}" if cause is None else f"{step}: {context}: {cause}"
        super().__init__(message)
        self.step = step
        self.context = context


class LeagueScraper:
    def __init__(
        self,
        rules: ExtractionRules,
        cache: FetchCache,
        store: SeasonStore,
        *,
        force_update: bool = False,
        user_agent: Optional[str] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.rules = rules
        self.cache = cache
        self.store = store
        self.force_update = force_update
        self.user_agent = user_agent or settings.DEFAULT_USER_AGENT
        self._clock = clock
        self.current_week = ""
        self.week_urls: Dict[str, str] = {}
        self._toc_harvested = False

    @property
    def league(self) -> str:
        return self.rules.league

    def _soup(self, url: str) -> BeautifulSoup:
        html = self.cache.get(url, self.user_agent)
        return BeautifulSoup(html, "html.parser")

    def scrape_home_page(self) -> None:
        self.current_week = ""
        self.week_urls = {}
        self._toc_harvested = False
        html = self.cache.get(self.rules.home_url, self.user_agent)
        week, url = link_extractor.find_current_week(html, self.rules)
        self.current_week = week
        self.week_urls[week] = url
        _log.info("%s current week %s at %s", self.league, week, url)

    def _harvest_toc(self, soup: BeautifulSoup) -> None:
        self._toc_harvested = True
        links = link_extractor.extract_week_links(soup, self.rules)
        for week, url in links.items():
            self.week_urls.setdefault(week, url)
        _log.info("%s table of contents: %d weeks known", self.league, len(self.week_urls))

    def scrape_ranking_page(self, week: str, url: str) -> Optional[WeekRecord]:
        """Scrape one week; returns the stored record, or None when the week was skipped."""
        soup = self._soup(url)

        if self.rules.supports_toc and not self._toc_harvested and len(self.week_urls) == 1:
            self._harvest_toc(soup)

        if not rescrape_policy.should_rescrape(
            week, self.current_week, self.store, force=self.force_update
        ):
            _log.debug("%s week %s already stored, skipping", self.league, week)
            return None

        scraped_at = self._clock().strftime(settings.TIMESTAMP_FORMAT)
        entries = ranking_parser.extract_rankings(soup, self.rules)
        if not entries:
            _log.warning("%s week %s: no rankings found at %s", self.league, week, url)
        record = WeekRecord(week_id=week, scraped_at=scraped_at, rankings=entries)
        self.store.upsert(record)
        _log.info("%s week %s: %d teams ranked", self.league, week, len(entries))
        return record

    def scrape(self) -> None:
        step = f"scrape {self.league.lower()} page"
        try:
            self.scrape_home_page()
        except Exception as e:
            raise ScrapeError(step, "get current rankings url", e) from e

        current = self.current_week
        self._scrape_week(current, self.week_urls[current])

        for week in sorted(self.week_urls, key=week_sort_key):
            if week == current:
                continue
            self._scrape_week(week, self.week_urls[week])

        self.store.save()

    def _scrape_week(self, week: str, url: str) -> None:
        try:
            self.scrape_ranking_page(week, url)
        except Exception as e:
            raise ScrapeError(f"week {week}", url, e) from e
