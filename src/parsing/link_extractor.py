"""Link discovery on landing pages and ranking pages (BeautifulSoup version)."""

from __future__ import annotations

import logging
from typing import Dict, Tuple

from bs4 import BeautifulSoup

from parsing.errors import MissingSectionError
from parsing.league_rules import ExtractionRules
from utils.html_utils import clean_cell

_log = logging.getLogger(__name__)


def normalize_url(href: str, base_url: str) -> str:
    if href.lower().startswith(("http://", "https://")):
        return href
    return base_url + href


def find_current_week(html: str | bytes, rules: ExtractionRules) -> Tuple[str, str]:
    """Return ``(week_id, url)`` of the current rankings linked from the landing page.

    The marker is a ``span.link-text`` whose text equals ``rules.home_link_text``
    and whose parent anchor points at a URL carrying the week id.
    """
    soup = BeautifulSoup(html, "html.parser")
    for span in soup.select("span.link-text"):
        if clean_cell(span.get_text()) != rules.home_link_text:
            continue
        parent = span.parent
        if parent is None or parent.name != "a" or not parent.get("href"):
            continue
        href = parent["href"]
        m = rules.week_from_url.search(href)
        if not m:
            continue
        return m.group(1), normalize_url(href, rules.base_url)
    raise MissingSectionError(
        f"{rules.league} rankings link '{rules.home_link_text}' not found",
        context={"league": rules.league, "url": rules.home_url},
    )


def extract_week_links(soup: BeautifulSoup, rules: ExtractionRules) -> Dict[str, str]:
    """Harvest ``{week_id: url}`` from the previous-rankings paragraph of a ranking page."""
    links: Dict[str, str] = {}
    if not rules.supports_toc:
        return links
    for strong in soup.select("p em strong"):
        if clean_cell(strong.get_text()) != rules.toc_marker:
            continue
        paragraph = strong.find_parent("p")
        if paragraph is None:
            break
        for a in paragraph.find_all("a", recursive=False):
            m = rules.toc_week.match(clean_cell(a.get_text()))  # type: ignore[union-attr]
            if not m:
                continue
            links[m.group(1)] = normalize_url(a.get("href", ""), rules.base_url)
        break
    _log.debug("%s TOC yielded %d week links", rules.league, len(links))
    return links
