"""Parsing of weekly ranking pages into rank entries (BeautifulSoup)."""

from __future__ import annotations

import logging
from typing import Iterator, List

from bs4 import BeautifulSoup, Tag

from domain.models import RankEntry
from parsing.errors import RankLineMismatchError
from parsing.league_rules import ExtractionRules
from utils import html_utils

_log = logging.getLogger(__name__)


def parse_rank_line(text: str, rules: ExtractionRules) -> RankEntry:
    """Match one ranking line, e.g. ``"12. (16) Montreal Canadiens, 37-21-8."``."""
    line = html_utils.clean_cell(text)
    m = rules.rank_line.match(line)
    if not m:
        raise RankLineMismatchError(
            f"unexpected text in rank line: '{line}'", context={"league": rules.league}
        )
    team = html_utils.clean_cell(m.group(2))
    if not team:
        raise RankLineMismatchError(
            f"empty team name in rank line: '{line}'", context={"league": rules.league}
        )
    return RankEntry(team=team, rank=int(m.group(1)))


def _blocks(group: Tag, rules: ExtractionRules) -> Iterator[Tag]:
    for block in group.find_all(rules.block_tag, recursive=rules.block_recursive):
        if rules.require_link and not html_utils.has_link(block):
            continue
        yield block


def extract_rankings(html: str | bytes | BeautifulSoup, rules: ExtractionRules) -> List[RankEntry]:
    """Extract rank entries from a ranking page.

    Blocks that fail the league's line pattern are logged and skipped. With
    ``first_group_only`` the search stops at the first group yielding entries.
    """
    soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "html.parser")
    entries: List[RankEntry] = []
    for group in soup.select(rules.group_selector):
        for block in _blocks(group, rules):
            html_utils.unwrap_links(block)
            try:
                entries.append(parse_rank_line(block.get_text(), rules))
            except RankLineMismatchError as e:
                _log.warning("%s: %s", rules.league, e)
        if rules.first_group_only and entries:
            break
    return entries
