"""League-specific extraction rules.

Each league is described by data only: where its landing page lives, which link
on it points at the current rankings, how a week id is read from that link,
whether ranking pages carry a table of contents of previous weeks, and how
ranking lines are located and matched. ``LeagueScraper`` runs the same
algorithm for every league.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Optional

from config import settings


class UnknownLeagueError(KeyError):
    def __str__(self) -> str:  # KeyError quotes its message otherwise
        return str(self.args[0]) if self.args else "unknown league"


@dataclass(frozen=True, slots=True)
class ExtractionRules:
    league: str
    home_url: str
    home_link_text: str
    week_from_url: re.Pattern[str]
    rank_line: re.Pattern[str]
    # Ranking blocks: ``block_tag`` elements inside each ``group_selector`` match.
    group_selector: str
    block_tag: str
    block_recursive: bool = True
    require_link: bool = False
    first_group_only: bool = False
    # Table of contents of previous weeks, found on ranking pages.
    toc_marker: Optional[str] = None
    toc_week: Optional[re.Pattern[str]] = None
    base_url: str = settings.BASE_URL

    @property
    def supports_toc(self) -> bool:
        return self.toc_marker is not None and self.toc_week is not None


NBA = ExtractionRules(
    league="NBA",
    home_url=f"{settings.BASE_URL}/nba/",
    home_link_text="Rankings",
    week_from_url=re.compile(r"week\-(\d+)\-rankings"),
    rank_line=re.compile(r"^(\d+)\.\s+(.*)"),
    group_selector="#article-feed article .container",
    block_tag="b",
    require_link=True,
    toc_marker="Previous rankings:",
    toc_week=re.compile(r"^(?:Week )?(\d+|Camp)"),
)

# Examples of NHL ranking headings:
#   1. (Last week: 1) Washington Capitals, 44-13-7
#   12. (16) Montreal Canadiens, 37-21-8.
#   31. (N/A) Vegas Golden Knights
# Prior rank in parentheses and the won-loss record are optional and dropped.
NHL = ExtractionRules(
    league="NHL",
    home_url=f"{settings.BASE_URL}/nhl/",
    home_link_text="Power Rankings",
    week_from_url=re.compile(r"/page/powerrankings\-([^/]+)/"),
    rank_line=re.compile(r"^(\d+)\.\s+(?:\([^)]+\)\s+)?([^,]+?)(?:,\s+[\d\-.]+)?\.?\s*$"),
    group_selector="div.article-body",
    block_tag="h2",
    block_recursive=False,
    first_group_only=True,
)

LEAGUES: Dict[str, ExtractionRules] = {r.league.lower(): r for r in (NBA, NHL)}


def get_rules(name: str) -> ExtractionRules:
    try:
        return LEAGUES[name.strip().lower()]
    except KeyError:
        raise UnknownLeagueError(f"Unknown league: '{name}'") from None
