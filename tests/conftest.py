# Shared HTML fixtures and an offline HTTP client for the scraper tests.
# Pages are trimmed-down versions of the ESPN markup the scrapers target.

from __future__ import annotations

from typing import Callable, Dict

import httpx
import pytest

NBA_HOME_URL = "http://www.espn.com/nba/"
NBA_WEEK3_URL = "http://www.espn.com/nba/story/_/page/powerrankings/week-3-rankings"
NBA_CAMP_URL = "http://www.espn.com/nba/story/_/id/100/camp-rankings"
NBA_WEEK1_URL = "http://www.espn.com/nba/story/_/id/101/week-1-rankings"
NBA_WEEK2_URL = "http://www.espn.com/nba/story/_/id/102/week-2-rankings"

NHL_HOME_URL = "http://www.espn.com/nhl/"
NHL_CURRENT_URL = "http://www.espn.com/nhl/page/powerrankings-161212/nhl-power-rankings"

NBA_HOME_HTML = """
<html><body>
<nav>
  <a href="/nba/scoreboard"><span class="link-text">Scores</span></a>
  <span class="link-text">Rankings</span>
  <a href="/nba/story/_/page/powerrankings/week-3-rankings"><span class="link-text">Rankings</span></a>
</nav>
</body></html>
"""


def nba_ranking_html(teams: list[tuple[int, str]], *, with_toc: bool = True) -> str:
    toc = ""
    if with_toc:
        toc = (
            "<p><em><strong>Previous rankings:</strong></em> "
            '<a href="/nba/story/_/id/100/camp-rankings">Camp</a> | '
            '<a href="/nba/story/_/id/101/week-1-rankings">Week 1</a> | '
            '<a href="http://www.espn.com/nba/story/_/id/102/week-2-rankings">Week 2</a> | '
            '<a href="/nba/story/_/id/999/other">Archive</a></p>'
        )
    rows = "\n".join(
        f'<p><b>{rank}. <a href="http://www.espn.com/nba/team/_/id/{rank}">{team}</a></b></p>'
        for rank, team in teams
    )
    return f"""
<html><body>
<div id="article-feed"><article><div class="container">
{toc}
{rows}
<p><b>Biggest mover: <a href="/nba/team/_/id/7">Denver</a></b></p>
<p><b>99. Unlinked Line Ignored</b></p>
</div></article></div>
</body></html>
"""


NHL_HOME_HTML = """
<html><body>
<a href="/nhl/page/powerrankings-161212/nhl-power-rankings"><span class="link-text">Power Rankings</span></a>
</body></html>
"""

NHL_RANKING_HTML = """
<html><body>
<div class="article-body"><p>Welcome to this week's rankings.</p></div>
<div class="article-body">
  <h2>1. (Last week: 1) <a href="/nhl/team/_/name/wsh">Washington Capitals</a>, 44-13-7</h2>
  <h2>12. (16) Montreal Canadiens, 37-21-8.</h2>
  <h2>31. (N/A) Vegas Golden Knights</h2>
  <h2>Biggest movers</h2>
</div>
<div class="article-body"><h2>5. Should Not Count</h2></div>
</body></html>
"""


@pytest.fixture
def nba_pages() -> Dict[str, str]:
    return {
        NBA_HOME_URL: NBA_HOME_HTML,
        NBA_WEEK3_URL: nba_ranking_html([(2, "Cleveland Cavaliers"), (1, "Golden State Warriors")]),
        NBA_CAMP_URL: nba_ranking_html([(1, "Golden State Warriors"), (2, "San Antonio Spurs")], with_toc=False),
        NBA_WEEK1_URL: nba_ranking_html([(1, "Houston Rockets"), (2, "Golden State Warriors")], with_toc=False),
        NBA_WEEK2_URL: nba_ranking_html([(1, "Boston Celtics"), (12, "Dallas Mavericks")], with_toc=False),
    }


@pytest.fixture
def nhl_pages() -> Dict[str, str]:
    return {NHL_HOME_URL: NHL_HOME_HTML, NHL_CURRENT_URL: NHL_RANKING_HTML}


@pytest.fixture
def make_client() -> Callable[..., httpx.Client]:
    """Build an httpx client serving ``pages``; ``requested`` collects fetched URLs."""

    def _make(pages: Dict[str, str], requested: list[str] | None = None, fail: set[str] | None = None):
        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            if requested is not None:
                requested.append(url)
            if fail and url in fail:
                return httpx.Response(500, text="server error")
            if url not in pages:
                return httpx.Response(404, text="not found")
            return httpx.Response(200, content=pages[url].encode("utf-8"))

        return httpx.Client(transport=httpx.MockTransport(handler))

    return _make
