"""HTTP client utilities.

Separated from parsing and from the record/replay cache so the transport can be
swapped in tests (``httpx.MockTransport``).
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from config import settings

_log = logging.getLogger(__name__)


class HttpError(RuntimeError):
    """Transport failure while fetching a page."""

    def __init__(self, message: str, *, url: str):
        super().__init__(message)
        self.url = url


def fetch(
    url: str,
    *,
    user_agent: Optional[str] = None,
    timeout: Optional[float] = None,
    client: Optional[httpx.Client] = None,
) -> bytes:
    """GET ``url`` and return the raw body.

    No retries: a single failure surfaces immediately as :class:`HttpError`.
    """
    ua = user_agent or settings.DEFAULT_USER_AGENT
    timeout = timeout or settings.DEFAULT_TIMEOUT
    headers = {"User-Agent": ua}
    close_client = False
    if client is None:
        client = httpx.Client(timeout=timeout, follow_redirects=True)
        close_client = True
    try:
        _log.debug("GET %s", url)
        resp = client.get(url, headers=headers, timeout=timeout)
        resp.raise_for_status()
        return resp.content
    except httpx.HTTPError as e:
        raise HttpError(f"Failed to fetch {url}: {e}", url=url) from e
    finally:
        if close_client:
            client.close()
