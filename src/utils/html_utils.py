"""HTML helper utilities."""

from __future__ import annotations

import re

from bs4 import Tag

NBSP_RE = re.compile(r"&nbsp;?|\xa0")
WS_RE = re.compile(r"\s+")


def clean_cell(text: str) -> str:
    text = NBSP_RE.sub(" ", text)
    return WS_RE.sub(" ", text).strip()


def unwrap_links(tag: Tag) -> int:
    """Replace every ``<a>`` inside ``tag`` by its contents; return how many were removed."""
    anchors = tag.find_all("a")
    for a in anchors:
        a.unwrap()
    return len(anchors)


def has_link(tag: Tag) -> bool:
    return tag.find("a", recursive=False) is not None
