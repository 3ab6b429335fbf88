import json
import random

import pytest

from domain.models import RankEntry, WeekRecord
from tracking.season_store import SeasonStore, StoreError, week_sort_key


def _week(week_id: str, *ranks: tuple[int, str], stamp: str = "2017-10-16 09:30:00") -> WeekRecord:
    return WeekRecord(
        week_id=week_id,
        scraped_at=stamp,
        rankings=[RankEntry(team=t, rank=r) for r, t in ranks],
    )


def test_upsert_replaces_existing_week_in_place(tmp_path):
    store = SeasonStore("NBA", str(tmp_path / "NBA.json"))
    store.upsert(_week("1", (1, "Old Team")))
    store.upsert(_week("2", (1, "Other Team")))
    store.upsert(_week("1", (1, "New Team"), stamp="2017-10-23 10:00:00"))
    assert store.week_ids == ["1", "2"]
    assert len(store) == 2
    week = store.lookup("1")
    assert week is not None
    assert week.rankings == [RankEntry(team="New Team", rank=1)]
    assert week.scraped_at == "2017-10-23 10:00:00"


def test_week_order_puts_literal_weeks_first():
    ids = ["Camp", "1", "2", "10"]
    for _ in range(10):
        shuffled = ids[:]
        random.shuffle(shuffled)
        store = SeasonStore("NBA", "unused.json")
        for w in shuffled:
            store.upsert(_week(w))
        assert store.week_ids == ["Camp", "1", "2", "10"]


def test_week_sort_key_orders_literals_lexically():
    assert sorted(["3", "Preseason", "Camp", "11"], key=week_sort_key) == [
        "Camp",
        "Preseason",
        "3",
        "11",
    ]


def test_upsert_sorts_rankings_by_rank():
    store = SeasonStore("NHL", "unused.json")
    store.upsert(_week("5", (12, "Montreal Canadiens"), (1, "Washington Capitals"), (4, "Minnesota Wild")))
    ranks = [r.rank for r in store.lookup("5").rankings]
    assert ranks == sorted(ranks) == [1, 4, 12]


def test_lookup_unknown_week_leaves_store_untouched():
    store = SeasonStore("NBA", "unused.json")
    store.upsert(_week("1", (1, "Team")))
    assert store.lookup("7") is None
    assert not store.has_week("7")
    assert store.week_ids == ["1"]


def test_load_creates_empty_baseline(tmp_path):
    path = tmp_path / "db" / "NHL.json"
    store = SeasonStore("NHL", str(path))
    season = store.load()
    assert season.weeks == []
    assert json.loads(path.read_text(encoding="utf-8")) == {"league": "NHL", "weeks": []}


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "NBA.json"
    store = SeasonStore("NBA", str(path))
    store.upsert(_week("Camp", (2, "San Antonio Spurs"), (1, "Golden State Warriors")))
    store.upsert(_week("3", (1, "Cleveland Cavaliers"), stamp="2017-11-06 08:00:00"))
    store.save()

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["weeks"][0] == {
        "week": "Camp",
        "modified": "2017-10-16 09:30:00",
        "rankings": [
            {"team": "Golden State Warriors", "rank": 1},
            {"team": "San Antonio Spurs", "rank": 2},
        ],
    }

    reloaded = SeasonStore("NBA", str(path))
    season = reloaded.load()
    assert season.league == "NBA"
    assert season.weeks == store.season.weeks


def test_load_corrupt_document_raises_store_error(tmp_path):
    path = tmp_path / "NBA.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreError):
        SeasonStore("NBA", str(path)).load()


def test_save_leaves_no_temp_files(tmp_path):
    store = SeasonStore("NBA", str(tmp_path / "NBA.json"))
    store.upsert(_week("1", (1, "Team")))
    store.save()
    store.save()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["NBA.json"]


@pytest.mark.parametrize(
    "document",
    [
        "[]",
        '"x"',
        '{"league": "NBA", "weeks": ["1"]}',
        '{"league": "NBA", "weeks": [{"week": "1", "rankings": [3]}]}',
        '{"league": "NBA", "weeks": [{"modified": "2017-10-16 09:30:00"}]}',
    ],
)
def test_load_malformed_document_raises_store_error(tmp_path, document):
    path = tmp_path / "NBA.json"
    path.write_text(document, encoding="utf-8")
    with pytest.raises(StoreError):
        SeasonStore("NBA", str(path)).load()


def test_load_keeps_last_entry_for_repeated_week(tmp_path):
    path = tmp_path / "NBA.json"
    doc = {
        "league": "NBA",
        "weeks": [
            {"week": "1", "modified": "2017-10-23 07:00:00", "rankings": [{"team": "Old Team", "rank": 1}]},
            {"week": "Camp", "modified": "2017-10-16 07:00:00", "rankings": []},
            {"week": "1", "modified": "2017-10-24 07:00:00", "rankings": [{"team": "New Team", "rank": 1}]},
        ],
    }
    path.write_text(json.dumps(doc), encoding="utf-8")
    store = SeasonStore("NBA", str(path))
    store.load()
    assert store.week_ids == ["Camp", "1"]
    assert store.lookup("1").rankings == [RankEntry(team="New Team", rank=1)]

    store.save()
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert [w["week"] for w in saved["weeks"]] == ["Camp", "1"]
