import logging
from datetime import datetime, timezone

import pytest

from tournacal.errors import MalformedPayload
from tournacal.models import ALL_SPORTS, Sport, Tournament, synthetic_sport_id
from tournacal.normalizer import load_tournament_records, normalize_sports, normalize_tournaments
from tournacal.timeutil import day_of_month, format_time


def _payload() -> dict:
    return {
        "status": "success",
        "msg": "ok",
        "err": None,
        "data": [
            {
                "sport_id": 1,
                "sport_name": "Cricket",
                "tournaments": [
                    {
                        "id": 11,
                        "name": "World Cup",
                        "tournament_img_url": "https://example.com/wc.png",
                        "level": "International",
                        "start_date": "2025-08-20T10:00:00Z",
                        "matches": [
                            {
                                "id": 1,
                                "stage": "Final",
                                "team_a": "India",
                                "team_b": "Australia",
                                "start_time": "2025-08-21T14:00:00Z",
                                "venue": "Mumbai",
                            }
                        ],
                    },
                    {
                        "id": 12,
                        "name": "Monsoon League",
                        "level": "State",
                        "start_date": "2025-08-05T10:00:00Z",
                        "matches": [],
                    },
                ],
            },
            {
                "sport_code": 2,
                "sport_name": "Football",
                "tournaments": [
                    {"id": 21, "name": "Derby", "start_date": "2025-08-10T10:00:00Z"},
                ],
            },
        ],
    }


def test_normalize_flattens_and_sorts_by_start_date() -> None:
    tournaments = normalize_tournaments(_payload())

    assert [t.id for t in tournaments] == [12, 21, 11]
    assert [t.sport_name for t in tournaments] == ["Cricket", "Football", "Cricket"]
    assert tournaments[1].sport_id == 2
    assert tournaments[2].matches[0].team_b == "Australia"
    assert tournaments[2].image_url == "https://example.com/wc.png"


def test_scenario_single_cricket_tournament() -> None:
    payload = {
        "status": "success",
        "data": [
            {
                "sport_id": 1,
                "sport_name": "Cricket",
                "tournaments": [
                    {"id": 1, "name": "Cup", "start_date": "2025-08-05T10:00:00Z", "matches": []},
                ],
            }
        ],
    }

    (tournament,) = normalize_tournaments(payload)

    assert tournament.sport_id == 1
    assert format_time(tournament.start_date) == "03:30 PM"
    assert day_of_month(tournament.start_date) == 5


def test_unparseable_start_date_sorts_as_now_and_is_kept() -> None:
    payload = _payload()
    payload["data"][1]["tournaments"][0]["start_date"] = "TBD"
    now = datetime(2025, 8, 15, tzinfo=timezone.utc)

    tournaments = normalize_tournaments(payload, now=now)

    assert [t.id for t in tournaments] == [12, 21, 11]
    assert tournaments[1].start_date == "TBD"


def test_non_success_status_is_malformed() -> None:
    with pytest.raises(MalformedPayload):
        normalize_tournaments({"status": "error", "err": "down", "data": []})


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"status": "success"},
        {"status": "success", "data": {"sport_id": 1}},
        {"status": "success", "data": [{"tournaments": []}]},
        {"status": "success", "data": [{"sport_id": 1, "sport_name": "X", "tournaments": {}}]},
        {"status": "success", "data": [{"sport_id": 1, "sport_name": "X", "tournaments": [{"name": "No id"}]}]},
        {
            "status": "success",
            "data": [{"sport_id": 1, "sport_name": "X", "tournaments": [{"id": 1, "name": "Open", "matches": {}}]}],
        },
    ],
)
def test_shape_errors_are_malformed(payload: object) -> None:
    with pytest.raises(MalformedPayload):
        normalize_tournaments(payload)


def test_sport_without_identifier_gets_stable_synthetic_id() -> None:
    first = Sport.from_dict({"sport_name": "Kabaddi"})
    second = Sport.from_dict({"sport_name": "Kabaddi"})

    assert first.id == second.id == synthetic_sport_id("Kabaddi")
    assert str(first.id).startswith("sport_")


def test_normalize_sports_prefixes_sentinel() -> None:
    sports = normalize_sports(
        {"status": "success", "data": [{"sport_id": 1, "sport_name": "Cricket"}, {"sport_code": 7, "name": "Chess"}]}
    )

    assert sports == [ALL_SPORTS, Sport(1, "Cricket"), Sport(7, "Chess")]


def test_cached_records_rebuild_the_same_tournaments() -> None:
    tournaments = normalize_tournaments(_payload())

    rebuilt = load_tournament_records([t.to_dict() for t in tournaments])

    assert rebuilt == tournaments


def test_end_date_is_kept_verbatim() -> None:
    tournament = Tournament.from_dict({"id": 3, "name": "Open", "start_date": "2025-08-01", "end_date": "later"})

    assert tournament.end_date == "later"
    assert tournament.to_dict()["end_date"] == "later"


def test_match_with_unusable_id_keeps_the_fetch(caplog: pytest.LogCaptureFixture) -> None:
    payload = _payload()
    payload["data"][0]["tournaments"][0]["matches"].append({"id": "m1", "team_a": "A", "team_b": "B"})
    payload["data"][0]["tournaments"][0]["matches"].append({"team_a": "C", "team_b": "D"})

    with caplog.at_level(logging.WARNING):
        tournaments = normalize_tournaments(payload)

    world_cup = next(t for t in tournaments if t.id == 11)
    assert len(tournaments) == 3
    assert [m.id for m in world_cup.matches] == [1, 2, 3]
    assert [m.team_a for m in world_cup.matches] == ["India", "A", "C"]
    assert "using position 2 as the match id" in caplog.text


def test_null_tournaments_and_matches_mean_empty() -> None:
    payload = {
        "status": "success",
        "data": [
            {"sport_id": 1, "sport_name": "Cricket", "tournaments": None},
            {"sport_id": 2, "sport_name": "Chess", "tournaments": [{"id": 4, "name": "Blitz", "matches": None}]},
        ],
    }

    (tournament,) = normalize_tournaments(payload)

    assert tournament.matches == []
