"""
Guess Submission & History Tests
================================
"""

import pytest

from conftest import MATCHUP_ID, history, set_lock, settle, submit_guess


# ═══════════════════════════════════════════════════════════════
# SUBMISSION

def test_submit_guess(client):
    resp = submit_guess(client, 42, 178, "away")
    assert resp.status_code == 201

    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["ok"] is True
    assert body["error"] is None


def test_second_submission_is_duplicate(client):
    assert submit_guess(client, 42, 178, "away").status_code == 201

    resp = submit_guess(client, 42, 120, "home")
    assert resp.status_code == 409
    assert resp.get_json()["error"]["code"] == "duplicate"

    guesses = history(client, 42).get_json()["data"]["guesses"]
    assert len(guesses) == 1
    assert guesses[0]["jerseySumGuess"] == 178
    assert guesses[0]["winnerPick"] == "away"


def test_same_participant_may_guess_other_matchups(client):
    assert submit_guess(client, 42, 178, "away").status_code == 201
    assert submit_guess(client, 42, 90, "home", matchup_id="week-1-buf-nyj").status_code == 201


def test_locked_matchup_rejects_guesses(client):
    assert submit_guess(client, 1, 100, "home").status_code == 201
    assert set_lock(client, True).status_code == 200

    resp = submit_guess(client, 2, 150, "away")
    assert resp.status_code == 403
    body = resp.get_json()
    assert body["error"]["code"] == "locked"
    assert body["error"]["message"] == "Guesses are locked for this matchup."

    assert history(client, 2).get_json()["data"]["guesses"] == []
    assert settle(client, "home", 100).get_json()["data"]["totalGuesses"] == 1


def test_unlock_reopens_submissions(client):
    set_lock(client, True)
    assert submit_guess(client, 3, 100, "home").status_code == 403

    set_lock(client, False)
    assert submit_guess(client, 3, 100, "home").status_code == 201


def test_unknown_matchup_is_open(client):
    assert submit_guess(client, 8, 10, "home", matchup_id="never-configured").status_code == 201


@pytest.mark.parametrize("total", [0, 9999])
def test_jersey_sum_bounds_accepted(client, total):
    assert submit_guess(client, 5, total, "home").status_code == 201


@pytest.mark.parametrize("total", [-1, 10000])
def test_jersey_sum_out_of_range_rejected(client, total):
    resp = submit_guess(client, 5, total, "home")
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"]["code"] == "validation_error"
    assert "jerseySumGuess" in body["error"]["details"]


@pytest.mark.parametrize(
    "field, value",
    [
        ("matchupId", ""),
        ("participantId", 0),
        ("participantId", -4),
        ("participantId", "42"),
        ("participantId", True),
        ("jerseySumGuess", 12.5),
        ("jerseySumGuess", "100"),
        ("winnerPick", "draw"),
    ],
)
def test_invalid_fields_rejected(client, field, value):
    payload = {"matchupId": MATCHUP_ID, "participantId": 42, "jerseySumGuess": 100, "winnerPick": "home"}
    payload[field] = value

    resp = client.post("/guesses", json=payload)
    assert resp.status_code == 400
    assert field in resp.get_json()["error"]["details"]


def test_missing_fields_rejected(client):
    resp = client.post("/guesses", json={"matchupId": MATCHUP_ID})
    assert resp.status_code == 400
    details = resp.get_json()["error"]["details"]
    assert {"participantId", "jerseySumGuess", "winnerPick"} <= set(details)


def test_malformed_json_rejected(client):
    resp = client.post("/guesses", data="{not json", content_type="application/json")
    assert resp.status_code == 400


# ═══════════════════════════════════════════════════════════════
# HISTORY

def test_history_newest_first(client):
    for i, matchup_id in enumerate(["m-1", "m-2", "m-3"]):
        submit_guess(client, 42, 100 + i, "home", matchup_id=matchup_id)
    submit_guess(client, 99, 1, "away", matchup_id="m-1")

    resp = history(client, 42)
    assert resp.status_code == 200

    guesses = resp.get_json()["data"]["guesses"]
    assert [g["matchupId"] for g in guesses] == ["m-3", "m-2", "m-1"]
    assert all(g["participantId"] == 42 for g in guesses)
    assert all(g["id"] and g["createdAt"] for g in guesses)


def test_history_capped_at_fifty(client):
    for i in range(55):
        submit_guess(client, 7, i, "away", matchup_id=f"m-{i}")

    guesses = history(client, 7).get_json()["data"]["guesses"]
    assert len(guesses) == 50
    assert guesses[0]["matchupId"] == "m-54"
    assert guesses[-1]["matchupId"] == "m-5"


def test_history_empty(client):
    resp = history(client, 12345)
    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"guesses": []}


@pytest.mark.parametrize("query", ["", "?participantId=", "?participantId=abc", "?participantId=0", "?participantId=-3", "?participantId=1.5"])
def test_history_requires_positive_participant(client, query):
    resp = client.get(f"/guesses{query}")
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "validation_error"


# ═══════════════════════════════════════════════════════════════
# 64-BIT IDS

def test_largest_storable_participant_id_accepted(client):
    assert submit_guess(client, 2**63 - 1, 100, "home").status_code == 201

    guesses = history(client, 2**63 - 1).get_json()["data"]["guesses"]
    assert [g["participantId"] for g in guesses] == [2**63 - 1]


def test_participant_id_beyond_64_bits_rejected(client):
    resp = submit_guess(client, 2**63, 100, "home")
    assert resp.status_code == 400
    assert "participantId" in resp.get_json()["error"]["details"]


@pytest.mark.parametrize("participant_id", [2**63, 10**20])
def test_history_participant_id_beyond_64_bits_rejected(client, participant_id):
    resp = history(client, participant_id)
    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "validation_error"
