"""Shared fixtures: one app per test, run against both storage backends."""

import uuid

import mongomock
import pytest

from jersey_pool import create_app

ADMIN_ID = 777
MATCHUP_ID = "week-1-phi-lac"


@pytest.fixture(params=["mongo", "sql"])
def app(request, monkeypatch, tmp_path):
    overrides = {
        "TESTING": True,
        "DB_BACKEND": request.param,
        "ADMIN_IDS": frozenset({ADMIN_ID}),
    }
    if request.param == "mongo":
        monkeypatch.setattr("jersey_pool.db.MongoClient", mongomock.MongoClient)
        overrides["MONGODB_DB"] = f"jersey-pool-test-{uuid.uuid4().hex[:8]}"
    else:
        overrides["DATABASE_URL"] = f"sqlite:///{tmp_path / 'jersey_pool_test.db'}"

    app = create_app(overrides)
    yield app

    engine = app.extensions.get("engine")
    if engine is not None:
        engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


def submit_guess(client, participant_id, jersey_sum_guess, winner_pick, matchup_id=MATCHUP_ID):
    return client.post(
        "/guesses",
        json={
            "matchupId": matchup_id,
            "participantId": participant_id,
            "jerseySumGuess": jersey_sum_guess,
            "winnerPick": winner_pick,
        },
    )


def settle(client, correct_winner, correct_total, matchup_id=MATCHUP_ID, admin_id=ADMIN_ID):
    return client.post(
        "/admin/settle",
        json={
            "adminId": admin_id,
            "matchupId": matchup_id,
            "correctWinner": correct_winner,
            "correctJerseyTotal": correct_total,
        },
    )


def set_lock(client, locked, matchup_id=MATCHUP_ID, admin_id=ADMIN_ID):
    return client.post(
        "/admin/lock",
        json={"adminId": admin_id, "matchupId": matchup_id, "locked": locked},
    )


def history(client, participant_id):
    return client.get(f"/guesses?participantId={participant_id}")
