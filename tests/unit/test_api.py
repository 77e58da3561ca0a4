"""Tests for the JSON API, run against an in-memory database."""

import inspect
import random

import pytest
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from songbattle.catalog.provider import seed_catalog
from songbattle.db.session import get_db
from songbattle.elo.constants import MatchmakingParams
from songbattle.matchmaking.matchmaker import Matchmaker
from songbattle.web.main import app, get_matchmaker


@pytest.fixture
def make_client(session_factory):
    def _override_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    def _make(seed: bool = True) -> TestClient:
        if seed:
            session = session_factory()
            seed_catalog(session)
            session.commit()
            session.close()
        app.dependency_overrides[get_db] = _override_db
        app.dependency_overrides[get_matchmaker] = lambda: Matchmaker(MatchmakingParams(), random.Random(7))
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    return make_client()


def test_songs(client):
    response = client.get("/api/songs")

    assert response.status_code == 200
    songs = response.json()
    assert len(songs) == 30
    assert {"id", "title", "artist", "genre", "youtube_id", "start_time", "rating"} <= set(songs[0])


def test_battle_returns_two_different_songs(client):
    for _ in range(20):
        body = client.get("/api/battle").json()
        assert body["left"]["id"] != body["right"]["id"]


def test_battle_issues_session_cookie(client):
    client.get("/api/battle")

    assert "session" in client.cookies


def test_vote(client):
    response = client.post(
        "/api/vote",
        json={"winnerId": 1, "loserId": 2},
        headers={"X-Session-Id": "listener-a"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Vote recorded for Blinding Lights!",
        "newRating": 1516,
        "ratingDelta": 16,
    }


@pytest.mark.parametrize(
    "payload",
    [{"winnerId": 1, "loserId": 1}, {"winnerId": 1}, {}, {"winnerId": 1, "loserId": 404}],
)
def test_invalid_vote_is_client_error(client, payload):
    response = client.post("/api/vote", json=payload)

    assert response.status_code == 400
    assert "error" in response.json()
    assert client.get("/api/stats").json()["totalBattles"] == 0


def test_per_session_reports(client):
    headers = {"X-Session-Id": "listener-a"}
    client.post("/api/vote", json={"winnerId": 15, "loserId": 21}, headers=headers)

    mine = client.get("/api/me/leaderboard", headers=headers).json()
    assert [row["id"] for row in mine] == [15, 21]

    affinity = client.get("/api/me/affinity", headers=headers).json()
    assert {row["genre"] for row in affinity} == {"Hip-Hop", "Rock"}

    other = client.get("/api/me/leaderboard", headers={"X-Session-Id": "listener-b"}).json()
    assert other == []


def test_cookie_session_is_sticky(client):
    client.post("/api/vote", json={"winnerId": 3, "loserId": 4})

    mine = client.get("/api/me/leaderboard").json()

    assert [row["id"] for row in mine] == [3, 4]


def test_leaderboard_and_stats(client):
    client.post("/api/vote", json={"winnerId": 30, "loserId": 29})

    board = client.get("/api/leaderboard").json()
    assert board[0]["id"] == 30
    assert board[0]["rank"] == 1

    stats = client.get("/api/stats").json()
    assert stats["totalBattles"] == 1
    assert stats["topSongs"][0]["title"] == "Billie Jean"


def test_empty_catalog_is_server_error(make_client):
    client = make_client(seed=False)

    response = client.get("/api/battle")

    assert response.status_code == 500
    assert response.json() == {"error": "Not enough songs to battle"}


def test_routes_are_sync_so_lock_waits_stay_off_the_event_loop():
    routes = [route for route in app.routes if isinstance(route, APIRoute)]

    assert {route.path for route in routes} >= {"/api/vote", "/api/battle"}
    for route in routes:
        assert not inspect.iscoroutinefunction(route.endpoint), route.path
