"""Tests for the FastAPI HTTP surface."""

import chess
import pytest
from fastapi.testclient import TestClient

from strategist.constants import MATE_SCORE, MAX_DEPTH
from tests.positions import MISSING_KING, OPPONENT_IN_CHECK
from web.app import EngineMoveRequest, app

FOOLS_MATE_MOVES = ["f2f3", "e7e5", "g2g4"]


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_status(client):
    response = client.get("/api/status")
    assert response.status_code == 200
    body = response.json()
    assert body["fen"] == chess.STARTING_FEN
    assert body["turn"] == "white"
    assert body["result"] == "*"


def test_engine_move_from_start(client):
    response = client.post("/api/move", json={"depth": 1, "seed": 3})
    assert response.status_code == 200
    body = response.json()
    assert chess.Move.from_uci(body["move"]) in chess.Board().legal_moves
    assert body["depth"] == 1
    assert body["nodes"] > 0
    assert body["status"]["turn"] == "black"
    assert body["fen"] == body["status"]["fen"]


def test_engine_finds_mate(client):
    response = client.post("/api/move", json={"moves": FOOLS_MATE_MOVES, "depth": 2, "seed": 0})
    assert response.status_code == 200
    body = response.json()
    assert body["move"] == "d8h4"
    assert body["san"] == "Qh4#"
    assert body["score"] == MATE_SCORE
    assert body["status"]["checkmate"]
    assert body["status"]["winner"] == "black"
    assert body["status"]["check_square"] == "e1"


def test_engine_move_after_game_over(client):
    response = client.post("/api/move", json={"moves": FOOLS_MATE_MOVES + ["d8h4"]})
    assert response.status_code == 400
    assert "over" in response.json()["detail"]


@pytest.mark.parametrize(
    "payload",
    [
        {"fen": "not a fen"},
        {"moves": ["e2e5"]},
        {"moves": ["nonsense"]},
        {"fen": OPPONENT_IN_CHECK, "depth": 2},
        {"fen": MISSING_KING, "depth": 2},
    ],
)
def test_engine_move_bad_game(client, payload):
    assert client.post("/api/move", json=payload).status_code == 400


def test_depth_is_clamped():
    assert EngineMoveRequest(depth=99).depth == MAX_DEPTH
    assert EngineMoveRequest(depth=5).depth == 4
    assert EngineMoveRequest(depth=-4).depth == 0


def test_play(client):
    response = client.post("/api/play", json={"move": "e2e4"})
    assert response.status_code == 200
    body = response.json()
    assert body["san"] == "e4"
    assert not body["captured"]
    assert body["status"]["turn"] == "black"


def test_play_capture_with_san(client):
    response = client.post("/api/play", json={"moves": ["e2e4", "d7d5"], "move": "exd5"})
    assert response.status_code == 200
    assert response.json()["captured"]


def test_play_illegal(client):
    response = client.post("/api/play", json={"move": "e2e5"})
    assert response.status_code == 400
    assert "Illegal move" in response.json()["detail"]


def test_legal(client):
    response = client.post("/api/legal", json={"square": "G1"})
    assert response.status_code == 200
    assert sorted(response.json()["moves"]) == ["g1f3", "g1h3"]

    everything = client.post("/api/legal", json={})
    assert len(everything.json()["moves"]) == 20


def test_legal_bad_square(client):
    assert client.post("/api/legal", json={"square": "z9"}).status_code == 422


def test_threat(client):
    response = client.post("/api/threat", json={"moves": ["e2e4", "d7d5"], "square": "e4"})
    assert response.status_code == 200
    assert response.json() == {"square": "e4", "attacked": True}

    safe = client.post("/api/threat", json={"square": "a2"})
    assert safe.json()["attacked"] is False


def test_undo(client):
    response = client.post("/api/undo", json={"moves": ["e2e4", "e7e5", "g1f3"]})
    assert response.status_code == 200
    body = response.json()
    assert body["undone"] == 2
    assert body["moves"] == ["e2e4"]
    assert body["status"]["turn"] == "black"


def test_undo_more_than_played(client):
    body = client.post("/api/undo", json={"moves": ["e2e4"], "plies": 4}).json()
    assert body["undone"] == 1
    assert body["fen"] == chess.STARTING_FEN


@pytest.mark.parametrize("fen", [OPPONENT_IN_CHECK, MISSING_KING])
def test_impossible_position_is_rejected_everywhere(client, fen):
    for path, payload in [
        ("/api/play", {"fen": fen, "move": "e1d1"}),
        ("/api/legal", {"fen": fen}),
        ("/api/undo", {"fen": fen}),
    ]:
        response = client.post(path, json=payload)
        assert response.status_code == 400
        assert "illegal position" in response.json()["detail"]
