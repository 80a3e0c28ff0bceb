"""
Tests for the HTTP API and the WebSocket endpoint.
"""

import pytest
from fastapi.testclient import TestClient

from ladderholdem.server.app import app
from ladderholdem.server.manager import ladder_manager


@pytest.fixture
def client():
    """A client against a fresh ladder: seed 42, 10 tokens, no CPU delay."""
    ladder_manager.seed = 42
    ladder_manager.starting_tokens = 10
    ladder_manager.cpu_delay = 0
    ladder_manager.reset()
    return TestClient(app)


def player_turn(client):
    """Deal hands until the player has a decision to make; return the state."""
    for _ in range(20):
        state = client.get("/match/state").json()
        if not state["game_over"] and state["to_act"] == "player":
            return state
        assert client.post("/match/next_hand").status_code == 200
    raise AssertionError("player never got to act")


class TestMatchRoutes:
    """Starting and playing a match over HTTP."""

    def test_state_before_match(self, client):
        assert client.get("/match/state").status_code == 404
        assert client.post("/match/action", json={"action_type": "FOLD"}).status_code == 404

    def test_start_match(self, client):
        response = client.post("/match/start", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["opponent"] == "theNorm"
        assert data["seed"] == 42
        assert data["cpu_actions"]
        assert data["cpu_actions"][0]["actor"] == "cpu"
        assert data["state"]["tokens"] == 9
        assert data["state"]["cpu"]["cards"] is None or data["state"]["phase"] == "showdown"
        assert data["state"]["match"]["hands_played"] in (0, 1)

    def test_explicit_seed(self, client):
        assert client.post("/match/start", json={"seed": 7}).json()["seed"] == 7

    def test_start_twice(self, client):
        client.post("/match/start", json={})
        assert client.post("/match/start", json={}).status_code == 400

    def test_locked_opponent(self, client):
        response = client.post("/match/start", json={"opponent_id": "mrMark"})
        assert response.status_code == 400

    def test_insufficient_tokens(self, client):
        client.post("/ladder/import", json={"tokens": 0})
        response = client.post("/match/start", json={})
        assert response.status_code == 402

    def test_legal_actions(self, client):
        client.post("/match/start", json={})
        player_turn(client)
        actions = client.get("/match/legal_actions").json()["legal_actions"]
        assert actions[0] == {"type": "FOLD"}
        assert {"CHECK", "CALL"} & {a["type"] for a in actions}

    def test_fold_then_rejected(self, client):
        client.post("/match/start", json={})
        player_turn(client)

        response = client.post("/match/action", json={"action_type": "FOLD"})
        assert response.status_code == 200
        assert response.json()["state"]["game_over"]

        response = client.post("/match/action", json={"action_type": "FOLD"})
        assert response.status_code == 400

    def test_invalid_action_type(self, client):
        client.post("/match/start", json={})
        response = client.post("/match/action", json={"action_type": "JUMP"})
        assert response.status_code == 400

    def test_next_hand_while_running(self, client):
        client.post("/match/start", json={})
        player_turn(client)
        assert client.post("/match/next_hand").status_code == 400

    def test_play_full_match(self, client):
        """Check or call every decision until the match ends, then collect."""
        client.post("/match/start", json={})
        state = client.get("/match/state").json()

        for _ in range(500):
            if state["match"]["is_over"]:
                break
            if state["game_over"]:
                state = client.post("/match/next_hand").json()["state"]
                continue
            types = {a["type"] for a in state["legal_actions"]}
            action = "CHECK" if "CHECK" in types else "CALL"
            response = client.post("/match/action", json={"action_type": action})
            assert response.status_code == 200, response.text
            state = response.json()["state"]

        assert state["match"]["is_over"]
        assert state["tokens"] == 9 + (state["reward"] or 0)
        assert client.post("/match/next_hand").status_code == 400


class TestLadderRoutes:
    """Ladder screen, opponents and persistence."""

    def test_ladder(self, client):
        data = client.get("/ladder").json()
        assert data["tokens"] == 10
        assert len(data["opponents"]) == 5
        assert len(data["leaderboard"]) == 6
        assert data["current_opponent"] == "theNorm"

    def test_select_locked_opponent(self, client):
        response = client.post("/ladder/opponent", json={"opponent_id": "crazyHorse"})
        assert response.status_code == 400

    def test_select_opponent_mid_match(self, client):
        client.post("/match/start", json={})
        response = client.post("/ladder/opponent", json={"opponent_id": "theNorm"})
        assert response.status_code == 400

    def test_export_import(self, client):
        saved = client.get("/ladder/export").json()
        saved["tokens"] = 55
        saved["unlocked_tiers"] = 3

        response = client.post("/ladder/import", json=saved)

        assert response.status_code == 200
        assert response.json()["progress"]["tokens"] == 55
        assert client.post("/ladder/opponent", json={"opponent_id": "redTheRiot"}).status_code == 200

    def test_import_corrupted(self, client):
        response = client.post("/ladder/import", json={"unlocked_tiers": 42})
        assert response.status_code == 200
        progress = response.json()["progress"]
        assert progress["tokens"] == 10
        assert progress["unlocked_tiers"] == 1

    def test_reset(self, client):
        client.post("/match/start", json={})
        assert client.post("/reset").json()["success"]
        assert client.get("/match/state").status_code == 404
        assert client.get("/ladder").json()["tokens"] == 10


class TestHandStrength:
    """Starting-hand preview."""

    def test_pocket_aces(self, client):
        data = client.post("/hand_strength", json={"cards": ["As", "Ad"]}).json()
        assert data == {
            "notation": "AA",
            "win_probability": 0.85,
            "multiplier": 1.176,
            "strength": 85,
            "listed": True,
        }

    def test_bad_cards(self, client):
        assert client.post("/hand_strength", json={"cards": ["As", "As"]}).status_code == 400
        assert client.post("/hand_strength", json={"cards": ["Zz", "As"]}).status_code == 400
        assert client.post("/hand_strength", json={"cards": ["As"]}).status_code == 422


class TestWebSocket:
    """Real-time play over /ws."""

    def test_initial_state_without_match(self, client):
        with client.websocket_connect("/ws") as ws:
            assert ws.receive_json() == {"type": "state", "phase": None, "tokens": 10}

    def test_start_match_reveals_cpu_action(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_json({"type": "start_match"})

            started = ws.receive_json()
            assert started["type"] == "match_started"
            assert started["seed"] == 42

            reveal = ws.receive_json()
            assert reveal["type"] == "cpu_action"
            assert reveal["actor"] == "cpu"
            assert "state" in reveal

    def test_errors(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_json({"type": "get_state"})
            assert ws.receive_json()["type"] == "error"
            ws.send_json({"type": "dance"})
            assert "Unknown message type" in ws.receive_json()["message"]

    def test_insufficient_tokens(self, client):
        client.post("/ladder/import", json={"tokens": 0})
        with client.websocket_connect("/ws") as ws:
            ws.receive_json()
            ws.send_json({"type": "start_match"})
            assert ws.receive_json()["code"] == 402
