# tests/test_api.py
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fastapi.testclient import TestClient

from focus.registry import SessionRegistry
from admin_portal.backend.main import create_app

class FakeClock:
    def __init__(self, start=3_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms

EXPLOIT_CONTEXT = {"timeSpent": 40000, "difficulty": 5, "pressure": 3, "consecutiveActions": 8}

class TestFocusAPI(unittest.TestCase):
    """Test suite for the focus HTTP API."""

    def setUp(self):
        self.clock = FakeClock()
        self.registry = SessionRegistry(clock=self.clock, seed=1)
        self.client = TestClient(create_app(self.registry, manage_ticker=False))

    def tearDown(self):
        self.registry.shutdown()

    def create(self, handle="Case"):
        response = self.client.post("/sessions/", json={"handle": handle})
        self.assertEqual(response.status_code, 201)
        return response.json()["id"]

    def test_health(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "online")
        self.assertEqual(body["sessions"], 0)

    def test_create_and_list_sessions(self):
        session_id = self.create()
        self.assertTrue(self.registry.require(session_id).engine.is_running)

        listing = self.client.get("/sessions/").json()
        self.assertEqual(len(listing), 1)
        self.assertEqual(listing[0]["handle"], "Case")
        self.assertEqual(listing[0]["focus"], 100.0)

        summary = self.client.get(f"/sessions/{session_id}").json()
        self.assertEqual(summary["status"], "sharp")

    def test_duplicate_handle_conflicts(self):
        self.create("Molly")
        response = self.client.post("/sessions/", json={"handle": "molly"})
        self.assertEqual(response.status_code, 409)

    def test_invalid_handle_rejected(self):
        response = self.client.post("/sessions/", json={"handle": "bad handle!"})
        self.assertEqual(response.status_code, 422)

    def test_unknown_session(self):
        for response in (self.client.get("/sessions/nope/state"),
                         self.client.post("/sessions/nope/consume", json={"command": "ls"})):
            self.assertEqual(response.status_code, 404)
            self.assertEqual(response.json()["detail"], "Session not found")

    def test_state(self):
        session_id = self.create()
        body = self.client.get(f"/sessions/{session_id}/state").json()
        self.assertEqual(body["current"], 100)
        self.assertEqual(body["percentage"], 100)
        self.assertEqual(body["status"], "sharp")
        self.assertFalse(body["is_overloaded"])
        self.assertEqual(body["effects"], [])

    def test_cost_quote_does_not_spend(self):
        session_id = self.create()
        response = self.client.post(f"/sessions/{session_id}/cost",
                                    json={"command": "exploit", "context": EXPLOIT_CONTEXT})
        self.assertEqual(response.json(), {"command": "exploit", "cost": 77})
        self.assertEqual(self.registry.require(session_id).engine.state.current, 100)

    def test_consume(self):
        session_id = self.create()
        response = self.client.post(f"/sessions/{session_id}/consume",
                                    json={"command": "exploit", "context": EXPLOIT_CONTEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["focus_used"], 77)
        self.assertFalse(body["overload_triggered"])

        state = self.client.get(f"/sessions/{session_id}/state").json()
        self.assertEqual(state["current"], 23)
        self.assertEqual(self.registry.require(session_id).commands_issued, 1)

    def test_consume_depleted(self):
        session_id = self.create()
        self.registry.require(session_id).engine.state.current = 3
        body = self.client.post(f"/sessions/{session_id}/consume", json={"command": "exploit"}).json()
        self.assertFalse(body["success"])
        self.assertTrue(body["overload_triggered"])
        self.assertTrue(1 <= len(body["effects"]) <= 3)

        effects = self.client.get(f"/sessions/{session_id}/effects").json()
        self.assertEqual(len(effects), len(body["effects"]))

    def test_negative_context_rejected(self):
        session_id = self.create()
        response = self.client.post(f"/sessions/{session_id}/cost",
                                    json={"command": "scan", "context": {"difficulty": -1}})
        self.assertEqual(response.status_code, 422)

    def test_stimulants(self):
        session_id = self.create()
        url = f"/sessions/{session_id}/stimulants"
        first = self.client.post(url, json={"type": "caffeine"}).json()
        self.assertTrue(first["success"])
        self.assertEqual(first["stimulant"]["name"], "Coffee")
        self.assertTrue(self.client.post(url, json={"type": "nootropic"}).json()["success"])

        overdose = self.client.post(url, json={"type": "energy_drink"})
        self.assertEqual(overdose.status_code, 200)
        self.assertFalse(overdose.json()["success"])
        self.assertEqual(overdose.json()["message"], "Too many active stimulants - risk of overdose")

        unknown = self.client.post(url, json={"type": "adrenaline"}).json()
        self.assertEqual(unknown["message"], "Unknown stimulant type")

    def test_typos_and_delay_without_effects(self):
        session_id = self.create()
        typo = self.client.post(f"/sessions/{session_id}/typos", json={"command": "exploit"}).json()
        self.assertEqual(typo, {"command": "exploit", "modified": "exploit"})
        delay = self.client.get(f"/sessions/{session_id}/delay").json()
        self.assertEqual(delay, {"delay_ms": 0})

    def test_reset(self):
        session_id = self.create()
        self.registry.require(session_id).engine.state.current = 3
        self.client.post(f"/sessions/{session_id}/consume", json={"command": "exploit"})
        body = self.client.post(f"/sessions/{session_id}/reset").json()
        self.assertEqual(body["current"], 100)
        self.assertFalse(body["is_overloaded"])
        self.assertEqual(body["effects"], [])

    def test_delete_stops_engine(self):
        session_id = self.create()
        engine = self.registry.require(session_id).engine
        response = self.client.delete(f"/sessions/{session_id}")
        self.assertEqual(response.status_code, 204)
        self.assertFalse(engine.is_running)
        self.assertEqual(self.client.get(f"/sessions/{session_id}").status_code, 404)

if __name__ == '__main__':
    unittest.main()
