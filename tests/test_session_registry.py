# tests/test_session_registry.py
import unittest
import asyncio
import sys
import os
from unittest.mock import MagicMock, AsyncMock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import config
from focus import ticker
from focus.registry import SessionRegistry, SessionNotFoundError

class FakeClock:
    def __init__(self, start=500_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms

def make_writer():
    writer = MagicMock(spec=asyncio.StreamWriter)
    writer.drain = AsyncMock()
    writer.is_closing.return_value = False
    return writer

class TestPlayerSession(unittest.TestCase):
    """Test suite for per-player command pacing and credits."""

    def setUp(self):
        self.clock = FakeClock()
        self.registry = SessionRegistry(clock=self.clock, seed=5)
        self.session = self.registry.create_session("Case", autostart=False)

    def tearDown(self):
        self.registry.shutdown()

    def test_consecutive_actions_form_runs(self):
        self.assertEqual(self.session.next_context().consecutive_actions, 1)
        self.clock.advance(2000)
        self.assertEqual(self.session.next_context().consecutive_actions, 2)
        self.clock.advance(config.CONSECUTIVE_RESET_MS)
        self.assertEqual(self.session.next_context().consecutive_actions, 3)
        self.clock.advance(config.CONSECUTIVE_RESET_MS + 1)
        self.assertEqual(self.session.next_context().consecutive_actions, 1)
        self.assertEqual(self.session.commands_issued, 4)

    def test_time_spent_measures_from_prompt(self):
        self.assertIsNone(self.session.next_context().time_spent)
        self.session.mark_prompt()
        self.clock.advance(31000)
        self.assertEqual(self.session.next_context().time_spent, 31000)

    def test_spend_credits(self):
        self.assertEqual(self.session.credits, config.STARTING_CREDITS)
        self.assertTrue(self.session.spend_credits(150))
        self.assertEqual(self.session.credits, config.STARTING_CREDITS - 150)
        self.assertFalse(self.session.spend_credits(10_000))
        self.assertEqual(self.session.credits, config.STARTING_CREDITS - 150)

    def test_history_is_bounded(self):
        for i in range(60):
            self.session.remember(f"ping host{i}")
        self.assertEqual(len(self.session.history), 50)
        self.assertEqual(self.session.history[-1], "ping host59")

    def test_summary(self):
        summary = self.session.summary()
        self.assertEqual(summary["handle"], "Case")
        self.assertEqual(summary["focus"], 100.0)
        self.assertEqual(summary["status"], "sharp")
        self.assertFalse(summary["is_overloaded"])
        self.assertFalse(summary["connected"])

class TestSessionSend(unittest.IsolatedAsyncioTestCase):
    """Test suite for terminal output."""

    async def test_send_colorizes_and_terminates_lines(self):
        registry = SessionRegistry(clock=FakeClock())
        writer = make_writer()
        session = registry.create_session("Molly", writer=writer, autostart=False)
        await session.send("<g>ok<x>")
        writer.write.assert_called_once_with("\x1b[1;32mok\x1b[0m\r\n".encode(config.ENCODING))
        writer.drain.assert_awaited_once()

    async def test_send_without_terminal_is_dropped(self):
        registry = SessionRegistry(clock=FakeClock())
        session = registry.create_session("Armitage", autostart=False)
        await session.send("nobody hears this")

    async def test_broadcast_skips_excluded(self):
        registry = SessionRegistry(clock=FakeClock())
        first = registry.create_session("Riviera", writer=make_writer(), autostart=False)
        second = registry.create_session("Maelcum", writer=make_writer(), autostart=False)
        await registry.broadcast("hello", exclude={first})
        first.writer.write.assert_not_called()
        second.writer.write.assert_called_once()

class TestSessionRegistry(unittest.TestCase):
    """Test suite for session lifecycle."""

    def setUp(self):
        self.registry = SessionRegistry(clock=FakeClock(), seed=9)

    def tearDown(self):
        self.registry.shutdown()

    def test_create_starts_engine_and_remove_stops_it(self):
        session = self.registry.create_session("Wintermute")
        self.assertIn(session.id, self.registry)
        self.assertTrue(session.engine.is_running)
        self.assertTrue(ticker.is_subscribed(session.engine.on_tick))

        removed = self.registry.remove_session(session.id)
        self.assertIs(removed, session)
        self.assertFalse(session.engine.is_running)
        self.assertFalse(ticker.is_subscribed(session.engine.on_tick))
        self.assertIsNone(self.registry.remove_session(session.id))

    def test_sessions_have_independent_engines(self):
        first = self.registry.create_session("Dixie")
        second = self.registry.create_session("Flatline")
        first.engine.consume_focus("backdoor")
        self.assertEqual(first.engine.state.current, 80)
        self.assertEqual(second.engine.state.current, 100)

    def test_lookup(self):
        session = self.registry.create_session("Neuromancer")
        self.assertIs(self.registry.get(session.id), session)
        self.assertIs(self.registry.require(session.id), session)
        self.assertIs(self.registry.find_by_handle("NEUROMANCER"), session)
        self.assertIsNone(self.registry.find_by_handle("nobody"))
        self.assertIsNone(self.registry.get("missing"))
        with self.assertRaises(SessionNotFoundError):
            self.registry.require("missing")

    def test_shutdown_stops_everything(self):
        sessions = [self.registry.create_session(f"op{i}") for i in range(3)]
        self.registry.shutdown()
        self.assertEqual(len(self.registry), 0)
        for session in sessions:
            self.assertFalse(session.engine.is_running)

if __name__ == '__main__':
    unittest.main()
