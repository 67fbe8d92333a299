# tests/test_ticker.py
import unittest
import asyncio
import sys
import os
from unittest.mock import Mock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from focus import ticker
from focus.engine import FocusEngine

class TestTicker(unittest.IsolatedAsyncioTestCase):
    """Test suite for the global focus ticker."""

    def setUp(self):
        self._saved = set(ticker._callbacks)
        ticker._callbacks.clear()

    async def asyncTearDown(self):
        await ticker.stop_ticker()

    def tearDown(self):
        ticker._callbacks.clear()
        ticker._callbacks.update(self._saved)

    def test_subscribe_rejects_plain_functions(self):
        self.assertFalse(ticker.subscribe(lambda dt: None))
        self.assertEqual(ticker.subscriber_count(), 0)

    def test_subscribe_and_unsubscribe(self):
        async def callback(dt):
            pass
        self.assertTrue(ticker.subscribe(callback))
        self.assertTrue(ticker.is_subscribed(callback))
        ticker.unsubscribe(callback)
        ticker.unsubscribe(callback)
        self.assertFalse(ticker.is_subscribed(callback))

    async def test_failing_callback_does_not_stop_others(self):
        """One raising subscriber is logged, the rest still run."""
        calls = []

        async def good(dt):
            calls.append(dt)

        async def bad(dt):
            raise RuntimeError("boom")

        ticker.subscribe(good)
        ticker.subscribe(bad)
        with self.assertLogs("focus.ticker", level="ERROR"):
            failures = await ticker.run_callbacks(0.5)
        self.assertEqual(failures, 1)
        self.assertEqual(calls, [0.5])

    async def test_run_callbacks_without_subscribers(self):
        self.assertEqual(await ticker.run_callbacks(1.0), 0)

    async def test_ticker_drives_engine_regeneration(self):
        engine = FocusEngine(label="ticked")
        engine.regenerate = Mock()
        engine.start()
        try:
            await ticker.start_ticker(0.01)
            self.assertTrue(ticker.is_running())
            await asyncio.sleep(0.1)
        finally:
            engine.stop()
            await ticker.stop_ticker()
        self.assertFalse(ticker.is_running())
        self.assertGreater(engine.regenerate.call_count, 0)

    async def test_invalid_interval_does_not_start(self):
        await ticker.start_ticker(0)
        self.assertFalse(ticker.is_running())

if __name__ == '__main__':
    unittest.main()
