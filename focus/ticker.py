# focus/ticker.py
"""
Process-wide asynchronous ticker that drives focus regeneration.
Each running FocusEngine subscribes one coroutine callback; the ticker awaits
every subscriber once per interval.
"""
import asyncio
import inspect
import logging
import time
from typing import Callable, Coroutine, Any, Set, Optional, List

log = logging.getLogger(__name__)

# Subscribers receive the delta time (dt) in seconds since the last tick.
TickCallback = Callable[[float], Coroutine[Any, Any, None]]

# --- Module State ---
_callbacks: Set[TickCallback] = set()
_ticker_task: Optional[asyncio.Task] = None
_interval_seconds: float = 1.0

# --- Public API ---
def subscribe(callback: TickCallback) -> bool:
    """Subscribe an async function to be called on each ticker cycle."""
    if not inspect.iscoroutinefunction(callback):
        log.error("Ticker subscription failed: %r is not an async function.", callback)
        return False
    _callbacks.add(callback)
    log.debug("Callback %r subscribed to ticker.", callback)
    return True

def unsubscribe(callback: TickCallback):
    """Unsubscribe an async function from the ticker cycle."""
    _callbacks.discard(callback)
    log.debug("Callback %r unsubscribed from ticker.", callback)

def is_subscribed(callback: TickCallback) -> bool:
    return callback in _callbacks

def subscriber_count() -> int:
    return len(_callbacks)

def is_running() -> bool:
    return _ticker_task is not None and not _ticker_task.done()

async def start_ticker(interval_seconds: float = 1.0):
    """Starts the global ticker task if not already running."""
    global _ticker_task, _interval_seconds

    if is_running():
        log.warning("Ticker task is already running.")
        return

    if interval_seconds <= 0:
        log.error("Ticker interval must be positive. Ticker not started.")
        return

    _interval_seconds = interval_seconds
    log.info("Starting focus ticker with interval: %.2f seconds.", interval_seconds)
    _ticker_task = asyncio.create_task(_run_ticker(), name="FocusTicker")

async def stop_ticker():
    """Stops the global ticker task gracefully."""
    global _ticker_task
    if not is_running():
        log.info("Ticker task is not running or already stopped.")
        _ticker_task = None
        return

    log.info("Stopping focus ticker...")
    _ticker_task.cancel()
    try:
        await asyncio.wait_for(_ticker_task, timeout=5.0)
    except asyncio.CancelledError:
        log.info("Ticker task successfully cancelled.")
    except asyncio.TimeoutError:
        log.warning("Ticker task did not finish cancelling within timeout.")
    except Exception:
        log.exception("Exception during ticker task cancellation:")
    finally:
        _ticker_task = None

async def run_callbacks(delta_time: float) -> int:
    """
    Awaits every subscriber once. Exceptions from individual callbacks are
    logged and do not affect the others.

    Returns:
        The number of callbacks that raised.
    """
    # Copy the set in case callbacks subscribe or unsubscribe while running
    callbacks: List[TickCallback] = list(_callbacks)
    if not callbacks:
        return 0

    results = await asyncio.gather(*(cb(delta_time) for cb in callbacks), return_exceptions=True)
    failures = 0
    for callback, result in zip(callbacks, results):
        if isinstance(result, Exception):
            failures += 1
            log.error("Ticker: Exception in callback %r: %s", callback, result, exc_info=result)
    return failures

# --- Internal Coroutine ---

async def _run_ticker():
    """The main loop that executes subscribed callbacks periodically."""
    log.debug("Ticker loop starting.")
    last_tick_time = time.monotonic()

    while True:
        try:
            await asyncio.sleep(_interval_seconds)

            current_time = time.monotonic()
            delta_time = current_time - last_tick_time
            last_tick_time = current_time

            if not _callbacks:
                continue

            log.debug("Ticker tick! Delta: %.3f s. Processing %d callbacks.", delta_time, len(_callbacks))
            await run_callbacks(delta_time)
        except asyncio.CancelledError:
            log.info("Ticker loop cancelled.")
            break
        except Exception:
            log.exception("Ticker loop encountered unexpected error:")
            # Avoid a tight loop on a persistent error
            await asyncio.sleep(max(5.0, _interval_seconds))

    log.debug("Ticker loop finished.")
