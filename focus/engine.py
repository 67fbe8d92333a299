# focus/engine.py
"""
The focus engine: one mutable focus pool per player session.

Commands spend focus, running low pushes the player into overload which
injects timed debuffs, and focus comes back through idle regeneration
(driven by the global ticker) and stimulants.
"""
import itertools
import logging
import random
import threading
import time
from typing import Callable, List, Optional

import config
from . import ticker
from .costs import calculate_focus_cost
from .models import (
    FocusState, FocusEffect, Stimulant, ConsumeResult, StimulantResult, ContextLike
)
from .definitions import effects as effect_defs
from .definitions import stimulants as stim_defs

log = logging.getLogger(__name__)

Clock = Callable[[], float]

def wall_clock_ms() -> float:
    """Milliseconds since the epoch."""
    return time.time() * 1000.0

DEPLETED_MESSAGE = "Focus depleted! Action executed with severe impairment."

# (percentage floor, message). First band the focus is above wins.
FOCUS_MESSAGES = (
    (80, "Sharp focus maintained"),
    (60, "Focus slightly diminished"),
    (40, "Concentration wavering"),
    (20, "Mental fatigue setting in"),
)
CRITICAL_FOCUS_MESSAGE = "Severe exhaustion - critical focus levels"

# Status bar bands, same floors as the focus panel colors
FOCUS_STATUS_BANDS = (
    (80, "sharp"),
    (60, "diminished"),
    (40, "wavering"),
)
CRITICAL_FOCUS_STATUS = "critical"

class FocusEngine:
    """
    Simulates the focus pool of a single player.

    Args:
        clock: Returns the current time in milliseconds. Defaults to the wall clock.
        rng: Random source for effect rolls and typos. Pass a seeded
            random.Random for reproducible behaviour.
        label: Name used in log messages, usually the player's handle.
    """

    def __init__(self, clock: Optional[Clock] = None, rng: Optional[random.Random] = None,
                 label: str = "anonymous", maximum: float = config.FOCUS_MAXIMUM):
        self.clock: Clock = clock or wall_clock_ms
        self.rng: random.Random = rng or random.Random()
        self.label = label
        self._lock = threading.RLock()
        self._ids = itertools.count(1)
        self._running = False

        self.state = FocusState(
            current=maximum,
            maximum=maximum,
            drain_rate=config.BASE_DRAIN_RATE,
            regen_rate=config.BASE_REGEN_RATE,
            overload_threshold=config.OVERLOAD_THRESHOLD,
            is_overloaded=False,
            last_action=self.clock(),
        )

    def __repr__(self) -> str:
        return f"<FocusEngine {self.label}: {self.state.current:.1f}/{self.state.maximum:.0f}>"

    # --- Lifecycle ---

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self):
        """Subscribes this engine's regeneration to the global ticker."""
        if self._running:
            return
        if ticker.subscribe(self.on_tick):
            self._running = True
            log.debug("Focus engine for %s started.", self.label)

    def stop(self):
        """Unsubscribes from the ticker. Safe to call more than once."""
        if not self._running:
            return
        ticker.unsubscribe(self.on_tick)
        self._running = False
        log.debug("Focus engine for %s stopped.", self.label)

    async def on_tick(self, dt: float):
        """Ticker callback."""
        self.regenerate()

    # --- Costs & Consumption ---

    def calculate_focus_cost(self, command: str, context: ContextLike = None) -> int:
        with self._lock:
            return calculate_focus_cost(self.state, command, context)

    def consume_focus(self, command: str, context: ContextLike = None) -> ConsumeResult:
        """
        Spends focus for a command. Running out never blocks the command: it
        still executes, but the player is pushed into overload.
        """
        with self._lock:
            state = self.state
            cost = calculate_focus_cost(state, command, context)

            if state.current < cost:
                state.current = max(0.0, state.current - cost)
                was_overloaded = state.is_overloaded
                effects = self._trigger_overload()
                log.info("%s ran out of focus on '%s' (cost %d). %d effects applied.",
                         self.label, command, cost, len(effects))
                return ConsumeResult(
                    success=False,
                    focus_used=cost,
                    effects=effects,
                    message=DEPLETED_MESSAGE,
                    overload_triggered=not was_overloaded,
                )

            state.current = max(0.0, state.current - cost)
            state.last_action = self.clock()

            effects: List[FocusEffect] = []
            overload_triggered = False
            if state.current <= state.overload_threshold and not state.is_overloaded:
                effects.extend(self._trigger_overload())
                overload_triggered = True
                log.info("%s is overloaded at %.1f focus.", self.label, state.current)

            if state.current < config.LOW_FOCUS_MINOR_EFFECT_LEVEL and self.rng.random() < config.MINOR_EFFECT_CHANCE:
                effects.append(self._generate_minor_effect())

            log.debug("%s used %d focus on '%s' (%.1f left).", self.label, cost, command, state.current)
            return ConsumeResult(
                success=True,
                focus_used=cost,
                effects=effects,
                message=self._focus_message(),
                overload_triggered=overload_triggered,
            )

    def _trigger_overload(self) -> List[FocusEffect]:
        state = self.state
        state.is_overloaded = True
        # Compounds when re-triggered before a clear
        state.drain_rate *= config.OVERLOAD_DRAIN_MULTIPLIER
        state.regen_rate *= config.OVERLOAD_REGEN_MULTIPLIER
        return self._generate_overload_effects()

    def _generate_overload_effects(self) -> List[FocusEffect]:
        now = self.clock()
        effects = []
        for _ in range(self.rng.randint(*effect_defs.OVERLOAD_EFFECT_COUNT)):
            effect_type = self.rng.choice(effect_defs.OVERLOAD_TYPES)
            effect = FocusEffect(
                id=self._next_id("effect", now),
                type=effect_type,
                severity=self.rng.randint(*effect_defs.OVERLOAD_SEVERITY),
                duration=self.rng.randrange(*effect_defs.OVERLOAD_DURATION_MS),
                start_time=now,
                description=effect_defs.get_description(effect_type, True),
            )
            effects.append(effect)
            self.state.effects.append(effect)
        return effects

    def _generate_minor_effect(self) -> FocusEffect:
        now = self.clock()
        effect_type = self.rng.choice(effect_defs.MINOR_TYPES)
        effect = FocusEffect(
            id=self._next_id("effect", now),
            type=effect_type,
            severity=self.rng.randint(*effect_defs.MINOR_SEVERITY),
            duration=self.rng.randrange(*effect_defs.MINOR_DURATION_MS),
            start_time=now,
            description=effect_defs.get_description(effect_type, False),
        )
        self.state.effects.append(effect)
        return effect

    def _next_id(self, prefix: str, now: float) -> str:
        return f"{prefix}_{int(now)}_{next(self._ids)}"

    def _focus_message(self) -> str:
        percent = self.get_focus_percentage()
        for floor, message in FOCUS_MESSAGES:
            if percent > floor:
                return message
        return CRITICAL_FOCUS_MESSAGE

    # --- Stimulants ---

    def use_stimulant(self, stimulant_type: str) -> StimulantResult:
        """Applies a stimulant. At most two may be active at once."""
        with self._lock:
            data = stim_defs.get_stimulant_data(stimulant_type)
            if not data:
                return StimulantResult(success=False, message="Unknown stimulant type")

            now = self.clock()
            # Counted, not evicted: expired entries stay until the next sweep
            active = [s for s in self.state.stimulants if s.is_active(now)]
            if len(active) >= config.MAX_ACTIVE_STIMULANTS:
                log.warning("%s refused %s: %d stimulants already active.", self.label, stimulant_type, len(active))
                return StimulantResult(success=False, message="Too many active stimulants - risk of overdose")

            stimulant = Stimulant(
                id=self._next_id("stim", now),
                name=data["name"],
                type=stimulant_type,
                focus_boost=data["focus_boost"],
                duration=data["duration"],
                side_effects=list(data["side_effects"]),
                applied_at=now,
                cost=data["cost"],
            )

            state = self.state
            state.current = min(state.maximum, state.current + stimulant.focus_boost)
            state.stimulants.append(stimulant)

            if stimulant_type in stim_defs.RESETTING_TYPES:
                self._clear_overload()
                state.effects = []

            log.info("%s used %s (+%d focus).", self.label, stimulant.name, stimulant.focus_boost)
            return StimulantResult(
                success=True,
                stimulant=stimulant,
                message=f"{stimulant.name} applied. Focus restored by {stimulant.focus_boost} points.",
            )

    def _clear_overload(self):
        state = self.state
        state.is_overloaded = False
        state.drain_rate = config.BASE_DRAIN_RATE
        state.regen_rate = config.BASE_REGEN_RATE

    # --- Regeneration ---

    def prune_expired(self):
        """Drops expired effects and stimulants."""
        with self._lock:
            now = self.clock()
            self.state.effects = [e for e in self.state.effects if e.is_active(now)]
            self.state.stimulants = [s for s in self.state.stimulants if s.is_active(now)]

    def regenerate(self):
        """One regeneration tick."""
        with self._lock:
            self.prune_expired()
            state = self.state

            if self.clock() - state.last_action <= config.REGEN_IDLE_MS:
                return

            state.current = min(state.maximum, state.current + state.regen_rate)

            # Overload only wears off during passive regeneration
            if state.is_overloaded and state.current > state.overload_threshold * 2:
                self._clear_overload()
                log.info("%s recovered from overload at %.1f focus.", self.label, state.current)

    def reset_focus(self):
        """Restores a full, clean focus pool."""
        with self._lock:
            state = self.state
            state.current = state.maximum
            self._clear_overload()
            state.effects = []
            state.stimulants = []
            log.info("Focus reset for %s.", self.label)

    # --- Read Views ---

    def get_state(self) -> FocusState:
        """Returns a shallow copy of the state after sweeping expired items."""
        with self._lock:
            self.prune_expired()
            state = self.state
            return FocusState(
                current=state.current,
                maximum=state.maximum,
                drain_rate=state.drain_rate,
                regen_rate=state.regen_rate,
                overload_threshold=state.overload_threshold,
                is_overloaded=state.is_overloaded,
                last_action=state.last_action,
                effects=list(state.effects),
                stimulants=list(state.stimulants),
            )

    def get_active_effects(self) -> List[FocusEffect]:
        with self._lock:
            now = self.clock()
            return [e for e in self.state.effects if e.is_active(now)]

    def get_active_stimulants(self) -> List[Stimulant]:
        with self._lock:
            now = self.clock()
            return [s for s in self.state.stimulants if s.is_active(now)]

    def get_focus_percentage(self) -> float:
        return self.state.efficiency * 100

    def focus_status(self) -> str:
        percent = self.get_focus_percentage()
        for floor, status in FOCUS_STATUS_BANDS:
            if percent > floor:
                return status
        return CRITICAL_FOCUS_STATUS

    def get_command_delay(self) -> int:
        """
        Milliseconds the caller should wait before showing command output.
        The engine never sleeps itself.
        """
        delays = [e.severity for e in self.get_active_effects() if e.type == effect_defs.COMMAND_DELAY]
        if not delays:
            return 0
        return max(delays) * config.COMMAND_DELAY_MS_PER_SEVERITY

    def apply_command_effects(self, command: str) -> str:
        """Returns the command as the player actually typed it under typo effects."""
        with self._lock:
            modified = command
            for effect in self.get_active_effects():
                if effect.type == effect_defs.TYPO_INJECTION and self.rng.random() < effect.severity * 0.1:
                    modified = self._inject_typo(modified)
            return modified

    def _inject_typo(self, command: str) -> str:
        if len(command) < 3:
            return command
        chars = list(command)
        index = self.rng.randrange(len(chars))
        chars[index] = chr(ord("a") + self.rng.randrange(26))
        return "".join(chars)
