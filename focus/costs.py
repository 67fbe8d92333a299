# focus/costs.py
"""
Handles the logic for pricing a command in focus points.
"""
import math
from typing import Mapping

from .models import FocusState, CostContext, ContextLike
from .definitions import actions as action_defs

# --- Context Modifiers ---
LONG_TASK_MS = 30000
LONG_TASK_MULTIPLIER = 1.5
DIFFICULTY_STEP = 0.2
PRESSURE_STEP = 0.1
FATIGUE_FREE_ACTIONS = 5
FATIGUE_STEP = 0.1

# --- State Modifiers ---
OVERLOAD_MULTIPLIER = 2.0
# (efficiency ceiling, multiplier). Only the first matching band applies.
EFFICIENCY_BANDS = (
    (0.3, 1.8),
    (0.5, 1.4),
)

def _coerce_context(context: ContextLike) -> CostContext:
    if context is None:
        return CostContext()
    if isinstance(context, CostContext):
        return context
    if isinstance(context, Mapping):
        return CostContext.from_mapping(context)
    raise TypeError(f"Unsupported cost context: {type(context).__name__}")

def apply_context_modifiers(cost: float, context: CostContext) -> float:
    """Compounds situational multipliers in a fixed order."""
    if context.time_spent and context.time_spent > LONG_TASK_MS:
        cost *= LONG_TASK_MULTIPLIER
    if context.difficulty:
        cost *= (1 + context.difficulty * DIFFICULTY_STEP)
    if context.pressure:
        cost *= (1 + context.pressure * PRESSURE_STEP)
    if context.consecutive_actions and context.consecutive_actions > FATIGUE_FREE_ACTIONS:
        cost *= (1 + (context.consecutive_actions - FATIGUE_FREE_ACTIONS) * FATIGUE_STEP)
    return cost

def efficiency_multiplier(state: FocusState) -> float:
    efficiency = state.efficiency
    for ceiling, multiplier in EFFICIENCY_BANDS:
        if efficiency < ceiling:
            return multiplier
    return 1.0

def calculate_focus_cost(state: FocusState, command: str, context: ContextLike = None) -> int:
    """
    Calculates the focus cost of a command against a snapshot of focus state.

    Args:
        state: The focus state the command is issued from. Overload and the
            current focus level both raise the cost.
        command: The command verb, e.g. "scan".
        context: Optional CostContext or mapping with time_spent, difficulty,
            pressure and consecutive_actions.

    Returns:
        The cost rounded up to a whole number of focus points.
    """
    action = action_defs.get_action(command)
    cost = float(action.base_cost)

    cost = apply_context_modifiers(cost, _coerce_context(context))

    if state.is_overloaded:
        cost *= OVERLOAD_MULTIPLIER

    cost *= efficiency_multiplier(state)

    return math.ceil(cost)
