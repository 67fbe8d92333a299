# focus/definitions/effects.py
"""
Central definitions for focus effect (debuff) types and their descriptions.
"""
from typing import Dict, List, Tuple

# --- Effect Type Constants ---
COMMAND_DELAY = "command_delay"
HALLUCINATION = "hallucination"
TYPO_INJECTION = "typo_injection"
FALSE_POSITIVE = "false_positive"
MEMORY_LOSS = "memory_loss"

OVERLOAD_TYPES: List[str] = [
    COMMAND_DELAY, HALLUCINATION, TYPO_INJECTION, FALSE_POSITIVE, MEMORY_LOSS
]
MINOR_TYPES: List[str] = [COMMAND_DELAY, TYPO_INJECTION]

# --- Roll Ranges (inclusive severity, half-open duration in ms) ---
OVERLOAD_EFFECT_COUNT: Tuple[int, int] = (1, 3)
OVERLOAD_SEVERITY: Tuple[int, int] = (6, 10)
OVERLOAD_DURATION_MS: Tuple[int, int] = (10000, 40000)
MINOR_SEVERITY: Tuple[int, int] = (1, 3)
MINOR_DURATION_MS: Tuple[int, int] = (5000, 15000)

# "type": (overload description, minor description)
_DESCRIPTIONS: Dict[str, Tuple[str, str]] = {
    COMMAND_DELAY: (
        "Severe mental fatigue causing significant command delays",
        "Slight hesitation before executing commands",
    ),
    HALLUCINATION: (
        "Visual distortions in terminal output",
        "Visual distortions in terminal output",
    ),
    TYPO_INJECTION: (
        "Frequent typos and command errors due to exhaustion",
        "Occasional typos in command input",
    ),
    FALSE_POSITIVE: (
        "Misinterpreting scan results and system responses",
        "Misinterpreting scan results and system responses",
    ),
    MEMORY_LOSS: (
        "Difficulty remembering recent actions and discoveries",
        "Difficulty remembering recent actions and discoveries",
    ),
}

def get_description(effect_type: str, is_overload: bool) -> str:
    overload_text, minor_text = _DESCRIPTIONS[effect_type]
    return overload_text if is_overload else minor_text
