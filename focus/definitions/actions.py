# focus/definitions/actions.py
"""
Defines the base focus cost of every terminal command.
Keys in ACTIONS are the lowercase command verbs typed by the player.
"""
from typing import Dict

from ..models import FocusAction

# --- Command Categories ---
CATEGORY_BASIC = "BASIC"
CATEGORY_RECON = "RECON"
CATEGORY_EXPLOIT = "EXPLOIT"
CATEGORY_ADVANCED = "ADVANCED"
CATEGORY_STEALTH = "STEALTH"
CATEGORY_SOCIAL = "SOCIAL"
CATEGORY_SYSADMIN = "SYSADMIN"
# Shown for commands missing from the table
CATEGORY_UNLISTED = "UNLISTED"

# Used for any command missing from the table below.
DEFAULT_BASE_COST = 5
DEFAULT_COMPLEXITY = 3
DEFAULT_STRESS_LEVEL = 3

# --- Action Cost Data ---
# Structure:
# "command": (base_cost, complexity 1-10, stress_level 1-10, category)
_ACTION_DATA = {
    # Basic commands
    "help": (1, 1, 1, CATEGORY_BASIC),
    "ls": (2, 2, 1, CATEGORY_BASIC),
    "cd": (1, 1, 1, CATEGORY_BASIC),
    "pwd": (1, 1, 1, CATEGORY_BASIC),

    # Network scanning
    "ping": (3, 3, 2, CATEGORY_RECON),
    "nmap": (8, 6, 4, CATEGORY_RECON),
    "scan": (5, 4, 3, CATEGORY_RECON),

    # Exploitation
    "exploit": (15, 8, 7, CATEGORY_EXPLOIT),
    "inject": (12, 7, 6, CATEGORY_EXPLOIT),
    "crack": (10, 6, 5, CATEGORY_EXPLOIT),

    # Advanced operations
    "backdoor": (20, 9, 8, CATEGORY_ADVANCED),
    "exfiltrate": (18, 8, 7, CATEGORY_ADVANCED),
    "pivot": (16, 7, 6, CATEGORY_ADVANCED),

    # Stealth operations
    "stealth": (14, 7, 8, CATEGORY_STEALTH),
    "cover_tracks": (12, 6, 7, CATEGORY_STEALTH),
    "spoof": (10, 5, 5, CATEGORY_STEALTH),

    # Social engineering
    "phish": (8, 5, 6, CATEGORY_SOCIAL),
    "social_engineer": (12, 7, 8, CATEGORY_SOCIAL),

    # System administration
    "sudo": (6, 4, 5, CATEGORY_SYSADMIN),
    "chmod": (3, 3, 2, CATEGORY_SYSADMIN),
    "ps": (2, 2, 1, CATEGORY_SYSADMIN),
    "kill": (4, 3, 4, CATEGORY_SYSADMIN),
}

ACTIONS: Dict[str, FocusAction] = {
    command: FocusAction(command=command, base_cost=base, complexity=cx, stress_level=stress)
    for command, (base, cx, stress, _category) in _ACTION_DATA.items()
}

ACTION_CATEGORIES: Dict[str, str] = {
    command: data[3] for command, data in _ACTION_DATA.items()
}

def get_category(command: str) -> str:
    return ACTION_CATEGORIES.get(command, CATEGORY_UNLISTED)

def get_action(command: str) -> FocusAction:
    """Returns the cost profile for a command, falling back to the default profile."""
    action = ACTIONS.get(command)
    if action:
        return action
    return FocusAction(
        command=command,
        base_cost=DEFAULT_BASE_COST,
        complexity=DEFAULT_COMPLEXITY,
        stress_level=DEFAULT_STRESS_LEVEL,
    )
