# focus/definitions/stimulants.py
"""
Catalog of stimulants a player can use to restore focus.
Durations are in milliseconds, costs in credits.
"""
from typing import Dict, Any, Optional

# --- Stimulant Type Constants ---
CAFFEINE = "caffeine"
NOOTROPIC = "nootropic"
ENERGY_DRINK = "energy_drink"
MEDITATION = "meditation"
BREAK = "break"

# Applying one of these also clears overload and wipes all active effects.
RESETTING_TYPES = {MEDITATION, BREAK}

STIMULANTS: Dict[str, Dict[str, Any]] = {
    CAFFEINE: {
        "name": "Coffee",
        "focus_boost": 20,
        "duration": 300000, # 5 minutes
        "side_effects": ["Jitters", "Crash after effect"],
        "cost": 50,
    },
    NOOTROPIC: {
        "name": "Nootropic Supplement",
        "focus_boost": 35,
        "duration": 600000, # 10 minutes
        "side_effects": ["Mild headache"],
        "cost": 150,
    },
    ENERGY_DRINK: {
        "name": "Energy Drink",
        "focus_boost": 30,
        "duration": 240000, # 4 minutes
        "side_effects": ["Heart palpitations", "Severe crash"],
        "cost": 75,
    },
    MEDITATION: {
        "name": "Deep Focus Meditation",
        "focus_boost": 50,
        "duration": 900000, # 15 minutes
        "side_effects": [],
        "cost": 0,
    },
    BREAK: {
        "name": "Short Break",
        "focus_boost": 25,
        "duration": 180000, # 3 minutes
        "side_effects": [],
        "cost": 0,
    },
}

# Terminal shortcuts, e.g. "stim coffee"
STIMULANT_ALIASES: Dict[str, str] = {
    "coffee": CAFFEINE, "caffeine": CAFFEINE,
    "nootropic": NOOTROPIC, "pill": NOOTROPIC,
    "energy": ENERGY_DRINK, "energy_drink": ENERGY_DRINK,
    "meditate": MEDITATION, "meditation": MEDITATION,
    "break": BREAK, "rest": BREAK,
}

def get_stimulant_data(stimulant_type: str) -> Optional[Dict[str, Any]]:
    return STIMULANTS.get(stimulant_type)

def resolve_alias(name: str) -> Optional[str]:
    return STIMULANT_ALIASES.get(name.lower().strip())
