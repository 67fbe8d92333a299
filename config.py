# config.py
"""
Server configuration settings.
"""

HOST = "0.0.0.0"  # Listen on all available network interfaces
PORT = 4000       # Port for terminal clients to connect to
ENCODING = "utf-8" # Encoding for network communication

# --- Game Loop ---
TICKER_INTERVAL_SECONDS = 1.0     # How often focus regeneration runs.

# --- Focus Pool ---
FOCUS_MAXIMUM = 100.0
BASE_DRAIN_RATE = 1.0
BASE_REGEN_RATE = 0.5             # Focus points restored per tick while idle
OVERLOAD_THRESHOLD = 20.0
REGEN_IDLE_MS = 5000              # No regen within this window after an action

# --- Overload & Effects ---
OVERLOAD_DRAIN_MULTIPLIER = 1.5
OVERLOAD_REGEN_MULTIPLIER = 0.5
LOW_FOCUS_MINOR_EFFECT_LEVEL = 30 # Below this, minor effects can roll
MINOR_EFFECT_CHANCE = 0.3
COMMAND_DELAY_MS_PER_SEVERITY = 500

# --- Stimulants ---
MAX_ACTIVE_STIMULANTS = 2

# --- Sessions ---
STARTING_CREDITS = 500
CONSECUTIVE_RESET_MS = 10000      # Idle gap that ends a run of consecutive commands

# --- Input ---
MAX_INPUT_LENGTH = 512
MAX_HANDLE_LENGTH = 24
