# focus/utils.py
"""
General utility functions for terminal output.
"""
import random
import logging
from typing import Optional, Tuple

from .definitions import colors as color_defs

log = logging.getLogger(__name__)

# Glyphs substituted into output while the player is hallucinating
GLITCH_GLYPHS = "#@%&$!?~^*"

def colorize(text: str) -> str:
    """
    Replaces custom color codes (e.g., <R>, <x>) in text with ANSI escape codes.
    """
    output = text
    for code, ansi_sequence in color_defs.COLOR_MAP.items():
        output = output.replace(code, ansi_sequence)
    return output

def parse_input(raw_input: str) -> Tuple[str, str]:
    """Splits raw input into a command verb and arguments string."""
    stripped_input = raw_input.strip()
    if not stripped_input:
        return "", ""
    parts = stripped_input.split(" ", 1)
    return parts[0].lower(), parts[1].strip() if len(parts) > 1 else ""

def focus_color(percent: float) -> str:
    for floor, code in color_defs.FOCUS_BAND_COLORS:
        if percent > floor:
            return code
    return color_defs.FOCUS_CRITICAL_COLOR

def focus_bar(percent: float, width: int = 20) -> str:
    """Renders a colored bar such as [##########----------]."""
    percent = max(0.0, min(100.0, percent))
    filled = int(round(width * percent / 100))
    return f"[{focus_color(percent)}{'#' * filled}<K>{'-' * (width - filled)}<x>]"

def format_duration(ms: float) -> str:
    """Formats milliseconds as 1m05s or 12s."""
    seconds = int(max(0, ms) // 1000)
    minutes, seconds = divmod(seconds, 60)
    if minutes:
        return f"{minutes}m{seconds:02d}s"
    return f"{seconds}s"

def format_credits(amount: int) -> str:
    return f"{amount:,} cr"

def distort_output(text: str, severity: int, rng: Optional[random.Random] = None) -> str:
    """
    Garbles terminal output. Each non-space character is replaced by a glitch
    glyph with probability severity * 2%.
    """
    rng = rng or random.Random()
    chance = max(0, min(10, severity)) * 0.02
    chars = []
    for char in text:
        if char not in " \r\n" and rng.random() < chance:
            chars.append(rng.choice(GLITCH_GLYPHS))
        else:
            chars.append(char)
    return "".join(chars)
