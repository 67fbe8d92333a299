# focus/definitions/colors.py
"""
Defines the terminal color codes and their ANSI escape sequence mappings.
"""

# \x1b is the ESC character, [ starts the sequence, m ends it.
# 0=reset, 1=bold; 30-37 foreground colors

COLOR_MAP = {
    # RESET
    "<x>": "\x1b[0m",

    # Foreground
    "<R>": "\x1b[0;31m",  # Red
    "<G>": "\x1b[0;32m",  # Green
    "<Y>": "\x1b[0;33m",  # Amber
    "<C>": "\x1b[0;36m",  # Cyan
    "<W>": "\x1b[0;37m",  # White

    # Bright
    "<K>": "\x1b[1;30m",  # Dark Grey
    "<r>": "\x1b[1;31m",  # Bright Red
    "<g>": "\x1b[1;32m",  # Bright Green
    "<y>": "\x1b[1;33m",  # Bright Amber
    "<m>": "\x1b[1;35m",  # Bright Magenta
    "<c>": "\x1b[1;36m",  # Bright Cyan
}

# Focus bar colors, matched against the focus percentage from the top down
FOCUS_BAND_COLORS = (
    (80, "<g>"),
    (60, "<y>"),
    (40, "<Y>"),
)
FOCUS_CRITICAL_COLOR = "<r>"
