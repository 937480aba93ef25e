"""
Digital Archaeology - Configuration Module

All tunable story-mode parameters live here. Adjust these to change how
narrative text is filtered without touching filter logic.
"""

import os

# =============================================================================
# FILTER OUTPUT
# =============================================================================

# Mode used when analyze() is called without one: find matches, keep text
DEFAULT_FILTER_MODE = "analyze"

# Mode used when scene content is filtered for display
SCENE_FILTER_MODE = "replace"

FLAG_TEMPLATE = "[ANACHRONISM: {term}]"
REMOVE_PLACEHOLDER = "[...]"
HIGHLIGHT_TEMPLATE = "**{term}**"

# =============================================================================
# ERA TERMS (seed table for create_era_filter)
# =============================================================================

# (term, year introduced, period-accurate replacement or None)
ERA_TERMS = [
    ("internet", 1990, "ARPANET"),
    ("smartphone", 2007, "mobile phone"),
    ("cloud computing", 2006, "timesharing"),
    ("web browser", 1990, None),
    ("email", 1971, "electronic mail"),
    ("personal computer", 1975, "minicomputer"),
    ("laptop", 1981, "portable computer"),
    ("USB", 1996, "serial port"),
    ("SSD", 2000, "disk drive"),
    ("Wi-Fi", 1999, "wireless network"),
    ("Bluetooth", 1998, "infrared link"),
    ("GPS", 1993, "navigation system"),
    ("touchscreen", 1982, "display"),
    ("flash memory", 1984, "EPROM"),
    ("gigabyte", 1980, "megabyte"),
    ("terabyte", 1997, "gigabyte"),
]

# =============================================================================
# TECHNOLOGY TIMELINE
# =============================================================================

DEFAULT_TIMELINE_PATH = os.path.join(
    os.path.dirname(__file__), "data", "technology-timeline.json"
)
TECHNOLOGY_TIMELINE_PATH = os.environ.get("TECHNOLOGY_TIMELINE_PATH", DEFAULT_TIMELINE_PATH)

# =============================================================================
# SERVER SETTINGS
# =============================================================================

SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE", "threading")
SESSION_SECRET = os.environ.get("SESSION_SECRET")

# =============================================================================
# DEBUG SETTINGS (Development Only)
# =============================================================================

# Set DEBUG_ERA to a valid era ID to start with that era's mindset
# Only works when DEBUG_MODE is also True
DEBUG_MODE = os.environ.get("DEBUG_MODE", "").lower() == "true"
DEBUG_ERA = os.environ.get("DEBUG_ERA", "")

# Valid era IDs for validation (prevents arbitrary input)
VALID_ERA_IDS = [
    "eniac_1946",
    "transistor_1955",
    "mainframe_1964",
    "intel_4004_1971",
    "altair_1975",
    "ibm_pc_1981",
    "world_wide_web_1993",
]


def get_debug_era_id():
    """Returns validated debug era ID or None if not in debug mode"""
    if DEBUG_MODE and DEBUG_ERA and DEBUG_ERA in VALID_ERA_IDS:
        return DEBUG_ERA
    return None
