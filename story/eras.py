"""
Era definitions for Digital Archaeology
Seven eras spanning the history of computing, from ENIAC to the Web

Each era includes:
- The year and place the story is set
- What the people there already know (known_technology)
- What they cannot know yet (unknown_technology)
- Perspective text for the era context panel
"""

from config import ERA_TERMS
from mindset import MindsetContext, HistoricalPerspective
from anachronism_filter import AnachronismFilter

ERAS = [
    # =========================================================================
    # ERA 1: ENIAC - THE MOORE SCHOOL
    # =========================================================================
    {
        "id": "eniac_1946",
        "name": "ENIAC - The Moore School",
        "year": 1946,
        "location": "Philadelphia, Pennsylvania",
        "known_technology": ["vacuum tube", "relay", "punched card", "plugboard"],
        "unknown_technology": ["transistor", "stored program", "compiler", "operating system"],
        "impossibilities": ["a computer that fits in a room smaller than a gymnasium"],
        "perspective": {
            "current_knowledge": "Eighteen thousand vacuum tubes compute firing tables faster than any human.",
            "future_blind": "Nobody here has heard of a transistor. Programs are wired, not stored.",
        },
    },
    # =========================================================================
    # ERA 2: BELL LABS - THE TRANSISTOR GOES TO WORK
    # =========================================================================
    {
        "id": "transistor_1955",
        "name": "Bell Labs - The Transistor Goes to Work",
        "year": 1955,
        "location": "Murray Hill, New Jersey",
        "known_technology": ["transistor", "vacuum tube", "magnetic core memory", "stored program"],
        "unknown_technology": ["integrated circuit", "microprocessor", "minicomputer"],
        "impossibilities": ["more than one transistor on a single piece of silicon"],
        "perspective": {
            "current_knowledge": "Transistors are replacing tubes in radios and hearing aids.",
            "future_blind": "Putting a whole circuit on one chip is not something anyone is attempting.",
        },
    },
    # =========================================================================
    # ERA 3: IBM SYSTEM/360
    # =========================================================================
    {
        "id": "mainframe_1964",
        "name": "IBM - The System/360 Announcement",
        "year": 1964,
        "location": "Poughkeepsie, New York",
        "known_technology": ["transistor", "magnetic core memory", "compiler", "magnetic tape"],
        "unknown_technology": ["microprocessor", "floppy disk", "email"],
        "impossibilities": ["a computer an individual could own"],
        "perspective": {
            "current_knowledge": "One instruction set across a whole family of machines is a radical bet.",
            "future_blind": "Computers belong to corporations and governments, and always will.",
        },
    },
    # =========================================================================
    # ERA 4: INTEL - THE 4004
    # =========================================================================
    {
        "id": "intel_4004_1971",
        "name": "Intel - The 4004",
        "year": 1971,
        "location": "Santa Clara, California",
        "known_technology": ["transistor", "integrated circuit", "minicomputer"],
        "unknown_technology": ["internet", "smartphone", "cloud computing"],
        "active_problems": [
            {
                "statement": "How to put a computer on a chip?",
                "motivation": "Reduce cost and size",
                "currentApproaches": ["MSI chips", "custom LSI"],
            },
        ],
        "constraints": [
            {
                "type": "technical",
                "description": "Only 2300 transistors fit on a chip",
                "limitation": "2300 transistors",
            },
        ],
        "impossibilities": ["1GB RAM", "GHz clock speeds"],
        "perspective": {
            "current_knowledge": "LSI is cutting edge. A calculator company wants a custom chip set.",
            "future_blind": "You do not know what will happen next.",
        },
    },
    # =========================================================================
    # ERA 5: MITS - THE ALTAIR 8800
    # =========================================================================
    {
        "id": "altair_1975",
        "name": "MITS - The Altair 8800",
        "year": 1975,
        "location": "Albuquerque, New Mexico",
        "known_technology": ["microprocessor", "minicomputer", "floppy disk", "email"],
        "unknown_technology": ["graphical user interface", "mouse", "spreadsheet"],
        "impossibilities": ["a home computer with more than a few kilobytes of memory"],
        "perspective": {
            "current_knowledge": "Hobbyists are ordering a computer kit from the back of a magazine.",
            "future_blind": "Whether anyone but hobbyists will want a computer is an open question.",
        },
    },
    # =========================================================================
    # ERA 6: IBM - THE PERSONAL COMPUTER
    # =========================================================================
    {
        "id": "ibm_pc_1981",
        "name": "IBM - The Personal Computer",
        "year": 1981,
        "location": "Boca Raton, Florida",
        "known_technology": ["microprocessor", "floppy disk", "spreadsheet", "personal computer"],
        "unknown_technology": ["web browser", "CD-ROM"],
        "impossibilities": ["a hard disk measured in gigabytes"],
        "perspective": {
            "current_knowledge": "Off-the-shelf parts and an open design are how IBM will ship in a year.",
            "future_blind": "Nobody expects clones to take over the market.",
        },
    },
    # =========================================================================
    # ERA 7: CERN - THE WORLD WIDE WEB GOES PUBLIC
    # =========================================================================
    {
        "id": "world_wide_web_1993",
        "name": "CERN - The World Wide Web Goes Public",
        "year": 1993,
        "location": "Geneva, Switzerland",
        "known_technology": ["internet", "email", "personal computer", "web browser", "laptop"],
        "unknown_technology": ["search engine", "social network", "streaming video"],
        "impossibilities": ["video calls from a pocket device"],
        "perspective": {
            "current_knowledge": "CERN has just put the Web into the public domain.",
            "future_blind": "The idea that the Web could carry most of the world's commerce sounds absurd.",
        },
    },
]


def get_era_by_id(era_id):
    """Get a specific era by ID"""
    for era in ERAS:
        if era['id'] == era_id:
            return era
    return None


def mindset_for_era(era) -> MindsetContext:
    """Build the MindsetContext a story should use while in `era`"""
    perspective = era.get('perspective', {})
    return MindsetContext(
        year=era['year'],
        known_technology=list(era.get('known_technology', [])),
        unknown_technology=list(era.get('unknown_technology', [])),
        active_problems=list(era.get('active_problems', [])),
        constraints=list(era.get('constraints', [])),
        impossibilities=list(era.get('impossibilities', [])),
        historical_perspective=HistoricalPerspective(
            current_knowledge=perspective.get('current_knowledge', ''),
            future_blind=perspective.get('future_blind', ''),
        ),
    )


def create_era_filter(year, store=None) -> AnachronismFilter:
    """
    A filter pre-loaded with common computing terms and their period
    replacements, evaluating against `year` when no mindset is set.

    Seeded terms go through add_custom_term like any other, so they can be
    overridden by adding the same term again.
    """
    era_filter = AnachronismFilter(store=store, default_year=year)
    for term, introduced_year, replacement in ERA_TERMS:
        era_filter.add_custom_term(term, introduced_year, replacement)
    return era_filter
