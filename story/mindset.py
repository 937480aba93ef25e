"""
Digital Archaeology - Mindset Module

The "you are THERE" perspective for the active historical era:
- Current year
- Known vs unknown technology
- What the people of the era know and cannot know

The MindsetStore holds at most one MindsetContext at a time. Entering a new
era replaces it wholesale; nothing is merged. The store is owned by the
story session and passed to whoever needs it.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Callable, Tuple

from technology_timeline import TechnologyTimeline

logger = logging.getLogger(__name__)


class MindsetEvent(Enum):
    """Notifications sent to store listeners"""
    ESTABLISHED = "mindset_established"   # First context set
    CHANGED = "mindset_changed"           # Context swapped for another
    CLEARED = "mindset_cleared"           # Context dropped


@dataclass
class HistoricalPerspective:
    """Display text only - the filter never reads this"""
    current_knowledge: str = ""
    future_blind: str = ""

    def to_dict(self) -> Dict:
        return {
            "currentKnowledge": self.current_knowledge,
            "futureBlind": self.future_blind,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "HistoricalPerspective":
        return cls(
            current_knowledge=data.get("currentKnowledge", ""),
            future_blind=data.get("futureBlind", ""),
        )


@dataclass
class MindsetContext:
    """
    Point-in-time knowledge for one era.

    `year` may be negative (BC). Anything in `unknown_technology` must never
    reach the reader unfiltered, whatever the year says.
    """

    year: int
    known_technology: List[str] = field(default_factory=list)
    unknown_technology: List[str] = field(default_factory=list)

    # Display data for the era panels
    active_problems: List[Dict] = field(default_factory=list)
    constraints: List[Dict] = field(default_factory=list)
    impossibilities: List[str] = field(default_factory=list)
    historical_perspective: HistoricalPerspective = field(default_factory=HistoricalPerspective)

    def to_dict(self) -> Dict:
        """Serialize using story content keys"""
        return {
            "year": self.year,
            "knownTechnology": list(self.known_technology),
            "unknownTechnology": list(self.unknown_technology),
            "activeProblems": list(self.active_problems),
            "constraints": list(self.constraints),
            "impossibilities": list(self.impossibilities),
            "historicalPerspective": self.historical_perspective.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "MindsetContext":
        """Deserialize from story content"""
        return cls(
            year=int(data["year"]),
            known_technology=list(data.get("knownTechnology", [])),
            unknown_technology=list(data.get("unknownTechnology", [])),
            active_problems=list(data.get("activeProblems", [])),
            constraints=list(data.get("constraints", [])),
            impossibilities=list(data.get("impossibilities", [])),
            historical_perspective=HistoricalPerspective.from_dict(
                data.get("historicalPerspective", {})
            ),
        )


@dataclass(frozen=True)
class MindsetSnapshot:
    """What a filter needs from the store, read once per operation"""
    year: int
    unknown_technology: Tuple[str, ...]

    def knows_nothing_of(self, term: str) -> bool:
        """Case-insensitive unknown-technology membership"""
        key = term.lower()
        return any(tech.lower() == key for tech in self.unknown_technology)


MindsetListener = Callable[[MindsetEvent, Dict], None]


class MindsetStore:
    """
    Holds the current MindsetContext and tells listeners when it changes.

    No accessor raises; before a context is set, get_current_mindset() and
    snapshot() return None.
    """

    def __init__(self, timeline: Optional[TechnologyTimeline] = None):
        self._current: Optional[MindsetContext] = None
        self._listeners: List[MindsetListener] = []
        self.timeline = timeline or TechnologyTimeline()

    # ==================== Context ====================

    def set_mindset(self, context: MindsetContext):
        """Replace the stored context"""
        previous = self._current
        self._current = context
        logger.info(f"Mindset set to year {context.year}")

        if previous is None:
            self._dispatch(MindsetEvent.ESTABLISHED, {"mindset": context})
        else:
            self._dispatch(MindsetEvent.CHANGED, {"previous": previous, "current": context})

    def get_current_mindset(self) -> Optional[MindsetContext]:
        return self._current

    def clear_mindset(self):
        """Empty the store. Clearing an empty store is silent."""
        if self._current is None:
            return
        previous = self._current
        self._current = None
        logger.info(f"Mindset for year {previous.year} cleared")
        self._dispatch(MindsetEvent.CLEARED, {"previous": previous})

    def current_year(self, default: Optional[int] = None) -> Optional[int]:
        if self._current is None:
            return default
        return self._current.year

    def snapshot(self) -> Optional[MindsetSnapshot]:
        """Freeze year + unknown technology so one call sees one era"""
        current = self._current
        if current is None:
            return None
        return MindsetSnapshot(
            year=current.year,
            unknown_technology=tuple(current.unknown_technology),
        )

    # ==================== Timeline lookups ====================

    def is_anachronism(self, concept: str, year: Optional[int] = None) -> bool:
        """
        Whether a concept is out of place for the current (or given) year.

        Unknown technology always is. Otherwise the technology timeline
        decides, which needs a year to work with.
        """
        snapshot = self.snapshot()
        if snapshot is not None and snapshot.knows_nothing_of(concept):
            return True

        check_year = year if year is not None else (snapshot.year if snapshot else None)
        if check_year is None:
            return False
        return self.timeline.is_anachronism(concept, check_year)

    def get_period_term(self, concept: str) -> str:
        """Era-appropriate word for a concept, or the concept itself"""
        year = self.current_year()
        if year is None:
            return concept
        return self.timeline.get_period_term(concept, year)

    # ==================== Listeners ====================

    def subscribe(self, listener: MindsetListener):
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: MindsetListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _dispatch(self, event: MindsetEvent, payload: Dict):
        for listener in list(self._listeners):
            try:
                listener(event, payload)
            except Exception as e:
                logger.error(f"Mindset listener failed on {event.value}: {e}")

    # ==================== Lifecycle ====================

    def reset(self):
        """Drop context, listeners and timeline data"""
        self._current = None
        self._listeners = []
        self.timeline.clear()
