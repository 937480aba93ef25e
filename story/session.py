"""
Digital Archaeology - Story Session Module

Owns the mindset store for one narrative session. Everything that needs
the current era gets it from here rather than from global state.
"""

import logging
from datetime import datetime
from typing import Optional, Dict, Any

from anachronism_filter import AnachronismFilter
from eras import get_era_by_id, mindset_for_era
from mindset import MindsetStore, MindsetContext, MindsetEvent
from scene_filter import SceneFilter
from technology_timeline import TechnologyTimeline

logger = logging.getLogger(__name__)


def emit(msg_type: str, data: Dict[str, Any] = None) -> Dict[str, Any]:
    """Create a standardized message"""
    return {
        "type": msg_type,
        "data": data or {},
        "timestamp": datetime.now().isoformat()
    }


def mindset_message(event: MindsetEvent, payload: Dict) -> Dict[str, Any]:
    """Message for a store notification, with contexts serialized"""
    data = {
        key: value.to_dict() if isinstance(value, MindsetContext) else value
        for key, value in payload.items()
    }
    return emit(event.value, data)


class StorySession:
    """
    One reader's trip through the story.

    Created once per session; enter_era() swaps the mindset when the
    narrative moves on, reset() starts over.
    """

    def __init__(self, timeline_path: Optional[str] = None, load_timeline: bool = True):
        self._timeline_path = timeline_path
        self._load_timeline = load_timeline
        self.timeline = TechnologyTimeline()
        if load_timeline:
            self.timeline.load(timeline_path)
        self.store = MindsetStore(timeline=self.timeline)
        self.current_era_id: Optional[str] = None
        self._listeners = []

    @property
    def mindset(self) -> Optional[MindsetContext]:
        return self.store.get_current_mindset()

    def enter_era(self, era_id: str) -> Optional[MindsetContext]:
        """Switch to a preset era. Returns None for an unknown era id."""
        era = get_era_by_id(era_id)
        if era is None:
            logger.warning(f"Unknown era requested: {era_id}")
            return None

        context = mindset_for_era(era)
        self.store.set_mindset(context)
        self.current_era_id = era_id
        logger.info(f"Entered era {era['name']} ({era['year']})")
        return context

    def set_mindset(self, context: MindsetContext):
        """Switch to a mindset that came from story content"""
        self.store.set_mindset(context)
        self.current_era_id = None

    def clear_mindset(self):
        self.store.clear_mindset()
        self.current_era_id = None

    def new_filter(self, default_year: Optional[int] = None) -> AnachronismFilter:
        return AnachronismFilter(store=self.store, default_year=default_year)

    def scene_filter(self, enabled: bool = True) -> SceneFilter:
        return SceneFilter(self.store, enabled=enabled)

    def subscribe(self, listener):
        """Listen to mindset changes for the life of the session, resets included"""
        self._listeners.append(listener)
        self.store.subscribe(listener)

    def reset(self):
        """Back to no era with a freshly loaded timeline"""
        self.store.reset()
        self.current_era_id = None
        if self._load_timeline:
            self.timeline.load(self._timeline_path)
        for listener in self._listeners:
            self.store.subscribe(listener)

    def get_state(self) -> Dict[str, Any]:
        mindset = self.mindset
        return {
            "era_id": self.current_era_id,
            "mindset": mindset.to_dict() if mindset else None,
            "timeline_loaded": self.timeline.is_loaded,
        }
