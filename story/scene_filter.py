"""
Digital Archaeology - Scene Filter Module

Runs scene text through the anachronism filter before it is displayed.
Only prose is filtered: speaker names and code snippets pass through
untouched.
"""

import logging
from copy import deepcopy
from typing import Dict, Optional

from config import SCENE_FILTER_MODE
from eras import create_era_filter
from mindset import MindsetStore

logger = logging.getLogger(__name__)


class SceneFilter:
    """Filters scene content against the store's current mindset"""

    def __init__(self, store: MindsetStore, enabled: bool = True):
        self.store = store
        self.enabled = enabled

    def set_enabled(self, enabled: bool):
        self.enabled = enabled

    def filter_text(self, text: Optional[str]) -> Optional[str]:
        """
        Era-appropriate version of `text`, or `text` itself when filtering
        is off or no mindset is set.

        A fresh era filter is built per call so it follows mindset changes
        between scenes.
        """
        if not self.enabled or not text:
            return text

        mindset = self.store.get_current_mindset()
        if mindset is None:
            return text

        era_filter = create_era_filter(mindset.year)

        # Unknown technology the seed table doesn't already catch gets a
        # custom entry dated just after the current year
        for tech in mindset.unknown_technology:
            if not era_filter.is_anachronism(tech, mindset.year):
                era_filter.add_custom_term(tech, mindset.year + 1)

        result = era_filter.analyze(text, mode=SCENE_FILTER_MODE, year=mindset.year)
        if result.has_anachronisms:
            logger.debug(f"Scene text had {len(result.anachronisms)} anachronisms for {mindset.year}")
        return result.filtered

    def filter_scene(self, scene: Dict) -> Dict:
        """
        Copy of a scene dict with its displayable prose filtered.

        Filters: setting.text, narrative paragraphs, dialogue text,
        technical note content.
        """
        filtered = deepcopy(scene)

        setting = filtered.get('setting')
        if isinstance(setting, dict) and 'text' in setting:
            setting['text'] = self.filter_text(setting['text'])

        if 'narrative' in filtered:
            filtered['narrative'] = [self.filter_text(p) for p in filtered['narrative']]

        for dialogue in filtered.get('dialogues', []):
            if 'text' in dialogue:
                dialogue['text'] = self.filter_text(dialogue['text'])

        for note in filtered.get('technicalNotes', []):
            if 'content' in note:
                note['content'] = self.filter_text(note['content'])

        return filtered
