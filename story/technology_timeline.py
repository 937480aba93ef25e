"""
Digital Archaeology - Technology Timeline Module

When each technology was invented, when it became common, and what
people called it along the way. Loaded from the story content's
technology-timeline.json.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Dict

from config import TECHNOLOGY_TIMELINE_PATH

logger = logging.getLogger(__name__)


@dataclass
class PeriodTerm:
    """What a technology was called from a given year onward"""
    year: int
    term: str

    def to_dict(self) -> Dict:
        return {"year": self.year, "term": self.term}

    @classmethod
    def from_dict(cls, data: Dict) -> "PeriodTerm":
        return cls(year=data["year"], term=data["term"])


@dataclass
class EraTechnology:
    """A technology and the years it appeared and spread"""

    name: str
    year_invented: int
    year_common: int
    predecessors: List[str] = field(default_factory=list)
    period_terms: List[PeriodTerm] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "name": self.name,
            "yearInvented": self.year_invented,
            "yearCommon": self.year_common,
            "predecessors": self.predecessors,
            "periodTerms": [pt.to_dict() for pt in self.period_terms],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "EraTechnology":
        return cls(
            name=data["name"],
            year_invented=data["yearInvented"],
            year_common=data.get("yearCommon", data["yearInvented"]),
            predecessors=data.get("predecessors", []),
            period_terms=[PeriodTerm.from_dict(pt) for pt in data.get("periodTerms", [])],
        )


@dataclass
class TerminologyMapping:
    """A modern word and the word used before it existed"""
    modern: str
    earliest: int
    before: str

    def to_dict(self) -> Dict:
        return {"modern": self.modern, "earliest": self.earliest, "before": self.before}

    @classmethod
    def from_dict(cls, data: Dict) -> "TerminologyMapping":
        return cls(modern=data["modern"], earliest=data["earliest"], before=data["before"])


class TechnologyTimeline:
    """
    Technology and terminology lookups for a point in time.

    Lookups are case-insensitive on the concept name. An empty timeline
    answers "not an anachronism" and returns concepts unchanged.
    """

    def __init__(self):
        self.technologies: List[EraTechnology] = []
        self.terminology: List[TerminologyMapping] = []
        self.is_loaded = False

    def load(self, path: Optional[str] = None):
        """
        Load the timeline JSON once. A missing or unreadable file leaves
        an empty timeline that still counts as loaded.
        """
        if self.is_loaded:
            return

        path = path or TECHNOLOGY_TIMELINE_PATH
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            self.technologies = [EraTechnology.from_dict(t) for t in data.get("technologies", [])]
            self.terminology = [TerminologyMapping.from_dict(t) for t in data.get("terminology", [])]
            logger.info(
                f"Loaded technology timeline from {path}: "
                f"{len(self.technologies)} technologies, {len(self.terminology)} terms"
            )
        except (IOError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Could not load technology timeline from {path}: {e}")
            self.technologies = []
            self.terminology = []
        self.is_loaded = True

    def set_technologies(self, technologies: List[EraTechnology]):
        self.technologies = list(technologies)
        self.is_loaded = True

    def set_terminology(self, terminology: List[TerminologyMapping]):
        self.terminology = list(terminology)

    def clear(self):
        self.technologies = []
        self.terminology = []
        self.is_loaded = False

    def find_technology(self, concept: str) -> Optional[EraTechnology]:
        key = concept.lower()
        for tech in self.technologies:
            if tech.name.lower() == key:
                return tech
        return None

    def find_terminology(self, concept: str) -> Optional[TerminologyMapping]:
        key = concept.lower()
        for mapping in self.terminology:
            if mapping.modern.lower() == key:
                return mapping
        return None

    def is_anachronism(self, concept: str, year: int) -> bool:
        """True if the concept wasn't common yet (or its word didn't exist) in `year`"""
        tech = self.find_technology(concept)
        if tech is not None:
            return year < tech.year_common

        mapping = self.find_terminology(concept)
        if mapping is not None:
            return year < mapping.earliest

        # Not in our timeline - nothing to say about it
        return False

    def get_period_term(self, concept: str, year: int) -> str:
        """
        The era-appropriate word for a concept in `year`.

        Terminology mappings win; otherwise the most recent period term
        already in use by `year`; otherwise the concept itself.
        """
        mapping = self.find_terminology(concept)
        if mapping is not None and year < mapping.earliest:
            return mapping.before

        tech = self.find_technology(concept)
        if tech is None or not tech.period_terms:
            return concept

        applicable = [pt for pt in tech.period_terms if pt.year <= year]
        if not applicable:
            return concept
        return max(applicable, key=lambda pt: pt.year).term
