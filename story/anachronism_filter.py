"""
Digital Archaeology - Anachronism Filter Module

Finds words in narrative text that don't belong in the current era and
rewrites them according to a filter mode:

- analyze:   find matches, leave the text alone
- flag:      [ANACHRONISM: internet]
- replace:   swap in the period term when one is registered
- remove:    [...]
- highlight: **internet**

The vocabulary is the filter's own custom terms (anachronistic before the
year they were introduced) plus the current mindset's unknown technology
(always anachronistic). Custom terms win when both name the same word.
Output is plain text; callers escape it before putting it in markup.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Optional, List, Dict, Union

from config import DEFAULT_FILTER_MODE, FLAG_TEMPLATE, REMOVE_PLACEHOLDER, HIGHLIGHT_TEMPLATE
from mindset import MindsetStore, MindsetSnapshot

logger = logging.getLogger(__name__)


class FilterMode(Enum):
    """How matched terms are rewritten"""
    ANALYZE = "analyze"
    FLAG = "flag"
    REPLACE = "replace"
    REMOVE = "remove"
    HIGHLIGHT = "highlight"

    @classmethod
    def parse(cls, mode: Union["FilterMode", str]) -> "FilterMode":
        if isinstance(mode, cls):
            return mode
        try:
            return cls(str(mode).lower())
        except ValueError:
            raise ValueError(f"Unknown filter mode: {mode}") from None


@dataclass
class CustomTerm:
    """
    A term the filter was told about directly.

    An empty replacement is treated like a missing one: replace mode keeps
    the term and get_period_term returns it unchanged.
    """

    term: str
    introduced_year: int
    replacement: Optional[str] = None

    @property
    def key(self) -> str:
        return self.term.lower()

    def is_anachronism(self, year: Optional[int]) -> bool:
        # Without a year there is nothing to compare against
        if year is None:
            return False
        return year < self.introduced_year

    def to_dict(self) -> Dict:
        return {
            "term": self.term,
            "introduced_year": self.introduced_year,
            "replacement": self.replacement,
        }


@dataclass
class AnachronismMatch:
    """One anachronistic term found in a piece of text"""

    term: str                   # As written in the source text
    position: int               # Character offset of the first letter
    reason: str
    replacement: Optional[str] = None

    @property
    def end(self) -> int:
        return self.position + len(self.term)

    def to_dict(self) -> Dict:
        return {
            "term": self.term,
            "position": self.position,
            "reason": self.reason,
            "replacement": self.replacement,
        }


@dataclass
class AnalysisResult:
    """Matches in left-to-right order and the rewritten text"""

    original: str
    filtered: str
    anachronisms: List[AnachronismMatch] = field(default_factory=list)

    @property
    def has_anachronisms(self) -> bool:
        return len(self.anachronisms) > 0

    def to_dict(self) -> Dict:
        return {
            "original": self.original,
            "filtered": self.filtered,
            "anachronisms": [m.to_dict() for m in self.anachronisms],
            "has_anachronisms": self.has_anachronisms,
        }


@dataclass
class _VocabularyEntry:
    term: str
    custom: Optional[CustomTerm] = None


@lru_cache(maxsize=512)
def compile_term(term: str, case_insensitive: bool = True) -> "re.Pattern":
    """
    Whole-word matcher for a literal term.

    Word boundaries only sit next to word characters, so a term that starts
    or ends with punctuation ("C++") never matches. Inner punctuation
    ("Wi-Fi") is matched literally.
    """
    flags = re.IGNORECASE if case_insensitive else 0
    return re.compile(r'\b' + re.escape(term) + r'\b', flags)


class AnachronismFilter:
    """
    Detects and rewrites anachronistic terms.

    The evaluation year comes from, in order: the `year` argument, the
    mindset store's current year, `default_year`. With none of those,
    custom terms are never anachronisms and unknown technology always is.
    """

    def __init__(self, store: Optional[MindsetStore] = None, default_year: Optional[int] = None):
        self.store = store
        self.default_year = default_year
        self._custom_terms: Dict[str, CustomTerm] = {}

    # ==================== Custom terms ====================

    def add_custom_term(self, term: str, introduced_year: int, replacement: Optional[str] = None):
        """Register a term, replacing any earlier entry for the same word"""
        entry = CustomTerm(term=term, introduced_year=introduced_year, replacement=replacement)
        self._custom_terms[entry.key] = entry

    def clear_custom_terms(self):
        self._custom_terms.clear()

    def custom_terms(self) -> Dict[str, CustomTerm]:
        return dict(self._custom_terms)

    # ==================== Single terms ====================

    def is_anachronism(self, term: str, year: Optional[int] = None) -> bool:
        snapshot = self._snapshot()
        check_year = self._resolve_year(year, snapshot)

        custom = self._custom_terms.get(term.lower())
        if custom is not None:
            return custom.is_anachronism(check_year)

        return snapshot is not None and snapshot.knows_nothing_of(term)

    def get_period_term(self, term: str) -> str:
        """Registered replacement for term, else term itself. An empty replacement counts as none."""
        custom = self._custom_terms.get(term.lower())
        if custom is not None and custom.replacement:
            return custom.replacement
        return term

    # ==================== Text ====================

    def analyze(
        self,
        text: str,
        mode: Union[FilterMode, str] = DEFAULT_FILTER_MODE,
        year: Optional[int] = None,
        case_insensitive: bool = True,
    ) -> AnalysisResult:
        """
        Scan text for anachronisms and rewrite it per `mode`.

        Overlapping candidates resolve to the earliest start, then the
        longest term, so "cloud computing" beats "cloud" at the same spot.
        """
        mode = FilterMode.parse(mode)
        snapshot = self._snapshot()
        check_year = self._resolve_year(year, snapshot)

        if not text:
            return AnalysisResult(original=text, filtered=text)

        candidates = []
        for entry in self._build_vocabulary(snapshot, case_insensitive):
            if entry.custom is not None and not entry.custom.is_anachronism(check_year):
                continue
            for m in compile_term(entry.term, case_insensitive).finditer(text):
                candidates.append((m.start(), m.end(), entry))

        candidates.sort(key=lambda c: (c[0], c[0] - c[1]))

        matches = []
        last_end = 0
        for start, end, entry in candidates:
            if start < last_end:
                continue
            matches.append(self._make_match(text[start:end], start, entry, check_year))
            last_end = end

        logger.debug(f"Analyzed {len(text)} chars for year {check_year}: {len(matches)} anachronisms")

        return AnalysisResult(
            original=text,
            filtered=self._apply_mode(text, matches, mode),
            anachronisms=matches,
        )

    # ==================== Internals ====================

    def _snapshot(self) -> Optional[MindsetSnapshot]:
        if self.store is None:
            return None
        return self.store.snapshot()

    def _resolve_year(self, year: Optional[int], snapshot: Optional[MindsetSnapshot]) -> Optional[int]:
        if year is not None:
            return year
        if snapshot is not None:
            return snapshot.year
        return self.default_year

    def _build_vocabulary(self, snapshot: Optional[MindsetSnapshot],
                          case_insensitive: bool = True) -> List[_VocabularyEntry]:
        def spelling(term):
            return term.lower() if case_insensitive else term

        vocabulary = []
        seen = set()
        for custom in self._custom_terms.values():
            if not custom.term.strip():
                continue
            vocabulary.append(_VocabularyEntry(term=custom.term, custom=custom))
            seen.add(spelling(custom.term))

        if snapshot is not None:
            for tech in snapshot.unknown_technology:
                if not tech.strip() or spelling(tech) in seen:
                    continue
                seen.add(spelling(tech))
                # Another casing of a custom term still follows the custom rule
                vocabulary.append(_VocabularyEntry(term=tech, custom=self._custom_terms.get(tech.lower())))

        return vocabulary

    def _make_match(self, found: str, position: int, entry: _VocabularyEntry,
                    year: Optional[int]) -> AnachronismMatch:
        if entry.custom is not None:
            return AnachronismMatch(
                term=found,
                position=position,
                reason=f'"{entry.custom.term}" was not introduced until {entry.custom.introduced_year}',
                replacement=entry.custom.replacement,
            )

        when = f"in {year}" if year is not None else "in this era"
        return AnachronismMatch(
            term=found,
            position=position,
            reason=f'"{entry.term}" is unknown technology {when}',
        )

    def _apply_mode(self, text: str, matches: List[AnachronismMatch], mode: FilterMode) -> str:
        if mode == FilterMode.ANALYZE or not matches:
            return text

        pieces = []
        cursor = 0
        for match in matches:
            pieces.append(text[cursor:match.position])
            pieces.append(self._substitute(match, mode))
            cursor = match.end
        pieces.append(text[cursor:])
        return "".join(pieces)

    def _substitute(self, match: AnachronismMatch, mode: FilterMode) -> str:
        if mode == FilterMode.FLAG:
            return FLAG_TEMPLATE.format(term=match.term)
        if mode == FilterMode.REMOVE:
            return REMOVE_PLACEHOLDER
        if mode == FilterMode.HIGHLIGHT:
            return HIGHLIGHT_TEMPLATE.format(term=match.term)
        if mode == FilterMode.REPLACE and match.replacement:
            return match.replacement
        return match.term
