"""
taxonomy/classifier.py
----------------------
Assign storm event labels to taxonomy categories with ordered pattern rules.

Classification is "first category whose patterns match, in priority order".
The last category must be a pattern-less fallback, which makes the
classifier total: every label gets exactly one category.
"""

import logging
import re
from collections import Counter

from stormimpact.records import ClassifiedRecord, NormalizedRecord

from .categories import STORM_CATEGORIES, EventCategory

logger = logging.getLogger(__name__)


class EventClassifier:
    """
    Ordered-rule classifier for free-text event labels.

    Args:
        categories: EventCategory list, highest priority first, ending with
            a fallback category that has no patterns

    Raises:
        ValueError: If the list is empty or does not end with a fallback
    """

    def __init__(self, categories: list[EventCategory] | None = None):
        categories = list(categories) if categories is not None else list(STORM_CATEGORIES)

        if not categories:
            raise ValueError("Taxonomy must contain at least one category")
        if not categories[-1].is_fallback:
            raise ValueError(
                f"Last category must be a fallback with no patterns, got {categories[-1].code!r}"
            )

        self.categories = categories
        self.fallback = categories[-1].code

        # Compile once; (code, [compiled patterns]) in priority order
        self._rules = [
            (cat.code, [re.compile(p, re.IGNORECASE) for p in cat.patterns])
            for cat in categories[:-1]
        ]

    def classify(self, text) -> str:
        """Return the category code for an event label. Never fails."""
        if not text:
            return self.fallback

        text = str(text)
        for code, patterns in self._rules:
            if any(p.search(text) for p in patterns):
                return code
        return self.fallback

    def matching_categories(self, text) -> list[str]:
        """
        List every category whose rules match, in priority order.

        Useful for inspecting compound labels; classify() returns the first.
        """
        if not text:
            return []
        text = str(text)
        return [
            code for code, patterns in self._rules
            if any(p.search(text) for p in patterns)
        ]

    def classify_record(self, record: NormalizedRecord) -> ClassifiedRecord:
        """Attach a category to one normalized record."""
        return ClassifiedRecord.from_normalized(record, self.classify(record.event_type))


_DEFAULT_CLASSIFIER = None


def get_default_classifier() -> EventClassifier:
    """Shared classifier over the default taxonomy."""
    global _DEFAULT_CLASSIFIER
    if _DEFAULT_CLASSIFIER is None:
        _DEFAULT_CLASSIFIER = EventClassifier(STORM_CATEGORIES)
    return _DEFAULT_CLASSIFIER


def classify_event_type(text) -> str:
    """Classify one event label with the default taxonomy."""
    return get_default_classifier().classify(text)


def classify_records(
    records,
    classifier: EventClassifier | None = None,
) -> list[ClassifiedRecord]:
    """Classify a batch of normalized records, preserving order."""
    classifier = classifier or get_default_classifier()
    return [classifier.classify_record(r) for r in records]


def category_distribution(records) -> Counter:
    """Count classified records per category."""
    return Counter(r.category for r in records)


def unmatched_event_types(records, fallback: str = "Other", limit: int = 20) -> list[tuple[str, int]]:
    """Most frequent event labels that fell through to the fallback category."""
    counts = Counter(r.event_type for r in records if r.category == fallback)
    return counts.most_common(limit)
