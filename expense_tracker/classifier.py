"""Keyword-based category suggestions for expense titles.

Rules are evaluated in a fixed priority order and the first rule with a
keyword contained in the lower-cased title wins.  A title that matches
several rules therefore always resolves to the earliest one, never to a
"best" match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .categories import OTHER_CATEGORY

MIN_SUGGESTION_LENGTH = 3


@dataclass(frozen=True)
class KeywordRule:
    """Suggest ``category`` when any of ``keywords`` occurs in a title."""
    category: str
    keywords: Tuple[str, ...]

    def matches(self, lowered_title: str) -> bool:
        return any(keyword in lowered_title for keyword in self.keywords)


DEFAULT_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule('Food & Dining', (
        'restaurant', 'food', 'pizza', 'burger', 'coffee', 'lunch', 'dinner',
        'breakfast', 'domino', 'mcdonalds', 'starbucks',
    )),
    KeywordRule('Transportation', (
        'uber', 'taxi', 'gas', 'fuel', 'metro', 'bus', 'train', 'parking',
    )),
    KeywordRule('Shopping', (
        'amazon', 'flipkart', 'mall', 'store', 'shopping', 'clothes', 'electronics',
    )),
    KeywordRule('Entertainment', (
        'movie', 'cinema', 'netflix', 'spotify', 'game', 'concert', 'party',
    )),
    KeywordRule('Bills & Utilities', (
        'electricity', 'water', 'internet', 'phone', 'rent', 'insurance', 'loan',
    )),
    KeywordRule('Healthcare', (
        'hospital', 'doctor', 'medicine', 'pharmacy', 'clinic', 'medical',
    )),
)


class CategoryClassifier:
    """Ordered keyword rules with an ``Other`` fallback."""

    def __init__(self, rules: Iterable[KeywordRule] = DEFAULT_RULES, fallback: str = OTHER_CATEGORY):
        self.rules: Tuple[KeywordRule, ...] = tuple(
            KeywordRule(rule.category, tuple(keyword.lower() for keyword in rule.keywords))
            for rule in rules
        )
        self.fallback = fallback

    def classify(self, title: Optional[str]) -> str:
        lowered = (title or '').lower()
        for rule in self.rules:
            if rule.matches(lowered):
                return rule.category
        return self.fallback


_DEFAULT_CLASSIFIER = CategoryClassifier()


def classify(title: Optional[str]) -> str:
    """Suggest a category name for an expense title.

    Example:
        >>> classify('Dominos Pizza order')
        'Food & Dining'
        >>> classify('xyz123')
        'Other'
    """
    return _DEFAULT_CLASSIFIER.classify(title)


def suggest_for_title(
    title: Optional[str],
    editing: bool = False,
    classifier: Optional[CategoryClassifier] = None,
) -> Optional[str]:
    """Return the suggestion the expense form should offer, if any.

    Nothing is suggested while editing an existing expense, for titles
    shorter than three characters, or when only the fallback matches.
    """
    if editing or not title or len(title) < MIN_SUGGESTION_LENGTH:
        return None
    active = classifier or _DEFAULT_CLASSIFIER
    suggestion = active.classify(title)
    if suggestion == active.fallback:
        return None
    return suggestion
