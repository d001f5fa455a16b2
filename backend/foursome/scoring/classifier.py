"""Hole score classification and award labels."""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    EAGLE = "eagle"
    BIRDIE = "birdie"
    PAR = "par"
    BOGEY = "bogey"
    DOUBLE_PAR = "double_par"
    OTHER = "other"


# Categories that can win an award. ``OTHER`` is never counted.
AWARD_CATEGORIES: tuple[Category, ...] = (
    Category.EAGLE,
    Category.BIRDIE,
    Category.PAR,
    Category.BOGEY,
    Category.DOUBLE_PAR,
)

_DIFF_CATEGORIES = {
    -2: Category.EAGLE,
    -1: Category.BIRDIE,
    0: Category.PAR,
    1: Category.BOGEY,
}

CATEGORY_LABELS: dict[str, dict[Category, str]] = {
    "ko": {
        Category.EAGLE: "다이글상",
        Category.BIRDIE: "다버디상",
        Category.PAR: "다파상",
        Category.BOGEY: "다보기상",
        Category.DOUBLE_PAR: "다양파상",
        Category.OTHER: "기타",
    },
    "en": {
        Category.EAGLE: "Most Eagles",
        Category.BIRDIE: "Most Birdies",
        Category.PAR: "Most Pars",
        Category.BOGEY: "Most Bogeys",
        Category.DOUBLE_PAR: "Most Double Pars",
        Category.OTHER: "Other",
    },
}
DEFAULT_LOCALE = "en"


def classify(strokes: int, par: int) -> Category:
    """Return the category of a single hole.

    A double par wins over the stroke difference, so a par-3 scored 6 or a
    par-4 scored 8 is ``DOUBLE_PAR``.
    """
    if strokes == par * 2:
        return Category.DOUBLE_PAR
    return _DIFF_CATEGORIES.get(strokes - par, Category.OTHER)


def category_label(category: Category, locale: str | None = None) -> str:
    labels = CATEGORY_LABELS.get((locale or "").lower(), CATEGORY_LABELS[DEFAULT_LOCALE])
    return labels[category]


def parse_category(value: str) -> Category:
    """Resolve an API path segment (``double_par``, ``double-par``) to a category."""
    normalized = value.strip().lower().replace("-", "_")
    return Category(normalized)
