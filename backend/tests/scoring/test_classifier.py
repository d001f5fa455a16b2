import os, sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..")))
from foursome.scoring.classifier import (
    AWARD_CATEGORIES,
    Category,
    category_label,
    classify,
    parse_category,
)


@pytest.mark.parametrize(
    "strokes, par, expected",
    [
        (2, 4, Category.EAGLE),
        (3, 5, Category.EAGLE),
        (1, 3, Category.EAGLE),
        (3, 4, Category.BIRDIE),
        (4, 4, Category.PAR),
        (5, 4, Category.BOGEY),
        (8, 4, Category.DOUBLE_PAR),
        (10, 5, Category.DOUBLE_PAR),
        (6, 4, Category.OTHER),
        (7, 4, Category.OTHER),
        (1, 4, Category.OTHER),
        (2, 5, Category.OTHER),
    ],
)
def test_classify(strokes, par, expected):
    assert classify(strokes, par) is expected


def test_double_par_wins_over_stroke_difference_on_par_three():
    # 6 on a par 3 is also +3, but a double par is what gets counted
    assert classify(6, 3) is Category.DOUBLE_PAR


def test_other_is_never_an_award():
    assert Category.OTHER not in AWARD_CATEGORIES
    assert len(AWARD_CATEGORIES) == 5


def test_category_labels_by_locale():
    assert category_label(Category.BIRDIE, "ko") == "다버디상"
    assert category_label(Category.DOUBLE_PAR, "KO") == "다양파상"
    assert category_label(Category.BIRDIE) == "Most Birdies"
    # unknown locales fall back to English
    assert category_label(Category.PAR, "fr") == "Most Pars"


def test_parse_category_accepts_dashes():
    assert parse_category("double-par") is Category.DOUBLE_PAR
    assert parse_category(" Birdie ") is Category.BIRDIE
    with pytest.raises(ValueError):
        parse_category("albatross")
