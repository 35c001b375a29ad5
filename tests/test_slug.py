import pytest

from core.errors import SlugGenerationError
from core.slug import MAX_SLUG_ATTEMPTS, slugify, unique_slug


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Two Sets", "two-sets"),
        ("  Missing Number!! ", "missing-number"),
        ("C++ & DP: Coin Combinations I", "c-dp-coin-combinations-i"),
        ("---Weird___Title---", "weird-title"),
        ("Grid Paths 2024", "grid-paths-2024"),
    ],
)
def test_slugify(title, expected):
    assert slugify(title) == expected


def test_slugify_falls_back_when_nothing_is_left():
    assert slugify("!!!") == "solution"
    assert slugify("수열") == "solution"


def test_unique_slug_free_base():
    assert unique_slug("Two Sets", set()) == "two-sets"


def test_unique_slug_appends_counter_on_collision():
    assert unique_slug("Two Sets", {"two-sets"}) == "two-sets-1"
    assert unique_slug("Two Sets", {"two-sets", "two-sets-1", "two-sets-2"}) == "two-sets-3"


def test_unique_slug_fills_first_gap():
    assert unique_slug("Two Sets", {"two-sets", "two-sets-2"}) == "two-sets-1"


def test_unique_slug_is_deterministic():
    taken = {"two-sets", "two-sets-1"}
    assert unique_slug("Two Sets", taken) == unique_slug("two sets", taken)


def test_unique_slug_gives_up_after_max_attempts():
    taken = {"two-sets"} | {f"two-sets-{i}" for i in range(1, MAX_SLUG_ATTEMPTS + 1)}
    with pytest.raises(SlugGenerationError):
        unique_slug("Two Sets", taken)
