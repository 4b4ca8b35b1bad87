import re

from core.categorizer import Categorizer, categorize


def test_channel_hint_wins_over_title_keywords():
    # Title says sports, channel says technology.
    assert categorize("programming", "Team wins the championship") == "technology"


def test_channel_hint_is_case_insensitive_substring():
    assert categorize("MachineLearning", "") == "technology"
    assert categorize("AskReddit", "") == "community"


def test_table_order_breaks_ties():
    # "worldnews" contains the politics fragment "news" and politics comes first.
    assert categorize("worldnews", "") == "politics"


def test_esports_hint_not_swallowed_by_sports():
    assert categorize("esports", "") == "esports"
    assert categorize("leagueoflegends", "") == "esports"
    assert categorize("nba", "") == "sports"


def test_title_keywords_used_when_channel_unknown():
    assert categorize("", "NASA telescope spots water on Mars") == "science"
    assert categorize("", "Parliament votes on new budget") == "politics"
    assert categorize("", "Missile strike near the border") == "world"
    assert categorize("", "TIL octopuses have three hearts") == "community"


def test_fallback_is_general():
    assert categorize("", "A quiet afternoon") == "general"
    assert categorize(None, None) == "general"


def test_deterministic():
    for channel, title in [("worldnews", "x"), ("", "Apple ships new chips"), ("", "")]:
        assert len({categorize(channel, title) for _ in range(5)}) == 1


def test_custom_tables_can_be_swapped_in():
    custom = Categorizer(
        {"science": ("lab",)},
        [("sports", re.compile(r"\bball\b", re.I))],
        fallback="general",
    )
    assert custom("biolab", "") == "science"
    assert custom("", "Ball game tonight") == "sports"
    assert custom("", "technology news") == "general"
