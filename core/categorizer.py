"""Heuristic topic classification.

Two stages: a channel-name lookup, then title keywords. Both tables are
ordered; the first category that matches wins.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

from core.models import Category

# Known channel-name fragments per category.  Matched as substrings of the
# lowercased channel hint, so fragments must be lowercase.
CHANNEL_TABLE: dict[str, tuple[str, ...]] = {
    Category.TECHNOLOGY: (
        "technology", "programming", "javascript", "python", "webdev",
        "coding", "linux", "apple", "android", "tech", "gadgets", "software",
        "hardware", "machinelearning", "artificial", "cybersecurity", "netsec",
        "hacking", "devops", "gamedev", "compsci", "datascience", "chatgpt",
        "openai", "singularity",
    ),
    Category.POLITICS: (
        "politics", "worldnews", "news", "conservative", "liberal",
        "democrats", "republicans", "geopolitics", "uspolitics", "ukpolitics",
        "europe", "law", "credibledefense",
    ),
    Category.SCIENCE: (
        "science", "space", "physics", "biology", "chemistry", "astronomy",
        "environment", "climate", "nature", "earthscience", "futurology",
    ),
    Category.BUSINESS: (
        "business", "economics", "finance", "stocks", "investing",
        "wallstreetbets", "cryptocurrency", "bitcoin", "entrepreneur",
        "startups", "personalfinance", "economy",
    ),
    # Ahead of sports and entertainment: "esports" contains "sports".
    Category.ESPORTS: (
        "esports", "leagueoflegends", "globaloffensive", "valorant", "dota2",
        "competitiveoverwatch", "starcraft",
    ),
    Category.ENTERTAINMENT: (
        "movies", "television", "music", "gaming", "books", "anime", "comics",
        "entertainment", "celebs", "popculture", "netflix", "marvel",
        "starwars", "hiphopheads", "indieheads",
    ),
    Category.SPORTS: (
        "sports", "nba", "nfl", "soccer", "football", "baseball", "hockey",
        "mma", "formula1", "tennis", "olympics", "running", "golf",
    ),
    Category.WORLD: (
        "internationalnews", "middleeast", "asia", "africa", "india", "china",
        "japan", "korea", "ukraine",
    ),
    Category.COMMUNITY: (
        "askreddit", "todayilearned", "explainlikeimfive", "amitheasshole",
        "showerthoughts", "unpopularopinion", "changemyview",
        "nostupidquestions", "tooafraidtoask", "tifu", "confessions",
        "relationship_advice", "trueoffmychest",
    ),
}

KEYWORD_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (Category.TECHNOLOGY, re.compile(
        r"\b(tech\w*|software|apps?|ai|robot\w*|cyber\w*|hack\w*|code|coding|"
        r"programm\w*|chips?|gpus?|startups?|openai|google|apple|microsoft|"
        r"amazon|meta)\b", re.I)),
    (Category.POLITICS, re.compile(
        r"\b(politi\w*|elect\w*|president\w*|congress\w*|senat\w*|govern\w*|"
        r"votes?|voters?|democrat\w*|republican\w*|trump|biden|parliament\w*|"
        r"minister\w*|laws?|courts?|judges?|ruling)\b", re.I)),
    (Category.SCIENCE, re.compile(
        r"\b(scien\w*|study|studies|research\w*|discover\w*|space|nasa|"
        r"climate|species|fossils?|quantum|telescopes?|mars|moon)\b", re.I)),
    (Category.BUSINESS, re.compile(
        r"\b(markets?|stocks?|econom\w*|financ\w*|banks?|crypto\w*|bitcoin|"
        r"invest\w*|billion|million|ceo|compan(y|ies)|revenue|profits?|"
        r"trade|tariffs?|rates?|fed)\b", re.I)),
    (Category.ESPORTS, re.compile(
        r"\b(e-?sports?|league of legends|valorant|dota|counter-strike|cs2|"
        r"overwatch league)\b", re.I)),
    (Category.ENTERTAINMENT, re.compile(
        r"\b(movies?|films?|music|games?|tv shows?|actor|actress|albums?|"
        r"songs?|streaming|netflix|disney|concerts?|awards?|grammys?|"
        r"oscars?)\b", re.I)),
    (Category.SPORTS, re.compile(
        r"\b(team|players?|champion\w*|league|cup|match|season|coach|nba|nfl|"
        r"fifa|goals?|wins|lost)\b", re.I)),
    (Category.WORLD, re.compile(
        r"\b(war|conflict|bomb\w*|missiles?|military|troops|refugees?|"
        r"humanitarian|sanctions?|treaty|border|crisis)\b", re.I)),
    (Category.COMMUNITY, re.compile(
        r"(\b(aita|yta|nta|eli5|til|ask reddit|what is|how do|why do|"
        r"what would|does anyone|am i the|today i learned|explain like)\b)",
        re.I)),
)


class Categorizer:
    """Pure ``(channel_hint, title) -> category`` classifier."""

    def __init__(
        self,
        channel_table: Mapping[str, Sequence[str]] = CHANNEL_TABLE,
        keyword_patterns: Sequence[tuple[str, re.Pattern[str]]] = KEYWORD_PATTERNS,
        fallback: str = Category.GENERAL,
    ) -> None:
        self._channels = tuple(
            (str(cat), tuple(f.lower() for f in frags))
            for cat, frags in channel_table.items()
        )
        self._keywords = tuple((str(cat), rx) for cat, rx in keyword_patterns)
        self._fallback = str(fallback)

    def categorize(self, channel_hint: str | None, title: str | None) -> str:
        hint = (channel_hint or "").lower()
        if hint:
            for category, fragments in self._channels:
                if any(frag in hint for frag in fragments):
                    return category

        text = title or ""
        for category, rx in self._keywords:
            if rx.search(text):
                return category
        return self._fallback

    __call__ = categorize


default_categorizer = Categorizer()


def categorize(channel_hint: str | None, title: str | None) -> str:
    return default_categorizer.categorize(channel_hint, title)
