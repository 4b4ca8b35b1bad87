"""Subreddits offered for subscription, grouped for display.

``on`` marks the channels a new profile is subscribed to.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

CUSTOM_GROUP = "custom"


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    group: str
    on: bool
    desc: str


CATALOG_GROUPS: list[tuple[str, str]] = [
    ("trending", "🔥 TRENDING"),
    ("news", "📰 NEWS / WORLD"),
    ("technology", "💻 TECHNOLOGY"),
    ("ai", "🤖 AI / ML"),
    ("science", "🔬 SCIENCE"),
    ("politics", "🏛️ POLITICS"),
    ("finance", "📈 BUSINESS / FINANCE"),
    ("entertainment", "🎬 ENTERTAINMENT"),
    ("sports", "⚽ SPORTS"),
    ("community", "💬 COMMUNITY"),
    ("countries", "🌍 COUNTRIES"),
    ("dailydose", "✨ DAILY DOSE"),
    ("misc", "💡 MISC"),
]

SUBSCRIPTION_CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry("popular", "trending", True, "Reddit front page"),
    CatalogEntry("all", "trending", False, "Everything on Reddit"),
    CatalogEntry("interestingasfuck", "trending", True, "Fascinating content"),
    CatalogEntry("Damnthatsinteresting", "trending", False, "Amazing discoveries"),
    CatalogEntry("OutOfTheLoop", "trending", False, "What you missed"),
    CatalogEntry("bestof", "trending", False, "Best Reddit comments"),

    CatalogEntry("worldnews", "news", True, "International news"),
    CatalogEntry("news", "news", True, "US & general news"),
    CatalogEntry("UpliftingNews", "news", True, "Positive stories"),
    CatalogEntry("nottheonion", "news", True, "Absurd real headlines"),
    CatalogEntry("TrueReddit", "news", False, "Long-form journalism"),
    CatalogEntry("inthenews", "news", False, "News discussion"),
    CatalogEntry("anime_titties", "news", False, "World politics (real)"),
    CatalogEntry("CredibleDefense", "news", False, "Military & conflict analysis"),
    CatalogEntry("qualitynews", "news", False, "Curated journalism"),

    CatalogEntry("technology", "technology", True, "Tech news"),
    CatalogEntry("programming", "technology", True, "Coding & dev"),
    CatalogEntry("webdev", "technology", False, "Web development"),
    CatalogEntry("javascript", "technology", False, "JavaScript"),
    CatalogEntry("python", "technology", False, "Python"),
    CatalogEntry("linux", "technology", False, "Linux"),
    CatalogEntry("apple", "technology", False, "Apple ecosystem"),
    CatalogEntry("Android", "technology", False, "Android"),
    CatalogEntry("gadgets", "technology", False, "Tech gadgets"),
    CatalogEntry("hardware", "technology", False, "PC hardware"),
    CatalogEntry("sysadmin", "technology", False, "System admin"),
    CatalogEntry("netsec", "technology", False, "Network security"),
    CatalogEntry("hacking", "technology", False, "Hacking & security"),
    CatalogEntry("cybersecurity", "technology", False, "Cybersecurity"),

    CatalogEntry("artificial", "ai", True, "AI news"),
    CatalogEntry("MachineLearning", "ai", True, "ML research"),
    CatalogEntry("ChatGPT", "ai", True, "ChatGPT discussions"),
    CatalogEntry("OpenAI", "ai", False, "OpenAI updates"),
    CatalogEntry("LocalLLaMA", "ai", False, "Local AI models"),
    CatalogEntry("singularity", "ai", False, "AGI & singularity"),
    CatalogEntry("StableDiffusion", "ai", False, "AI image generation"),
    CatalogEntry("datascience", "ai", False, "Data science"),

    CatalogEntry("science", "science", True, "Scientific studies"),
    CatalogEntry("space", "science", True, "Space & astronomy"),
    CatalogEntry("Futurology", "science", True, "Future tech & society"),
    CatalogEntry("physics", "science", False, "Physics"),
    CatalogEntry("biology", "science", False, "Biology"),
    CatalogEntry("chemistry", "science", False, "Chemistry"),
    CatalogEntry("environment", "science", False, "Environment & climate"),
    CatalogEntry("EverythingScience", "science", False, "All sciences"),

    CatalogEntry("politics", "politics", False, "US politics"),
    CatalogEntry("geopolitics", "politics", True, "Global geopolitics"),
    CatalogEntry("NeutralPolitics", "politics", False, "Balanced politics"),
    CatalogEntry("PoliticalDiscussion", "politics", False, "Political debate"),
    CatalogEntry("europe", "politics", False, "European news"),
    CatalogEntry("ukpolitics", "politics", False, "UK politics"),

    CatalogEntry("business", "finance", True, "Business news"),
    CatalogEntry("economics", "finance", True, "Economics"),
    CatalogEntry("finance", "finance", False, "Finance"),
    CatalogEntry("stocks", "finance", False, "Stock market"),
    CatalogEntry("investing", "finance", False, "Investing"),
    CatalogEntry("wallstreetbets", "finance", False, "WSB memes & plays"),
    CatalogEntry("cryptocurrency", "finance", False, "Crypto news"),
    CatalogEntry("bitcoin", "finance", False, "Bitcoin"),
    CatalogEntry("ethereum", "finance", False, "Ethereum"),
    CatalogEntry("personalfinance", "finance", False, "Personal finance"),
    CatalogEntry("entrepreneur", "finance", False, "Entrepreneurship"),
    CatalogEntry("startups", "finance", False, "Startups"),

    CatalogEntry("movies", "entertainment", True, "Movies"),
    CatalogEntry("television", "entertainment", False, "TV shows"),
    CatalogEntry("music", "entertainment", False, "Music"),
    CatalogEntry("gaming", "entertainment", True, "Gaming"),
    CatalogEntry("books", "entertainment", False, "Books & reading"),
    CatalogEntry("anime", "entertainment", False, "Anime"),
    CatalogEntry("netflix", "entertainment", False, "Netflix"),
    CatalogEntry("marvel", "entertainment", False, "Marvel"),
    CatalogEntry("Games", "entertainment", False, "Tabletop & video games"),
    CatalogEntry("pcgaming", "entertainment", False, "PC Gaming"),
    CatalogEntry("PS5", "entertainment", False, "PlayStation 5"),

    CatalogEntry("sports", "sports", False, "General sports"),
    CatalogEntry("nba", "sports", False, "Basketball"),
    CatalogEntry("nfl", "sports", False, "American football"),
    CatalogEntry("soccer", "sports", False, "Football/Soccer"),
    CatalogEntry("formula1", "sports", False, "Formula 1"),
    CatalogEntry("MMA", "sports", False, "MMA / UFC"),
    CatalogEntry("tennis", "sports", False, "Tennis"),
    CatalogEntry("baseball", "sports", False, "Baseball"),

    CatalogEntry("AskReddit", "community", False, "Trending questions & discussions"),
    CatalogEntry("todayilearned", "community", False, "Interesting random facts"),
    CatalogEntry("explainlikeimfive", "community", False, "Simple explanations"),
    CatalogEntry("AmItheAsshole", "community", False, "Moral judgement stories"),
    CatalogEntry("Showerthoughts", "community", False, "Random insights"),
    CatalogEntry("unpopularopinion", "community", False, "Hot takes & debates"),
    CatalogEntry("changemyview", "community", False, "Challenge your views"),
    CatalogEntry("NoStupidQuestions", "community", False, "Ask anything"),
    CatalogEntry("TooAfraidToAsk", "community", False, "Taboo & awkward questions"),
    CatalogEntry("tifu", "community", False, "Today I messed up"),
    CatalogEntry("confessions", "community", False, "Anonymous confessions"),
    CatalogEntry("relationship_advice", "community", False, "Relationship advice"),
    CatalogEntry("TrueOffMyChest", "community", False, "Vent & share stories"),

    CatalogEntry("unitedkingdom", "countries", False, "🇬🇧 UK community & news"),
    CatalogEntry("canada", "countries", False, "🇨🇦 Canada news & community"),
    CatalogEntry("australia", "countries", False, "🇦🇺 Australia news & community"),
    CatalogEntry("de", "countries", False, "🇩🇪 Germany (German-language)"),
    CatalogEntry("france", "countries", False, "🇫🇷 France community & news"),
    CatalogEntry("india", "countries", False, "🇮🇳 India news & discussion"),
    CatalogEntry("japan", "countries", False, "🇯🇵 Japan community & news"),
    CatalogEntry("brasil", "countries", False, "🇧🇷 Brazil (Portuguese)"),
    CatalogEntry("southafrica", "countries", False, "🇿🇦 South Africa news"),
    CatalogEntry("Nigeria", "countries", False, "🇳🇬 Nigeria community"),
    CatalogEntry("dubai", "countries", False, "🇦🇪 UAE / Dubai community"),
    CatalogEntry("singapore", "countries", False, "🇸🇬 Singapore news & community"),
    CatalogEntry("korea", "countries", False, "🇰🇷 South Korea community"),
    CatalogEntry("mexico", "countries", False, "🇲🇽 Mexico community & news"),
    CatalogEntry("italy", "countries", False, "🇮🇹 Italy community"),
    CatalogEntry("spain", "countries", False, "🇪🇸 Spain community"),
    CatalogEntry("thenetherlands", "countries", False, "🇳🇱 Netherlands community"),
    CatalogEntry("sweden", "countries", False, "🇸🇪 Sweden community"),
    CatalogEntry("Polska", "countries", False, "🇵🇱 Poland (Polish)"),
    CatalogEntry("Philippines", "countries", False, "🇵🇭 Philippines news & community"),
    CatalogEntry("ukraine", "countries", False, "🇺🇦 Ukraine news & community"),
    CatalogEntry("China_irl", "countries", False, "🇨🇳 China discussion (Chinese)"),
    CatalogEntry("Turkey", "countries", False, "🇹🇷 Turkey community"),
    CatalogEntry("Egypt", "countries", False, "🇪🇬 Egypt community"),
    CatalogEntry("Thailand", "countries", False, "🇹🇭 Thailand community"),
    CatalogEntry("indonesia", "countries", False, "🇮🇩 Indonesia community"),
    CatalogEntry("malaysia", "countries", False, "🇲🇾 Malaysia community"),
    CatalogEntry("pakistan", "countries", False, "🇵🇰 Pakistan news & community"),
    CatalogEntry("argentina", "countries", False, "🇦🇷 Argentina community"),
    CatalogEntry("chile", "countries", False, "🇨🇱 Chile community"),
    CatalogEntry("colombia", "countries", False, "🇨🇴 Colombia community"),
    CatalogEntry("ireland", "countries", False, "🇮🇪 Ireland community & news"),
    CatalogEntry("newzealand", "countries", False, "🇳🇿 New Zealand community"),
    CatalogEntry("Switzerland", "countries", False, "🇨🇭 Switzerland community"),
    CatalogEntry("Austria", "countries", False, "🇦🇹 Austria community"),
    CatalogEntry("portugal", "countries", False, "🇵🇹 Portugal community"),
    CatalogEntry("greece", "countries", False, "🇬🇷 Greece community"),
    CatalogEntry("Romania", "countries", False, "🇷🇴 Romania community"),
    CatalogEntry("czech", "countries", False, "🇨🇿 Czech Republic community"),
    CatalogEntry("hungary", "countries", False, "🇭🇺 Hungary community"),
    CatalogEntry("Finland", "countries", False, "🇫🇮 Finland community"),
    CatalogEntry("Norway", "countries", False, "🇳🇴 Norway community"),
    CatalogEntry("Denmark", "countries", False, "🇩🇰 Denmark community"),
    CatalogEntry("Belgium", "countries", False, "🇧🇪 Belgium community"),
    CatalogEntry("Israel", "countries", False, "🇮🇱 Israel community"),
    CatalogEntry("kenya", "countries", False, "🇰🇪 Kenya community"),
    CatalogEntry("ethiopia", "countries", False, "🇪🇹 Ethiopia community"),
    CatalogEntry("iraq", "countries", False, "🇮🇶 Iraq community"),
    CatalogEntry("saudiarabia", "countries", False, "🇸🇦 Saudi Arabia community"),
    CatalogEntry("bangladesh", "countries", False, "🇧🇩 Bangladesh community"),
    CatalogEntry("vietnam", "countries", False, "🇻🇳 Vietnam community"),
    CatalogEntry("Peru", "countries", False, "🇵🇪 Peru community"),
    CatalogEntry("venezuela", "countries", False, "🇻🇪 Venezuela community"),
    CatalogEntry("Morocco", "countries", False, "🇲🇦 Morocco community"),
    CatalogEntry("Ghana", "countries", False, "🇬🇭 Ghana community"),
    CatalogEntry("taiwan", "countries", False, "🇹🇼 Taiwan community"),

    CatalogEntry("Damnthatsinteresting", "dailydose", False, "Amazing discoveries & stories"),
    CatalogEntry("BeAmazed", "dailydose", False, "Jaw-dropping content"),
    CatalogEntry("NatureIsFuckingLit", "dailydose", False, "Mind-blowing nature"),
    CatalogEntry("HumansAreMetal", "dailydose", False, "Incredible human feats"),
    CatalogEntry("nextfuckinglevel", "dailydose", False, "Next level achievements"),
    CatalogEntry("ThatsInsane", "dailydose", False, "Insane real-world moments"),
    CatalogEntry("MadeMeSmile", "dailydose", False, "Wholesome daily dose"),
    CatalogEntry("OldSchoolCool", "dailydose", False, "Cool history moments"),
    CatalogEntry("woahdude", "dailydose", False, "Mind-bending content"),
    CatalogEntry("AbsoluteUnits", "dailydose", False, "Impressively sized things"),

    CatalogEntry("LifeProTips", "misc", False, "Life hacks"),
    CatalogEntry("mildlyinteresting", "misc", False, "Mildly interesting"),
    CatalogEntry("YouShouldKnow", "misc", False, "Useful knowledge"),
    CatalogEntry("coolguides", "misc", False, "Infographics"),
    CatalogEntry("dataisbeautiful", "misc", False, "Data visualisation"),
)


def default_subscriptions() -> list[str]:
    return [entry.name for entry in SUBSCRIPTION_CATALOG if entry.on]


def catalog_with_custom(custom: Iterable[str]) -> list[CatalogEntry]:
    """The fixed catalog plus one ``custom`` entry per unlisted custom channel."""
    entries = list(SUBSCRIPTION_CATALOG)
    known = {e.name.lower() for e in entries}
    for name in custom:
        if name.lower() not in known:
            known.add(name.lower())
            entries.append(CatalogEntry(name, CUSTOM_GROUP, False, "Custom"))
    return entries
