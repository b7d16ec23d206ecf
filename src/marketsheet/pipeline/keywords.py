"""Built-in category keyword table used when a market carries no tags.

Each entry maps a category name to inclusion keywords and exclusion keywords,
matched as case-insensitive substrings of the question. Config files overlay
this table per category (see Settings.category_keywords).
"""

from __future__ import annotations

from typing import TypedDict


class CategoryKeywords(TypedDict):
    keywords: list[str]
    exclude: list[str]


KeywordTable = dict[str, CategoryKeywords]

DEFAULT_KEYWORD_TABLE: KeywordTable = {
    "Sports": {
        "keywords": [
            " vs ",
            " vs.",
            "nfl",
            "nba",
            "mlb",
            "nhl",
            "soccer",
            "football",
            "basketball",
            "baseball",
            "hockey",
            "tennis",
            "ufc",
            "boxing",
            "premier league",
            "champions league",
            "la liga",
            "serie a",
            "bundesliga",
            "copa libertadores",
            "world cup",
            "super bowl",
            "win the match",
            "to beat",
            "grand prix",
        ],
        "exclude": [
            "lawsuit",
            "court",
            "indicted",
            "sentenced",
            "trial",
            "election",
            "president",
            "tariff",
            "bitcoin",
            "ethereum",
        ],
    },
    "Politics": {
        "keywords": [
            "trump",
            "biden",
            "congress",
            "senate",
            "house of representatives",
            "governor",
            "democrat",
            "republican",
            "cabinet",
            "impeach",
            "supreme court",
            "executive order",
            "parliament",
            "prime minister",
        ],
        "exclude": ["super bowl", "nba", "nfl", "bitcoin"],
    },
    "Finance": {
        "keywords": [
            "s&p 500",
            "nasdaq",
            "dow jones",
            "stock",
            "shares",
            "ipo",
            "treasury",
            "bond yield",
            "gold price",
            "oil price",
            "market cap",
        ],
        "exclude": ["bitcoin", "ethereum", "crypto", "solana"],
    },
    "Crypto": {
        "keywords": [
            "bitcoin",
            "btc",
            "ethereum",
            "eth ",
            "solana",
            "crypto",
            "xrp",
            "dogecoin",
            "stablecoin",
            "airdrop",
            "token",
            "memecoin",
        ],
        "exclude": ["super bowl", "election"],
    },
    "Geopolitics": {
        "keywords": [
            "ukraine",
            "russia",
            "israel",
            "gaza",
            "iran",
            "china",
            "taiwan",
            "ceasefire",
            "invasion",
            "nato",
            "sanctions",
            "missile",
            "military",
        ],
        "exclude": ["world cup", "olympics", "nba", "soccer"],
    },
    "Earnings": {
        "keywords": [
            "earnings",
            "eps",
            "revenue",
            "quarterly",
            "guidance",
            "beat estimates",
            "q1",
            "q2",
            "q3",
            "q4",
        ],
        "exclude": ["q&a"],
    },
    "Tech": {
        "keywords": [
            "openai",
            "chatgpt",
            "gpt-",
            "artificial intelligence",
            " ai ",
            "apple",
            "google",
            "microsoft",
            "nvidia",
            "tesla",
            "spacex",
            "iphone",
            "meta ",
        ],
        "exclude": ["earnings", "stock price"],
    },
    "Culture": {
        "keywords": [
            "movie",
            "box office",
            "album",
            "grammy",
            "oscar",
            "emmy",
            "taylor swift",
            "netflix",
            "billboard",
            "celebrity",
            "tiktok",
            "youtube",
            "mrbeast",
        ],
        "exclude": ["election", "lawsuit"],
    },
    "World": {
        "keywords": [
            "united nations",
            "pope",
            "earthquake",
            "hurricane",
            "pandemic",
            "climate",
            "king charles",
            "royal",
            "who ",
        ],
        "exclude": ["world cup", "world series"],
    },
    "Economy": {
        "keywords": [
            "fed ",
            "federal reserve",
            "interest rate",
            "rate cut",
            "rate hike",
            "inflation",
            "cpi",
            "gdp",
            "recession",
            "unemployment",
            "jobs report",
            "tariff",
        ],
        "exclude": ["bitcoin", "crypto"],
    },
    "Elections": {
        "keywords": [
            "election",
            "primary",
            "nominee",
            "nomination",
            "electoral",
            "ballot",
            "polls",
            "vote share",
            "mayor",
            "win the seat",
        ],
        "exclude": ["nba", "mvp", "all-star", "oscar"],
    },
    "Mentions": {
        "keywords": [
            "say ",
            "mention",
            "tweet",
            "post on x",
            "during the speech",
            "press conference",
        ],
        "exclude": ["poll"],
    },
}


def merge_keyword_table(base: KeywordTable, overrides: dict[str, dict[str, list[str]]]) -> KeywordTable:
    """Overlay per-category keyword/exclude lists from config onto base. New categories are added."""
    merged: KeywordTable = {name: {"keywords": list(e["keywords"]), "exclude": list(e["exclude"])} for name, e in base.items()}
    for name, entry in overrides.items():
        current = merged.setdefault(name, {"keywords": [], "exclude": []})
        if "keywords" in entry:
            current["keywords"] = [str(k) for k in entry["keywords"]]
        if "exclude" in entry:
            current["exclude"] = [str(k) for k in entry["exclude"]]
    return merged
