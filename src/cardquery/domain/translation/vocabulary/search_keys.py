"""Search keys accepted by the external query syntax."""

VALID_SEARCH_KEYS: frozenset[str] = frozenset(
    {
        # Core operators
        "c",
        "color",
        "id",
        "identity",
        "ci",
        "t",
        "type",
        "o",
        "oracle",
        "fo",
        "m",
        "mana",
        "mv",
        "cmc",
        "pow",
        "power",
        "tou",
        "toughness",
        "pt",
        "loy",
        "loyalty",
        "kw",
        "keyword",
        "r",
        "rarity",
        "s",
        "set",
        "edition",
        "e",
        "cn",
        "number",
        "collector",
        "lang",
        "language",
        "produces",
        # Boolean helpers
        "is",
        "not",
        "include",
        "in",
        "has",
        # Formats & legality
        "f",
        "format",
        "legal",
        "banned",
        "restricted",
        # Games
        "game",
        "games",
        "paper",
        "arena",
        "mtgo",
        # Art & cosmetics
        "a",
        "art",
        "artist",
        "ft",
        "flavor",
        "watermark",
        "border",
        "frame",
        "full",
        "textless",
        "atag",
        "arttag",
        # Time & value
        "year",
        "date",
        "new",
        "old",
        "usd",
        "eur",
        "tix",
        "cheapest",
        # Sorting & view
        "order",
        "sort",
        "dir",
        "direction",
        "unique",
        "as",
        "st",
        # Special
        "cube",
        "devotion",
        "name",
        "wildpair",
        # Oracle tags (aliases)
        "otag",
        "oracletag",
        "function",
    },
)
