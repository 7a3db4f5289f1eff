"""Color names, shorthand codes and named color combinations."""

COLOR_MAP: dict[str, str] = {
    "white": "w",
    "w": "w",
    "blue": "u",
    "u": "u",
    "black": "b",
    "b": "b",
    "red": "r",
    "r": "r",
    "green": "g",
    "g": "g",
    "colorless": "c",
    "c": "c",
}

COLOR_NAMES = ("white", "blue", "black", "red", "green")

# Guilds, shards, wedges and four-color nephilim names
MULTICOLOR_MAP: dict[str, str] = {
    "azorius": "wu",
    "dimir": "ub",
    "rakdos": "br",
    "gruul": "rg",
    "selesnya": "gw",
    "orzhov": "wb",
    "izzet": "ur",
    "golgari": "bg",
    "boros": "rw",
    "simic": "gu",
    "bant": "gwu",
    "esper": "wub",
    "grixis": "ubr",
    "jund": "brg",
    "naya": "rgw",
    "abzan": "wbg",
    "jeskai": "urw",
    "sultai": "bgu",
    "mardu": "rwb",
    "temur": "gur",
    "yore-tiller": "wubr",
    "glint-eye": "ubrg",
    "dune-brood": "brgw",
    "ink-treader": "rgwu",
    "witch-maw": "gwub",
    "sans-white": "ubrg",
    "sans-blue": "brgw",
    "sans-black": "rgwu",
    "sans-red": "gwub",
    "sans-green": "wubr",
}

GUILD_NAMES = (
    "azorius",
    "dimir",
    "rakdos",
    "gruul",
    "selesnya",
    "orzhov",
    "izzet",
    "golgari",
    "boros",
    "simic",
)
