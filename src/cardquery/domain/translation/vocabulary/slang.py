"""Community slang, spelled-out numbers and field synonyms."""

import re
from dataclasses import dataclass

# Card nicknames expanded by the normalizer
NICKNAME_MAP: dict[str, str] = {
    "bob": "dark confidant",
    "steve": "sakura-tribe elder",
    "gary": "gray merchant of asphodel",
    "tim": "prodigal sorcerer",
    "sad robot": "solemn simulacrum",
    "mom": "mother of runes",
    "goyf": "tarmogoyf",
    "snappy": "snapcaster mage",
    "bolt": "lightning bolt",
    "path": "path to exile",
    "swords": "swords to plowshares",
    "fow": "force of will",
}

# Canonical short codes for field names, longest spelling first
FIELD_SYNONYMS: dict[str, str] = {
    "converted mana cost": "mv",
    "mana value": "mv",
    "cmc": "mv",
    "color identity": "ci",
    "colour identity": "ci",
}

WORD_NUMBER_MAP: dict[str, int] = {
    "zero": 0,
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
}


@dataclass(frozen=True)
class SlangMapping:
    """A slang phrase consumed early and replaced by search syntax.

    An empty ``syntax`` consumes the phrase without emitting anything.
    """

    pattern: re.Pattern[str]
    syntax: str


def _slang(pattern: str, syntax: str) -> SlangMapping:
    return SlangMapping(re.compile(pattern, re.IGNORECASE), syntax)


SLANG_TO_SYNTAX_MAP: tuple[SlangMapping, ...] = (
    _slang(r"\bcounterspells?\b", "otag:counter"),
    _slang(r"\bfree sac(?:rifice)? outlets?\b", "otag:free-sacrifice-outlet"),
    _slang(r"\bsac(?:rifice)? outlets?\b", "otag:sacrifice-outlet"),
    _slang(r"\bpingers?\b", "otag:pinger"),
    _slang(r"\bloot(?:ing|ers?)\b", "otag:loot"),
    _slang(r"\brummag(?:e|ing)\b", "otag:rummage"),
    _slang(r"\bgraveyard hate\b", "otag:graveyard-hate"),
    _slang(r"\bmind control\b|\bsteal effects?\b", "otag:theft"),
    _slang(r"\banthems?\b", "otag:anthem"),
    _slang(r"\bbounce\b", "otag:bounce"),
    _slang(r"\bburn\b", "otag:burn"),
    _slang(r"\bramp\b", "otag:ramp"),
    _slang(r"\btron lands?\b|\btron\b", "t:land (set:atq or set:chr)"),
    _slang(r"\b(?:edh|cmdr)\b", "f:commander"),
    _slang(r"\bplease\b|\bi (?:want|need)\b|\bshow me\b|\bfind me\b", ""),
)
