"""Dictionary-based fallback compiler.

A deliberately simple translator with no dependency on the extractor
pipeline, the rule store or any external service. Callers use it when
the primary translation path is unreachable.
"""

import re

from cardquery.domain.translation.filters import SearchFilters, apply_filters

# Exact phrases that bypass all parsing
PRETRANSLATED: dict[str, str] = {
    "dragons": "t:dragon",
    "mono red creatures": "id=r t:creature",
    "budget board wipes under $5": "otag:boardwipe usd<5",
    "commander staples under $3": "f:commander usd<3",
    "creatures with flying and deathtouch": "t:creature kw:flying kw:deathtouch",
    "green ramp spells that search for lands": (
        'c:g otag:ramp o:"search your library" o:"basic land"'
    ),
    "elf tribal payoffs for commander": (
        't:elf f:commander (o:"elf" o:"you control" or o:"elf" o:"+1/+1")'
    ),
    "creatures that make token creatures when an opponent takes an action": (
        't:creature o:"whenever" o:"opponent" o:"create" o:"token"'
    ),
    "cards that double etb effects": (
        'o:"enters the battlefield" o:"triggers an additional time"'
    ),
    "utility lands for commander in esper under $5": (
        "t:land -t:basic id<=wub f:commander usd<5"
    ),
    "equipment or auras that give bonuses to equipped or enchanted permanent for commander": (
        '(t:equipment or t:aura) (o:"equipped creature" or o:"enchanted creature") '
        "f:commander"
    ),
    "creatures that deal damage or drain life when a creature dies for commander": (
        't:creature o:"whenever" (o:"dies" or o:"creature dies") '
        '(o:"deals" or o:"lose" or o:"drain") f:commander'
    ),
    "blue red instants or sorceries that reward casting spells for commander": (
        'id<=ur (t:instant or t:sorcery or o:"whenever you cast") f:commander'
    ),
    "selesnya cards that create creature tokens for commander": (
        'id<=gw o:"create" o:"token" f:commander'
    ),
    "black cards that return creatures from graveyard to battlefield for commander": (
        'c:b o:"return" o:"from" o:"graveyard" o:"battlefield" f:commander'
    ),
    "white cards that restrict or tax opponents for commander": (
        'c:w (o:"opponents" or o:"each opponent") '
        '(o:"pay" or o:"can\'t" or o:"cost" o:"more") f:commander'
    ),
    "simic cards that let all players draw cards or gain mana for commander": (
        'id<=gu (o:"each player" or o:"all players") (o:"draw" or o:"add") f:commander'
    ),
    "cards that mill opponents or put cards from library into graveyard for commander": (
        '(o:"mill" or (o:"library" o:"graveyard")) f:commander'
    ),
    "landfall cards legal in commander": "otag:landfall f:commander",
    "orzhov cards that gain life or care about lifegain triggers for commander": (
        'id<=wb (o:"gain" o:"life" or o:"whenever" o:"life") f:commander'
    ),
    "selesnya creatures that add or care about +1/+1 counters for commander": (
        'id<=gw t:creature o:"+1/+1 counter" f:commander'
    ),
    "azorius cards that exile and return permanents or have etb effects for commander": (
        'id<=wu (o:"exile" o:"return" or o:"enters the battlefield") f:commander'
    ),
    "izzet cards that make all players discard and draw for commander": (
        'id<=ur o:"each player" o:"discard" o:"draw" f:commander'
    ),
    "golgari cards that recur from graveyard or benefit from creatures dying for commander": (
        'id<=bg (o:"from your graveyard" or o:"whenever" o:"dies") f:commander'
    ),
    "planeswalkers or cards that proliferate or protect planeswalkers for commander": (
        '(t:planeswalker or o:"proliferate" or o:"planeswalker" o:"protect") f:commander'
    ),
    "selesnya enchantments or creatures that draw cards when enchantments enter for commander": (
        'id<=gw (t:enchantment or t:creature) o:"enchantment" o:"draw" f:commander'
    ),
    "simic creatures with infect or proliferate for commander": (
        'id<=gu (kw:infect or o:"proliferate") f:commander'
    ),
    "treasure token cards legal in commander": 'o:"treasure" o:"token" f:commander',
    "izzet cards with storm or that copy spells or reduce spell costs for commander": (
        'id<=ur (kw:storm or o:"copy" o:"spell" or o:"costs" o:"less") f:commander'
    ),
    "chaos cards legal in commander": '(o:"coin" or o:"random" or o:"chaos") f:commander',
    "tribal lords legal in commander": "(otag:lord or otag:anthem) f:commander",
    "azorius enchantments or artifacts that prevent attacks or tax attackers for commander": (
        'id<=wu (t:enchantment or t:artifact) (o:"can\'t attack" or o:"attacks" o:"pay") '
        "f:commander"
    ),
    "azorius counterspells or board wipes or removal for commander": (
        "id<=wu (otag:counter or otag:boardwipe or otag:removal) f:commander"
    ),
}

SLANG_MAP: dict[str, str] = {
    "mana rocks": 't:artifact o:"add" o:"{"',
    "mana rock": 't:artifact o:"add" o:"{"',
    "mana dorks": 't:creature o:"add" o:"{"',
    "mana dork": 't:creature o:"add" o:"{"',
    "board wipes": "otag:boardwipe",
    "board wipe": "otag:boardwipe",
    "boardwipes": "otag:boardwipe",
    "boardwipe": "otag:boardwipe",
    "counterspells": "otag:counter",
    "counterspell": "otag:counter",
    "card draw": "otag:draw",
    "ramp": "otag:ramp",
    "removal": "otag:removal",
    "tutors": "otag:tutor",
    "tutor": "otag:tutor",
    "lifegain": "otag:lifegain",
    "mill": 'o:"mill"',
    "blink": "otag:blink",
    "flicker": "otag:flicker",
    "reanimation": "otag:reanimate",
    "reanimate": "otag:reanimate",
    "treasure tokens": 'o:"create" o:"treasure"',
    "treasure token": 'o:"create" o:"treasure"',
    "treasure": 'o:"treasure"',
    "aristocrats": 'o:"when" o:"dies"',
    "voltron": "(t:equipment or t:aura)",
    "spellslinger": "(t:instant or t:sorcery)",
    "tokens": 'o:"create" o:"token"',
    "sacrifice": 'o:"sacrifice"',
}

GUILD_WORDS: dict[str, str] = {
    "azorius": "id<=wu",
    "dimir": "id<=ub",
    "rakdos": "id<=br",
    "gruul": "id<=rg",
    "selesnya": "id<=gw",
    "orzhov": "id<=wb",
    "izzet": "id<=ur",
    "golgari": "id<=bg",
    "boros": "id<=rw",
    "simic": "id<=gu",
}

COLOR_WORDS: dict[str, str] = {
    "white": "c:w",
    "blue": "c:u",
    "black": "c:b",
    "red": "c:r",
    "green": "c:g",
    "colorless": "c:c",
}

TYPE_WORDS: dict[str, str] = {
    "creatures?": "t:creature",
    "artifacts?": "t:artifact",
    "enchantments?": "t:enchantment",
    "instants?": "t:instant",
    "sorcery|sorceries": "t:sorcery",
    "planeswalkers?": "t:planeswalker",
    "lands?": "t:land",
    "equipments?": "t:equipment",
    "auras?": "t:aura",
}

FORMAT_WORDS: dict[str, str] = {
    "commander": "f:commander",
    "edh": "f:commander",
    "standard": "f:standard",
    "modern": "f:modern",
    "pioneer": "f:pioneer",
    "legacy": "f:legacy",
    "vintage": "f:vintage",
    "pauper": "f:pauper",
    "brawl": "f:brawl",
    "historic": "f:historic",
}

KEYWORD_WORDS: dict[str, str] = {
    "first strike": "kw:first-strike",
    "double strike": "kw:double-strike",
    "flying": "kw:flying",
    "trample": "kw:trample",
    "deathtouch": "kw:deathtouch",
    "lifelink": "kw:lifelink",
    "haste": "kw:haste",
    "vigilance": "kw:vigilance",
    "menace": "kw:menace",
    "reach": "kw:reach",
    "hexproof": "kw:hexproof",
    "indestructible": "kw:indestructible",
    "flash": "kw:flash",
    "defender": "kw:defender",
    "infect": "kw:infect",
    "prowess": "kw:prowess",
    "ward": "kw:ward",
    "cascade": "kw:cascade",
}

COST_WORDS: dict[str, str] = {
    "cheap": "mv<=3",
    "low": "mv<=2",
    "expensive": "mv>=6",
    "high": "mv>=5",
}

_FILLER = re.compile(
    r"\b(?:that|the|with|for|and|or|a|an|in|of|to|make|produce|spells?|bonus(?:es)?"
    r"|reward|casting|gives?|when|dies?|deal|drain|legal|cards?|pieces?)\b",
)
_WHITESPACE = re.compile(r"\s+")


def _compile_table(table: dict[str, str]) -> tuple[tuple[re.Pattern[str], str], ...]:
    return tuple(
        (re.compile(rf"\b(?:{words})\b"), syntax) for words, syntax in table.items()
    )


_SLANG = tuple(
    (re.compile(rf"\b{re.escape(phrase)}\b"), syntax)
    for phrase, syntax in sorted(SLANG_MAP.items(), key=lambda kv: len(kv[0]), reverse=True)
)
_MULTI_WORD_KEYWORDS = tuple(
    (re.compile(rf"\b{re.escape(phrase)}\b"), syntax)
    for phrase, syntax in KEYWORD_WORDS.items()
    if " " in phrase
)
_SINGLE_WORD_KEYWORDS = tuple(
    (re.compile(rf"\b{re.escape(phrase)}\b"), syntax)
    for phrase, syntax in KEYWORD_WORDS.items()
    if " " not in phrase
)
# Applied in this order, each removing what it matched
_WORD_TABLES = (
    _compile_table(GUILD_WORDS),
    _compile_table(COLOR_WORDS),
    _compile_table(TYPE_WORDS),
    _compile_table(FORMAT_WORDS),
    _SINGLE_WORD_KEYWORDS,
    _compile_table(COST_WORDS),
)


def _tidy(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def compile_fallback(query: str, filters: SearchFilters | None = None) -> str:
    """Translate ``query`` using only the static dictionaries above.

    Parameters
    ----------
    query
        Natural-language search text
    filters
        Optional filters appended as ``f:`` / ``ci=`` fragments

    Returns
    -------
    The compiled query. When no dictionary entry matched at all, the
    trimmed input is returned unchanged so it works as a name search.
    """
    lower = _tidy(query.lower())
    if not lower:
        return apply_filters("", filters)

    if lower in PRETRANSLATED:
        return apply_filters(PRETRANSLATED[lower], filters)

    parts: list[str] = []
    residual = lower

    for table in (_MULTI_WORD_KEYWORDS, _SLANG, *_WORD_TABLES):
        for pattern, syntax in table:
            if pattern.search(residual):
                parts.append(syntax)
                residual = _tidy(pattern.sub(" ", residual, count=1))

    if not parts:
        return apply_filters(query.strip(), filters)

    residual = _tidy(_FILLER.sub(" ", residual))
    if len(residual) > 2:
        residual = residual.replace('"', "")
        parts.append(f'o:"{residual}"')

    return apply_filters(" ".join(parts), filters)
