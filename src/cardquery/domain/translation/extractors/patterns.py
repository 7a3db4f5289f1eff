"""Idiom extractors: companions, formats, oracle-text phrases, removal
targets, mana production and equip costs."""

from cardquery.domain.translation.extractors.base import cut, cut_all, word
from cardquery.domain.translation.extractors.mappings import add_tribal_payoff
from cardquery.domain.translation.ir import (
    ComparisonOperator,
    NumericConstraint,
    SearchIR,
)
from cardquery.domain.translation.vocabulary import (
    COMPANION_RESTRICTIONS,
    FORMAT_NAMES,
    KNOWN_OTAGS,
)

# ---------------------------------------------------------------------------
# Companions
# ---------------------------------------------------------------------------

_COMPANION = word(r"\bcompanions?\b")


def extract_companions(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """'lurrus companion' -> that companion's deck-building restriction."""
    if not _COMPANION.search(text):
        return text, ir

    for name, restrictions in COMPANION_RESTRICTIONS.items():
        pattern = word(rf"\b{name}\b")
        if pattern.search(text):
            ir.specials.extend(restrictions)
            text = cut_all(text, pattern)
            return cut_all(text, _COMPANION), ir

    ir.specials.append("is:companion")
    return cut_all(text, _COMPANION), ir


# ---------------------------------------------------------------------------
# Formats and commander
# ---------------------------------------------------------------------------

_COMMANDER_FORMAT = word(
    r"\bcommander(?:-|\s)?(?:deck|format|legal)\b"
    r"|\blegal in commander\b|\bfor\s+commander\b|\bin\s+commander\b"
    r"|\bcommander\s+(?:staples?|cards?|playable|options?|picks?|pieces?"
    r"|essentials?|must[- ]haves?)\b",
)
_COMMANDER = word(r"\b(?:as )?commanders?\b")
_FORMAT = word(
    rf"\b(?:from|in|for|legal in|legal for)\s+({'|'.join(FORMAT_NAMES)})\b",
)
_MULTICOLORED = word(
    r"\bmore than 1 colou?r\b|\bmulti-?colou?r(?:ed)?\b|\b(?:at least|2 or more) colou?rs?\b",
)
_BLUE = word(r"\bblue\b")
_INCLUDING = word(r"\b(?:one of which|including|with)\b")
_PHYREXIAN = word(r"\bphyrexian\s+mana\b")


def extract_special_patterns(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """Commander and format legality, multicolor counts, phyrexian mana."""
    if _COMMANDER_FORMAT.search(text):
        ir.specials.append("f:commander")
        text = cut_all(text, _COMMANDER_FORMAT)

    if _COMMANDER.search(text):
        ir.specials.append("is:commander")
        text = cut_all(text, _COMMANDER)

    if match := _FORMAT.search(text):
        fragment = f"f:{match.group(1).lower()}"
        if not ir.has_special(fragment):
            ir.specials.append(fragment)
        text = cut(text, match)

    if _MULTICOLORED.search(text):
        ir.color_count = NumericConstraint("id", ComparisonOperator.GT, 1)
        text = cut_all(text, _MULTICOLORED)

    if _BLUE.search(text) and _INCLUDING.search(text):
        ir.specials.append("ci>=u")
        text = cut_all(text, _INCLUDING)
        text = cut_all(text, _BLUE)

    if _PHYREXIAN.search(text):
        ir.specials.append("m:/P/")
        text = cut_all(text, _PHYREXIAN)
    return text, ir


# ---------------------------------------------------------------------------
# Oracle-text idioms
# ---------------------------------------------------------------------------

_DRAW = word(r"\b(?:draw cards?|card\s+draw)\b")
_SACRIFICE = word(r"\bsacrifice\b")
_LANDS = word(r"\blands?\b")
_ACTIVATED = word(r"\bactivated abilit(?:y|ies)\b")
_NO_MANA_COST = word(r"\bdo(?:es)? not cost mana\b")
_LAND_SEARCH = word(r"\bsearch(?:es)?\s+(?:for\s+|your\s+library\s+for\s+)?(?:a\s+)?lands?\b")
_OPPONENT_ACTION = word(
    r"\bwhen(?:ever)?\s+(?:an?\s+)?opponents?\s+"
    r"(?:takes?\s+an\s+action|does\s+something|casts?|attacks?|plays?)\b",
)
_MAKE_TOKENS = word(r"\b(?:make|create|generates?)\s+tokens?(?:\s+creatures?)?\b")
_RETURN_VERB = word(r"\b(?:return|bring\s+back|reanimate|revive)\b")
_GRAVEYARD = word(r"\bgraveyard\b")
_RETURN_FROM_GRAVEYARD = word(
    r"\b(?:return|bring\s+back|reanimate|revive)\s+(?:\w+\s+)*?(?:from\s+)?"
    r"(?:the\s+)?graveyard(?:\s+to\s+(?:the\s+)?battlefield)?\b",
)
_COPY_SPELLS = word(r"\bcopy\s+(?:instant|sorcery|spells?)\b")
_COST_REDUCTION = word(
    r"\b(?:reduce|lower)\s+(?:spell\s+)?costs?\b|\bcost\s+reduct(?:ion|ers?)s?\b",
)
_PREVENT_ATTACKS = word(r"\bprevent\s+attacks?\b|\btax\s+attackers?\b")


def extract_oracle_patterns(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """Common rules-text idioms that have no dedicated tag."""
    if _DRAW.search(text):
        if "draw" in KNOWN_OTAGS:
            ir.tags.append("otag:draw")
        else:
            ir.oracle.append(r"o:/draw (a|two|three|\d+) cards?/")
        text = cut_all(text, _DRAW)

    if _SACRIFICE.search(text) and _LANDS.search(text):
        ir.oracle.extend(("o:sacrifice", "o:land"))
        ir.exclude_type("land")
        text = cut_all(cut_all(text, _SACRIFICE), _LANDS)

    if _ACTIVATED.search(text) and _NO_MANA_COST.search(text):
        ir.oracle.extend(('o:":"', r"-o:/\{[WUBRG0-9XSC]\}:/"))
        text = cut_all(cut_all(text, _ACTIVATED), _NO_MANA_COST)

    if _LAND_SEARCH.search(text):
        ir.oracle.extend(('o:"search your library"', 'o:"land"'))
        text = cut_all(text, _LAND_SEARCH)

    text = add_tribal_payoff(text, ir)

    if _OPPONENT_ACTION.search(text):
        ir.oracle.extend(('o:"whenever"', 'o:"opponent"'))
        text = cut_all(text, _OPPONENT_ACTION)

    if _MAKE_TOKENS.search(text):
        ir.oracle.extend(('o:"create"', 'o:"token"'))
        text = cut_all(text, _MAKE_TOKENS)

    if _RETURN_VERB.search(text) and _GRAVEYARD.search(text):
        ir.oracle.append('o:"return" o:"graveyard" o:"battlefield"')
        text = cut_all(cut_all(text, _RETURN_FROM_GRAVEYARD), _GRAVEYARD)

    if _COPY_SPELLS.search(text):
        ir.oracle.append('o:"copy" (o:"instant" or o:"sorcery" or o:"spell")')
        text = cut_all(text, _COPY_SPELLS)

    if _COST_REDUCTION.search(text):
        ir.oracle.append('o:"costs" o:"less"')
        text = cut_all(text, _COST_REDUCTION)

    if _PREVENT_ATTACKS.search(text):
        ir.oracle.append("(o:\"can't attack\" or o:\"costs\" o:\"more to attack\")")
        text = cut_all(text, _PREVENT_ATTACKS)
    return text, ir


# ---------------------------------------------------------------------------
# Removal targets
# ---------------------------------------------------------------------------

_TARGETS = "artifact|enchantment|creature|planeswalker|land|permanent"
_PREFIX = r"\b(?:(?:spells?|cards?|things?)\s+)?(?:(?:that|which|to)\s+)?"
_REMOVAL_TAGS: dict[str, str] = {
    "artifact": "otag:artifact-removal",
    "enchantment": "otag:enchantment-removal",
    "creature": "otag:creature-removal",
    "planeswalker": "otag:planeswalker-removal",
    "land": 'o:"destroy" o:"land"',
    "permanent": "otag:removal",
}
_TARGETING_PATTERNS = (
    (word(rf"{_PREFIX}destroy\s+({_TARGETS})s?\b"), "remove"),
    (word(rf"\b({_TARGETS})\s*destruction\b"), "remove"),
    (word(rf"{_PREFIX}exile\s+({_TARGETS})s?\b"), "exile"),
    (word(rf"{_PREFIX}remove\s+({_TARGETS})s?\b"), "remove"),
    (word(rf"\b({_TARGETS})\s*removal\b"), "remove"),
    (word(rf"{_PREFIX}counter\s+({_TARGETS})(?:\s*spell)?s?\b"), "counter"),
    (word(rf"{_PREFIX}kill\s+(creature)s?\b"), "remove"),
    (
        word(rf"{_PREFIX}deal\s+damage\s+to\s+(artifact|enchantment|creature|planeswalker|permanent)s?\b"),
        "remove",
    ),
)


def extract_targeting(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """'destroy artifacts', 'exile creatures', 'counter creature spells'.

    Must run before type parsing so the target type is not read as a
    required card type.
    """
    for pattern, effect in _TARGETING_PATTERNS:
        while match := pattern.search(text):
            target = match.group(1).lower()
            if effect == "remove":
                ir.specials.append(_REMOVAL_TAGS[target])
            elif effect == "exile":
                ir.oracle.append(f'o:"exile" o:"{target}"')
            elif target == "creature":
                ir.oracle.append('o:"counter" o:"creature spell"')
            else:
                ir.oracle.append(f'o:"counter" o:"{target}"')
            text = cut(text, match)
    return text, ir


# ---------------------------------------------------------------------------
# Mana production and equip costs
# ---------------------------------------------------------------------------

_TWO_MANA = word(r"\b(?:produce|produces|produced|add|adds)\s*2\s+mana\b")
_EQUIP_COST = word(r"\bequips?(?: cost)?(?: for)?\s*(\d+)\b")
_OR_LESS = word(r"\bor less\b")


def extract_mana_production(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """'produces 2 mana' -> nonland sources of two mana."""
    if not _TWO_MANA.search(text):
        return text, ir

    ir.oracle.append(r'(o:"add {c}{c}" or o:/add \{[WUBRGC]\}\{[WUBRGC]\}/)')
    text = cut_all(text, _TWO_MANA)

    land_in_group = any("t:land" in s and " or " in s for s in ir.specials)
    land_intent = "land" in ir.types or bool(_LANDS.search(text)) or land_in_group
    if not land_intent:
        ir.exclude_type("land")
    return text, ir


def extract_equipment(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """'equip 2', 'equip cost 3 or less'."""
    match = _EQUIP_COST.search(text)
    if not match:
        return text, ir

    cost = int(match.group(1))
    if _OR_LESS.search(text):
        ir.oracle.append(rf"o:/equip \{{[0-{cost}]\}}/")
        text = cut_all(cut(text, match), _OR_LESS)
    else:
        ir.oracle.append(f'o:"equip {{{cost}}}"')
        text = cut(text, match)
    return text, ir
