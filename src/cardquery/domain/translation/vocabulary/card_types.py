"""Card types recognized by the type and exclusion extractors."""

CARD_TYPES: tuple[str, ...] = (
    "creature",
    "artifact",
    "enchantment",
    "instant",
    "sorcery",
    "land",
    "planeswalker",
    "battle",
    "kindred",
    "equipment",
)

# Types that negation phrases ("non-creature", "landless") can exclude
EXCLUDABLE_TYPES: tuple[str, ...] = (
    "creature",
    "land",
    "artifact",
    "enchantment",
    "instant",
    "sorcery",
    "planeswalker",
)

# Types that take part in "X or Y" disjunctions
DISJUNCTIVE_TYPES: tuple[str, ...] = EXCLUDABLE_TYPES

FORMAT_NAMES: tuple[str, ...] = (
    "standard",
    "pioneer",
    "modern",
    "legacy",
    "vintage",
    "pauper",
    "historic",
    "timeless",
    "oathbreaker",
    "penny",
    "alchemy",
    "brawl",
    "gladiator",
)
