"""Oracle and art tag taxonomy.

``KNOWN_OTAGS`` lists the oracle tags the external database actually
serves. Anything outside it must fall back to plain oracle-text search.
"""

import re
from dataclasses import dataclass

KNOWN_OTAGS: frozenset[str] = frozenset(
    {
        # Ramp & mana
        "ramp",
        "mana-rock",
        "manarock",
        "mana-dork",
        "mana-doubler",
        "mana-sink",
        "ritual",
        # Card advantage
        "draw",
        "cantrip",
        "loot",
        "wheel",
        "impulse-draw",
        "scry",
        "surveil",
        # Tutors
        "tutor",
        # Removal
        "removal",
        "spot-removal",
        "creature-removal",
        "artifact-removal",
        "enchantment-removal",
        "planeswalker-removal",
        "board-wipe",
        "boardwipe",
        "mass-removal",
        "graveyard-hate",
        "naturalize",
        "pacifism",
        "removal-artifact",
        "removal-creature",
        "removal-enchantment",
        "removal-land",
        "removal-planeswalker",
        # Graveyard
        "recursion",
        "reanimate",
        "regrowth",
        "self-mill",
        "graveyard-order-matters",
        "activate-from-graveyard",
        "cast-from-graveyard",
        "mulch",
        # Life & combat
        "lifegain",
        "soul-warden-ability",
        "burn",
        "fog",
        "combat-trick",
        "bite",
        "pinger",
        "evasion",
        "attack-trigger",
        "pseudo-haste",
        "overrun",
        "anthem",
        "lord",
        # Blink & bounce
        "blink",
        "flicker",
        "bounce",
        "banish",
        # Copy
        "copy",
        "copy-permanent",
        "copy-spell",
        "clone",
        # Control
        "counter",
        "hatebear",
        "pillowfort",
        "punisher",
        "tapper",
        "untapper",
        "theft",
        "threaten",
        "bribery",
        # Sacrifice
        "sacrifice-outlet",
        "free-sacrifice-outlet",
        "death-trigger",
        "synergy-sacrifice",
        "synergy-lifegain",
        "synergy-discard",
        "synergy-equipment",
        "synergy-proliferate",
        "discard-outlet",
        "rummage",
        # Special effects
        "extra-turn",
        "extra-combat",
        "polymorph",
        "egg",
        "balance",
        "plunder",
        "persist",
        "win-condition",
        "alternate-win-condition",
        "activated-ability",
        "affinity",
        "battalion",
        "bushido",
        "revolt",
        # Ability granting
        "gives-flash",
        "gives-hexproof",
        "gives-haste",
        "gives-flying",
        "gives-trample",
        "gives-vigilance",
        "gives-deathtouch",
        "gives-lifelink",
        "gives-first-strike",
        "gives-double-strike",
        "gives-menace",
        "gives-reach",
        "gives-protection",
        "gives-indestructible",
        # Lands & enchantress
        "landfall",
        "extra-land",
        "enchantress",
        "painland",
        "bounceland",
        "boltland",
        # Counters
        "counters-matter",
        "counter-doubler",
        "counter-movement",
        "cost-reducer",
    },
)


@dataclass(frozen=True)
class TagPattern:
    """A phrase that maps to an oracle tag, with a text fallback."""

    pattern: re.Pattern[str]
    tag: str
    fallback: str | None = None


def _tag(pattern: str, tag: str, fallback: str | None = None) -> TagPattern:
    return TagPattern(re.compile(pattern, re.IGNORECASE), tag, fallback)


_DOUBLER_FALLBACK = (
    '(o:"triggers an additional time" or '
    'o:"one or more triggered abilities" o:"trigger")'
)

# More specific phrases must come before generic ones
TAG_FIRST_MAP: tuple[TagPattern, ...] = (
    _tag(r"\bmana sinks?\b", "mana-sink", 'o:"{X}"'),
    _tag(r"\bmana ?rocks?\b", "manarock", 't:artifact o:"add"'),
    _tag(r"\bmana dorks?\b", "mana-dork", 't:creature o:"add"'),
    _tag(r"\bboard[ -]?wipes?\b", "board-wipe", 'o:"destroy all"'),
    _tag(r"\bwraths?\b", "board-wipe", 'o:"destroy all"'),
    _tag(r"\bcantrips?\b", "cantrip", 'o:"draw a card"'),
    _tag(r"\btutors?\b", "tutor", 'o:"search your library"'),
    _tag(r"\bremoval\b", "removal", 'o:"destroy"'),
    _tag(r"\bcard draw\b", "draw", 'o:"draw"'),
    _tag(r"\bgives? flash\b", "gives-flash", 'o:"flash"'),
    _tag(r"\bgives? hexproof\b", "gives-hexproof", 'o:"hexproof"'),
    _tag(r"\bhexproof providers?\b", "gives-hexproof", 'o:"hexproof"'),
    _tag(r"\bgives? haste\b", "gives-haste", 'o:"haste"'),
    _tag(r"\bgives? indestructible\b", "gives-indestructible", 'o:"indestructible"'),
    _tag(r"\bself[ -]?mill\b", "self-mill", 'o:"mill" o:"you"'),
    _tag(
        r"\bcares? about graveyard order\b",
        "graveyard-order-matters",
        'o:"graveyard" o:"order"',
    ),
    _tag(
        r"\bgraveyard order(?: matters)?\b",
        "graveyard-order-matters",
        'o:"graveyard" o:"order"',
    ),
    _tag(
        r"\bsoul sisters?\b",
        "soul-warden-ability",
        'o:"gain 1 life" o:"creature enters"',
    ),
    _tag(r"\buntap(?:per)?s?\b", "untapper", 'o:"untap"'),
    _tag(r"\bedicts?\b", "creature-removal", 'o:"sacrifice a creature"'),
    _tag(r"\bfogs?\b", "fog", 'o:"prevent all combat damage"'),
    _tag(r"\blifegain\b", "lifegain", 'o:"gain" o:"life"'),
    _tag(r"\blandfall\b", "landfall"),
    _tag(
        r"\breanimation\b",
        "reanimate",
        'o:"from your graveyard to the battlefield"',
    ),
    _tag(r"\bstax\b", "stax", "o:\"opponent\" (o:\"can't\" or o:\"doesn't\")"),
    _tag(r"\bhatebears?\b", "hatebear", "t:creature o:\"can't\""),
    _tag(r"\bpillowfort\b", "pillowfort", "o:\"can't attack you\""),
    _tag(
        r"\baristocrats?\b",
        "aristocrats",
        'o:"whenever" (o:"dies" or o:"sacrifice")',
    ),
    _tag(r"\bwheels?\b", "wheel", 'o:"discard" o:"draw"'),
    _tag(
        r"\bimpulse draw\b",
        "impulse-draw",
        'o:"exile" o:"until end of turn" o:"play"',
    ),
    _tag(r"\btreasure generators?\b", "treasure-generator", 'o:"create" o:"treasure"'),
    _tag(r"\bclones?\b", "clone", 'o:"copy of" o:"creature"'),
    _tag(r"\bblink(?:s|ing)?\b", "blink", 'o:"exile" o:"return" o:"battlefield"'),
    _tag(r"\bflicker(?:s|ing)?\b", "flicker", 'o:"exile" o:"return" o:"battlefield"'),
    _tag(r"\bextra turns?\b", "extra-turn", 'o:"extra turn"'),
    _tag(r"\bextra combats?\b", "extra-combat", 'o:"additional combat"'),
    _tag(r"\bcost reducers?\b", "cost-reducer", 'o:"cost" o:"less"'),
    _tag(r"\bcounters? matter\b", "counters-matter", 'o:"counter" o:"on"'),
    _tag(r"\bcounter ?magics?\b", "counter", 'o:"counter target spell"'),
    _tag(r"\betb doubl(?:ers?|ing)\b", "etb-doubler", _DOUBLER_FALLBACK),
    _tag(r"\bdoubles? etbs?\b", "etb-doubler", _DOUBLER_FALLBACK),
    _tag(
        r"\bpanharmonicon(?:-?like)?\s*(?:effect|card)?s?\b",
        "etb-doubler",
        _DOUBLER_FALLBACK,
    ),
    _tag(
        r"\bdeath trigger doubl(?:ers?|ing)\b",
        "death-trigger-doubler",
        '(o:"triggers an additional time" o:"die")',
    ),
    _tag(
        r"\bltb doubl(?:ers?|ing)\b",
        "ltb-doubler",
        '(o:"triggers an additional time" o:"leaves")',
    ),
    _tag(r"\bforce[sd]?\s+(?:to\s+)?attack\b", "goad", '(o:goad or o:"must attack")'),
)


@dataclass(frozen=True)
class ArtTagPattern:
    """A phrase that maps to an art tag. ``tag=None`` takes group 1."""

    pattern: re.Pattern[str]
    tag: str | None


def _art(subject: str, tag: str) -> ArtTagPattern:
    return ArtTagPattern(
        re.compile(rf"\b{subject} in (?:the )?art\b", re.IGNORECASE),
        tag,
    )


ART_TAG_MAP: tuple[ArtTagPattern, ...] = (
    _art("cows?", "cow"),
    _art("dogs?", "dog"),
    _art("cats?", "cat"),
    _art("trees?", "tree"),
    _art("mountains?", "mountain"),
    _art("ocean", "ocean"),
    _art("skulls?", "skull"),
    _art("hooks?", "hook"),
    _art("axes?", "axe"),
    _art("swords?", "sword"),
    _art("shields?", "shield"),
    _art("armou?r", "armor"),
    _art("helmets?", "helmet"),
    _art("fire", "fire"),
    _art("water", "water"),
    _art("dragons?", "dragon"),
    _art("angels?", "angel"),
    _art("demons?", "demon"),
    _art("horses?", "horse"),
    _art("(?:wolf|wolves)", "wolf"),
    _art("birds?", "bird"),
    _art("snakes?", "snake"),
    _art("spiders?", "spider"),
    ArtTagPattern(
        re.compile(
            r"\bart (?:with|showing|depicting|featuring) (\w+)\b",
            re.IGNORECASE,
        ),
        None,
    ),
)
