"""Card-function, archetype and companion lookups."""

# Famous cards mapped to queries that find functional equivalents
CARDS_LIKE_MAP: dict[str, str] = {
    # Ramp
    "cultivate": 'otag:ramp o:"search your library" o:"basic land"',
    "kodama": 'otag:ramp o:"search your library" o:"basic land"',
    "rampant growth": "otag:ramp mv<=2",
    "nature's lore": 'otag:ramp mv<=2 o:"forest"',
    "farseek": "otag:ramp mv=2",
    "sol ring": 't:artifact mv<=2 o:"add" o:"{c}{c}"',
    "mana crypt": 't:artifact mv=0 o:"add"',
    "arcane signet": 't:artifact mv=2 o:"add" o:"color"',
    # Card draw
    "brainstorm": 'o:"draw" o:"cards" o:"put" o:"top"',
    "ponder": 'o:"look at the top" o:"shuffle"',
    "preordain": 'o:"scry" o:"draw a card" mv<=2',
    "rhystic": 'o:"whenever" o:"opponent" o:"pay" o:"draw"',
    # Removal
    "swords to plowshares": 'o:"exile target creature" mv<=2',
    "path to exile": 'o:"exile target creature" mv<=2',
    "wrath of god": "otag:board-wipe t:sorcery",
    "damnation": "otag:board-wipe t:sorcery",
    "cyclonic rift": 'otag:bounce o:"each"',
    # Counters
    "counterspell": "otag:counter mv<=2",
    "mana drain": "otag:counter mv<=2",
    "force of will": 'otag:counter o:"without paying"',
    # Aristocrats
    "blood artist": 'otag:death-trigger o:"loses"',
    "zulaport cutthroat": 'otag:death-trigger o:"loses"',
    "viscera seer": "otag:free-sacrifice-outlet",
    # Tutors
    "demonic tutor": 'otag:tutor o:"search your library" o:"hand"',
    "vampiric": 'otag:tutor o:"search your library" o:"top"',
    "enlightened tutor": 'otag:tutor (o:"artifact" or o:"enchantment")',
    "mystical tutor": 'otag:tutor (o:"instant" or o:"sorcery")',
    "worldly tutor": 'otag:tutor o:"creature card"',
    # Reanimation
    "reanimate": "otag:reanimate mv<=3",
    "animate dead": "otag:reanimate t:enchantment",
    "exhume": "otag:reanimate",
    # Value creatures
    "dark confidant": 'o:"beginning of your upkeep" o:"draw" o:"life"',
    # Equipment
    "lightning greaves": 't:equipment o:"haste" (o:"shroud" or o:"hexproof")',
    "swiftfoot boots": 't:equipment o:"haste" o:"hexproof"',
    "skullclamp": 't:equipment o:"draw"',
    # Mana dorks
    "llanowar elves": 'otag:mana-dork mv=1 o:"add {g}"',
    "birds of paradise": 'otag:mana-dork mv=1 o:"add" o:"any color"',
    # Wheels
    "wheel of fortune": "otag:wheel",
    "windfall": "otag:wheel",
    # Land destruction
    "strip mine": 't:land o:"destroy target land"',
    "ghost quarter": 't:land o:"destroy target" o:"land"',
}

# Deck strategy words mapped to the cards that support them
ARCHETYPE_MAP: dict[str, str] = {
    "sacrifice": (
        '(otag:sacrifice-outlet or (o:"whenever" (o:"dies" or o:"sacrifice")))'
    ),
    "spellslinger": (
        '(t:instant or t:sorcery or (o:"whenever you cast" '
        '(o:"instant" or o:"sorcery")))'
    ),
    "tokens": 'o:"create" o:"token"',
    "aggro": "t:creature mv<=3 pow>=2",
    "voltron": (
        '(t:equipment or t:aura or o:"equipped creature" '
        'or o:"enchanted creature")'
    ),
    "aristocrats": (
        '(otag:sacrifice-outlet or (o:"whenever" (o:"dies" or o:"sacrifice")))'
    ),
    "reanimator": "otag:reanimate",
    "control": "(otag:removal or otag:board-wipe)",
    "combo": (
        '(o:"infinite" or o:"you win the game" or o:"opponents lose the game")'
    ),
    "midrange": "t:creature mv>=3 mv<=5",
    "lifegain": "otag:lifegain",
    "mill": 'o:"mill"',
    "discard": '(o:"discard" o:"opponent")',
    "graveyard": '(otag:reanimate or o:"from your graveyard")',
    "tribal": '(o:"creature type" or o:"of the chosen type")',
    "superfriends": "t:planeswalker",
}

# Deck-building restrictions of companions that have a search equivalent
COMPANION_RESTRICTIONS: dict[str, tuple[str, ...]] = {
    "jegantha": (
        "-mana:{w}{w}",
        "-mana:{u}{u}",
        "-mana:{b}{b}",
        "-mana:{r}{r}",
        "-mana:{g}{g}",
    ),
    "lurrus": ("mv<=2", "-t:land"),
    "kaheera": ("(t:cat or t:elemental or t:nightmare or t:dinosaur or t:beast)",),
}
