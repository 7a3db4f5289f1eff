"""Dictionary-driven extractors.

These run first so the generic extractors further down the pipeline
never see phrases that belong to a named concept.
"""

import re

from cardquery.domain.translation.extractors.base import cut, cut_all, word
from cardquery.domain.translation.ir import SearchIR
from cardquery.domain.translation.normalizer import collapse_whitespace
from cardquery.domain.translation.vocabulary import (
    ARCHETYPE_MAP,
    ART_TAG_MAP,
    CARDS_LIKE_MAP,
    ENABLER_KEYWORDS,
    KEYWORD_MAP,
    KNOWN_OTAGS,
    SLANG_TO_SYNTAX_MAP,
    SPECIAL_KEYWORD_MAP,
    TAG_FIRST_MAP,
)

_CARDS_LIKE_PATTERNS = (
    word(r"\b(?:cards?|spells?|creatures?)\s+(?:like|similar to)\s+([^,]+?)(?=\s+(?:in|for|that)\b|$)"),
    word(r"\b(?:like|similar to)\s+([^,]+?)(?=\s+(?:in|for|that)\b|$)"),
    word(r"\b([^,]+?)\s+(?:alternatives?|replacements?|substitutes?)\b"),
)
_QUOTES = re.compile(r"^['\"]|['\"]$")


def extract_cards_like(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """'cards like sol ring' -> the functional equivalent query."""
    for pattern in _CARDS_LIKE_PATTERNS:
        while match := pattern.search(text):
            card_name = _QUOTES.sub("", match.group(1).strip().lower())
            card_name = re.sub(r"\s+", " ", card_name)

            syntax = next(
                (
                    query
                    for known, query in CARDS_LIKE_MAP.items()
                    if card_name and (known in card_name or card_name in known)
                ),
                None,
            )
            if syntax:
                ir.specials.append(syntax)
            else:
                ir.warn(f'No specific mapping for "{card_name}".')

            text = cut(text, match)
    return text, ir


def extract_slang_terms(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """Community slang that maps straight to search syntax."""
    for mapping in SLANG_TO_SYNTAX_MAP:
        if mapping.pattern.search(text):
            if mapping.syntax.strip():
                ir.specials.append(mapping.syntax)
            text = cut_all(text, mapping.pattern)
    return text, ir


_MANA_HEAD = re.compile(r"mana\b", re.IGNORECASE)
_TRAILING_NUMBER = re.compile(r"\b\d+\s*$")


def _cut_tag(text: str, pattern: re.Pattern[str]) -> str:
    """Remove a tag phrase, keeping a leading 'N mana' as a mana value.

    '4 mana rock' shares its 'mana' with the tag phrase; the number is
    left next to an ``mv`` marker so the numeric extractor still sees it.
    """

    def replace(match: re.Match[str]) -> str:
        if _MANA_HEAD.match(match.group(0)) and _TRAILING_NUMBER.search(text, 0, match.start()):
            return " mv "
        return " "

    return collapse_whitespace(pattern.sub(replace, text))


def extract_tags(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """Oracle-tag phrases first, then art-tag phrases."""
    for entry in TAG_FIRST_MAP:
        if not entry.pattern.search(text):
            continue
        text = _cut_tag(text, entry.pattern)
        if entry.tag in KNOWN_OTAGS:
            ir.tags.append(f"otag:{entry.tag}")
        elif entry.fallback:
            ir.oracle.append(entry.fallback)
            ir.warn(f"Oracle tag unavailable for {entry.tag}; using oracle fallback.")

    for art in ART_TAG_MAP:
        match = art.pattern.search(text)
        if not match:
            continue
        tag = art.tag if art.tag is not None else match.group(1).lower()
        ir.art_tags.append(f"atag:{tag}")
        text = cut_all(text, art.pattern)
    return text, ir


_TOKEN_PATTERNS = (
    word(r"\b(?:cards? that )?(?:make|makes|create|creates|generate|generates|generating|produce|produces)\s+(\w+)\s+tokens?\b"),
    word(r"\b(\w+)\s+token\s+(?:generator|creator|maker)s?\b"),
)
_TOKEN_STOPWORDS = frozenset({"a", "an", "the", "some", "any", "multiple", "many"})


def extract_token_creation(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """'make treasure tokens' -> o:"create" o:"treasure" o:"token"."""
    for pattern in _TOKEN_PATTERNS:
        pos = 0
        while match := pattern.search(text, pos):
            token_type = match.group(1).lower()
            if token_type in _TOKEN_STOPWORDS:
                pos = match.end()
                continue
            ir.oracle.append(f'o:"create" o:"{token_type}" o:"token"')
            text = cut(text, match)
            pos = match.start()
    return text, ir


def _enabler_fragment(keyword: str, ir: SearchIR) -> None:
    tag = f"gives-{keyword}"
    if tag in KNOWN_OTAGS:
        ir.tags.append(f"otag:{tag}")
    else:
        ir.oracle.append(f'o:"{keyword.replace("-", " ")}"')


def extract_enablers(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """'haste enablers', 'gives trample' -> otag:gives-X."""
    for template in (r"\b{kw}\s+enablers?\b", r"\b(?:grants?|gives?)\s+{kw}\b"):
        for keyword in ENABLER_KEYWORDS:
            pattern = word(template.format(kw=keyword.replace("-", "[ -]?")))
            if pattern.search(text):
                _enabler_fragment(keyword, ir)
                text = cut_all(text, pattern)
    return text, ir


def extract_keywords(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """Keyword abilities -> kw: fragments."""
    matched: set[str] = set()

    for keyword, syntax in KEYWORD_MAP.items():
        kw = re.escape(keyword)
        for pattern in (
            word(rf"\b(?:with|has|have)\s+{kw}\b"),
            word(rf"\b{kw}\s+(?=creatures?\b)"),
            word(rf"(?<=creatures )(?:with|that have)\s+{kw}\b"),
            word(rf"(?<=creature )(?:with|that have)\s+{kw}\b"),
        ):
            if pattern.search(text):
                if keyword not in matched:
                    ir.specials.append(syntax)
                    matched.add(keyword)
                text = cut_all(text, pattern)

    for keyword, syntax in KEYWORD_MAP.items():
        if keyword in matched:
            continue
        pattern = word(rf"\b{re.escape(keyword)}\b")
        if pattern.search(text):
            ir.specials.append(syntax)
            matched.add(keyword)
            text = cut_all(text, pattern)

    for keyword, syntax in SPECIAL_KEYWORD_MAP.items():
        kw = re.escape(keyword)
        for pattern in (
            word(rf"\b(?:with|has|have)\s+{kw}\b"),
            word(rf"\b{kw}\b"),
        ):
            if pattern.search(text):
                ir.specials.append(syntax)
                text = cut_all(text, pattern)
                break
    return text, ir


_TRIBAL_PAYOFF = word(r"\b(\w+)\s+tribal\s+(?:payoffs?|synerg(?:y|ies)|lords?|rewards?)\b")
_VERB_SACRIFICE = word(r"\bsacrifice\s+(?:a\s+)?(?:creature|land|artifact|enchantment|permanent)")
_GRAVEYARD_VERB = word(r"\b(?:return|bring\s+back|reanimate|revive|from)\b")
_GRAVEYARD = word(r"\bgraveyard\b")
# Archetype words used as verbs or objects are not deck themes
_NOT_AFTER_VERB = r"(?<!\bto )(?<!\bcan )(?<!\blet you )(?<!\bthat )(?<!\bwhich )"
_NOT_BEFORE_OBJECT = r"(?!\s+(?:a|an|the|your|target|lands?|creatures?|artifacts?)\b)"


def add_tribal_payoff(text: str, ir: SearchIR) -> str:
    match = _TRIBAL_PAYOFF.search(text)
    if not match:
        return text
    tribe = match.group(1).lower()
    if tribe.endswith("s"):
        tribe = tribe[:-1]
    ir.oracle.append(f'(o:"{tribe}" o:"you control" or o:"{tribe}" o:"+1/+1")')
    ir.include_subtype(tribe)
    return cut(text, match)


def extract_archetypes(text: str, ir: SearchIR) -> tuple[str, SearchIR]:
    """Standalone deck-theme words ('aristocrats', 'voltron')."""
    text = add_tribal_payoff(text, ir)

    skip_sacrifice = bool(_VERB_SACRIFICE.search(text))
    skip_graveyard = bool(_GRAVEYARD_VERB.search(text) and _GRAVEYARD.search(text))

    for archetype, syntax in ARCHETYPE_MAP.items():
        if archetype == "sacrifice" and skip_sacrifice:
            continue
        if archetype == "graveyard" and skip_graveyard:
            continue
        pattern = word(
            rf"{_NOT_AFTER_VERB}\b{re.escape(archetype)}\b{_NOT_BEFORE_OBJECT}",
        )
        if pattern.search(text):
            ir.specials.append(syntax)
            text = cut_all(text, pattern)
    return text, ir
