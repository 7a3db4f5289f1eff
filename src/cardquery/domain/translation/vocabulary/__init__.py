"""Static vocabulary tables used by the translation compiler."""

from cardquery.domain.translation.vocabulary.card_types import (
    CARD_TYPES,
    DISJUNCTIVE_TYPES,
    EXCLUDABLE_TYPES,
    FORMAT_NAMES,
)
from cardquery.domain.translation.vocabulary.cards import (
    ARCHETYPE_MAP,
    CARDS_LIKE_MAP,
    COMPANION_RESTRICTIONS,
)
from cardquery.domain.translation.vocabulary.colors import (
    COLOR_MAP,
    COLOR_NAMES,
    GUILD_NAMES,
    MULTICOLOR_MAP,
)
from cardquery.domain.translation.vocabulary.keywords import (
    ENABLER_KEYWORDS,
    KEYWORD_MAP,
    SPECIAL_KEYWORD_MAP,
)
from cardquery.domain.translation.vocabulary.search_keys import VALID_SEARCH_KEYS
from cardquery.domain.translation.vocabulary.slang import (
    FIELD_SYNONYMS,
    NICKNAME_MAP,
    SLANG_TO_SYNTAX_MAP,
    WORD_NUMBER_MAP,
    SlangMapping,
)
from cardquery.domain.translation.vocabulary.tags import (
    ART_TAG_MAP,
    KNOWN_OTAGS,
    TAG_FIRST_MAP,
    ArtTagPattern,
    TagPattern,
)

__all__ = [
    "ARCHETYPE_MAP",
    "ART_TAG_MAP",
    "CARDS_LIKE_MAP",
    "CARD_TYPES",
    "COLOR_MAP",
    "COLOR_NAMES",
    "COMPANION_RESTRICTIONS",
    "DISJUNCTIVE_TYPES",
    "ENABLER_KEYWORDS",
    "EXCLUDABLE_TYPES",
    "FIELD_SYNONYMS",
    "FORMAT_NAMES",
    "GUILD_NAMES",
    "KEYWORD_MAP",
    "KNOWN_OTAGS",
    "MULTICOLOR_MAP",
    "NICKNAME_MAP",
    "SLANG_TO_SYNTAX_MAP",
    "SPECIAL_KEYWORD_MAP",
    "TAG_FIRST_MAP",
    "VALID_SEARCH_KEYS",
    "WORD_NUMBER_MAP",
    "ArtTagPattern",
    "SlangMapping",
    "TagPattern",
]
