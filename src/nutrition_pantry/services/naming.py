"""Ingredient name normalization and canonical name resolution."""

import re
from collections.abc import Iterable

from nutrition_pantry.domain.pantry import CatalogFood

_PARENTHETICAL = re.compile(r"\(.*?\)")
_PREPARATION_WORDS = re.compile(r"\b(raw|cooked|uncooked)\b")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_SIBILANT_PLURAL = re.compile(r"(ches|shes|xes|zes|ses)$")


def normalize_name(name: str) -> str:
    """Reduce an ingredient name to a comparison key.

    Lower-cases, drops parenthetical notes and preparation words such as
    "raw" or "cooked", collapses punctuation to single spaces and singularizes
    each word.
    """
    cleaned = name.lower()
    cleaned = _PARENTHETICAL.sub("", cleaned)
    cleaned = _PREPARATION_WORDS.sub("", cleaned)
    cleaned = _NON_ALNUM.sub(" ", cleaned).strip()
    words = [_singularize(word) for word in cleaned.split(" ")]
    return " ".join(word for word in words if word)


def _singularize(word: str) -> str:
    if word.endswith("ss"):
        return word
    if word.endswith("ies"):
        return word[:-3] + "y"
    if _SIBILANT_PLURAL.search(word):
        return word[:-2]
    if word.endswith("s"):
        return word[:-1]
    return word


def build_canonical_name_map(
    pantry_names: Iterable[str], foods: Iterable[CatalogFood] = ()
) -> dict[str, str]:
    """Map normalized names to the literal name the pantry uses.

    Pantry names win; catalog names and aliases only fill keys that are
    still free. When the pantry stocks a food under one of its aliases, the
    food's other names resolve to that pantry entry.
    """
    mapping: dict[str, str] = {}
    for name in pantry_names:
        mapping[normalize_name(name)] = name
    pantry_keys = set(mapping)
    for food in foods:
        keys = [normalize_name(name) for name in (food.name, *food.aliases)]
        target = next(
            (mapping[key] for key in keys if key in pantry_keys), food.name
        )
        for key in keys:
            mapping.setdefault(key, target)
    return mapping


def resolve_name(name: str, canonical_map: dict[str, str]) -> str:
    """Return the canonical name for a recipe name, or the name itself."""
    return canonical_map.get(normalize_name(name), name)
