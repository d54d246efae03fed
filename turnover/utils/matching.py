"""
Property name matching utilities.

Purpose:
- Resolve a free-text marker (e.g. "Casa Amplia") to one property of the
  portfolio, case-insensitively and by substring.
- Keep the outcome independent of the order the property list arrives in.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from typing import Dict, Iterable, List, Optional, Tuple

from ..types import Property

_LOGGER = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_name(value: Optional[str]) -> str:
    """Casefold, strip accents and collapse whitespace ("  Casá  Amplia" → "casa amplia")."""
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _WHITESPACE_RE.sub(" ", stripped).strip().casefold()


def display_name(prop: Optional[Property], fallback: Optional[str] = None) -> Optional[str]:
    """Internal name, then public name, then ``fallback``."""
    if prop is None:
        return fallback
    return prop.display_name or fallback


class PropertyNameIndex:
    """Deterministic name lookup over a property snapshot.

    Entries are sorted by (normalised display name, id) once, so a substring
    query returns the same property however the input list was ordered.
    An exact normalised match beats a substring match.
    """

    def __init__(self, properties: Iterable[Property]) -> None:
        entries: List[Tuple[str, str, Property]] = []
        self._by_id: Dict[str, Property] = {}
        for prop in properties:
            entries.append((normalize_name(prop.display_name), prop.id, prop))
            # duplicate ids: the first occurrence is kept
            self._by_id.setdefault(prop.id, prop)
        entries.sort(key=lambda entry: (entry[0], entry[1]))
        self._entries = entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, property_id: Optional[str]) -> Optional[Property]:
        if property_id is None:
            return None
        return self._by_id.get(property_id)

    def find(self, marker: Optional[str]) -> Optional[Property]:
        """Return the property whose display name contains ``marker``."""
        needle = normalize_name(marker)
        if not needle:
            return None
        first_partial: Optional[Property] = None
        for name, _pid, prop in self._entries:
            if name == needle:
                return prop
            if first_partial is None and needle in name:
                first_partial = prop
        if first_partial is None:
            _LOGGER.debug("No property matches marker %r among %s properties", marker, len(self._entries))
        return first_partial


def match_property_id(name: Optional[str], properties: Iterable[Property]) -> Optional[str]:
    """Resolve an imported row's property name to an id.

    Falls back to the first property of the portfolio when nothing matches,
    and to ``None`` for an empty portfolio.
    """
    props = list(properties)
    if not props:
        return None
    match = PropertyNameIndex(props).find(name)
    if match is None:
        _LOGGER.debug("Property name %r unmatched; assigning %s", name, props[0].id)
        return props[0].id
    return match.id


__all__ = [
    "normalize_name",
    "display_name",
    "PropertyNameIndex",
    "match_property_id",
]
