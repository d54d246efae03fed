"""Immutable portfolio snapshots, the store that swaps them, and a derivation memo."""
from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Callable, Hashable, Iterable, Mapping, Optional, Tuple

from .config import load_config
from .index import ReservationIndex
from .types import InventoryItem, Property, Reservation
from .utils.matching import PropertyNameIndex

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the portfolio at derivation time."""

    properties: Tuple[Property, ...] = ()
    reservations: Tuple[Reservation, ...] = ()
    inventory: Tuple[InventoryItem, ...] = ()
    version: int = 0

    @classmethod
    def from_records(
        cls,
        properties: Iterable[Mapping[str, Any]] = (),
        reservations: Iterable[Mapping[str, Any]] = (),
        inventory: Iterable[Mapping[str, Any]] = (),
        version: int = 0,
    ) -> "Snapshot":
        return cls(
            properties=tuple(Property.from_mapping(p) for p in properties),
            reservations=tuple(Reservation.from_mapping(r) for r in reservations),
            inventory=tuple(InventoryItem.from_mapping(i) for i in inventory),
            version=version,
        )

    @cached_property
    def reservation_index(self) -> ReservationIndex:
        return ReservationIndex(self.reservations)

    @cached_property
    def property_index(self) -> PropertyNameIndex:
        return PropertyNameIndex(self.properties)


class SnapshotStore:
    """Holds the current snapshot; replacing it bumps the version."""

    def __init__(self, initial: Optional[Snapshot] = None) -> None:
        self._lock = threading.Lock()
        self._snapshot = initial or Snapshot()

    def current(self) -> Snapshot:
        with self._lock:
            return self._snapshot

    def replace(
        self,
        properties: Optional[Iterable[Property]] = None,
        reservations: Optional[Iterable[Reservation]] = None,
        inventory: Optional[Iterable[InventoryItem]] = None,
    ) -> Snapshot:
        """Swap in a new snapshot. Collections left as ``None`` carry over."""
        with self._lock:
            previous = self._snapshot
            self._snapshot = Snapshot(
                properties=tuple(properties) if properties is not None else previous.properties,
                reservations=tuple(reservations) if reservations is not None else previous.reservations,
                inventory=tuple(inventory) if inventory is not None else previous.inventory,
                version=previous.version + 1,
            )
            snapshot = self._snapshot
        _LOGGER.info(
            "Snapshot v%s: %s properties | %s reservations | %s inventory items",
            snapshot.version, len(snapshot.properties), len(snapshot.reservations), len(snapshot.inventory),
        )
        return snapshot


@dataclass
class DerivationCache:
    """Bounded memo for derived results keyed by snapshot version and query.

    Entries for superseded versions are never hit again and age out through
    the size bound.
    """

    max_entries: int = field(default_factory=lambda: load_config().cache_size)
    _entries: "OrderedDict[Hashable, Any]" = field(default_factory=OrderedDict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get_or_compute(self, snapshot: Snapshot, key: Hashable, compute: Callable[[], Any]) -> Any:
        cache_key = (snapshot.version, key)
        with self._lock:
            if cache_key in self._entries:
                self._entries.move_to_end(cache_key)
                return self._entries[cache_key]
        value = compute()
        with self._lock:
            self._entries[cache_key] = value
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["Snapshot", "SnapshotStore", "DerivationCache"]
