"""Expand a selected collision day into per-property guest handovers."""
from __future__ import annotations

from typing import Iterable, Union

from .config import load_config
from .index import ReservationIndex
from .types import CollisionDetail, CollisionEntry, Property, Reservation
from .utils.matching import PropertyNameIndex, display_name


def expand_collision_detail(
    date: str,
    property_ids: Iterable[str],
    reservations: Union[ReservationIndex, Iterable[Reservation]],
    properties: Union[PropertyNameIndex, Iterable[Property]],
) -> CollisionDetail:
    """Pair the outgoing and incoming guest for each property on ``date``.

    Entries follow ``property_ids`` order. Unknown properties get the
    configured placeholder name; a missing guest on either side stays ``None``.
    """
    index = reservations if isinstance(reservations, ReservationIndex) else ReservationIndex(reservations)
    names = properties if isinstance(properties, PropertyNameIndex) else PropertyNameIndex(properties)
    unknown = load_config().unknown_property_label

    entries = []
    for pid in property_ids:
        out_guest = index.first_departure(pid, date)
        entries.append(
            CollisionEntry(
                property_id=pid,
                property_name=display_name(names.get(pid), unknown),
                out_guest=out_guest,
                in_guest=index.first_arrival(pid, date, exclude=out_guest),
            )
        )
    return CollisionDetail(date=date, collisions=tuple(entries))


__all__ = ["expand_collision_detail"]
