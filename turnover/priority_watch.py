"""Dedicated turnover watch for the portfolio's priority property."""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from .config import load_config
from .index import ReservationIndex
from .types import PriorityWatchResult, Property, Reservation
from .utils.dates import on_or_after
from .utils.matching import PropertyNameIndex

_LOGGER = logging.getLogger(__name__)


def resolve_priority_property(
    properties: Union[PropertyNameIndex, Iterable[Property]],
    marker: Optional[str] = None,
) -> Optional[Property]:
    """Find the property whose name contains the priority marker."""
    names = properties if isinstance(properties, PropertyNameIndex) else PropertyNameIndex(properties)
    return names.find(marker if marker is not None else load_config().priority_marker)


def next_turnover(index: ReservationIndex, property_id: str, today: str) -> Optional[Reservation]:
    """Earliest outgoing reservation at ``property_id`` that hands over to a new arrival."""
    best: Optional[Reservation] = None
    for res in index.for_property(property_id):
        if not on_or_after(res.check_out, today) or not index.is_turnover(res):
            continue
        # strict comparison keeps the first of several same-day departures
        if best is None or res.check_out < best.check_out:
            best = res
    return best


def watch_priority_property(
    reservations: Union[ReservationIndex, Iterable[Reservation]],
    properties: Union[PropertyNameIndex, Iterable[Property]],
    today: str,
    marker: Optional[str] = None,
) -> PriorityWatchResult:
    """
    Report the next turnover at the priority property.

    An unresolved marker yields an empty result; a resolved property with
    nothing ahead yields a result with ``date`` unset ("currently clear").
    """
    prop = resolve_priority_property(properties, marker)
    if prop is None:
        _LOGGER.debug("Priority marker unresolved; watch is empty")
        return PriorityWatchResult()

    index = reservations if isinstance(reservations, ReservationIndex) else ReservationIndex(reservations)
    out_guest = next_turnover(index, prop.id, today)
    if out_guest is None:
        return PriorityWatchResult(property=prop)

    day = out_guest.check_out
    return PriorityWatchResult(
        property=prop,
        date=day,
        out_guest=out_guest,
        in_guest=index.first_arrival(prop.id, day, exclude=out_guest),
    )


__all__ = ["resolve_priority_property", "next_turnover", "watch_priority_property"]
