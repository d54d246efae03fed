"""Reservation lookups keyed by property and turnover date."""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from .types import Reservation

_LOGGER = logging.getLogger(__name__)

_Key = Tuple[str, str]


class ReservationIndex:
    """Index a reservation snapshot by ``(property_id, check_in)`` and ``(property_id, check_out)``.

    Buckets keep snapshot order, so ``first_*`` return the same record a linear
    scan would. Reservations without a property id or date are skipped for the
    key they lack.
    """

    def __init__(self, reservations: Iterable[Reservation]) -> None:
        self.reservations: Tuple[Reservation, ...] = tuple(reservations)
        self._arrivals: Dict[_Key, List[Reservation]] = defaultdict(list)
        self._departures: Dict[_Key, List[Reservation]] = defaultdict(list)
        self._by_property: Dict[str, List[Reservation]] = defaultdict(list)
        skipped = 0
        for res in self.reservations:
            if res.property_id is None:
                skipped += 1
                continue
            self._by_property[res.property_id].append(res)
            if res.check_in is not None:
                self._arrivals[(res.property_id, res.check_in)].append(res)
            if res.check_out is not None:
                self._departures[(res.property_id, res.check_out)].append(res)
        if skipped:
            _LOGGER.debug("Skipped %s reservations without property id", skipped)

    def for_property(self, property_id: str) -> List[Reservation]:
        return list(self._by_property.get(property_id, ()))

    def first_arrival(
        self, property_id: str, day: Optional[str], exclude: Optional[Reservation] = None
    ) -> Optional[Reservation]:
        """First reservation checking in at ``property_id`` on ``day``, other than ``exclude``."""
        if day is None:
            return None
        for res in self._arrivals.get((property_id, day), ()):
            if res is not exclude:
                return res
        return None

    def first_departure(self, property_id: str, day: Optional[str]) -> Optional[Reservation]:
        """First reservation checking out of ``property_id`` on ``day``."""
        if day is None:
            return None
        bucket = self._departures.get((property_id, day))
        return bucket[0] if bucket else None

    def has_arrival(self, property_id: Optional[str], day: Optional[str]) -> bool:
        if property_id is None or day is None:
            return False
        return (property_id, day) in self._arrivals

    def is_turnover(self, res: Reservation) -> bool:
        """True when someone else checks in where and when ``res`` checks out."""
        if not self.has_arrival(res.property_id, res.check_out):
            return False
        # a zero-night stay (check_in == check_out) is not its own successor
        return any(other is not res for other in self._arrivals[(res.property_id, res.check_out)])


__all__ = ["ReservationIndex"]
