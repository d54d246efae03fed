"""Portfolio-wide scan for same-day turnovers."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Union

from .config import load_config
from .index import ReservationIndex
from .types import CriticalDay, Reservation
from .utils.dates import on_or_after

_LOGGER = logging.getLogger(__name__)


def collision_dates(index: ReservationIndex) -> Dict[str, Dict[str, None]]:
    """Map each turnover date to the properties colliding on it.

    Inner dicts act as insertion-ordered sets, so a property shows up once per
    date no matter how many guests land on it.
    """
    dates: Dict[str, Dict[str, None]] = {}
    for res in index.reservations:
        if not index.is_turnover(res):
            continue
        dates.setdefault(res.check_out, {})[res.property_id] = None
    return dates


def scan_portfolio_collisions(
    reservations: Union[ReservationIndex, Iterable[Reservation]],
    today: str,
    limit: Optional[int] = None,
) -> List[CriticalDay]:
    """
    Rank the soonest collision days across the portfolio.

    Parameters
    ----------
    reservations : ReservationIndex or iterable of Reservation
        Snapshot to scan. An existing index is reused as-is.
    today : str
        ISO date; earlier collision days are dropped.
    limit : int, optional
        Maximum number of days returned (``Config.max_critical_days`` by default).
    """
    index = reservations if isinstance(reservations, ReservationIndex) else ReservationIndex(reservations)
    if limit is None:
        limit = load_config().max_critical_days

    days = [
        CriticalDay(date=day, property_ids=tuple(props))
        for day, props in collision_dates(index).items()
        if on_or_after(day, today)
    ]
    # stable: same-date entries keep discovery order
    days.sort(key=lambda d: d.date)
    ranked = days[: max(limit, 0)]

    _LOGGER.debug(
        "Scanned %s reservations: %s upcoming collision days, returning %s",
        len(index.reservations), len(days), len(ranked),
    )
    return ranked


__all__ = ["collision_dates", "scan_portfolio_collisions"]
