"""Daily operations board: today's counters, upcoming stays and restock needs."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional

from .config import load_config
from .expander import expand_collision_detail
from .priority_watch import watch_priority_property
from .scanner import scan_portfolio_collisions
from .snapshot import Snapshot
from .types import InventoryItem, OpsStat, Property, Reservation, payloads
from .utils.matching import PropertyNameIndex, display_name

_LOGGER = logging.getLogger(__name__)

STAT_LABELS = {
    "cleanings_today": "Cleanings today",
    "check_ins_today": "Check-ins",
    "check_outs_today": "Check-outs",
    "restock_needed": "Low stock",
    "total_reservations": "Total reservations",
}


def shopping_list(inventory: Iterable[InventoryItem]) -> List[InventoryItem]:
    """Items at or below their minimum stock."""
    return [item for item in inventory if item.needs_restock]


def compute_daily_stats(
    reservations: Iterable[Reservation],
    inventory: Iterable[InventoryItem],
    today: str,
) -> List[OpsStat]:
    stays = list(reservations)
    departures = sum(1 for r in stays if r.check_out == today)
    arrivals = sum(1 for r in stays if r.check_in == today)
    values = {
        # every departure leaves a unit to clean
        "cleanings_today": departures,
        "check_ins_today": arrivals,
        "check_outs_today": departures,
        "restock_needed": len(shopping_list(inventory)),
        "total_reservations": len(stays),
    }
    return [OpsStat(key=key, label=label, value=values[key]) for key, label in STAT_LABELS.items()]


def upcoming_stays(
    reservations: Iterable[Reservation],
    properties: Iterable[Property],
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """First ``limit`` reservations in snapshot order, with property names attached."""
    if limit is None:
        limit = load_config().upcoming_limit
    names = properties if isinstance(properties, PropertyNameIndex) else PropertyNameIndex(properties)
    unknown = load_config().unknown_property_label
    stays: List[Dict[str, Any]] = []
    for res in list(reservations)[: max(limit, 0)]:
        payload = res.to_payload()
        payload["propertyName"] = display_name(names.get(res.property_id), unknown)
        stays.append(payload)
    return stays


def build_ops_board(snapshot: Snapshot, today: str) -> Dict[str, Any]:
    """Everything the dashboard home renders, derived from one snapshot."""
    index = snapshot.reservation_index
    names = snapshot.property_index
    critical_days = scan_portfolio_collisions(index, today)
    watch = watch_priority_property(index, names, today)
    watch_detail = None
    if watch.property is not None and watch.date is not None:
        watch_detail = expand_collision_detail(watch.date, [watch.property.id], index, names).to_payload()

    board = {
        "today": today,
        "version": snapshot.version,
        "stats": payloads(compute_daily_stats(snapshot.reservations, snapshot.inventory, today)),
        "criticalDays": payloads(critical_days),
        "priorityWatch": {**watch.to_payload(), "isClear": watch.is_clear, "detail": watch_detail},
        "upcomingStays": upcoming_stays(snapshot.reservations, names),
        "shoppingList": payloads(shopping_list(snapshot.inventory)),
    }
    _LOGGER.debug(
        "Built ops board v%s for %s: %s critical days, priority=%s",
        snapshot.version, today, len(critical_days), watch.date,
    )
    return board


__all__ = [
    "STAT_LABELS",
    "shopping_list",
    "compute_daily_stats",
    "upcoming_stays",
    "build_ops_board",
]
