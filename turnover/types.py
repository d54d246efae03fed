"""Value types shared across the turnover collision engine."""
from __future__ import annotations

import builtins
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .config import load_config
from .utils.dates import to_iso_date


def _pick(record: Mapping[str, Any], *keys: str) -> Any:
    """Return the first non-None value among ``keys`` (camelCase or snake_case)."""
    for key in keys:
        value = record.get(key)
        if value is not None:
            return value
    return None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class Property:
    """A rentable unit in the portfolio."""

    id: str
    name: str = ""
    internal_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Operational name when present, otherwise the public name."""
        return self.internal_name or self.name

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "Property":
        return cls(
            id=str(_pick(record, "id") or ""),
            name=_text(_pick(record, "name")) or "",
            internal_name=_text(_pick(record, "internalName", "internal_name")),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "internalName": self.internal_name}


@dataclass(frozen=True)
class Reservation:
    """One stay at one property. Dates are ISO strings and never validated."""

    id: str
    property_id: Optional[str]
    guest_name: str = ""
    check_in: Optional[str] = None
    check_out: Optional[str] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None

    @property
    def effective_check_in_time(self) -> str:
        return self.check_in_time or load_config().default_check_in_time

    @property
    def effective_check_out_time(self) -> str:
        return self.check_out_time or load_config().default_check_out_time

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "Reservation":
        property_id = _pick(record, "propertyId", "property_id")
        return cls(
            id=str(_pick(record, "id") or ""),
            property_id=str(property_id) if property_id is not None else None,
            guest_name=_text(_pick(record, "guestName", "guest_name")) or "",
            check_in=to_iso_date(_pick(record, "checkIn", "check_in")),
            check_out=to_iso_date(_pick(record, "checkOut", "check_out")),
            check_in_time=_text(_pick(record, "checkInTime", "check_in_time")),
            check_out_time=_text(_pick(record, "checkOutTime", "check_out_time")),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "propertyId": self.property_id,
            "guestName": self.guest_name,
            "checkIn": self.check_in,
            "checkOut": self.check_out,
            "checkInTime": self.effective_check_in_time,
            "checkOutTime": self.effective_check_out_time,
        }


@dataclass(frozen=True)
class InventoryItem:
    """Consumable stock tracked per portfolio (linen, soap, coffee...)."""

    id: str
    name: str = ""
    stock: float = 0
    min_stock: float = 0

    @property
    def needs_restock(self) -> bool:
        return self.stock <= self.min_stock

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "InventoryItem":
        def _number(value: Any) -> float:
            try:
                return float(value)
            except (TypeError, ValueError):
                return 0.0

        return cls(
            id=str(_pick(record, "id") or ""),
            name=_text(_pick(record, "name")) or "",
            stock=_number(_pick(record, "stock")),
            min_stock=_number(_pick(record, "minStock", "min_stock")),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "stock": self.stock, "minStock": self.min_stock}


def _maybe_payload(value: Any) -> Optional[Dict[str, Any]]:
    return value.to_payload() if value is not None else None


@dataclass(frozen=True)
class CriticalDay:
    """A collision date aggregated across every property it touches."""

    date: str
    property_ids: Tuple[str, ...] = ()

    @property
    def count(self) -> int:
        return len(self.property_ids)

    def to_payload(self) -> Dict[str, Any]:
        return {"date": self.date, "count": self.count, "propertyIds": list(self.property_ids)}


@dataclass(frozen=True)
class PriorityWatchResult:
    """Next turnover for the priority property, or the reason there is none."""

    property: Optional[Property] = None
    date: Optional[str] = None
    out_guest: Optional[Reservation] = None
    in_guest: Optional[Reservation] = None

    # the "property" field shadows the builtin inside this class body
    @builtins.property
    def is_clear(self) -> bool:
        """Property resolved but nothing to turn over."""
        return self.property is not None and self.date is None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "property": _maybe_payload(self.property),
            "date": self.date,
            "outGuest": _maybe_payload(self.out_guest),
            "inGuest": _maybe_payload(self.in_guest),
        }


@dataclass(frozen=True)
class CollisionEntry:
    property_id: str
    property_name: str
    out_guest: Optional[Reservation] = None
    in_guest: Optional[Reservation] = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "propertyId": self.property_id,
            "propertyName": self.property_name,
            "outGuest": _maybe_payload(self.out_guest),
            "inGuest": _maybe_payload(self.in_guest),
        }


@dataclass(frozen=True)
class CollisionDetail:
    date: str
    collisions: Tuple[CollisionEntry, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        return {"date": self.date, "collisions": [c.to_payload() for c in self.collisions]}


@dataclass(frozen=True)
class OpsStat:
    """One counter on the daily operations board."""

    key: str
    label: str
    value: int

    def to_payload(self) -> Dict[str, Any]:
        return {"key": self.key, "label": self.label, "value": self.value}


def payloads(items: List[Any]) -> List[Dict[str, Any]]:
    """Serialise a list of value types."""
    return [item.to_payload() for item in items]


__all__ = [
    "Property",
    "Reservation",
    "InventoryItem",
    "CriticalDay",
    "PriorityWatchResult",
    "CollisionEntry",
    "CollisionDetail",
    "OpsStat",
    "payloads",
]
