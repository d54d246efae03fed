from __future__ import annotations
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from turnover.types import InventoryItem, Property, Reservation


class PropertyIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)
    id: Optional[str] = None
    name: Optional[str] = None
    internal_name: Optional[str] = Field(default=None, alias='internalName')

    def to_domain(self) -> Property:
        return Property.from_mapping(self.model_dump())


class ReservationIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)
    id: Optional[str] = None
    property_id: Optional[str] = Field(default=None, alias='propertyId')
    guest_name: Optional[str] = Field(default=None, alias='guestName')
    check_in: Optional[str] = Field(default=None, alias='checkIn')
    check_out: Optional[str] = Field(default=None, alias='checkOut')
    check_in_time: Optional[str] = Field(default=None, alias='checkInTime')
    check_out_time: Optional[str] = Field(default=None, alias='checkOutTime')

    def to_domain(self) -> Reservation:
        return Reservation.from_mapping(self.model_dump())


class InventoryItemIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)
    id: Optional[str] = None
    name: Optional[str] = None
    stock: Optional[Any] = None
    min_stock: Optional[Any] = Field(default=None, alias='minStock')

    def to_domain(self) -> InventoryItem:
        return InventoryItem.from_mapping(self.model_dump())


class SnapshotRequest(BaseModel):
    """Full or partial replacement; omitted collections are kept."""
    model_config = ConfigDict(populate_by_name=True)
    properties: Optional[List[PropertyIn]] = None
    reservations: Optional[List[ReservationIn]] = None
    inventory: Optional[List[InventoryItemIn]] = None


class SnapshotResponse(BaseModel):
    version: int
    properties: int
    reservations: int
    inventory: int


class CollisionDetailRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    date: str = Field(..., pattern=r'^\d{4}-\d{2}-\d{2}$')
    property_ids: List[str] = Field(default_factory=list, alias='propertyIds')
