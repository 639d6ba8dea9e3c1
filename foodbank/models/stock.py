# file: models/stock.py

from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Optional

from pydantic import BaseModel


class RequestStatus(IntEnum):
    SUBMITTED = 0
    AWAITING_PICKUP = 1
    COMPLETED = 2
    REJECTED = 3
    CANCELLED = 4


def as_utc(value: Any) -> Optional[datetime]:
    """Store timestamps come back tz-aware; naive values are treated as UTC."""
    if not isinstance(value, datetime):
        return None
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class StockItem(BaseModel):
    id: str
    quantity: int = 0
    expiration_date: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "StockItem":
        return cls(
            id=doc_id,
            quantity=int(data.get("quantity") or 0),
            expiration_date=as_utc(data.get("expirationDate")),
        )


class PickupRequest(BaseModel):
    id: str
    status: int
    user_id: Optional[str] = None
    scheduled_pickup_date: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: dict) -> "PickupRequest":
        return cls(
            id=doc_id,
            status=int(data.get("status", -1)),
            user_id=data.get("userId") or None,
            scheduled_pickup_date=as_utc(data.get("scheduledPickupDate")),
        )
