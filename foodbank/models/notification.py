# file: models/notification.py

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class EventType(str, Enum):
    NEW_APPLICATION = "new_application"
    NEW_REQUEST = "new_request"
    APPLICATION_ACCEPTED = "application_accepted"
    APPLICATION_REJECTED = "application_rejected"
    REQUEST_ACCEPTED = "request_accepted"
    REQUEST_REJECTED = "request_rejected"
    DATE_PROPOSED_OR_ACCEPTED = "date_proposed_or_accepted"
    BENEFICIARY_DATE_PROPOSAL = "beneficiary_date_proposal"
    PICKUP_REMINDER = "pickup_reminder"
    EXPIRING_ITEMS = "expiring_items"


class NotificationEvent(BaseModel):
    """A push message ready to be addressed to any number of tokens."""
    event_type: EventType
    title: str = Field(min_length=1)
    body: str = Field(min_length=1)
    data: Dict[str, str]
    android_channel_id: str = "default"
    sound: str = "default"
    badge: int = 1
    click_action: Optional[str] = None

    @model_validator(mode="after")
    def check_data_type(self):
        if self.data.get("type") != self.event_type.value:
            raise ValueError("data['type'] must match the event type")
        if "screen" not in self.data:
            raise ValueError("data must carry a 'screen' deep-link hint")
        return self


class Recipient(BaseModel):
    uid: str
    token: str
    name: str = "Admin"
    email: str = ""


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERROR = "error"


class TokenLookup(BaseModel):
    """Outcome of resolving one user's push token."""
    status: LookupStatus
    token: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def found(cls, token: str) -> "TokenLookup":
        return cls(status=LookupStatus.FOUND, token=token)

    @classmethod
    def not_found(cls) -> "TokenLookup":
        return cls(status=LookupStatus.NOT_FOUND)

    @classmethod
    def failed(cls, cause: Exception) -> "TokenLookup":
        return cls(status=LookupStatus.ERROR, error=str(cause) or type(cause).__name__)


class DispatchResult(BaseModel):
    recipient_id: str
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    token_invalid: bool = False


class DispatchSummary(BaseModel):
    success_count: int = 0
    failure_count: int = 0


class NotifyResult(BaseModel):
    success: bool
    error: Optional[str] = None
    success_count: int = 0
    failure_count: int = 0
    results: List[DispatchResult] = Field(default_factory=list)


class ExpirationScanSummary(BaseModel):
    item_count: int
    notifications_sent: int = 0
    notifications_failed: int = 0
    timestamp: datetime
    results: List[DispatchResult] = Field(default_factory=list)


class PickupReminderOutcome(BaseModel):
    request_id: str
    user_id: Optional[str] = None
    success: bool
    error: Optional[str] = None
    results: List[DispatchResult] = Field(default_factory=list)


class PickupReminderScanSummary(BaseModel):
    total_pickups: int
    reminders_sent: int = 0
    timestamp: datetime
    outcomes: List[PickupReminderOutcome] = Field(default_factory=list)

    @property
    def results(self) -> List[DispatchResult]:
        return [result for outcome in self.outcomes for result in outcome.results]
