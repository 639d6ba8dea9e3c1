# file: services/pickup_reminder_service.py

import asyncio
import logging
from datetime import datetime, time, timezone, tzinfo
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from foodbank.config import SCHEDULER_TIMEZONE
from foodbank.database.connection import DocumentSource, QueryFilter
from foodbank.models.notification import PickupReminderOutcome, PickupReminderScanSummary
from foodbank.models.stock import PickupRequest, RequestStatus
from foodbank.services.dispatcher import Dispatcher
from foodbank.services.notification_service import notify_pickup_reminder

logger = logging.getLogger(__name__)

REQUESTS_COLLECTION = "requests"
MISSING_RECIPIENT_ERROR = "missing recipient"


def day_window(now: datetime, tz: tzinfo) -> Tuple[datetime, datetime]:
    """Start (00:00:00.000) and end (23:59:59.999) of the calendar day of `now` in `tz`."""
    local_day = now.astimezone(tz).date()
    start = datetime.combine(local_day, time.min, tzinfo=tz)
    end = datetime.combine(local_day, time(23, 59, 59, 999000), tzinfo=tz)
    return start, end


async def _remind(store: DocumentSource, dispatcher: Dispatcher, request: PickupRequest) -> PickupReminderOutcome:
    if not request.user_id:
        logger.info(f"Request {request.id} has no userId, skipping reminder")
        return PickupReminderOutcome(request_id=request.id, success=False, error=MISSING_RECIPIENT_ERROR)

    result = await notify_pickup_reminder(store, dispatcher, request.id, request.user_id)
    return PickupReminderOutcome(
        request_id=request.id,
        user_id=request.user_id,
        success=result.success,
        error=result.error,
        results=result.results,
    )


async def check_and_send_pickup_reminders(
    store: DocumentSource,
    dispatcher: Dispatcher,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> PickupReminderScanSummary:
    """Reminds every beneficiary whose accepted request is due for pickup today."""
    logger.info("Starting pickup reminder check...")
    now = now or datetime.now(timezone.utc)
    start_of_today, end_of_today = day_window(now, tz or ZoneInfo(SCHEDULER_TIMEZONE))
    logger.info(
        f"Checking for pickups scheduled between {start_of_today.isoformat()} and {end_of_today.isoformat()}"
    )

    docs = await store.query(
        REQUESTS_COLLECTION,
        [
            QueryFilter("status", "==", int(RequestStatus.AWAITING_PICKUP)),
            QueryFilter("scheduledPickupDate", ">=", start_of_today),
            QueryFilter("scheduledPickupDate", "<=", end_of_today),
        ],
    )
    requests = [PickupRequest.from_document(doc.id, doc.data) for doc in docs]
    logger.info(f"Found {len(requests)} pickups scheduled for today")

    outcomes = await asyncio.gather(*(_remind(store, dispatcher, r) for r in requests))
    reminders_sent = sum(1 for outcome in outcomes if outcome.success)

    logger.info(f"Sent {reminders_sent}/{len(requests)} pickup reminders successfully")
    return PickupReminderScanSummary(
        total_pickups=len(requests),
        reminders_sent=reminders_sent,
        timestamp=datetime.now(timezone.utc),
        outcomes=list(outcomes),
    )
