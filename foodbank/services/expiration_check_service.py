# file: services/expiration_check_service.py

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from foodbank.config import EXPIRATION_THRESHOLD_DAYS
from foodbank.database.connection import DocumentSource, QueryFilter
from foodbank.models.notification import EventType, ExpirationScanSummary
from foodbank.models.stock import StockItem
from foodbank.services.dispatcher import Dispatcher
from foodbank.services.messages import build_notification
from foodbank.services.notification_service import notify_admins

logger = logging.getLogger(__name__)

ITEMS_COLLECTION = "items"


async def find_expiring_items(
    store: DocumentSource,
    days_threshold: int = EXPIRATION_THRESHOLD_DAYS,
    now: Optional[datetime] = None,
) -> List[StockItem]:
    """
    Returns the in-stock items expiring between now and now + days_threshold.

    The store only filters on the upper bound; already-expired items are
    dropped here.
    """
    now = now or datetime.now(timezone.utc)
    threshold_date = now + timedelta(days=days_threshold)

    docs = await store.query(
        ITEMS_COLLECTION,
        [
            QueryFilter("quantity", ">", 0),
            QueryFilter("expirationDate", "<=", threshold_date),
        ],
    )
    items = [StockItem.from_document(doc.id, doc.data) for doc in docs]
    expiring = [
        item for item in items
        if item.quantity > 0
        and item.expiration_date is not None
        and now <= item.expiration_date <= threshold_date
    ]
    logger.info(f"Found {len(expiring)} items expiring within {days_threshold} days")
    return expiring


async def check_and_notify_expiring_items(
    store: DocumentSource,
    dispatcher: Dispatcher,
    days_threshold: int = EXPIRATION_THRESHOLD_DAYS,
    now: Optional[datetime] = None,
) -> ExpirationScanSummary:
    """Counts expiring items and warns every admin about them in a single notification."""
    logger.info("Starting expiration check...")
    expiring = await find_expiring_items(store, days_threshold, now)
    item_count = len(expiring)

    if item_count == 0:
        logger.info("No expiring items, skipping notifications")
        return ExpirationScanSummary(item_count=0, timestamp=datetime.now(timezone.utc))

    event = build_notification(EventType.EXPIRING_ITEMS, item_count=item_count)
    outcome = await notify_admins(store, dispatcher, event)

    logger.info(
        f"Expiration check completed: {item_count} expiring items, "
        f"{outcome.success_count} notifications sent"
    )
    return ExpirationScanSummary(
        item_count=item_count,
        notifications_sent=outcome.success_count,
        notifications_failed=outcome.failure_count,
        timestamp=datetime.now(timezone.utc),
        results=outcome.results,
    )
