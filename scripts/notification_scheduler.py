# file: scripts/notification_scheduler.py

import argparse
import asyncio
import logging
import os
import sys
from datetime import datetime, time, timedelta, tzinfo
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

# Add the project root to the Python path to allow absolute imports from the 'foodbank' package
# when this file is run as a standalone script.
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from foodbank.config import (
    EXPIRATION_CHECK_HOUR,
    PICKUP_REMINDER_HOUR,
    PRUNE_INVALID_TOKENS,
    SCHEDULER_TIMEZONE,
)
from foodbank.database.connection import DocumentSource, get_document_source
from foodbank.services.dispatcher import Dispatcher
from foodbank.services.expiration_check_service import check_and_notify_expiring_items
from foodbank.services.pickup_reminder_service import check_and_send_pickup_reminders
from foodbank.services.push_gateway import get_push_gateway
from foodbank.services.token_cleanup import prune_invalid_tokens
from foodbank.utils.log_setup import setup_logging

logger = logging.getLogger("notification_scheduler")

DAILY_SCHEDULE = {
    "pickups": PICKUP_REMINDER_HOUR,
    "expiration": EXPIRATION_CHECK_HOUR,
}


# --- SCHEDULING HELPERS ---

def next_run_at(hour: int, now: datetime, tz: tzinfo) -> datetime:
    """The first `hour`:00 local time strictly after `now`."""
    local_now = now.astimezone(tz)
    candidate = datetime.combine(local_now.date(), time(hour), tzinfo=tz)
    if candidate <= local_now:
        candidate = datetime.combine(local_now.date() + timedelta(days=1), time(hour), tzinfo=tz)
    return candidate


def next_due_job(now: datetime, tz: tzinfo) -> Tuple[str, datetime]:
    return min(
        ((name, next_run_at(hour, now, tz)) for name, hour in DAILY_SCHEDULE.items()),
        key=lambda job: job[1],
    )


# --- JOBS ---

async def _maybe_prune(store: DocumentSource, results) -> None:
    if not PRUNE_INVALID_TOKENS:
        return
    cleaned = await prune_invalid_tokens(store, results)
    if cleaned:
        logger.info(f" -> Removed {cleaned} invalid FCM tokens")


async def run_expiration_job(store: Optional[DocumentSource] = None, dispatcher: Optional[Dispatcher] = None):
    store = store or get_document_source()
    dispatcher = dispatcher or Dispatcher(get_push_gateway())
    summary = await check_and_notify_expiring_items(store, dispatcher)
    logger.info(
        f" -> Scheduled check completed: {summary.item_count} expiring items, "
        f"{summary.notifications_sent} notifications sent"
    )
    await _maybe_prune(store, summary.results)
    return summary


async def run_pickup_reminder_job(store: Optional[DocumentSource] = None, dispatcher: Optional[Dispatcher] = None):
    store = store or get_document_source()
    dispatcher = dispatcher or Dispatcher(get_push_gateway())
    summary = await check_and_send_pickup_reminders(store, dispatcher)
    logger.info(
        f" -> Scheduled pickup reminder check completed: "
        f"{summary.reminders_sent}/{summary.total_pickups} reminders sent"
    )
    await _maybe_prune(store, summary.results)
    return summary


JOBS = {
    "expiration": run_expiration_job,
    "pickups": run_pickup_reminder_job,
}


async def main_scheduler_loop():
    """The main event loop for the scheduler daemon."""
    tz = ZoneInfo(SCHEDULER_TIMEZONE)
    not_before = datetime.now(tz)
    while True:
        now = max(datetime.now(tz), not_before)
        name, run_at = next_due_job(now, tz)
        logger.info(f"--- Next job '{name}' at {run_at.isoformat()} ---")
        await asyncio.sleep(max(0.0, (run_at - datetime.now(tz)).total_seconds()))

        logger.info(f"--- [{datetime.now(tz)}] STARTING '{name}' ---")
        try:
            await JOBS[name]()
        except Exception:
            logger.exception(f"Scheduled '{name}' job failed")
        # Never fire the same slot twice if the sleep woke up early
        not_before = run_at


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Daily expiration and pickup reminder notifications.")
    parser.add_argument(
        "--run-now",
        choices=sorted(JOBS),
        help="run a single job immediately and exit",
    )
    return parser.parse_args(argv)


if __name__ == "__main__":
    setup_logging()
    args = parse_args()
    if args.run_now:
        asyncio.run(JOBS[args.run_now]())
    else:
        logger.info("Starting notification scheduler...")
        asyncio.run(main_scheduler_loop())
