# file: services/notification_service.py

import logging

from foodbank.database.connection import DocumentSource
from foodbank.models.notification import (
    EventType,
    LookupStatus,
    NotificationEvent,
    NotifyResult,
    Recipient,
)
from foodbank.services.dispatcher import Dispatcher, summarize
from foodbank.services.messages import build_notification
from foodbank.services.recipients import get_admin_users_with_tokens, get_user_fcm_token

logger = logging.getLogger(__name__)

NO_ADMINS_ERROR = "No admin users with FCM tokens"
NO_TOKEN_ERROR = "No FCM token"


async def notify_admins(store: DocumentSource, dispatcher: Dispatcher, event: NotificationEvent) -> NotifyResult:
    """Sends the event to every admin with a token. Admin lookup failures propagate."""
    admins = await get_admin_users_with_tokens(store)
    if not admins:
        logger.info(f"No admin users with FCM tokens found for {event.event_type.value} notification")
        return NotifyResult(success=False, error=NO_ADMINS_ERROR)

    results = await dispatcher.send_many(admins, event)
    summary = summarize(results)
    return NotifyResult(
        success=summary.success_count > 0,
        error=None if summary.success_count else results[0].error,
        success_count=summary.success_count,
        failure_count=summary.failure_count,
        results=results,
    )


async def notify_user(
    store: DocumentSource, dispatcher: Dispatcher, user_id: str, event: NotificationEvent
) -> NotifyResult:
    """Sends the event to a single user, if that user has a push token."""
    lookup = await get_user_fcm_token(store, user_id)
    if lookup.status is LookupStatus.ERROR:
        return NotifyResult(success=False, error=lookup.error)
    if lookup.status is LookupStatus.NOT_FOUND:
        logger.info(f"No FCM token found for user {user_id}")
        return NotifyResult(success=False, error=NO_TOKEN_ERROR)

    result = await dispatcher.send_one(Recipient(uid=user_id, token=lookup.token, name=user_id), event)
    summary = summarize([result])
    return NotifyResult(
        success=summary.success_count > 0,
        error=result.error,
        success_count=summary.success_count,
        failure_count=summary.failure_count,
        results=[result],
    )


# --- Admin-facing events ---

async def notify_new_application(store, dispatcher, application_id: str) -> NotifyResult:
    event = build_notification(EventType.NEW_APPLICATION, application_id=application_id)
    return await notify_admins(store, dispatcher, event)


async def notify_new_request(store, dispatcher, request_id: str) -> NotifyResult:
    event = build_notification(EventType.NEW_REQUEST, request_id=request_id)
    return await notify_admins(store, dispatcher, event)


async def notify_beneficiary_date_proposal(store, dispatcher, request_id: str) -> NotifyResult:
    event = build_notification(EventType.BENEFICIARY_DATE_PROPOSAL, request_id=request_id)
    return await notify_admins(store, dispatcher, event)


# --- Events addressed to a single user ---

async def notify_date_proposed_or_accepted(
    store, dispatcher, request_id: str, recipient_user_id: str, is_accepted: bool = False
) -> NotifyResult:
    event = build_notification(EventType.DATE_PROPOSED_OR_ACCEPTED, request_id=request_id, is_accepted=is_accepted)
    return await notify_user(store, dispatcher, recipient_user_id, event)


async def notify_pickup_reminder(store, dispatcher, request_id: str, beneficiary_user_id: str) -> NotifyResult:
    event = build_notification(EventType.PICKUP_REMINDER, request_id=request_id)
    return await notify_user(store, dispatcher, beneficiary_user_id, event)


async def notify_request_accepted(store, dispatcher, request_id: str, beneficiary_user_id: str) -> NotifyResult:
    event = build_notification(EventType.REQUEST_ACCEPTED, request_id=request_id)
    return await notify_user(store, dispatcher, beneficiary_user_id, event)


async def notify_request_rejected(store, dispatcher, request_id: str, beneficiary_user_id: str) -> NotifyResult:
    event = build_notification(EventType.REQUEST_REJECTED, request_id=request_id)
    return await notify_user(store, dispatcher, beneficiary_user_id, event)


async def notify_application_accepted(store, dispatcher, application_id: str, applicant_user_id: str) -> NotifyResult:
    event = build_notification(EventType.APPLICATION_ACCEPTED, application_id=application_id)
    return await notify_user(store, dispatcher, applicant_user_id, event)


async def notify_application_rejected(store, dispatcher, application_id: str, applicant_user_id: str) -> NotifyResult:
    event = build_notification(EventType.APPLICATION_REJECTED, application_id=application_id)
    return await notify_user(store, dispatcher, applicant_user_id, event)
