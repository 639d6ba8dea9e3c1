import asyncio
import logging
from typing import Protocol

from firebase_admin import exceptions, messaging

from foodbank.models.notification import NotificationEvent
from foodbank.services.firebase_app import initialize_firebase

logger = logging.getLogger(__name__)

# Errors after which the token will never be deliverable again
INVALID_TOKEN_ERRORS = (
    messaging.UnregisteredError,
    messaging.SenderIdMismatchError,
)


def is_invalid_token_error(error: Exception) -> bool:
    if isinstance(error, INVALID_TOKEN_ERRORS):
        return True
    # INVALID_ARGUMENT also covers payload mistakes; only a rejected token counts
    return isinstance(error, exceptions.InvalidArgumentError) and "registration token" in str(error).lower()


class PushGateway(Protocol):
    async def send(self, token: str, event: NotificationEvent) -> str:
        """Delivers the event to one token and returns the gateway message id."""
        ...


def build_message(token: str, event: NotificationEvent) -> messaging.Message:
    return messaging.Message(
        token=token,
        notification=messaging.Notification(title=event.title, body=event.body),
        data=dict(event.data),
        android=messaging.AndroidConfig(
            priority="high",
            notification=messaging.AndroidNotification(
                channel_id=event.android_channel_id,
                sound=event.sound,
                click_action=event.click_action,
            ),
        ),
        apns=messaging.APNSConfig(
            payload=messaging.APNSPayload(
                aps=messaging.Aps(sound=event.sound, badge=event.badge),
            ),
        ),
    )


class FirebasePushGateway:
    """Sends through Firebase Cloud Messaging. The SDK call blocks, so it runs in a worker thread."""

    def __init__(self, app=None):
        self._app = app

    async def send(self, token: str, event: NotificationEvent) -> str:
        message = build_message(token, event)
        return await asyncio.to_thread(messaging.send, message, False, self._app)


def get_push_gateway() -> PushGateway:
    return FirebasePushGateway(initialize_firebase())
