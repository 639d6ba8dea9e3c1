# file: services/dispatcher.py

import asyncio
import logging
from typing import Iterable, List, Optional, Sequence

from fastapi import Depends
from firebase_admin import exceptions

from foodbank.config import DISPATCH_MAX_CONCURRENCY, DISPATCH_TIMEOUT_SECONDS
from foodbank.models.notification import DispatchResult, DispatchSummary, NotificationEvent, Recipient
from foodbank.services.push_gateway import PushGateway, get_push_gateway, is_invalid_token_error

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Fans a notification out to recipients through the push gateway.

    All sends of one dispatcher share a semaphore, so at most `max_concurrency`
    gateway calls are in flight at once. A send never raises: every failure
    comes back as an unsuccessful DispatchResult.
    """

    def __init__(
        self,
        gateway: PushGateway,
        max_concurrency: int = DISPATCH_MAX_CONCURRENCY,
        timeout: Optional[float] = DISPATCH_TIMEOUT_SECONDS,
    ):
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._gateway = gateway
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._timeout = timeout

    async def send_one(self, recipient: Recipient, event: NotificationEvent) -> DispatchResult:
        async with self._semaphore:
            try:
                message_id = await asyncio.wait_for(
                    self._gateway.send(recipient.token, event), timeout=self._timeout
                )
            except asyncio.TimeoutError:
                logger.error(f"Timed out sending {event.event_type.value} to {recipient.name} ({recipient.uid})")
                return DispatchResult(
                    recipient_id=recipient.uid,
                    success=False,
                    error=f"Push gateway did not answer within {self._timeout}s",
                    error_code="TIMEOUT",
                )
            except Exception as e:
                return self._failure(recipient, event, e)

        logger.info(f"Successfully sent {event.event_type.value} to {recipient.name} ({recipient.uid}): {message_id}")
        return DispatchResult(recipient_id=recipient.uid, success=True, message_id=message_id)

    @staticmethod
    def _failure(recipient: Recipient, event: NotificationEvent, error: Exception) -> DispatchResult:
        if isinstance(error, exceptions.FirebaseError):
            code = error.code
        else:
            code = type(error).__name__
        token_invalid = is_invalid_token_error(error)

        logger.error(
            f"Error sending {event.event_type.value} to {recipient.name} ({recipient.uid}) [{code}]: {error}"
        )
        if token_invalid:
            logger.warning(f"Invalid token for user {recipient.uid}, should be removed from the user record")

        return DispatchResult(
            recipient_id=recipient.uid,
            success=False,
            error=str(error) or type(error).__name__,
            error_code=code,
            token_invalid=token_invalid,
        )

    async def send_many(self, recipients: Sequence[Recipient], event: NotificationEvent) -> List[DispatchResult]:
        """Sends to every recipient concurrently and waits for all of them to settle."""
        if not recipients:
            return []
        results = await asyncio.gather(*(self.send_one(r, event) for r in recipients))
        summary = summarize(results)
        logger.info(f"Sent {summary.success_count}/{len(recipients)} {event.event_type.value} notifications successfully")
        return list(results)


def summarize(results: Iterable[DispatchResult]) -> DispatchSummary:
    summary = DispatchSummary()
    for result in results:
        if result.success:
            summary.success_count += 1
        else:
            summary.failure_count += 1
    return summary


async def get_dispatcher(gateway: PushGateway = Depends(get_push_gateway)) -> Dispatcher:
    return Dispatcher(gateway)
