import logging
from typing import Iterable

from foodbank.database.connection import DocumentSource
from foodbank.models.notification import DispatchResult
from foodbank.services.recipients import USERS_COLLECTION

logger = logging.getLogger(__name__)


async def prune_invalid_tokens(store: DocumentSource, results: Iterable[DispatchResult]) -> int:
    """
    Removes the fcmToken of every user whose send reported a dead token.
    Runs as its own step after a scan; dispatch never writes to user records.
    """
    uids = sorted({r.recipient_id for r in results if r.token_invalid})
    for uid in uids:
        await store.delete_field(USERS_COLLECTION, uid, "fcmToken")
        logger.info(f"Removed invalid FCM token for user {uid}")
    return len(uids)
