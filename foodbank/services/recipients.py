import logging
from typing import List

from foodbank.database.connection import DocumentSource, QueryFilter
from foodbank.models.notification import Recipient, TokenLookup

logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"


async def get_user_fcm_token(store: DocumentSource, user_id: str) -> TokenLookup:
    """
    Resolves the push token of a single user.
    A missing user or a user without a token is NOT_FOUND; store failures are
    reported as ERROR so callers can tell them apart from a real absence.
    """
    try:
        doc = await store.get(USERS_COLLECTION, user_id)
    except Exception as e:
        logger.error(f"Error getting FCM token for user {user_id}: {e}")
        return TokenLookup.failed(e)

    if doc is None:
        logger.info(f"User {user_id} not found")
        return TokenLookup.not_found()

    token = doc.data.get("fcmToken")
    if not token:
        return TokenLookup.not_found()
    return TokenLookup.found(token)


async def get_admin_users_with_tokens(store: DocumentSource) -> List[Recipient]:
    """Returns every admin user carrying a push token. Store errors propagate."""
    docs = await store.query(USERS_COLLECTION, [QueryFilter("isAdmin", "==", True)])

    admins = [
        Recipient(
            uid=doc.id,
            token=doc.data["fcmToken"],
            name=doc.data.get("name") or "Admin",
            email=doc.data.get("email") or "",
        )
        for doc in docs
        if doc.data.get("fcmToken")
    ]
    logger.info(f"Found {len(admins)} admin users with FCM tokens")
    return admins
