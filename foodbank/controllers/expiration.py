# file: controllers/expiration.py

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from foodbank.database.connection import DocumentSource, get_document_source
from foodbank.services.dispatcher import Dispatcher, get_dispatcher
from foodbank.services.expiration_check_service import check_and_notify_expiring_items

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/check-expiring")
async def check_expiring(
        store: DocumentSource = Depends(get_document_source),
        dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """
    Manual trigger for the expiration scan.
    Individual failed sends are part of the summary; only a failed scan returns 500.
    """
    try:
        summary = await check_and_notify_expiring_items(store, dispatcher)
    except Exception as e:
        logger.exception("Error in manual expiration check")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})

    return {
        "success": True,
        "itemCount": summary.item_count,
        "notificationsSent": summary.notifications_sent,
        "timestamp": summary.timestamp.isoformat(),
    }
