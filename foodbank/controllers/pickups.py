# file: controllers/pickups.py

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from foodbank.database.connection import DocumentSource, get_document_source
from foodbank.services.api_auth import verify_api_password
from foodbank.services.dispatcher import Dispatcher, get_dispatcher
from foodbank.services.pickup_reminder_service import check_and_send_pickup_reminders

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(verify_api_password)])


@router.post("/check-reminders")
async def check_reminders(
        store: DocumentSource = Depends(get_document_source),
        dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Manual trigger for today's pickup reminders."""
    try:
        summary = await check_and_send_pickup_reminders(store, dispatcher)
    except Exception as e:
        logger.exception("Error in manual pickup reminder check")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})

    return {
        "success": True,
        "remindersSent": summary.reminders_sent,
        "totalPickups": summary.total_pickups,
        "timestamp": summary.timestamp.isoformat(),
    }
