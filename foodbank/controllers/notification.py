# file: controllers/notification.py

import logging
from typing import Annotated, Awaitable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from foodbank.database.connection import DocumentSource, get_document_source
from foodbank.models.notification import NotifyResult
from foodbank.services import notification_service
from foodbank.services.api_auth import verify_api_password
from foodbank.services.dispatcher import Dispatcher, get_dispatcher

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(verify_api_password)])

# Ids are Firestore document ids supplied by the mobile client
NonEmptyId = Annotated[str, Field(min_length=1)]


class NewApplicationRequest(BaseModel):
    applicationId: NonEmptyId


class NewRequestRequest(BaseModel):
    requestId: NonEmptyId


class BeneficiaryDateProposalRequest(BaseModel):
    requestId: NonEmptyId


class DateProposedOrAcceptedRequest(BaseModel):
    requestId: NonEmptyId
    recipientUserId: NonEmptyId
    isAccepted: bool = False


class BeneficiaryEventRequest(BaseModel):
    requestId: NonEmptyId
    beneficiaryUserId: NonEmptyId


class ApplicantEventRequest(BaseModel):
    applicationId: NonEmptyId
    applicantUserId: NonEmptyId


async def _respond(label: str, pending: Awaitable[NotifyResult]):
    try:
        result = await pending
    except Exception as e:
        logger.exception(f"Error in {label} notification")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})

    return {
        "success": result.success,
        "message": "Notification sent" if result.success else "Failed to send notification",
        "error": result.error,
    }


@router.post("/new-application")
async def new_application(
        payload: NewApplicationRequest,
        store: DocumentSource = Depends(get_document_source),
        dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Tells every admin that an application was submitted."""
    return await _respond(
        "new application",
        notification_service.notify_new_application(store, dispatcher, payload.applicationId),
    )


@router.post("/new-request")
async def new_request(
        payload: NewRequestRequest,
        store: DocumentSource = Depends(get_document_source),
        dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Tells every admin that a pickup request was submitted."""
    return await _respond(
        "new request",
        notification_service.notify_new_request(store, dispatcher, payload.requestId),
    )


@router.post("/beneficiary-date-proposal")
async def beneficiary_date_proposal(
        payload: BeneficiaryDateProposalRequest,
        store: DocumentSource = Depends(get_document_source),
        dispatcher: Dispatcher = Depends(get_dispatcher),
):
    """Tells every admin that a beneficiary proposed a new pickup date."""
    return await _respond(
        "beneficiary date proposal",
        notification_service.notify_beneficiary_date_proposal(store, dispatcher, payload.requestId),
    )


@router.post("/date-proposed-or-accepted")
async def date_proposed_or_accepted(
        payload: DateProposedOrAcceptedRequest,
        store: DocumentSource = Depends(get_document_source),
        dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await _respond(
        "date proposed/accepted",
        notification_service.notify_date_proposed_or_accepted(
            store, dispatcher, payload.requestId, payload.recipientUserId, payload.isAccepted
        ),
    )


@router.post("/pickup-reminder")
async def pickup_reminder(
        payload: BeneficiaryEventRequest,
        store: DocumentSource = Depends(get_document_source),
        dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await _respond(
        "pickup reminder",
        notification_service.notify_pickup_reminder(store, dispatcher, payload.requestId, payload.beneficiaryUserId),
    )


@router.post("/request-accepted")
async def request_accepted(
        payload: BeneficiaryEventRequest,
        store: DocumentSource = Depends(get_document_source),
        dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await _respond(
        "request accepted",
        notification_service.notify_request_accepted(store, dispatcher, payload.requestId, payload.beneficiaryUserId),
    )


@router.post("/request-rejected")
async def request_rejected(
        payload: BeneficiaryEventRequest,
        store: DocumentSource = Depends(get_document_source),
        dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await _respond(
        "request rejected",
        notification_service.notify_request_rejected(store, dispatcher, payload.requestId, payload.beneficiaryUserId),
    )


@router.post("/application-accepted")
async def application_accepted(
        payload: ApplicantEventRequest,
        store: DocumentSource = Depends(get_document_source),
        dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await _respond(
        "application accepted",
        notification_service.notify_application_accepted(
            store, dispatcher, payload.applicationId, payload.applicantUserId
        ),
    )


@router.post("/application-rejected")
async def application_rejected(
        payload: ApplicantEventRequest,
        store: DocumentSource = Depends(get_document_source),
        dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await _respond(
        "application rejected",
        notification_service.notify_application_rejected(
            store, dispatcher, payload.applicationId, payload.applicantUserId
        ),
    )
