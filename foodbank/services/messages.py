# file: services/messages.py

from typing import Callable, Dict

from foodbank.models.notification import EventType, NotificationEvent

EXPIRING_ITEMS_CHANNEL = "stock_warnings"
FLUTTER_CLICK_ACTION = "FLUTTER_NOTIFICATION_CLICK"


def _expiring_items(item_count: int) -> NotificationEvent:
    if item_count == 1:
        body = "1 item está próximo do prazo de validade"
    else:
        body = f"{item_count} itens estão próximos do prazo de validade"
    return NotificationEvent(
        event_type=EventType.EXPIRING_ITEMS,
        title="Aviso de Validade",
        body=body,
        data={
            "type": EventType.EXPIRING_ITEMS.value,
            "itemCount": str(item_count),
            "screen": "expiringItems",
        },
        android_channel_id=EXPIRING_ITEMS_CHANNEL,
        click_action=FLUTTER_CLICK_ACTION,
        badge=item_count,
    )


def _new_application(application_id: str) -> NotificationEvent:
    return NotificationEvent(
        event_type=EventType.NEW_APPLICATION,
        title="Nova Candidatura",
        body="Uma nova candidatura foi submetida",
        data={
            "type": EventType.NEW_APPLICATION.value,
            "screen": "applicationDetail",
            "applicationId": str(application_id),
        },
    )


def _new_request(request_id: str) -> NotificationEvent:
    return NotificationEvent(
        event_type=EventType.NEW_REQUEST,
        title="Novo Pedido",
        body="Um novo pedido foi submetido",
        data={
            "type": EventType.NEW_REQUEST.value,
            "screen": "requestDetails",
            "requestId": str(request_id),
        },
    )


def _beneficiary_date_proposal(request_id: str) -> NotificationEvent:
    return NotificationEvent(
        event_type=EventType.BENEFICIARY_DATE_PROPOSAL,
        title="Nova Data Proposta",
        body="Um beneficiário propôs uma nova data de levantamento",
        data={
            "type": EventType.BENEFICIARY_DATE_PROPOSAL.value,
            "screen": "requestDetails",
            "requestId": str(request_id),
        },
    )


def _date_proposed_or_accepted(request_id: str, is_accepted: bool = False) -> NotificationEvent:
    return NotificationEvent(
        event_type=EventType.DATE_PROPOSED_OR_ACCEPTED,
        title="Nova Data Aceite" if is_accepted else "Nova Data Proposta",
        body=(
            "Uma nova data de levantamento foi aceite"
            if is_accepted
            else "Uma nova data de levantamento foi proposta"
        ),
        data={
            "type": EventType.DATE_PROPOSED_OR_ACCEPTED.value,
            "screen": "requestDetails",
            "requestId": str(request_id),
        },
    )


def _pickup_reminder(request_id: str) -> NotificationEvent:
    return NotificationEvent(
        event_type=EventType.PICKUP_REMINDER,
        title="Lembrete de Levantamento",
        body="Tens um levantamento agendado para hoje",
        data={
            "type": EventType.PICKUP_REMINDER.value,
            "screen": "requestDetails",
            "requestId": str(request_id),
        },
    )


def _request_accepted(request_id: str) -> NotificationEvent:
    return NotificationEvent(
        event_type=EventType.REQUEST_ACCEPTED,
        title="Pedido Aceite",
        body="O teu pedido foi aceite",
        data={
            "type": EventType.REQUEST_ACCEPTED.value,
            "screen": "requestDetails",
            "requestId": str(request_id),
        },
    )


def _request_rejected(request_id: str) -> NotificationEvent:
    return NotificationEvent(
        event_type=EventType.REQUEST_REJECTED,
        title="Pedido Rejeitado",
        body="O teu pedido foi rejeitado",
        data={
            "type": EventType.REQUEST_REJECTED.value,
            "screen": "requestDetails",
            "requestId": str(request_id),
        },
    )


def _application_accepted(application_id: str) -> NotificationEvent:
    # The accepted applicant lands on the beneficiary portal, no id needed
    return NotificationEvent(
        event_type=EventType.APPLICATION_ACCEPTED,
        title="Candidatura Aceite",
        body="A tua candidatura foi aceite",
        data={
            "type": EventType.APPLICATION_ACCEPTED.value,
            "screen": "beneficiaryPortal",
        },
    )


def _application_rejected(application_id: str) -> NotificationEvent:
    return NotificationEvent(
        event_type=EventType.APPLICATION_REJECTED,
        title="Candidatura Rejeitada",
        body="A tua candidatura foi rejeitada",
        data={
            "type": EventType.APPLICATION_REJECTED.value,
            "screen": "applicationDetail",
            "applicationId": str(application_id),
        },
    )


BUILDERS: Dict[EventType, Callable[..., NotificationEvent]] = {
    EventType.EXPIRING_ITEMS: _expiring_items,
    EventType.NEW_APPLICATION: _new_application,
    EventType.NEW_REQUEST: _new_request,
    EventType.BENEFICIARY_DATE_PROPOSAL: _beneficiary_date_proposal,
    EventType.DATE_PROPOSED_OR_ACCEPTED: _date_proposed_or_accepted,
    EventType.PICKUP_REMINDER: _pickup_reminder,
    EventType.REQUEST_ACCEPTED: _request_accepted,
    EventType.REQUEST_REJECTED: _request_rejected,
    EventType.APPLICATION_ACCEPTED: _application_accepted,
    EventType.APPLICATION_REJECTED: _application_rejected,
}


def build_notification(event_type: EventType, **params) -> NotificationEvent:
    """
    Builds the push message for an event type.
    Pure: the same event type and parameters always yield an equal event.
    """
    return BUILDERS[EventType(event_type)](**params)
