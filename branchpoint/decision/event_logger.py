"""Event logging for the decision engine - append-only audit trail."""
import logging
from typing import Any, Dict

from branchpoint.db.enums import EventType, Table
from branchpoint.decision.state_machine import StateTransition
from branchpoint.storage.base import DocumentStore
from branchpoint.utils import new_id, utc_now_iso

logger = logging.getLogger(__name__)


class EventLogger:
    """
    Appends audit events to the ``events`` table.

    Events are write-only: nothing in the request path reads them back.
    """

    @staticmethod
    async def log_event(
        store: DocumentStore,
        user_id: str,
        event_type: EventType,
        payload: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Append one event.

        Args:
            store: Document store
            user_id: Owner of the event
            event_type: Event type
            payload: Free-form event details

        Returns:
            The stored event record
        """
        event = {
            "eventId": new_id("evt"),
            "userId": user_id,
            "type": event_type.value,
            "payload": payload,
            "createdAt": utc_now_iso(),
        }
        return await store.put(Table.EVENTS.value, event)

    @staticmethod
    async def log_metric(
        store: DocumentStore,
        user_id: str,
        payload: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Append a METRIC event, e.g. the outcome of a commit or resolve."""
        logger.info(f"Metric event '{payload.get('event')}' for user {user_id}")
        return await EventLogger.log_event(store, user_id, EventType.METRIC, payload)

    @staticmethod
    async def log_state_transition(
        store: DocumentStore,
        user_id: str,
        decision_id: str,
        transition: StateTransition,
    ) -> Dict[str, Any]:
        """
        Log a decision state transition.

        Args:
            store: Document store
            user_id: Decision owner
            decision_id: Decision identifier
            transition: StateTransition instance
        """
        return await EventLogger.log_event(
            store,
            user_id,
            EventType.STATE_TRANSITION,
            {"decisionId": decision_id, **transition.to_dict()},
        )
