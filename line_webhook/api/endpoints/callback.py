"""Webhook callback endpoint"""

from typing import List

from fastapi import APIRouter, Depends

from line_webhook.api.deps import get_callback_events, get_event_dispatcher, get_line_client
from line_webhook.config import settings
from line_webhook.schemas.event import Event
from line_webhook.schemas.response import CallbackResponse
from line_webhook.services.event_dispatcher import EventDispatcher
from line_webhook.services.line_client import LineMessagingClient
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(settings.LINE_CALLBACK_PATH, response_model=CallbackResponse)
def callback(
    events: List[Event] = Depends(get_callback_events),
    client: LineMessagingClient = Depends(get_line_client),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher)
):
    """
    Receive webhooks from LINE
    - Signature is verified by get_callback_events (400 on failure)
    - Events are handled one by one, in order
    - Replies are sent before the response is returned
    """
    logger.info(f"Got request: {events}")
    
    replies = dispatcher.dispatch_all(events, client)
    
    logger.info(f"Handled {len(events)} event(s), sent {len(replies)} reply(ies)")
    return CallbackResponse(status="ok", events=len(events))
