"""Reusable dependencies for the webhook routes"""

from functools import lru_cache
from typing import List, Optional

from fastapi import Depends, Header, Request

from line_webhook.config import Settings, get_settings
from line_webhook.schemas.event import Event, parse_callback_request
from line_webhook.security.signature_validator import (
    SIGNATURE_HEADER,
    LineSignatureValidator,
    verify_request_signature,
)
from line_webhook.services.echo_bot import create_dispatcher
from line_webhook.services.event_dispatcher import EventDispatcher
from line_webhook.services.line_client import LineMessagingClient


def get_signature_validator(settings: Settings = Depends(get_settings)) -> LineSignatureValidator:
    return LineSignatureValidator(settings.LINE_CHANNEL_SECRET)


def get_line_client(settings: Settings = Depends(get_settings)) -> LineMessagingClient:
    return LineMessagingClient(
        channel_token=settings.LINE_CHANNEL_TOKEN,
        api_endpoint=settings.LINE_API_ENDPOINT,
        connect_timeout=settings.LINE_CONNECT_TIMEOUT,
        read_timeout=settings.LINE_READ_TIMEOUT
    )


@lru_cache
def get_event_dispatcher() -> EventDispatcher:
    return create_dispatcher()


async def get_callback_events(
    request: Request,
    x_line_signature: Optional[str] = Header(None, alias=SIGNATURE_HEADER),
    validator: LineSignatureValidator = Depends(get_signature_validator)
) -> List[Event]:
    """
    Verified, parsed events of a webhook request

    The signature is checked against the raw body before any parsing.
    """
    body = await request.body()
    verify_request_signature(validator, body, x_line_signature)
    return parse_callback_request(body).events
