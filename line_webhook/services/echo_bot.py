"""Default bot behavior: echo text messages, greet new followers"""

import logging

from line_webhook.schemas.event import FollowEvent, MessageEvent, TextMessageContent
from line_webhook.schemas.message import TextMessage
from line_webhook.services.event_dispatcher import EventDispatcher

logger = logging.getLogger(__name__)

FOLLOW_GREETING = "follow"


def handle_text_message(event: MessageEvent) -> TextMessage:
    """Echo the text back"""
    text = event.message.text
    logger.info(f"Echoing text from {event.source.sender_id}: {text[:50]}")
    return TextMessage(text=text)


def handle_follow(event: FollowEvent) -> TextMessage:
    logger.info(f"New follower: {event.source.sender_id}")
    return TextMessage(text=FOLLOW_GREETING)


def create_dispatcher() -> EventDispatcher:
    """Dispatcher with the default handlers registered"""
    dispatcher = EventDispatcher()
    dispatcher.add_handler(handle_text_message, MessageEvent, TextMessageContent)
    dispatcher.add_handler(handle_follow, FollowEvent)
    return dispatcher
