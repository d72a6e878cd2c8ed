"""Event dispatch to registered handlers"""

import logging
from typing import Callable, List, Optional, Type

from line_webhook.schemas.event import Event, MessageEvent, MessageContent
from line_webhook.schemas.message import MESSAGE_CLASSES, ReplyMessage
from line_webhook.services.line_client import LineMessagingClient

logger = logging.getLogger(__name__)

EventHandler = Callable[[Event], object]


class HandlerRegistration:
    """A handler bound to an event class and, optionally, a content class"""

    def __init__(self, handler: EventHandler, event_type: Type[Event], content_type: Optional[Type[MessageContent]] = None):
        self.handler = handler
        self.event_type = event_type
        self.content_type = content_type

    @property
    def specificity(self) -> int:
        # content match > event match > catch-all
        if self.content_type is not None:
            return 2
        if self.event_type is not Event:
            return 1
        return 0

    def matches(self, event: Event) -> bool:
        if not isinstance(event, self.event_type):
            return False
        if self.content_type is None:
            return True
        return isinstance(event, MessageEvent) and isinstance(event.message, self.content_type)

    def __repr__(self):
        name = getattr(self.handler, "__name__", repr(self.handler))
        target = self.event_type.__name__
        if self.content_type is not None:
            target += f"[{self.content_type.__name__}]"
        return f"<HandlerRegistration {name} -> {target}>"


class EventDispatcher:
    """
    Routes webhook events to handlers and sends their replies

    Handlers take the event and return None, a message, or a list of
    messages. Returned messages are sent as the reply to the event.
    """

    def __init__(self):
        self._registrations: List[HandlerRegistration] = []

    def add_handler(
        self,
        handler: EventHandler,
        event_type: Type[Event] = Event,
        content_type: Optional[Type[MessageContent]] = None
    ) -> None:
        """Register a handler for an event class and optional message content class"""
        if content_type is not None and not issubclass(event_type, MessageEvent):
            raise ValueError("content_type can only be used with MessageEvent handlers")
        self._registrations.append(HandlerRegistration(handler, event_type, content_type))

    def on(self, event_type: Type[Event] = Event, content_type: Optional[Type[MessageContent]] = None):
        """Decorator form of add_handler"""
        def decorator(func: EventHandler) -> EventHandler:
            self.add_handler(func, event_type, content_type)
            return func
        return decorator

    def find_handler(self, event: Event) -> Optional[HandlerRegistration]:
        """Most specific matching handler; registration order breaks ties"""
        best = None
        for registration in self._registrations:
            if not registration.matches(event):
                continue
            if best is None or registration.specificity > best.specificity:
                best = registration
        return best

    def dispatch(self, event: Event, client: LineMessagingClient) -> Optional[ReplyMessage]:
        """
        Run the handler for one event and send its reply

        Args:
            event: Parsed webhook event
            client: Messaging API client used for the reply

        Returns:
            The reply that was sent, or None
        """
        registration = self.find_handler(event)
        if registration is None:
            logger.info(f"No handler for {event.type} event, skipping")
            return None

        logger.debug(f"Dispatching {event.type} event to {registration!r}")
        result = registration.handler(event)
        messages = _as_message_list(result)
        if not messages:
            return None

        if not event.reply_token:
            logger.warning(f"Dropping {len(messages)} message(s) for {event.type} event without a reply token")
            return None

        reply = ReplyMessage(reply_token=event.reply_token, messages=messages)
        client.reply_message(reply)
        return reply

    def dispatch_all(self, events: List[Event], client: LineMessagingClient) -> List[ReplyMessage]:
        """Dispatch events one at a time, in order"""
        replies = []
        for event in events:
            reply = self.dispatch(event, client)
            if reply is not None:
                replies.append(reply)
        return replies


def _as_message_list(result) -> list:
    if result is None:
        return []
    if isinstance(result, MESSAGE_CLASSES):
        return [result]
    if isinstance(result, (list, tuple)):
        for item in result:
            if not isinstance(item, MESSAGE_CLASSES):
                raise TypeError(f"Handler returned a non-message item: {item!r}")
        return list(result)
    raise TypeError(f"Handler must return a message, a list of messages or None, got {type(result).__name__}")
