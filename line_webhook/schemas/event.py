"""Webhook event schemas"""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from line_webhook.exceptions import ParseException


class LineModel(BaseModel):
    """Base model using LINE's camelCase keys"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Sources

class Source(LineModel):
    """Event source"""
    type: str
    user_id: Optional[str] = None

    @property
    def sender_id(self) -> Optional[str]:
        """ID to push messages back to"""
        return self.user_id


class UserSource(Source):
    user_id: str


class GroupSource(Source):
    group_id: str

    @property
    def sender_id(self) -> str:
        return self.group_id


class RoomSource(Source):
    room_id: str

    @property
    def sender_id(self) -> str:
        return self.room_id


class UnknownSource(Source):
    model_config = ConfigDict(extra="allow")


SOURCE_TYPES = {
    "user": UserSource,
    "group": GroupSource,
    "room": RoomSource,
}


def parse_source(data: Any) -> Any:
    if isinstance(data, dict):
        return SOURCE_TYPES.get(data.get("type"), UnknownSource).model_validate(data)
    return data


# Message contents

class MessageContent(LineModel):
    """Content of a message event"""
    id: str
    type: str


class TextMessageContent(MessageContent):
    text: str


class ImageMessageContent(MessageContent):
    pass


class VideoMessageContent(MessageContent):
    pass


class AudioMessageContent(MessageContent):
    pass


class FileMessageContent(MessageContent):
    file_name: str
    file_size: int


class LocationMessageContent(MessageContent):
    title: Optional[str] = None
    address: Optional[str] = None
    latitude: float
    longitude: float


class StickerMessageContent(MessageContent):
    package_id: str
    sticker_id: str


class UnknownMessageContent(MessageContent):
    model_config = ConfigDict(extra="allow")


MESSAGE_CONTENT_TYPES = {
    "text": TextMessageContent,
    "image": ImageMessageContent,
    "video": VideoMessageContent,
    "audio": AudioMessageContent,
    "file": FileMessageContent,
    "location": LocationMessageContent,
    "sticker": StickerMessageContent,
}


def parse_message_content(data: Any) -> Any:
    if isinstance(data, dict):
        content_cls = MESSAGE_CONTENT_TYPES.get(data.get("type"), UnknownMessageContent)
        return content_cls.model_validate(data)
    return data


# Events

class Event(LineModel):
    """
    Base webhook event

    reply_token is None for events without a reply window (unfollow, leave)
    and for events delivered while the channel is in standby mode.
    """
    type: str
    timestamp: int
    source: Source
    reply_token: Optional[str] = None

    @field_validator("source", mode="before")
    @classmethod
    def _parse_source(cls, value):
        return parse_source(value)


class MessageEvent(Event):
    message: MessageContent

    @field_validator("message", mode="before")
    @classmethod
    def _parse_message(cls, value):
        return parse_message_content(value)


class FollowEvent(Event):
    pass


class UnfollowEvent(Event):
    pass


class JoinEvent(Event):
    pass


class LeaveEvent(Event):
    pass


class PostbackContent(LineModel):
    data: str
    params: Optional[Dict[str, str]] = None


class PostbackEvent(Event):
    postback: PostbackContent


class BeaconContent(LineModel):
    hwid: str
    type: str
    dm: Optional[str] = None


class BeaconEvent(Event):
    beacon: BeaconContent


class UnknownEvent(Event):
    """Event type this service does not model; raw fields are kept"""
    model_config = ConfigDict(extra="allow")

    timestamp: Optional[int] = None
    source: Optional[Source] = None


EVENT_TYPES = {
    "message": MessageEvent,
    "follow": FollowEvent,
    "unfollow": UnfollowEvent,
    "join": JoinEvent,
    "leave": LeaveEvent,
    "postback": PostbackEvent,
    "beacon": BeaconEvent,
}


def parse_event(data: Any) -> Any:
    if isinstance(data, dict):
        return EVENT_TYPES.get(data.get("type"), UnknownEvent).model_validate(data)
    return data


class CallbackRequest(LineModel):
    """Webhook request body"""
    destination: Optional[str] = None
    events: List[Event]

    @field_validator("events", mode="before")
    @classmethod
    def _parse_events(cls, value):
        if isinstance(value, list):
            return [parse_event(item) for item in value]
        return value


def parse_callback_request(body: bytes) -> CallbackRequest:
    """
    Parse a raw webhook body

    Raises:
        ParseException: body is not JSON or does not match the event model
    """
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseException(f"Invalid JSON body: {str(e)}") from e

    if not isinstance(payload, dict):
        raise ParseException("Callback body must be a JSON object")

    try:
        return CallbackRequest.model_validate(payload)
    except ValidationError as e:
        raise ParseException(f"Invalid callback request: {str(e)}") from e
