"""Outbound message schemas"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from line_webhook.schemas.event import LineModel


class TextMessage(LineModel):
    """Text message"""
    type: Literal["text"] = "text"
    text: str = Field(..., min_length=1, max_length=5000)


class ImageMessage(LineModel):
    """Image message; both URLs must be HTTPS"""
    type: Literal["image"] = "image"
    original_content_url: str
    preview_image_url: str


class StickerMessage(LineModel):
    """Sticker message"""
    type: Literal["sticker"] = "sticker"
    package_id: str
    sticker_id: str


class LocationMessage(LineModel):
    """Location message"""
    type: Literal["location"] = "location"
    title: str
    address: str
    latitude: float
    longitude: float


Message = Annotated[
    Union[TextMessage, ImageMessage, StickerMessage, LocationMessage],
    Field(discriminator="type")
]

MESSAGE_CLASSES = (TextMessage, ImageMessage, StickerMessage, LocationMessage)


class ReplyMessage(LineModel):
    """Reply to an event, identified by its reply token"""
    reply_token: str
    messages: List[Message] = Field(..., min_length=1, max_length=5)

    def to_json(self) -> str:
        """Compact JSON body for the Messaging API"""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class PushMessage(LineModel):
    """Message pushed to a user, group or room"""
    to: str
    messages: List[Message] = Field(..., min_length=1, max_length=5)
    notification_disabled: Optional[bool] = None

    def to_json(self) -> str:
        """Compact JSON body for the Messaging API"""
        return self.model_dump_json(by_alias=True, exclude_none=True)
