"""LINE Messaging API client"""

import httpx
from typing import Optional
from urllib.parse import quote
from line_webhook.config import settings
from line_webhook.exceptions import LineMessagingException
from line_webhook.schemas.message import ReplyMessage, PushMessage
from line_webhook.schemas.response import BotApiResponse, UserProfileResponse
import logging

logger = logging.getLogger(__name__)


class LineMessagingClient:
    """Synchronous LINE Messaging API client"""

    def __init__(
        self,
        channel_token: Optional[str] = None,
        api_endpoint: Optional[str] = None,
        connect_timeout: Optional[float] = None,
        read_timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.channel_token = channel_token if channel_token is not None else settings.LINE_CHANNEL_TOKEN
        self.base_url = (api_endpoint or settings.LINE_API_ENDPOINT).rstrip('/') + '/'
        self.timeout = httpx.Timeout(
            read_timeout if read_timeout is not None else settings.LINE_READ_TIMEOUT,
            connect=connect_timeout if connect_timeout is not None else settings.LINE_CONNECT_TIMEOUT
        )
        self.transport = transport

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.channel_token}",
            "Content-Type": "application/json"
        }

    def _request(self, method: str, path: str, content: Optional[str] = None) -> httpx.Response:
        """
        Send a request to the Messaging API

        Args:
            method: HTTP method
            path: API path relative to the endpoint (e.g. "v2/bot/message/reply")
            content: Pre-serialized JSON body

        Returns:
            The successful response

        Raises:
            LineMessagingException: transport failure or non-2xx status
        """
        try:
            with httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport
            ) as client:
                response = client.request(
                    method,
                    path,
                    content=content,
                    headers=self._headers()
                )
        except httpx.HTTPError as e:
            logger.error(f"LINE API request to {path} failed: {str(e)}")
            raise LineMessagingException(f"Request to {path} failed: {str(e)}") from e

        if response.is_error:
            message, details = _error_detail(response)
            logger.error(f"LINE API error {response.status_code} on {path}: {message}")
            raise LineMessagingException(
                message or f"LINE API returned {response.status_code}",
                status_code=response.status_code,
                details=details
            )

        return response

    def reply_message(self, reply: ReplyMessage) -> BotApiResponse:
        """
        Reply to an event

        Args:
            reply: Reply token and up to five messages

        Returns:
            Messaging API response
        """
        response = self._request("POST", "v2/bot/message/reply", content=reply.to_json())
        logger.info(f"Replied with {len(reply.messages)} message(s)")
        return _bot_api_response(response)

    def push_message(self, push: PushMessage) -> BotApiResponse:
        """Push messages to a user, group or room"""
        response = self._request("POST", "v2/bot/message/push", content=push.to_json())
        logger.info(f"Pushed {len(push.messages)} message(s) to {push.to}")
        return _bot_api_response(response)

    def get_profile(self, user_id: str) -> UserProfileResponse:
        """Get a user's display profile"""
        response = self._request("GET", f"v2/bot/profile/{_segment(user_id)}")
        return UserProfileResponse.model_validate(response.json())

    def get_message_content(self, message_id: str) -> bytes:
        """Download the binary content of an image, video, audio or file message"""
        response = self._request("GET", f"v2/bot/message/{_segment(message_id)}/content")
        return response.content

    def leave_group(self, group_id: str) -> BotApiResponse:
        """Leave a group chat"""
        response = self._request("POST", f"v2/bot/group/{_segment(group_id)}/leave")
        logger.info(f"Left group {group_id}")
        return _bot_api_response(response)

    def leave_room(self, room_id: str) -> BotApiResponse:
        """Leave a multi-person chat"""
        response = self._request("POST", f"v2/bot/room/{_segment(room_id)}/leave")
        logger.info(f"Left room {room_id}")
        return _bot_api_response(response)


def _segment(value: str) -> str:
    """Quote an id for use as a single path segment"""
    return quote(value, safe="")


def _bot_api_response(response: httpx.Response) -> BotApiResponse:
    if not response.content:
        return BotApiResponse()
    return BotApiResponse.model_validate(response.json())


def _error_detail(response: httpx.Response):
    """Extract message and details from an error body, if it is JSON"""
    try:
        body = response.json()
    except ValueError:
        return response.text or None, []
    if not isinstance(body, dict):
        return None, []
    return body.get("message"), body.get("details") or []
