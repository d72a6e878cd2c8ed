"""Test Messaging API client"""

import json

import httpx
import pytest

from line_webhook.exceptions import LineMessagingException
from line_webhook.schemas.message import (
    ImageMessage,
    LocationMessage,
    PushMessage,
    ReplyMessage,
    StickerMessage,
    TextMessage,
)
from line_webhook.services.line_client import LineMessagingClient


def test_reply_message(line_client, line_api):
    """Reply is posted with bearer token and compact JSON body"""
    result = line_client.reply_message(
        ReplyMessage(reply_token="token", messages=[TextMessage(text="hi")])
    )

    assert result.message is None
    assert result.details == []

    request = line_api.take_request()
    assert request.method == "POST"
    assert str(request.url) == "http://line-api.test/v2/bot/message/reply"
    assert request.headers["Authorization"] == "Bearer TOKEN"
    assert request.headers["Content-Type"] == "application/json"
    assert request.content == b'{"replyToken":"token","messages":[{"type":"text","text":"hi"}]}'


def test_reply_message_multiple(line_client, line_api):
    """Message order and camelCase keys are preserved"""
    line_client.reply_message(ReplyMessage(
        reply_token="token",
        messages=[
            StickerMessage(package_id="1", sticker_id="2"),
            ImageMessage(
                original_content_url="https://example.com/a.jpg",
                preview_image_url="https://example.com/a_preview.jpg"
            ),
        ]
    ))

    body = json.loads(line_api.take_request().content)
    assert body["messages"] == [
        {"type": "sticker", "packageId": "1", "stickerId": "2"},
        {
            "type": "image",
            "originalContentUrl": "https://example.com/a.jpg",
            "previewImageUrl": "https://example.com/a_preview.jpg"
        },
    ]


def test_reply_location_message(line_client, line_api):
    line_client.reply_message(ReplyMessage(
        reply_token="token",
        messages=[LocationMessage(
            title="my location",
            address="Tokyo",
            latitude=35.65910807942215,
            longitude=139.70372892916203
        )]
    ))

    body = json.loads(line_api.take_request().content)
    assert body == {
        "replyToken": "token",
        "messages": [{
            "type": "location",
            "title": "my location",
            "address": "Tokyo",
            "latitude": 35.65910807942215,
            "longitude": 139.70372892916203
        }]
    }


def test_push_message(line_client, line_api):
    line_client.push_message(PushMessage(to="U123", messages=[TextMessage(text="news")]))

    request = line_api.take_request()
    assert request.url.path == "/v2/bot/message/push"
    assert json.loads(request.content) == {"to": "U123", "messages": [{"type": "text", "text": "news"}]}


def test_get_profile(line_client, line_api):
    line_api.enqueue(body=json.dumps({
        "displayName": "LINE taro",
        "userId": "U4af4980629",
        "pictureUrl": "https://obs.line-apps.com/abc",
        "statusMessage": "Hello, LINE!"
    }))

    profile = line_client.get_profile("U4af4980629")

    request = line_api.take_request()
    assert request.method == "GET"
    assert request.url.path == "/v2/bot/profile/U4af4980629"
    assert request.headers["Authorization"] == "Bearer TOKEN"
    assert profile.display_name == "LINE taro"
    assert profile.status_message == "Hello, LINE!"


def test_get_message_content(line_client, line_api):
    line_api.enqueue(body="image-bytes")

    content = line_client.get_message_content("325708")

    assert line_api.take_request().url.path == "/v2/bot/message/325708/content"
    assert content == b"image-bytes"


def test_leave_group_and_room(line_client, line_api):
    line_client.leave_group("G1")
    line_client.leave_room("R1")

    assert line_api.take_request().url.path == "/v2/bot/group/G1/leave"
    assert line_api.take_request().url.path == "/v2/bot/room/R1/leave"


def test_ids_are_single_path_segments(line_client, line_api):
    """Ids containing slashes cannot change the request path"""
    line_api.enqueue(body=json.dumps({"displayName": "x", "userId": "U1/../../message/push"}))

    line_client.get_profile("U1/../../message/push")
    line_client.leave_group("G1/leave")

    assert line_api.take_request().url.raw_path == b"/v2/bot/profile/U1%2F..%2F..%2Fmessage%2Fpush"
    assert line_api.take_request().url.raw_path == b"/v2/bot/group/G1%2Fleave/leave"


def test_error_response(line_client, line_api):
    """Non-2xx responses raise with the API's message"""
    line_api.enqueue(status_code=400, body=json.dumps({
        "message": "The request body has 1 error(s)",
        "details": [{"message": "May not be empty", "property": "messages[0].text"}]
    }))

    with pytest.raises(LineMessagingException) as exc_info:
        line_client.reply_message(ReplyMessage(reply_token="token", messages=[TextMessage(text="hi")]))

    assert exc_info.value.status_code == 400
    assert str(exc_info.value) == "The request body has 1 error(s)"
    assert exc_info.value.details[0]["property"] == "messages[0].text"


def test_error_response_without_body(line_client, line_api):
    line_api.enqueue(status_code=503, body="")

    with pytest.raises(LineMessagingException) as exc_info:
        line_client.leave_room("R1")

    assert exc_info.value.status_code == 503
    assert "503" in str(exc_info.value)


def test_transport_error():
    """Connection failures raise LineMessagingException"""
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = LineMessagingClient(
        channel_token="TOKEN",
        api_endpoint="http://line-api.test",
        transport=httpx.MockTransport(refuse)
    )

    with pytest.raises(LineMessagingException) as exc_info:
        client.push_message(PushMessage(to="U1", messages=[TextMessage(text="x")]))

    assert exc_info.value.status_code is None


def test_reply_message_limits():
    """At most five messages per reply"""
    with pytest.raises(ValueError):
        ReplyMessage(reply_token="token", messages=[TextMessage(text=str(i)) for i in range(6)])
    with pytest.raises(ValueError):
        ReplyMessage(reply_token="token", messages=[])
