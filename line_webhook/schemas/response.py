"""Generic response schemas"""

from pydantic import BaseModel
from typing import Optional, List, Dict, Any

from line_webhook.schemas.event import LineModel


class ErrorResponse(BaseModel):
    """Error response schema"""
    error: str
    detail: str


class HealthResponse(BaseModel):
    """Health check response schema"""
    status: str
    dependencies: dict


class CallbackResponse(BaseModel):
    """Webhook response schema"""
    status: str
    events: int = 0


class BotApiResponse(LineModel):
    """Messaging API response; `{}` on success"""
    message: Optional[str] = None
    details: List[Dict[str, Any]] = []


class UserProfileResponse(LineModel):
    """Messaging API user profile"""
    display_name: str
    user_id: str
    picture_url: Optional[str] = None
    status_message: Optional[str] = None
