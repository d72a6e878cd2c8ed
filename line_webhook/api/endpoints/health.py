"""Health check endpoint"""

from fastapi import APIRouter, Depends, Response, status
from line_webhook.config import Settings, get_settings
from line_webhook.schemas.response import HealthResponse
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health", response_model=HealthResponse)
async def health_check(response: Response, settings: Settings = Depends(get_settings)):
    """
    Health check endpoint
    Checks that the channel credentials are configured:
    - Channel secret (signature validation)
    - Channel token (Messaging API)
    """
    health_status = {
        "status": "healthy",
        "dependencies": {}
    }
    
    for name, value in (
        ("channel_secret", settings.LINE_CHANNEL_SECRET),
        ("channel_token", settings.LINE_CHANNEL_TOKEN),
    ):
        if value:
            health_status["dependencies"][name] = "configured"
        else:
            health_status["dependencies"][name] = "missing"
            health_status["status"] = "unhealthy"
            logger.error(f"Health check failed: {name} is not configured")
    
    health_status["dependencies"]["api_endpoint"] = settings.LINE_API_ENDPOINT
    
    # Set HTTP status code
    if health_status["status"] == "unhealthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    
    return HealthResponse(**health_status)
