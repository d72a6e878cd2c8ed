"""FastAPI application entry point"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from line_webhook.api.endpoints import callback, health
from line_webhook.config import settings
from line_webhook.utils.logger import setup_logging, mask_secret
from line_webhook.exceptions import LineBotException, SignatureValidationException
from line_webhook.schemas.response import ErrorResponse

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager
    - Startup: Log channel configuration
    - Shutdown: Nothing to release; every request builds its own client
    """
    # Startup
    logger.info(f"Starting {settings.APP_NAME}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Callback path: {settings.LINE_CALLBACK_PATH}")
    logger.info(f"API endpoint: {settings.LINE_API_ENDPOINT}")
    logger.info(f"Channel secret: {mask_secret(settings.LINE_CHANNEL_SECRET)}")
    logger.info(f"Channel token: {mask_secret(settings.LINE_CHANNEL_TOKEN)}")

    if not settings.LINE_CHANNEL_SECRET or not settings.LINE_CHANNEL_TOKEN:
        logger.warning("LINE channel credentials are incomplete; callbacks will fail")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="LINE Messaging API webhook that echoes text and greets followers",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None
)

# Include routers
app.include_router(callback.router, tags=["callback"])
app.include_router(health.router, tags=["health"])


# Exception handlers
@app.exception_handler(SignatureValidationException)
async def signature_exception_handler(request: Request, exc: SignatureValidationException):
    """Reject unsigned or badly signed callbacks"""
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=exc.__class__.__name__, detail=str(exc)).model_dump()
    )


@app.exception_handler(LineBotException)
async def line_bot_exception_handler(request: Request, exc: LineBotException):
    """Handle custom bot exceptions"""
    logger.error(f"LINE bot exception: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=exc.__class__.__name__, detail=str(exc)).model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions"""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="InternalServerError",
            detail="An unexpected error occurred"
        ).model_dump()
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"{settings.APP_NAME} API",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT,
        "callback": settings.LINE_CALLBACK_PATH
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "line_webhook.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
