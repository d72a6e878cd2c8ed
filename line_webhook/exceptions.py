"""Custom exception classes"""

from typing import Optional


class LineBotException(Exception):
    """Base exception for the LINE bot"""
    pass


class SignatureValidationException(LineBotException):
    """Missing or invalid X-Line-Signature"""
    pass


class ParseException(LineBotException):
    """Webhook body could not be parsed into events"""
    pass


class LineMessagingException(LineBotException):
    """Messaging API call failed"""
    
    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[list] = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details or []
