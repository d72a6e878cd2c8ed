"""LINE webhook signature validation"""

import base64
import hashlib
import hmac
import logging
from typing import Optional

from line_webhook.exceptions import SignatureValidationException

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-Line-Signature"


class LineSignatureValidator:
    """
    Validates X-Line-Signature headers

    LINE signs the raw request body with HMAC-SHA256 keyed by the channel
    secret and sends the digest base64-encoded.
    """

    def __init__(self, channel_secret: str):
        if not channel_secret:
            raise ValueError("channel_secret must not be empty")
        self._secret = channel_secret.encode("utf-8")

    def generate_signature(self, body: bytes) -> str:
        """
        Calculate the signature for a request body

        Args:
            body: Raw request body

        Returns:
            Base64-encoded HMAC-SHA256 digest
        """
        digest = hmac.new(self._secret, body, hashlib.sha256).digest()
        return base64.b64encode(digest).decode("ascii")

    def validate_signature(self, body: bytes, signature: str) -> bool:
        """Check a signature against the body in constant time"""
        expected = self.generate_signature(body)
        return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))


def verify_request_signature(validator: LineSignatureValidator, body: bytes, signature: Optional[str]) -> None:
    """
    Verify the signature header of a webhook request

    Raises:
        SignatureValidationException: header missing or signature mismatch
    """
    if not signature:
        logger.warning(f"Rejected callback: missing {SIGNATURE_HEADER} header")
        raise SignatureValidationException(f"Missing '{SIGNATURE_HEADER}' header")

    if not validator.validate_signature(body, signature):
        logger.warning("Rejected callback: invalid signature")
        raise SignatureValidationException("Invalid API signature")
