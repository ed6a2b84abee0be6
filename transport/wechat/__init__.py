"""WeChat Transport Layer - Module Exports"""

from .parse import MalformedMessageError, parse_message
from .reply import REPLY_CONTENT_TYPE, cdata, render_text_reply
from .schemas import InboundMessage
from .security import (
    SignatureVerificationError,
    check_signature,
    compute_signature,
    verify_webhook_challenge,
)

__all__ = [
    # Schemas
    "InboundMessage",
    # Parsing
    "parse_message",
    "MalformedMessageError",
    # Security
    "compute_signature",
    "check_signature",
    "verify_webhook_challenge",
    "SignatureVerificationError",
    # Reply
    "render_text_reply",
    "cdata",
    "REPLY_CONTENT_TYPE",
]
