"""
WeChat Handshake Signature Verification

SECURITY BOUNDARY - verify the callback URL handshake.
No bridge imports. No retries. No logic.

signature == sha1("".join(sorted([token, timestamp, nonce]))).hexdigest()
"""

import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)


class SignatureVerificationError(Exception):
    """Signature verification failed."""
    pass


def compute_signature(token: str, timestamp: str, nonce: str) -> str:
    """Hex SHA-1 of the lexicographically sorted, concatenated parts."""
    joined = "".join(sorted([token, timestamp, nonce]))
    return hashlib.sha1(joined.encode("utf-8")).hexdigest()


def check_signature(token: str, signature: str, timestamp: str, nonce: str) -> bool:
    """
    Check a handshake signature.

    Fails closed: an unconfigured token or a missing timestamp/nonce is
    always a mismatch.
    """
    if not token or not timestamp or not nonce:
        logger.warning("WeChat token or handshake parameters empty, signature check failed")
        return False

    expected = compute_signature(token, timestamp, nonce)
    logger.debug(f"Computed signature {expected}, received {signature}")

    # Constant-time compare on bytes; str compare rejects non-ASCII input
    return hmac.compare_digest(expected.encode("ascii"), (signature or "").encode("utf-8"))


def verify_webhook_challenge(
    token: str,
    signature: str,
    timestamp: str,
    nonce: str,
    echostr: str,
) -> str:
    """
    Verify the callback URL handshake.

    Returns:
        echostr, unchanged

    Raises:
        SignatureVerificationError: Signature does not match
    """
    if not check_signature(token, signature, timestamp, nonce):
        raise SignatureVerificationError("Invalid signature")
    return echostr
