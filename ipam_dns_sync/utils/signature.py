"""Webhook signature verification (hex HMAC-SHA512 of the raw body)."""

import hashlib
import hmac
from typing import Optional

from ..core.exceptions import SignatureError

SIGNATURE_HEADER = "X-Hook-Signature"


def compute_signature(secret: str, body: bytes) -> str:
    return hmac.new(secret.encode("utf-8"), body, hashlib.sha512).hexdigest()


def verify_signature(signature: str, body: bytes, secret: str) -> bool:
    """Return True if signature matches the body under secret."""
    expected = compute_signature(secret, body)
    return hmac.compare_digest(expected.encode("ascii"), signature.strip().lower().encode("utf-8"))


def check_signature(signature: Optional[str], body: bytes, secret: str) -> None:
    """
    Validate the signature header of a webhook delivery.

    Unsigned deliveries are accepted.

    Raises:
        SignatureError: A signature was sent and does not match
    """
    if signature and not verify_signature(signature, body, secret):
        raise SignatureError("Signature verification failed")
