"""Ed25519 signature verification for inbound Discord requests."""
import time
from typing import Mapping, Optional, Union

from nacl.signing import VerifyKey
from nacl.exceptions import BadSignatureError

from .constants import SIGNATURE_HEADER, TIMESTAMP_HEADER
from .observability import get_logger

logger = get_logger('interaction-router-verifier')


def verify(
    public_key_hex: str,
    timestamp: Optional[str],
    signature: Optional[str],
    body: Union[str, bytes],
    max_age: Optional[int] = None,
    now: Optional[float] = None
) -> bool:
    """Check that `body` was signed by Discord.

    Discord signs the timestamp header followed by the raw body. Never raises:
    any malformed input or failed check yields False.

    Args:
        public_key_hex: Application public key from the developer portal
        timestamp: Value of the X-Signature-Timestamp header
        signature: Value of the X-Signature-Ed25519 header
        body: Raw request body
        max_age: Reject timestamps older (or newer) than this many seconds.
            None disables the replay check.
        now: Reference Unix time for the replay check (defaults to time.time())

    Returns:
        True if the request is correctly signed
    """
    if not timestamp:
        logger.warning("Timestamp header missing", header=TIMESTAMP_HEADER)
        return False

    if not signature:
        logger.warning("Signature header missing", header=SIGNATURE_HEADER)
        return False

    if max_age is not None and not _within_window(timestamp, max_age, now):
        logger.warning("Signature timestamp outside replay window", timestamp=timestamp, max_age=max_age)
        return False

    if isinstance(body, str):
        body = body.encode('utf-8')

    try:
        verify_key = VerifyKey(bytes.fromhex(public_key_hex))
        message = timestamp.encode('utf-8') + body
        verify_key.verify(message, bytes.fromhex(signature))
        return True
    except (BadSignatureError, ValueError, TypeError) as e:
        logger.warning("Signature verification failed", error=type(e).__name__)
        return False


def verify_headers(
    public_key_hex: str,
    headers: Mapping[str, str],
    body: Union[str, bytes],
    max_age: Optional[int] = None
) -> bool:
    """Verify using the signature headers of a request."""
    return verify(
        public_key_hex,
        headers.get(TIMESTAMP_HEADER),
        headers.get(SIGNATURE_HEADER),
        body,
        max_age=max_age
    )


def _within_window(timestamp: str, max_age: int, now: Optional[float]) -> bool:
    try:
        signed_at = int(timestamp)
    except ValueError:
        return False

    if now is None:
        now = time.time()
    return abs(now - signed_at) <= max_age
