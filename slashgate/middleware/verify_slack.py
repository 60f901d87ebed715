import hashlib
import hmac
import re
import time
from typing import Mapping, Optional, Union

from slashgate.utils.errors import (
    MissingHeadersError,
    SignatureMismatchError,
    StaleTimestampError,
)

SIGNATURE_HEADER = "X-Slack-Signature"
TIMESTAMP_HEADER = "X-Slack-Request-Timestamp"
SIGNATURE_VERSION = "v0"

# Replay window in seconds
DEFAULT_MAX_SKEW = 300

_TIMESTAMP = re.compile(r"[0-9]+")   # unix seconds, ASCII digits only
_MAX_TIMESTAMP_DIGITS = 18           # anything longer is far outside any replay window


def compute_signature(secret: str, timestamp: Union[int, str], raw_body: bytes) -> str:
    """
    Slack's request signature: "v0=" + hex(HMAC-SHA256(secret, "v0:<ts>:<body>")).

    The body is hashed as raw bytes, never decoded. A string timestamp is
    hashed verbatim, exactly as it appeared in the header.
    """
    base_string = f"{SIGNATURE_VERSION}:{timestamp}:".encode() + raw_body
    digest = hmac.new(secret.encode(), base_string, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_VERSION}={digest}"


def verify_signature(
    secret: str,
    headers: Mapping[str, str],
    raw_body: bytes,
    now: Optional[float] = None,
    max_skew: int = DEFAULT_MAX_SKEW,
) -> None:
    """
    Validates a request came from Slack.

    Steps:
      1. Both signature headers present, timestamp made of digits only.
      2. Timestamp within max_skew seconds of now  →  replay-attack prevention.
      3. Recompute the expected signature and compare in constant time.

    Raises MissingHeadersError, StaleTimestampError or SignatureMismatchError.
    Returns None when the request is authentic.
    """
    timestamp = headers.get(TIMESTAMP_HEADER, "")
    slack_sig = headers.get(SIGNATURE_HEADER, "")

    if not timestamp or not slack_sig:
        raise MissingHeadersError("missing headers")

    if not _TIMESTAMP.fullmatch(timestamp):
        raise MissingHeadersError(f"invalid timestamp header: {timestamp!r}")

    # integer arithmetic only: a float cannot hold an arbitrarily long timestamp,
    # and int() refuses very long digit strings
    significant = timestamp.lstrip("0")
    if len(significant) > _MAX_TIMESTAMP_DIGITS:
        raise StaleTimestampError("timestamp outside replay window")

    if now is None:
        now = time.time()
    if abs(int(now) - int(significant or "0")) > max_skew:
        raise StaleTimestampError("timestamp outside replay window")

    expected_sig = compute_signature(secret, timestamp, raw_body)

    if not hmac.compare_digest(expected_sig.encode(), slack_sig.encode()):
        raise SignatureMismatchError("computed unexpected signature")
