"""Shared fixtures: environment for the demo app, request signing and raw ASGI requests."""

import hashlib
import hmac
import os
import tempfile
import time
from urllib.parse import urlencode

# Must be set before slashgate.utils.config is imported anywhere
os.environ["SLACK_SIGNING_SECRET"] = "secret"
os.environ["SLACK_COMMAND"] = ""
os.environ["SLACK_PROTECTED_PATHS"] = "/slack"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="slashgate-logs-"))

import pytest
from starlette.requests import Request

SECRET = "secret"


def sign(secret: str, timestamp: int, body: str) -> str:
    """Independent implementation of Slack's v0 signature."""
    base_string = f"v0:{timestamp}:{body}"
    digest = hmac.new(secret.encode(), base_string.encode(), hashlib.sha256).hexdigest()
    return "v0=" + digest


def form(**fields: str) -> str:
    return urlencode(fields)


def signed_headers(body: str, secret: str = SECRET, timestamp: int = None) -> dict:
    ts = int(time.time()) if timestamp is None else timestamp
    return {
        "Content-Type": "application/x-www-form-urlencoded",
        "X-Slack-Signature": sign(secret, ts, body),
        "X-Slack-Request-Timestamp": str(ts),
    }


def make_request(body: bytes = b"", headers: dict = None, disconnect: bool = False) -> Request:
    """A bare Starlette request whose body arrives in a single ASGI message."""
    raw_headers = [
        (key.lower().encode("latin-1"), value.encode("latin-1"))
        for key, value in (headers or {}).items()
    ]
    scope = {
        "type": "http",
        "method": "POST",
        "path": "/slack",
        "query_string": b"",
        "headers": raw_headers,
    }
    delivered = False

    async def receive():
        nonlocal delivered
        if disconnect or delivered:
            return {"type": "http.disconnect"}
        delivered = True
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


@pytest.fixture
def now() -> int:
    return int(time.time())
