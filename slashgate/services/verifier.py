from typing import Protocol

from starlette.requests import ClientDisconnect, Request

from slashgate.middleware.verify_slack import DEFAULT_MAX_SKEW, verify_signature
from slashgate.models.slash_command import SlashCommand
from slashgate.utils.errors import BodyReadError, ParseError

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Verifier(Protocol):
    """
    Anything that can authenticate a request and hand back its slash command.

    Implementations raise a VerificationError subclass on failure. The
    middleware accepts any object with this shape, which is how tests
    swap in a stub instead of signing every request.
    """

    async def verify(self, request: Request) -> SlashCommand:
        ...


async def read_body(request: Request) -> bytes:
    """
    Reads the full raw body once.

    Starlette keeps the bytes on the request, so the command parser and any
    downstream handler read the exact same content again.
    """
    try:
        return await request.body()
    except ClientDisconnect as exc:
        raise BodyReadError("failed to read body") from exc


class SlackVerifier:
    """Default Verifier: Slack signing-secret HMAC check, then form parsing."""

    def __init__(self, secret: str, max_skew: int = DEFAULT_MAX_SKEW):
        self._secret = secret
        self.max_skew = max_skew

    def __repr__(self) -> str:
        # never expose the secret
        return f"SlackVerifier(max_skew={self.max_skew})"

    async def verify(self, request: Request) -> SlashCommand:
        raw_body = await read_body(request)

        verify_signature(self._secret, request.headers, raw_body, max_skew=self.max_skew)

        return await parse_slash_command(request)


async def parse_slash_command(request: Request) -> SlashCommand:
    """Parses the (already read) form body into a SlashCommand."""
    content_type = request.headers.get("content-type", "")
    media_type = content_type.split(";")[0].strip().lower()
    if media_type and media_type != FORM_CONTENT_TYPE:
        raise ParseError(f"failed to parse slash command: unsupported content type {media_type!r}")

    raw_body = await read_body(request)
    try:
        return SlashCommand.from_form(raw_body)
    except UnicodeDecodeError as exc:
        raise ParseError("failed to parse slash command") from exc
