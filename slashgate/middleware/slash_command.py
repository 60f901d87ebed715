import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from slashgate.middleware.verify_slack import DEFAULT_MAX_SKEW
from slashgate.services.command_store import _publish
from slashgate.services.verifier import SlackVerifier, Verifier
from slashgate.utils.errors import UnauthorizedError, VerificationError


def _null_logger() -> logging.Logger:
    null = logging.getLogger("slashgate.null")
    if not null.handlers:
        null.addHandler(logging.NullHandler())
    null.propagate = False
    return null


@dataclass(frozen=True)
class SlashCommandOptions:
    """
    Settings for SlashCommandMiddleware, built once before the app starts.

    expected_command — only this slash command is accepted (e.g. "/deploy");
                       None accepts any command
    logger           — receives info/warning events; defaults to a logger
                       that discards everything
    verifier         — replaces the default SlackVerifier (handy in tests)
    max_skew         — replay window in seconds for the default verifier
    paths            — path prefixes to guard; empty guards every path
    """

    expected_command: Optional[str] = None
    logger: Optional[logging.Logger] = None
    verifier: Optional[Verifier] = None
    max_skew: int = DEFAULT_MAX_SKEW
    paths: Tuple[str, ...] = field(default_factory=tuple)


class SlashCommandMiddleware(BaseHTTPMiddleware):
    """
    Verifies Slack slash-command requests and stores the parsed command.

    Flow per request:
        1. Authenticate with the verifier   →  401 / 400 on failure.
        2. Check the expected command        →  400 on mismatch.
        3. Store the command on request.state and continue.

    Handlers read the command back with get_slash_command(request).
    """

    def __init__(self, app: ASGIApp, secret: str = "", options: Optional[SlashCommandOptions] = None):
        super().__init__(app)
        options = options or SlashCommandOptions()

        if options.verifier is None and not secret:
            raise ValueError("A Slack signing secret is required when no verifier is given")

        self.expected_command = options.expected_command
        self.logger = options.logger if options.logger is not None else _null_logger()
        self.verifier = (
            options.verifier
            if options.verifier is not None
            else SlackVerifier(secret, max_skew=options.max_skew)
        )
        self.paths = tuple(options.paths)

    def _guards(self, path: str) -> bool:
        if not self.paths:
            return True
        # whole path segments only: "/slack" guards "/slack/command", not "/slackers"
        for prefix in self.paths:
            base = prefix.rstrip("/")
            if path == base or path.startswith(base + "/"):
                return True
        return False

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self._guards(request.url.path):
            return await call_next(request)

        extra = {"path": request.url.path}

        try:
            command = await self.verifier.verify(request)
        except UnauthorizedError as exc:
            self.logger.warning(f"{exc} | error={exc!r}", extra=extra)
            return JSONResponse({"error": "unauthorized"}, status_code=401)
        except Exception as exc:
            # every non-auth failure, including ones from custom verifiers, is a 400
            cause = exc.__cause__ if isinstance(exc, VerificationError) and exc.__cause__ else exc
            self.logger.warning(f"{exc} | error={cause!r}", extra=extra)
            return JSONResponse({"error": "invalid signature"}, status_code=400)

        if self.expected_command and self.expected_command != command.command:
            self.logger.warning(
                f"command mismatch | expected={self.expected_command} received={command.command}",
                extra=extra,
            )
            return JSONResponse({"error": "command mismatch"}, status_code=400)

        self.logger.info(f"received slack slash command | command={command!r}", extra=extra)
        _publish(request, command)
        return await call_next(request)
