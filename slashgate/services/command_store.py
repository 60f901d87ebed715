from typing import Optional, Tuple

from starlette.requests import Request

from slashgate.models.slash_command import SlashCommand

# request.state attribute holding the parsed command
_STATE_KEY = "slack_slash_command"


def get_slash_command(request: Optional[Request]) -> Tuple[SlashCommand, bool]:
    """
    Returns the slash command the middleware stored for this request.

    Safe to call anywhere: when the middleware did not run, rejected the
    request, or something else sits in the slot, you get
    (SlashCommand(), False) rather than an error.
    """
    if request is None:
        return SlashCommand(), False

    value = getattr(request.state, _STATE_KEY, None)
    if not isinstance(value, SlashCommand):
        return SlashCommand(), False

    return value, True


def _publish(request: Request, command: SlashCommand) -> None:
    setattr(request.state, _STATE_KEY, command)
