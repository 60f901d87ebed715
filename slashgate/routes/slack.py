from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from slashgate.services.command_store import get_slash_command
from slashgate.utils.logger import logger

router = APIRouter(prefix="/slack", tags=["Slack"])


# ---------------------------------------------------------------------------
# POST /slack/command
# ---------------------------------------------------------------------------

@router.post("/command")
async def slack_command(request: Request):
    """
    Entry point for Slack slash commands.

    SlashCommandMiddleware has already verified the signature and parsed
    the form body by the time we get here, so the handler only reads the
    command back and answers within Slack's 3 second window.

    response_type ephemeral — only visible to the user who ran the command.
    """
    cmd, ok = get_slash_command(request)
    if not ok:
        # middleware not installed on this path
        logger.error("Slash command route reached without a verified command")
        return JSONResponse({"error": "unauthorized"}, status_code=401)

    text = cmd.text.strip()
    logger.info(f"Slack command handled | user_id={cmd.user_id} command={cmd.command} text='{text}'")

    if not text:
        return JSONResponse({
            "response_type": "ephemeral",
            "text": f"Usage: `{cmd.command} <arguments>`",
        })

    return JSONResponse({
        "response_type": "ephemeral",
        "text": f"Received `{cmd.command} {text}`",
    })
