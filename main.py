import uvicorn
from fastapi import FastAPI

from slashgate.middleware.slash_command import SlashCommandMiddleware, SlashCommandOptions
from slashgate.routes.slack import router as slack_router
from slashgate.utils.config import (
    PORT,
    SLACK_COMMAND,
    SLACK_MAX_TIMESTAMP_SKEW,
    SLACK_PROTECTED_PATHS,
    SLACK_SIGNING_SECRET,
)
from slashgate.utils.logger import logger

app = FastAPI(
    title="slashgate",
    description="Verified Slack slash commands for FastAPI",
    version="1.0.0",
)

# Every request under SLACK_PROTECTED_PATHS must carry a valid Slack signature
app.add_middleware(
    SlashCommandMiddleware,
    secret=SLACK_SIGNING_SECRET,
    options=SlashCommandOptions(
        expected_command=SLACK_COMMAND or None,
        logger=logger,
        max_skew=SLACK_MAX_TIMESTAMP_SKEW,
        paths=SLACK_PROTECTED_PATHS,
    ),
)

# Routes
app.include_router(slack_router)   # /slack/command  (Slack slash commands)


@app.get("/health")
def health_check():
    return {"status": "ok"}


# Entry point
if __name__ == "__main__":
    logger.info(f"Starting slashgate on port {PORT}")
    uvicorn.run("main:app", host="0.0.0.0", port=PORT, reload=True)
