import os
from dotenv import load_dotenv

load_dotenv()

# ── Slack ─────────────────────────────────────────────────────────────────────
SLACK_SIGNING_SECRET: str = os.getenv("SLACK_SIGNING_SECRET", "")
SLACK_COMMAND: str        = os.getenv("SLACK_COMMAND", "")   # empty → accept any command
SLACK_MAX_TIMESTAMP_SKEW: int = int(os.getenv("SLACK_MAX_TIMESTAMP_SKEW", 300))
SLACK_PROTECTED_PATHS: tuple[str, ...] = tuple(
    path.strip()
    for path in os.getenv("SLACK_PROTECTED_PATHS", "/slack").split(",")
    if path.strip()
)

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_DIR: str = os.getenv(
    "LOG_DIR", os.path.join(os.path.dirname(__file__), "../../logs")
)

# ── Server ────────────────────────────────────────────────────────────────────
PORT: int = int(os.getenv("PORT", 8000))
