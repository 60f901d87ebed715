import logging
import os
from logging.handlers import RotatingFileHandler

from slashgate.utils.config import LOG_DIR

os.makedirs(LOG_DIR, exist_ok=True)

LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"

logger = logging.getLogger("slashgate")
logger.setLevel(logging.INFO)

# Console handler
console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

# File handler — rotates at 5 MB, keeps 3 backups
file_handler = RotatingFileHandler(
    os.path.join(LOG_DIR, "audit.log"),
    maxBytes=5 * 1024 * 1024,
    backupCount=3,
)
file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

logger.addHandler(console_handler)
logger.addHandler(file_handler)
