import logging
import json
import time
from config_loader import get_config

cfg = get_config()
LOG_FILE = cfg.get("logging", {}).get("security_log", "security.log")

# audit logger, one JSON entry per signup/login outcome
logger = logging.getLogger("security")
logger.setLevel(logging.INFO)
formatter = logging.Formatter('%(asctime)s - %(message)s')
if not logger.handlers:
    fh = logging.FileHandler(LOG_FILE, delay=True)
    fh.setFormatter(formatter)
    logger.addHandler(fh)


def log_auth_event(action: str, email, success: bool, reason: str, distance=None):
    entry = {
        "timestamp": time.time(),
        "action": action,
        "email": email,
        "success": bool(success),
        "reason": reason,
    }
    if distance is not None:
        entry["distance"] = float(distance)
    logger.info(json.dumps(entry))
    return entry
