import json
from datetime import datetime

import config


def log_event(event_type: str, message: str, extra: dict = None):
    """
    Logs events to a JSON-lines file for debugging & monitoring.
    """
    entry = {
        "time": datetime.now().isoformat(),
        "type": event_type,
        "message": message
    }
    if extra:
        entry["extra"] = extra

    try:
        with open(config.LOG_FILE, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, default=str) + "\n")
    except OSError as e:
        print(f"Log write error: {e}")
