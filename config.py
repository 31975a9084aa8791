# config.py
import copy
import json
import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CONFIG_PATH = os.getenv("DRAFTS_CONFIG", "drafts.json")
LOG_FILE = os.getenv("LOG_FILE", "log.json")

WORDPRESS_URL = os.getenv("WORDPRESS_URL")
WORDPRESS_USERNAME = os.getenv("WORDPRESS_USERNAME")
WORDPRESS_APP_PASSWORD = os.getenv("WORDPRESS_APP_PASSWORD")

DEFAULTS = {
    "inventory_path": "data/inventory.csv",
    "publish": False,
    "lint": {},
}


def load_config(config_path: str) -> dict:
    """
    Load drafts configuration from JSON file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with path.open("r", encoding="utf-8") as f:
        config = json.load(f)

    required_keys = [
        "articles_dir",
    ]

    for key in required_keys:
        if key not in config or not config[key]:
            raise ValueError(f"Missing required config key: {key}")

    if config.get("publish"):
        for key, value in (
            ("WORDPRESS_URL", WORDPRESS_URL),
            ("WORDPRESS_USERNAME", WORDPRESS_USERNAME),
            ("WORDPRESS_APP_PASSWORD", WORDPRESS_APP_PASSWORD),
        ):
            if not value:
                raise ValueError(f"Missing required environment variable for publishing: {key}")

    return {**copy.deepcopy(DEFAULTS), **config}
