"""Runtime settings for the relay, read from the environment."""

import os

from common.constants import DEFAULT_UPDATE_INTERVAL_SECONDS


UPDATE_INTERVAL = float(os.getenv("RELAY_UPDATE_INTERVAL", str(DEFAULT_UPDATE_INTERVAL_SECONDS)))

RELAY_DEBUG = os.getenv("RELAY_DEBUG", "0").lower() in ("1", "true", "yes")

HOST_LAYOUT_PATH = os.getenv("RELAY_HOST_LAYOUT", "host_layout.json")
