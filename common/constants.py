"""Project-wide constants (section names, config keys, update cadence)."""

GAME_TICKS_PER_SECOND: int = 60
UPDATE_EVERY_TICKS: int = 100
DEFAULT_UPDATE_INTERVAL_SECONDS: float = UPDATE_EVERY_TICKS / GAME_TICKS_PER_SECOND

ROOT_SECTION_NAME = ""
TRANSMITTER_SECTION = "transmitter"
RECEIVER_SECTION = "receiver"

BLOCK_KEY = "block"
SURFACE_KEY = "surface"
TAG_KEY = "tag"

DEFAULT_SURFACE_INDEX: int = 0

LOG_PAYLOAD_PREVIEW_CHARS: int = 64
