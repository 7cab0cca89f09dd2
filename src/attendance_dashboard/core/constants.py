"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

INPUT_EXTENSION = ".csv"

INDEX_FILENAME = "index.json"
SESSIONS_DIRNAME = "sessions"
LOCK_FILENAME = ".lock"
STAGING_PREFIX = ".staging-"

AGGREGATION_FILE_PATH = "aggregation"

DEFAULT_INPUT_DIR = "data/sample"
DEFAULT_OUTPUT_DIR = "public/data"

ID_HEX_LENGTH = 8
