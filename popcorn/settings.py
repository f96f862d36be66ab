from pathlib import Path
import os
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent

# Load environment variables
load_dotenv(BASE_DIR / "secret.env")

OMDB_API_KEY  = os.getenv("OMDB_API_KEY")
OMDB_URL      = os.getenv("OMDB_URL", "https://www.omdbapi.com/")
OMDB_TIMEOUT  = float(os.getenv("OMDB_TIMEOUT", "10"))

# File / folder paths
DATA_DIR    = Path(os.getenv("POPCORN_DATA_DIR", Path.home() / ".popcorn")).expanduser()
STORE_PATH  = DATA_DIR / "storage.json"
LOG_PATH    = DATA_DIR / "popcorn_debug.log"

# Watched list
WATCHED_KEY    = "watched"
DEDUP_POLICIES = ("allow", "ignore", "replace")
WATCHED_DEDUP  = os.getenv("POPCORN_DEDUP", "allow").strip().lower()

if WATCHED_DEDUP not in DEDUP_POLICIES:
    raise EnvironmentError(
        f"POPCORN_DEDUP must be one of {', '.join(DEDUP_POLICIES)} (got {WATCHED_DEDUP!r})"
    )

# Search
MIN_QUERY_LENGTH = 2

# UI constants
APP_NAME      = "usePopcorn"
DEFAULT_TITLE = "usePopCorn"
ACCENT_COLOR  = "#6741d9"
MAX_RATING    = 10
