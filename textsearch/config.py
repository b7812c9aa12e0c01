"""
Configuration settings for the text search engine.
"""
import os


def _positive_int(name: str, default: int) -> int:
    value = int(os.getenv(name, str(default)))
    if value < 1:
        raise ValueError(f"{name} must be a positive integer.")
    return value


# Work queue settings
DEFAULT_THREADS = _positive_int("TEXTSEARCH_THREADS", 5)

# Fetch settings
MAX_REDIRECTS = 3
FETCH_TIMEOUT = float(os.getenv("TEXTSEARCH_FETCH_TIMEOUT", "10"))
USER_AGENT = "TextSearchBot/1.0"

# Crawler settings (1 page means only the seed is indexed)
DEFAULT_MAX_PAGES = 1

# Document settings
TEXT_EXTENSIONS = (".txt", ".text")
STEMMER_LANGUAGE = "english"

# Output defaults
INDEX_PATH = "index.json"
COUNTS_PATH = "counts.json"
RESULTS_PATH = "results.json"

# Logging
LOG_LEVEL = os.getenv("TEXTSEARCH_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] [%(threadName)s] %(name)s: %(message)s"
