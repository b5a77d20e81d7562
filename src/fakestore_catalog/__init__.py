"""Fakestore Catalog - Fetch, enrich and group a product catalog."""

__version__ = "0.1.0"

# Directory and file constants
CONFIG_FILE = "fakestore.json"
FILES_DIR = "files"
LOGS_DIR = "logs"
LOG_FILE = "log.txt"
CACHE_KEY = "get_products"
