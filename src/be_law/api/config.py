import os
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")

# Corpus
DB_ENV_VAR = "BELGIAN_LAW_DB_PATH"
DB_PATH = os.getenv(DB_ENV_VAR, os.path.join(PROJECT_ROOT, "data", "database.db"))

MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', '65536'))  # 64 KB default
API_KEY = os.getenv("API_KEY", "")
RATE_LIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")
DEFAULT_RATE_LIMIT = os.getenv("DEFAULT_RATE_LIMIT", "120 per minute")
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0"))
SENTRY_PROFILES_SAMPLE_RATE = float(os.getenv("SENTRY_PROFILES_SAMPLE_RATE", "0.0"))
APP_ENV = os.getenv("APP_ENV", "production")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")

SERVER_NAME = "belgian-legal-citations"
SERVER_LABEL = "Belgian Law Citations"

# Citation handling
MAX_CITATION_LENGTH = int(os.getenv("MAX_CITATION_LENGTH", "1000"))
DEFAULT_CITATION_FORMAT = os.getenv("DEFAULT_CITATION_FORMAT", "full")  # full, short, pinpoint
