import os

SERVICE_NAME = os.getenv("SERVICE_NAME", "feed-relay")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG").upper()

DEFAULT_LISTEN_ADDRESS = "localhost:9092"
POCKET_BASE_URL = os.environ.get("POCKET_BASE_URL", "https://getpocket.com").rstrip(
    "/"
)

OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT")
OTLP_HEADERS = os.getenv("OTLP_HEADERS", "")
