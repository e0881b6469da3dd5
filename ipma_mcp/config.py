# ABOUTME: Runtime configuration for the IPMA tool server.
# ABOUTME: Reads overrides from the environment (and .env) once at import time.

import os

from dotenv import load_dotenv

load_dotenv()

IPMA_BASE_URL = os.environ.get("IPMA_BASE_URL", "https://api.ipma.pt/open-data").rstrip("/")
HTTP_TIMEOUT = float(os.environ.get("IPMA_HTTP_TIMEOUT", "30"))
DISPLAY_TIMEZONE = os.environ.get("IPMA_DISPLAY_TIMEZONE", "Europe/Lisbon")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

SERVER_NAME = "ipma-weather-server"
SERVER_VERSION = "1.0.0"
USER_AGENT = f"{SERVER_NAME}/{SERVER_VERSION}"
