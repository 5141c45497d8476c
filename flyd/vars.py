import os

from dotenv import load_dotenv

FLYD_DEBUG = os.getenv("FLYD_DEBUG", "false").lower() == "true"

# Local overrides for development, loaded before anything else is read
if FLYD_DEBUG:
    load_dotenv(".env.local", override=True)

SERVICE_NAME = os.getenv("SERVICE_NAME", "flyd")

PUBLIC_API_URL = os.getenv("PUBLIC_API_URL", "https://api.machines.dev").rstrip("/")
PRIVATE_API_URL = os.getenv(
    "PRIVATE_API_URL", "http://fly-api.internal:4280"
).rstrip("/")

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "info").lower()

OTLP_ENDPOINT = os.getenv("OTLP_ENDPOINT")
OTLP_HEADERS = os.getenv("OTLP_HEADERS", "")
