import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
# Only applies to postgres URLs
DATABASE_SSL = os.getenv("DATABASE_SSL", "1").lower() in ("1", "true", "yes", "on")

# All JSON endpoints live under this prefix (the frontend uses e.g. http://host/api)
_api_prefix = os.getenv("API_PREFIX", "/api").strip().strip("/")
API_PREFIX = f"/{_api_prefix}" if _api_prefix else ""

# Comma-separated list; "*" lets the static site be served from any origin
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

# Admin basic auth (dashboard statistics)
ADMIN_USER = os.getenv("ADMIN_USER", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "change-me")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# IANA zone the museum operates in; decides what "today" means for visit dates and stats
MUSEUM_TIMEZONE = os.getenv("MUSEUM_TIMEZONE", "UTC").strip() or "UTC"

PORT = int((os.getenv("PORT", "5000").strip() or "5000"))
