import os
from dotenv import load_dotenv

load_dotenv()

# Database (PostgreSQL via asyncpg)
DATABASE_URL = os.getenv("DATABASE_URL", "")
DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", "1"))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", "10"))
DB_COMMAND_TIMEOUT = float(os.getenv("DB_COMMAND_TIMEOUT", "30"))

# Facebook Graph API
FACEBOOK_GRAPH_URL = os.getenv("FACEBOOK_GRAPH_URL", "https://graph.facebook.com")
FACEBOOK_API_VERSION = os.getenv("FACEBOOK_API_VERSION", "v2.10")
FACEBOOK_PROFILE_FIELDS = os.getenv("FACEBOOK_PROFILE_FIELDS", "id,name,email")
FACEBOOK_AUTH_SCHEME = os.getenv("FACEBOOK_AUTH_SCHEME", "OAuth")
FACEBOOK_TIMEOUT = float(os.getenv("FACEBOOK_TIMEOUT", "5.0"))  # seconds, httpx default

# Sessions (Starlette SessionMiddleware, signed cookie)
DEFAULT_SESSION_SECRET_KEY = "dev-session-secret-change-in-production"
SESSION_SECRET_KEY = os.getenv("SESSION_SECRET_KEY", DEFAULT_SESSION_SECRET_KEY)
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(14 * 24 * 60 * 60)))  # 14 days

# Middleware behaviour
LOGOUT_PATH = os.getenv("LOGOUT_PATH", "/services/userAuth/logout")
LOGIN_REQUIRED_STATUS = int(os.getenv("LOGIN_REQUIRED_STATUS", "200"))
EXEMPT_PATHS = [p for p in os.getenv("EXEMPT_PATHS", "/health").split(",") if p]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
