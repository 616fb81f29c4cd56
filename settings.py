from typing import List

from config.loader import get_config_loader

# Get the config loader instance
config = get_config_loader()

# Server configuration
PORT = config.get("PORT", 5000)
LOG_LEVEL = config.get("LOG_LEVEL", "info")
BIND_ADDRESS = config.get("BIND_ADDRESS", "0.0.0.0")

# Vertex AI project configuration (required)
GOOGLE_PROJECT_ID = config.get("GOOGLE_PROJECT_ID", "")
GOOGLE_PROJECT_LOCATION = config.get("GOOGLE_PROJECT_LOCATION", "")

# Model configuration
GEMINI_MODEL = config.get("GEMINI_MODEL", "gemini-2.0-flash-001")
# "generateContent" (contents/generationConfig) or "predict" (instances/parameters)
GEMINI_API_STYLE = config.get("GEMINI_API_STYLE", "generateContent")

# Credential configuration
# GOOGLE_AUTH_MODE is one of "api_key", "oauth", "service_account".
# When blank the first complete credential set in that order is used.
GOOGLE_AUTH_MODE = config.get("GOOGLE_AUTH_MODE", "")
GOOGLE_API_KEY = config.get_secret("GOOGLE_API_KEY")
GOOGLE_CLIENT_ID = config.get_secret("GOOGLE_CLIENT_ID")
GOOGLE_CLIENT_SECRET = config.get_secret("GOOGLE_CLIENT_SECRET")
GOOGLE_REFRESH_TOKEN = config.get_secret("GOOGLE_REFRESH_TOKEN")
GOOGLE_SERVICE_ACCOUNT_EMAIL = config.get_secret("GOOGLE_SERVICE_ACCOUNT_EMAIL")
GOOGLE_PRIVATE_KEY = config.get_secret("GOOGLE_PRIVATE_KEY")
GOOGLE_APPLICATION_CREDENTIALS = config.get_secret("GOOGLE_APPLICATION_CREDENTIALS")

# OAuth token endpoint and scope (Google defaults)
TOKEN_URI = config.get("TOKEN_URI", "https://oauth2.googleapis.com/token")
TOKEN_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
# Signed assertions are valid for one hour
ASSERTION_LIFETIME = 3600
# Cached tokens are refreshed when they expire within this many seconds
TOKEN_SAFETY_MARGIN = config.get("TOKEN_SAFETY_MARGIN", 60)

# Timeout configuration
# Token endpoint exchange: held while the token cache lock is held
TOKEN_TIMEOUT = config.get("TOKEN_TIMEOUT", 30.0)
# Connection timeout: Time to establish TCP connection
CONNECT_TIMEOUT = config.get("CONNECT_TIMEOUT", 10.0)
# Request timeout: Total timeout for generation requests
REQUEST_TIMEOUT = config.get("REQUEST_TIMEOUT", 120.0)


def missing_required_settings() -> List[str]:
    """Names of required settings that are not configured"""
    required = {
        "GOOGLE_PROJECT_ID": GOOGLE_PROJECT_ID,
        "GOOGLE_PROJECT_LOCATION": GOOGLE_PROJECT_LOCATION,
    }
    return [name for name, value in required.items() if not value]
