"""Configuration for the Portal token client."""

DEFAULT_TOKEN_URL = "https://portal.example.com/oauth2/token"
DEFAULT_TIMEOUT = 30.0  # seconds
GRANT_TYPE = "client_credentials"

DEFAULT_HEADERS = {
    "content-type": "application/x-www-form-urlencoded",
    "accept": "application/json",
    "cache-control": "no-cache",
}

CLIENT_ID_ENV = "PORTAL_CLIENT_ID"
CLIENT_SECRET_ENV = "PORTAL_CLIENT_SECRET"
TOKEN_URL_ENV = "PORTAL_TOKEN_URL"
