"""Shared constants for the Shippo MCP server."""

SERVER_NAME = "shippo-mcp"
SERVER_VERSION = "1.0.0"

# Remote API
DEFAULT_BASE_URL = "https://api.goshippo.com"
AUTH_SCHEME = "ShippoToken"
DEFAULT_RETRY_AFTER_SECONDS = 60

# Per-call credential headers
API_KEY_HEADER = "X-Shippo-API-Key"
BASE_URL_HEADER = "X-Shippo-Base-URL"

# Error messages
ERROR_MISSING_CREDENTIALS = f"No credentials provided. Include {API_KEY_HEADER} header."
ERROR_AUTH_FAILED = "Authentication failed. Check your Shippo API key."
ERROR_RATE_LIMITED = "Rate limit exceeded"
