"""API-related constants."""

# HTTP headers
API_KEY_HEADER = "x-api-key"
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

# Routing
PRODUCTS_PREFIX = "/api/products"

# Logging
MAX_USER_AGENT_LENGTH = 200
