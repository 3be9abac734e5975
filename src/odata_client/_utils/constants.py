# HTTP methods
HTTP_METHOD_GET = "GET"
HTTP_METHOD_POST = "POST"
HTTP_METHOD_PUT = "PUT"
HTTP_METHOD_MERGE = "MERGE"
HTTP_METHOD_DELETE = "DELETE"

# Headers
HEADER_ACCEPT = "Accept"
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_USER_AGENT = "User-Agent"
HEADER_HTTP_METHOD = "X-HTTP-Method"
HEADER_RETRY_AFTER = "Retry-After"

# Content types
CONTENT_TYPE_JSON = "application/json"

# Environment variables
ENV_BASE_URL = "ODATA_URL"
ENV_ACCESS_TOKEN = "ODATA_ACCESS_TOKEN"
ENV_TIMEOUT = "ODATA_TIMEOUT"
ENV_MAX_RETRIES = "ODATA_MAX_RETRIES"
ENV_DISABLE_SSL_VERIFY = "ODATA_DISABLE_SSL_VERIFY"

# Files
DOTENV_FILE = ".env"

USER_AGENT_PREFIX = "odata-client"
