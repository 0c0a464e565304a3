# Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"

# Environment variables
ENV_TIMEOUT = "RESTCLIENT_TIMEOUT"
ENV_DEBUG = "RESTCLIENT_DEBUG"

# Defaults
DEFAULT_TIMEOUT = 2.0
LOGGER_NAME = "restclient"

# Tags
TAG_FORM = "form"
TAG_JSON = "json"
TAG_IGNORE = "-"
OPTION_OMIT_EMPTY = "omitempty"
