# Structured log event codes / error codes
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_LONG_URL = 'MISSING_LONG_URL'
INVALID_LONG_URL = 'INVALID_LONG_URL'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
STORAGE_UNAVAILABLE = 'STORAGE_UNAVAILABLE'
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'
