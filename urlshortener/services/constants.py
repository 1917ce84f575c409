# Structured log event codes
SHORT_URL_CREATED = 'SHORT_URL_CREATED'
SHORT_URL_DEDUPLICATED = 'SHORT_URL_DEDUPLICATED'
CREATION_RACE_LOST = 'CREATION_RACE_LOST'
SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'
SHORT_URL_RESOLVED = 'SHORT_URL_RESOLVED'
ACCESS_COUNT_UPDATE_FAILED = 'ACCESS_COUNT_UPDATE_FAILED'
