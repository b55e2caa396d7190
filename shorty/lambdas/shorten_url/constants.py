# Error codes
INVALID_JSON = 'INVALID_JSON'
MISSING_URL = 'MISSING_URL'

# Event codes
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'

# Header carrying the caller's API key
API_KEY_HEADER = 'X-Api-Key'
