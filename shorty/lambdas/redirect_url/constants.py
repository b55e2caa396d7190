# Error codes
MISSING_SHORT_ID = 'MISSING_SHORT_ID'

# Event codes
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
