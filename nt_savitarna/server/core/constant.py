PROJECT_NAME = "NT Savitarna"
API_STR = "/api"

AUTH_COOKIE_NAME = "auth-token"
AUTH_COOKIE_PATH = "/"

ADMIN_ORDERS_DEFAULT_LIMIT = 100
ADMIN_USERS_PAGE_SIZE = 50
VALUATOR_ORDERS_PAGE_SIZE = 20
VALUATOR_MONTHLY_STATS_MONTHS = 6

MAX_EXPORT_RECORDS = 10000
