"""Key names in the on-device store shared with the auth and location flows."""

USER_LOCATION = "userLocation"
USER_ID = "userId"
TOKEN = "token"
REFRESH_TOKEN = "refreshToken"
IS_LOGGED_IN = "isLoggedIn"
USER_DATA = "userData"
HAS_LAUNCHED = "hasLaunched"

# Value the auth flow writes to IS_LOGGED_IN
LOGGED_IN_SENTINEL = "true"

AUTH_KEYS: tuple[str, ...] = (IS_LOGGED_IN, USER_DATA, USER_ID, TOKEN, REFRESH_TOKEN)
