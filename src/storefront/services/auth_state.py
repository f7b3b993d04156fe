"""Read access to the credentials left in the store by the sign-in flow."""

import logging
from typing import Optional

from storefront.core import storage_keys
from storefront.repositories.protocols import KeyValueStore

logger = logging.getLogger(__name__)


class AuthState:
    """
    Service for checking whether a user is signed in.

    The OTP sign-in flow writes ``isLoggedIn``, ``userId`` and ``token``;
    this class only reads them, and clears them on logout.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def is_logged_in(self) -> bool:
        """Return True if the logged-in flag is set and a token is present."""
        try:
            values = await self._store.multi_get(
                [storage_keys.IS_LOGGED_IN, storage_keys.TOKEN]
            )
        except Exception as exc:
            logger.error("Error checking login status: %s", exc)
            return False
        return (
            values[storage_keys.IS_LOGGED_IN] == storage_keys.LOGGED_IN_SENTINEL
            and bool(values[storage_keys.TOKEN])
        )

    async def credentials(self) -> Optional[tuple[str, str]]:
        """Return ``(user_id, token)``, or None if either is missing."""
        values = await self._store.multi_get([storage_keys.USER_ID, storage_keys.TOKEN])
        user_id = values[storage_keys.USER_ID]
        token = values[storage_keys.TOKEN]
        if not user_id or not token:
            return None
        return user_id, token

    async def clear_auth_data(self) -> None:
        """Remove every credential slot."""
        try:
            await self._store.multi_remove(storage_keys.AUTH_KEYS)
            logger.info("Auth data cleared")
        except Exception as exc:
            logger.error("Error clearing auth data: %s", exc)
