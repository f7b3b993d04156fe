"""Application context wiring the client services together.

Each UI process builds one context and hands its services to the screens.
There is no module-level instance: tests build their own contexts with fake
collaborators.
"""

import logging
from typing import Optional

from storefront.config.settings import Settings, get_settings
from storefront.core.clock import Clock, SystemClock
from storefront.providers import (
    HttpRemoteDataGateway,
    RemoteDataGateway,
    StubRemoteDataGateway,
)
from storefront.repositories.protocols import KeyValueStore
from storefront.repositories.sqlalchemy import (
    SqlAlchemyKeyValueStore,
    get_session_factory,
    init_db,
    reset_database,
)
from storefront.services import (
    AuthState,
    CartAggregate,
    CartPrompter,
    HomeDataCache,
    HomeDataLoader,
    UserProfileCache,
)

logger = logging.getLogger(__name__)


class AppContext:
    """
    Application context providing access to all client services.

    Collaborators not passed in are built from settings on ``initialize``:
    a SQLite key/value store under the data directory, and an HTTP gateway
    (or the stub gateway in offline mode).
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        prompter: Optional[CartPrompter] = None,
        gateway: Optional[RemoteDataGateway] = None,
        store: Optional[KeyValueStore] = None,
        clock: Optional[Clock] = None,
    ):
        self._settings = settings or get_settings()
        self._prompter = prompter
        self._gateway = gateway
        self._store = store
        self._clock = clock or SystemClock()
        self._owns_gateway = False
        self._owns_database = False
        self._initialized = False

        # Service instances (lazy initialized)
        self._auth: Optional[AuthState] = None
        self._home_cache: Optional[HomeDataCache] = None
        self._home_loader: Optional[HomeDataLoader] = None
        self._user_cache: Optional[UserProfileCache] = None
        self._cart: Optional[CartAggregate] = None

    async def initialize(self) -> None:
        """Open the store and gateway if they were not injected."""
        if self._initialized:
            return

        if self._store is None:
            await init_db(self._settings.get_database_url())
            self._store = SqlAlchemyKeyValueStore(get_session_factory())
            self._owns_database = True

        if self._gateway is None:
            if self._settings.offline_mode:
                self._gateway = StubRemoteDataGateway()
            else:
                self._gateway = HttpRemoteDataGateway.from_settings(self._settings)
                self._owns_gateway = True

        self._initialized = True
        logger.info(
            "%s %s client context initialized",
            self._settings.app_name,
            self._settings.app_version,
        )

    @property
    def is_initialized(self) -> bool:
        """Check if context is initialized."""
        return self._initialized

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def store(self) -> KeyValueStore:
        self._require_initialized()
        return self._store

    @property
    def gateway(self) -> RemoteDataGateway:
        self._require_initialized()
        return self._gateway

    # Service accessors
    @property
    def auth(self) -> AuthState:
        """Get the AuthState instance."""
        if self._auth is None:
            self._auth = AuthState(self.store)
        return self._auth

    @property
    def home_cache(self) -> HomeDataCache:
        """Get the HomeDataCache instance."""
        if self._home_cache is None:
            self._home_cache = HomeDataCache(
                gateway=self.gateway,
                store=self.store,
                clock=self._clock,
                cache_duration_ms=self._settings.home_cache_duration_ms,
                section_limit=self._settings.home_section_limit,
            )
        return self._home_cache

    @property
    def home_loader(self) -> HomeDataLoader:
        """Get the HomeDataLoader instance."""
        if self._home_loader is None:
            self._home_loader = HomeDataLoader(cache=self.home_cache, store=self.store)
        return self._home_loader

    @property
    def user_cache(self) -> UserProfileCache:
        """Get the UserProfileCache instance."""
        if self._user_cache is None:
            self._user_cache = UserProfileCache(
                gateway=self.gateway,
                store=self.store,
                auth=self.auth,
                clock=self._clock,
                cache_duration_ms=self._settings.user_cache_duration_ms,
            )
        return self._user_cache

    @property
    def cart(self) -> CartAggregate:
        """Get the CartAggregate instance. Needs a prompter."""
        if self._cart is None:
            if self._prompter is None:
                raise RuntimeError("AppContext was created without a CartPrompter")
            self._cart = CartAggregate(auth=self.auth, prompter=self._prompter)
        return self._cart

    async def logout(self) -> None:
        """Forget the signed-in user: profile cache, credentials and cart."""
        await self.user_cache.clear_cache()
        await self.auth.clear_auth_data()
        if self._cart is not None:
            self._cart.clear_cart()

    async def close(self) -> None:
        """Clean up resources."""
        if self._owns_gateway and isinstance(self._gateway, HttpRemoteDataGateway):
            await self._gateway.aclose()
        if self._owns_database:
            await reset_database()
        self._initialized = False

    def _require_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("AppContext.initialize() has not been awaited")
