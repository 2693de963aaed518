"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from forum.config import AuthSettings, CacheSettings, SearchSettings, Settings
from forum.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_cache_settings(self, settings: Settings) -> CacheSettings:
        return settings.cache

    @provide(scope=Scope.APP)
    def provide_search_settings(self, settings: Settings) -> SearchSettings:
        return settings.search
