"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from uiplanner.agents import Completer, PlanCache, Planner
from uiplanner.core import Settings, configure_logging, get_settings


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, complete: Completer, settings: Settings) -> None:
        self.complete = complete
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_plan_cache(self, settings: Settings) -> PlanCache:
        return PlanCache(max_size=settings.cache_size, ttl_seconds=settings.cache_ttl)

    @singleton
    @provider
    def provide_planner(self, settings: Settings, cache: PlanCache) -> Planner:
        """Provide planner; the cache is only attached when enabled."""
        return Planner(
            self.complete,
            cache=cache if settings.enable_cache else None,
            settings=settings,
        )


def create_container(complete: Completer, settings: Settings | None = None) -> Injector:
    """Configure logging from settings, then build the injector around a completion callable."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.json_logs)
    return Injector([CoreModule(complete, settings)])
