"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from .config import Settings, get_settings
from ..registry import ComponentRegistry, create_default_registry
from ..validation import Sanitizer, Validator
from ..evolution import EvolutionApplier
from ..engine import Engine, VersionStore


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_registry(self) -> ComponentRegistry:
        """Provide registry populated with the built-in kinds."""
        return create_default_registry()

    @singleton
    @provider
    def provide_validator(self, registry: ComponentRegistry, settings: Settings) -> Validator:
        sanitizer = Sanitizer(
            max_string_length=settings.max_string_length,
            max_depth=settings.max_prop_depth,
        )
        return Validator(registry, sanitizer)

    @singleton
    @provider
    def provide_applier(self, validator: Validator) -> EvolutionApplier:
        return EvolutionApplier(validator)

    @singleton
    @provider
    def provide_engine(
        self,
        registry: ComponentRegistry,
        settings: Settings,
        validator: Validator,
        applier: EvolutionApplier,
    ) -> Engine:
        """Provide engine with all dependencies."""
        return Engine(
            registry,
            settings=settings,
            validator=validator,
            applier=applier,
            store=VersionStore(max_depth=settings.history_depth),
        )


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
