"""
Service registrations and the provider built from them

A ServiceCollection is an ordered list of registrations. Building it
produces a ServiceProvider, a thin wrapper around an injector.Injector
that resolves services by type.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Type, TypeVar

from injector import (
    Binder,
    CallableProvider,
    ClassProvider,
    Injector,
    InstanceProvider,
    UnsatisfiedRequirement,
    noscope,
    singleton,
)

from .errors import AlreadyBuiltError, ResolutionError
from ..utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class Lifetime(str, Enum):
    """How long a resolved service lives"""
    SINGLETON = "singleton"  # one instance per provider
    TRANSIENT = "transient"  # new instance per resolution


@dataclass(frozen=True)
class ServiceDescriptor:
    """
    A single registration: requested type, lifetime and exactly one of
    implementation class, factory or instance
    """
    service_type: Any
    lifetime: Lifetime = Lifetime.SINGLETON
    implementation: Optional[type] = None
    factory: Optional[Callable[["ServiceProvider"], Any]] = None
    instance: Any = None

    def __post_init__(self):
        given = [
            self.implementation is not None,
            self.factory is not None,
            self.instance is not None,
        ]
        if sum(given) > 1:
            raise ValueError("Give only one of implementation, factory or instance")
        if self.instance is not None and self.lifetime is not Lifetime.SINGLETON:
            raise ValueError("Instance registrations are always singletons")
        if not any(given):
            # Self-binding: the service type is its own implementation
            if not isinstance(self.service_type, type):
                raise ValueError(f"Cannot construct {self.service_type!r}; give an implementation, factory or instance")
            object.__setattr__(self, "implementation", self.service_type)


class ServiceCollection:
    """Ordered, mutable collection of service registrations"""

    def __init__(self, descriptors: Optional[List[ServiceDescriptor]] = None):
        self._descriptors: List[ServiceDescriptor] = list(descriptors or [])
        self._read_only = False

    @property
    def is_read_only(self) -> bool:
        return self._read_only

    def make_read_only(self) -> None:
        """Freeze the collection; any further registration fails"""
        self._read_only = True

    def add(self, descriptor: ServiceDescriptor) -> "ServiceCollection":
        """Append a registration (later registrations of the same type win)"""
        if self._read_only:
            raise AlreadyBuiltError(
                f"Cannot register {getattr(descriptor.service_type, '__qualname__', descriptor.service_type)}: "
                "the service collection has already been built"
            )
        self._descriptors.append(descriptor)
        return self

    def add_singleton(
        self,
        service_type: Any,
        implementation: Optional[type] = None,
        *,
        factory: Optional[Callable[["ServiceProvider"], Any]] = None,
        instance: Any = None,
    ) -> "ServiceCollection":
        return self.add(ServiceDescriptor(
            service_type,
            Lifetime.SINGLETON,
            implementation=implementation,
            factory=factory,
            instance=instance,
        ))

    def add_transient(
        self,
        service_type: Any,
        implementation: Optional[type] = None,
        *,
        factory: Optional[Callable[["ServiceProvider"], Any]] = None,
    ) -> "ServiceCollection":
        return self.add(ServiceDescriptor(
            service_type,
            Lifetime.TRANSIENT,
            implementation=implementation,
            factory=factory,
        ))

    def build_provider(self) -> "ServiceProvider":
        """Create a provider from the current registrations"""
        return ServiceProvider(self._descriptors)

    def __iter__(self) -> Iterator[ServiceDescriptor]:
        return iter(list(self._descriptors))

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, service_type: Any) -> bool:
        return any(d.service_type is service_type for d in self._descriptors)


class ServiceProvider:
    """
    Resolves services by type

    Wraps an injector.Injector created with auto_bind=False, so only
    registered types resolve. The provider registers itself, so factories
    and constructors can ask for a ServiceProvider.
    """

    def __init__(self, descriptors: Optional[List[ServiceDescriptor]] = None, *, injector: Optional[Injector] = None):
        self._descriptors = tuple(descriptors or ())
        if injector is None:
            injector = Injector([self._configure], auto_bind=False)
            logger.debug(f"Built service provider with {len(self._descriptors)} registrations")
        self._injector = injector

    @classmethod
    def from_injector(cls, injector: Injector) -> "ServiceProvider":
        """Use an injector that was configured elsewhere"""
        return cls(injector=injector)

    @property
    def injector(self) -> Injector:
        return self._injector

    def _configure(self, binder: Binder) -> None:
        binder.bind(ServiceProvider, to=InstanceProvider(self))
        for descriptor in self._descriptors:
            scope = singleton if descriptor.lifetime is Lifetime.SINGLETON else noscope
            if descriptor.instance is not None:
                binder.bind(descriptor.service_type, to=InstanceProvider(descriptor.instance))
            elif descriptor.factory is not None:
                binder.bind(
                    descriptor.service_type,
                    to=CallableProvider(self._factory_call(descriptor.factory)),
                    scope=scope,
                )
            else:
                binder.bind(
                    descriptor.service_type,
                    to=ClassProvider(descriptor.implementation),
                    scope=scope,
                )

    def _factory_call(self, factory: Callable[["ServiceProvider"], Any]) -> Callable[[], Any]:
        def call():
            return factory(self)
        return call

    def get(self, service_type: Type[T]) -> T:
        """
        Resolve a service

        Raises:
            ResolutionError: If the type (or one of its dependencies) is not registered
        """
        try:
            return self._injector.get(service_type)
        except UnsatisfiedRequirement as e:
            raise ResolutionError(service_type, e) from e

    def get_optional(self, service_type: Type[T]) -> Optional[T]:
        """Resolve a service, returning None when it is not registered"""
        try:
            return self.get(service_type)
        except ResolutionError:
            return None

    def registrations(self) -> Dict[Any, ServiceDescriptor]:
        """Effective registration per type (last one wins)"""
        effective: Dict[Any, ServiceDescriptor] = {}
        for descriptor in self._descriptors:
            effective[descriptor.service_type] = descriptor
        return effective
