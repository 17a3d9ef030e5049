"""
Binder implementation backed by a triple graph.

The application is described as entities in a graph. Each entity names its
implementation with a literal of datatype ``PYTHON_QUALIFIED_NAME`` on the
``IMPLEMENTATION`` property; the binder activates that implementation the
first time the entity is reached and keeps the instance for its own lifetime.

Entities without an implementation are bound to a plain ``object()``, so
every entity can still be navigated through the query methods.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Optional

from graphbinder.activation import Activator
from graphbinder.bindable import Bindable
from graphbinder.binder import Binder
from graphbinder.configuration import BootstrapConfig, bootstrap
from graphbinder.domain import (
    Entity,
    HOME_DIRECTORY,
    IMPLEMENTATION,
    IRI,
    Literal,
    PYTHON_QUALIFIED_NAME,
    RDF_TYPE,
    Triple,
    Value,
)
from graphbinder.errors import (
    ActivationError,
    ConfigurationError,
    UnboundInstanceError,
    UsageError,
)
from graphbinder.graph import GraphStore

__all__ = ["GraphBinder"]

logger = logging.getLogger(__name__)


class GraphBinder(Binder):
    """Binds graph entities to instances, one instance per entity.

    Args:
        application_type: IRI of the type marking the application entity.
        activator: Creates instances from implementation names.
        graph: The graph describing the application. When omitted, the graph
            is loaded by :func:`~graphbinder.configuration.bootstrap`.
        home: Home directory recorded on the application entity. Defaults to
            the one found while bootstrapping, if any. The record is removed
            again if the application cannot be bound.
        config: Where :func:`~graphbinder.configuration.bootstrap` looks for
            configuration when ``graph`` is omitted.

    Raises:
        ConfigurationError: If no entity has type ``application_type``.
        ActivationError: If the application, or anything it resolves while
            being bound, cannot be activated.
    """

    def __init__(
        self,
        application_type: str,
        activator: Activator,
        graph: Optional[GraphStore] = None,
        home: Optional[Path] = None,
        config: Optional[BootstrapConfig] = None,
    ):
        if graph is None:
            graph, discovered_home = bootstrap(config, home)
            home = home or discovered_home
        self._graph = graph
        self._activator = activator
        self._home = home
        self._instances: dict[Entity, Any] = {}
        self._entities: dict[int, tuple[Any, Entity]] = {}
        self._lock = threading.RLock()
        self._application = None

        self._application_entity = self._find_application_entity(application_type)
        added = self._record_home()
        try:
            self.resolve(self._application_entity)
        except Exception:
            if added:
                self._graph.remove(added)
            raise

    def _record_home(self) -> list[Triple]:
        if self._home is None:
            return []
        home = Literal(str(self._home))
        if home in self._graph.values(self._application_entity, IRI(HOME_DIRECTORY)):
            return []
        added = [Triple(self._application_entity, IRI(HOME_DIRECTORY), home)]
        self._graph.add(added)
        return added

    def _find_application_entity(self, application_type: str) -> Entity:
        candidates = self._graph.project(IRI(RDF_TYPE), IRI(application_type))
        if not candidates:
            raise ConfigurationError(
                f"Application entity of type {application_type} not found"
            )
        candidates = sorted(candidates, key=lambda entity: entity.as_iri())
        if len(candidates) > 1:
            logger.warning(
                "Found %d entities of type %s, using %s",
                len(candidates),
                application_type,
                candidates[0],
            )
        logger.info("Application entity is %s", candidates[0])
        return candidates[0]

    @property
    def application(self) -> Any:
        return self._application

    @property
    def application_entity(self) -> Entity:
        return self._application_entity

    @property
    def activator(self) -> Activator:
        return self._activator

    @property
    def home(self) -> Optional[Path]:
        return self._home

    @property
    def graph(self) -> GraphStore:
        return self._graph

    def resolve(self, entity: Entity) -> Any:
        """Return the instance bound to ``entity``, activating it if needed.

        The new instance is registered before its :meth:`Bindable.bind` is
        called, so lookups made from ``bind`` see the binding and do not
        activate the entity again. An error raised by ``bind`` propagates and
        the binding stays in place.

        Raises:
            ActivationError: If the implementation cannot be activated.
        """
        with self._lock:
            instance = self._instances.get(entity)
            if instance is not None:
                return instance

            implementation = self._implementation_of(entity)
            if implementation is None:
                instance = object()
            else:
                logger.info("Instantiating %s", implementation)
                try:
                    instance = self._activator(implementation)
                except ActivationError:
                    raise
                except Exception as e:
                    raise ActivationError(implementation) from e
                if instance is None:
                    raise ActivationError(
                        implementation, f"Activating {implementation} produced no instance"
                    )
                bound = self._entities.get(id(instance))
                if bound is not None and bound[0] is instance:
                    raise ActivationError(
                        implementation,
                        f"Activating {implementation} for {entity} returned the "
                        f"instance already bound to {bound[1]}",
                    )

            self._instances[entity] = instance
            self._entities[id(instance)] = (instance, entity)
            if entity == self._application_entity:
                self._application = instance
            if isinstance(instance, Bindable):
                instance.bind(self)
            return instance

    def _implementation_of(self, entity: Entity) -> Optional[str]:
        implementation = None
        for value in self._graph.values(entity, IRI(IMPLEMENTATION)):
            if value.type_tag() == PYTHON_QUALIFIED_NAME:
                implementation = value.as_string()
        return implementation

    def entity_of(self, instance: Any) -> Entity:
        binding = self._entities.get(id(instance))
        if binding is None or binding[0] is not instance:
            raise UnboundInstanceError(instance)
        return binding[1]

    def properties(self, instance: Any) -> list[str]:
        return [
            property.as_iri()
            for property in self._graph.properties(self.entity_of(instance))
        ]

    def value(self, instance: Any, property: str) -> Optional[str]:
        value = self._graph.first(self.entity_of(instance), IRI(property))
        return None if value is None else _as_text(value)

    def values(self, instance: Any, property: str) -> list[str]:
        return [
            _as_text(value)
            for value in self._graph.values(self.entity_of(instance), IRI(property))
        ]

    def instance(self, instance: Any, property: str) -> Optional[Any]:
        entity = self._graph.first(self.entity_of(instance), IRI(property))
        return None if entity is None else self.resolve(_as_entity(entity, property))

    def instances(self, instance: Any, property: str) -> list[Any]:
        return [
            self.resolve(_as_entity(entity, property))
            for entity in self._graph.values(self.entity_of(instance), IRI(property))
        ]

    def find_instance(self, property: str, value: str) -> Optional[Any]:
        entities = self._graph.project(IRI(property), IRI(value))
        return self.resolve(entities[0]) if entities else None

    def find_instances(self, property: str, value: Optional[str] = None) -> list[Any]:
        obj = None if value is None else IRI(value)
        return [self.resolve(entity) for entity in self._graph.project(IRI(property), obj)]


def _as_text(value: Value) -> str:
    text = value.as_string()
    return text if text is not None else value.as_iri()


def _as_entity(value: Value, property: str) -> Entity:
    if isinstance(value, Literal):
        raise UsageError(
            f"Property {property} has literal value {value.lexical!r}, not an entity"
        )
    return value
