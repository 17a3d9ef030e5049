"""The query surface shared by binder implementations, and how one is chosen."""

import inspect
import logging
import os
from abc import ABC, abstractmethod
from typing import Any, Optional

from graphbinder.activation import Activator, import_activator, load_object
from graphbinder.domain import Entity
from graphbinder.errors import ActivationError, BinderError, ConfigurationError

__all__ = ["Binder", "BINDER_VARIABLE"]

logger = logging.getLogger(__name__)

BINDER_VARIABLE = "GRAPHBINDER_BINDER"
"""Environment variable naming the binder implementation to use."""


class Binder(ABC):
    """Binds the entities of an application description to instances.

    Instances are created lazily, one per entity, the first time they are
    reached through the application or through one of the lookup methods.
    Instance-relative methods accept only instances created by this binder.
    """

    @staticmethod
    def for_application(
        application_type: str,
        default_binder: Optional[str] = None,
        activator: Optional[Activator] = None,
        binder: Optional[str] = None,
        **options,
    ) -> "Binder":
        """Create the binder for an application.

        The implementation is the first of: the ``binder`` argument, the
        ``GRAPHBINDER_BINDER`` environment variable, ``default_binder``.

        Args:
            application_type: IRI of the type marking the application entity.
            default_binder: Qualified name of the implementation to use when
                nothing else is configured.
            activator: Activator passed on to the binder; defaults to
                :func:`~graphbinder.activation.import_activator`.
            binder: Qualified name overriding every other source.
            **options: Passed on to the binder, e.g. ``config`` or ``home``
                for :class:`~graphbinder.graph_binder.GraphBinder`.

        Returns:
            The constructed binder, its application already bound.

        Raises:
            ConfigurationError: If no implementation is configured.
            ActivationError: If the implementation cannot be constructed.

        Example:
            >>> binder = Binder.for_application(
            ...     "urn:example:Application", "graphbinder.graph_binder.GraphBinder"
            ... )
            >>> binder.application
        """
        binder_impl = _select_binder(binder, default_binder)
        try:
            binder_class = load_object(binder_impl)
            if not inspect.isclass(binder_class):
                raise ActivationError(binder_impl, f"{binder_impl} is not a class")
            return binder_class(application_type, activator or import_activator, **options)
        except BinderError:
            raise
        except Exception as e:
            raise ActivationError(
                binder_impl, f"Error instantiating binder implementation {binder_impl}"
            ) from e

    @property
    @abstractmethod
    def application(self) -> Any:
        """The instance bound to the application entity."""

    @property
    @abstractmethod
    def activator(self) -> Activator:
        """The activator used to create instances."""

    @abstractmethod
    def entity_of(self, instance: Any) -> Entity:
        """Return the entity ``instance`` is bound to."""

    @abstractmethod
    def properties(self, instance: Any) -> list[str]:
        """Return the IRIs of all properties of the instance's entity."""

    @abstractmethod
    def value(self, instance: Any, property: str) -> Optional[str]:
        """Return the first value of ``property``, as a string or an IRI."""

    @abstractmethod
    def values(self, instance: Any, property: str) -> list[str]:
        """Return all values of ``property``, as strings or IRIs."""

    @abstractmethod
    def instance(self, instance: Any, property: str) -> Optional[Any]:
        """Return the instance bound to the first entity ``property`` refers to."""

    @abstractmethod
    def instances(self, instance: Any, property: str) -> list[Any]:
        """Return the instances bound to every entity ``property`` refers to."""

    @abstractmethod
    def find_instance(self, property: str, value: str) -> Optional[Any]:
        """Return the instance of the first entity whose ``property`` is ``value``."""

    @abstractmethod
    def find_instances(self, property: str, value: Optional[str] = None) -> list[Any]:
        """Return the instances of all entities having ``property``.

        When ``value`` is given, only entities whose ``property`` refers to that
        IRI are included.
        """


def _select_binder(binder: Optional[str], default_binder: Optional[str]) -> str:
    if binder is not None:
        logger.info("Binder implementation is set explicitly: %s", binder)
        return binder

    binder = os.environ.get(BINDER_VARIABLE)
    if binder:
        logger.info(
            "Binder implementation is set to value of environment variable %s: %s",
            BINDER_VARIABLE,
            binder,
        )
        return binder
    logger.info("Environment variable %s has not been set", BINDER_VARIABLE)

    if default_binder is not None:
        logger.info("Binder implementation is set to default value: %s", default_binder)
        return default_binder

    logger.error("No binder implementation has been set")
    raise ConfigurationError("No binder implementation has been set")
