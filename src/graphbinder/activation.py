"""Activators turn an implementation name from the graph into a new object.

An activator is any callable taking a qualified name and returning a fresh
instance. :func:`import_activator` imports the named class and calls it with no
arguments. :class:`ImplementationRegistry` lets implementations be registered
explicitly under a name, falling back to another activator for names it does
not know.
"""

import importlib
import inspect
import logging
from typing import Any, Callable, Optional

from graphbinder.errors import ActivationError

__all__ = [
    "Activator",
    "load_object",
    "import_activator",
    "qualified_name",
    "ImplementationRegistry",
]

logger = logging.getLogger(__name__)

Activator = Callable[[str], Any]
"""Produces a new instance given the qualified name of its implementation."""


def load_object(name: str) -> Any:
    """Import the object a qualified name refers to.

    The longest importable module prefix of the name is imported and the rest
    of the name is followed as attributes, so nested classes resolve too.

    Args:
        name: A dotted name such as ``"package.module.Class"``, or the
            ``"package.module:Class"`` form used by entry points.

    Returns:
        The object the name refers to.

    Raises:
        ActivationError: If no prefix of the name can be imported, or an
            attribute along the path is missing.

    Example:
        >>> load_object("collections.OrderedDict")
        <class 'collections.OrderedDict'>
    """
    logger.debug("Loading %s", name)
    if ":" in name:
        module_name, _, attribute_path = name.partition(":")
        parts = module_name.split(".")
        attributes = attribute_path.split(".") if attribute_path else []
        candidates = [(parts, attributes)]
    else:
        parts = name.split(".")
        candidates = [(parts[:i], parts[i:]) for i in range(len(parts) - 1, 0, -1)]
    if not candidates:
        raise ActivationError(name, f"Invalid implementation name {name!r} (no module)")

    last_error: Optional[Exception] = None
    for module_parts, attributes in candidates:
        module_name = ".".join(module_parts)
        try:
            target = importlib.import_module(module_name)
        except ModuleNotFoundError as e:
            if e.name and not _is_prefix(e.name, module_name):
                # the module exists but one of its own imports is missing
                raise ActivationError(name, f"Could not import {module_name}") from e
            last_error = e
            continue
        except Exception as e:
            raise ActivationError(name, f"Could not import {module_name}") from e
        try:
            for attribute in attributes:
                target = getattr(target, attribute)
        except AttributeError as e:
            raise ActivationError(name, f"{name} not found in {module_name}") from e
        return target

    raise ActivationError(name, f"Could not import {name}") from last_error


def _is_prefix(package: str, module_name: str) -> bool:
    return module_name == package or module_name.startswith(package + ".")


def import_activator(name: str) -> Any:
    """Instantiate the class named by ``name`` with its no-argument constructor.

    Raises:
        ActivationError: If the class cannot be found, is not a class, or its
            constructor fails.
    """
    cls = load_object(name)
    if not inspect.isclass(cls):
        raise ActivationError(name, f"{name} is not a class")
    try:
        return cls()
    except Exception as e:
        raise ActivationError(name) from e


def qualified_name(target: Any) -> str:
    """Derive the name an implementation is known by in the graph.

    Example:
        >>> qualified_name(OrderedDict)  # Returns "collections.OrderedDict"
    """
    return f"{target.__module__}.{target.__qualname__}"


class ImplementationRegistry:
    """Registry of implementation factories, usable as an activator.

    Names that have not been registered are passed to the fallback activator,
    which by default imports them.

    Example:
        >>> registry = ImplementationRegistry()
        >>>
        >>> @registry.provides()
        >>> class Greeter:
        ...     pass
        >>>
        >>> registry(qualified_name(Greeter))  # A new Greeter
    """

    def __init__(self, fallback: Optional[Activator] = import_activator):
        self._factories: dict[str, Callable[[], Any]] = {}
        self._fallback = fallback

    def register(self, name: str, factory: Callable[[], Any]):
        """Register a factory under an implementation name.

        Args:
            name: The qualified name entities refer to.
            factory: A callable taking no arguments, typically a class.

        Raises:
            ActivationError: If the name is already registered.
        """
        if name in self._factories:
            raise ActivationError(name, f"Duplicate implementation name '{name}'")
        self._factories[name] = factory

    def provides(self, name: Optional[str] = None) -> Callable:
        """Decorator registering a class or factory function.

        Args:
            name: Optional name to register under; defaults to the qualified
                name of the decorated object.
        """

        def decorator(obj):
            if not (inspect.isclass(obj) or inspect.isfunction(obj)):
                raise ActivationError(str(obj), f"{obj} is not a class or function")
            self.register(name or qualified_name(obj), obj)
            return obj

        return decorator

    def registered_names(self) -> list[str]:
        return list(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories

    def __call__(self, name: str) -> Any:
        factory = self._factories.get(name)
        if factory is None:
            if self._fallback is None:
                raise ActivationError(name, f"No implementation registered as {name}")
            return self._fallback(name)
        try:
            return factory()
        except Exception as e:
            raise ActivationError(name) from e
