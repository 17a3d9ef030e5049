"""Optional capability for instances that wire themselves from the graph."""

from abc import ABC, abstractmethod

__all__ = ["Bindable"]


class Bindable(ABC):
    """An implementation that wants a handle on the binder that created it.

    The binder calls :meth:`bind` exactly once, right after the instance has
    been registered, so the instance may already look itself up through the
    binder.

    Example:
        >>> class Server(Bindable):
        ...     def bind(self, binder):
        ...         self.port = int(binder.value(self, "urn:example:port"))
    """

    @abstractmethod
    def bind(self, binder) -> None:
        ...
