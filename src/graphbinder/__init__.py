"""Graph-driven object binding.

Graphbinder activates the components of an application from a declarative
graph description instead of wiring code. Each entity in the graph names its
implementation; the binder creates one instance per entity, lazily, the first
time the entity is reached, and keeps the binding for its own lifetime.

Key Features:
    - One instance per entity, with lookup from instance back to entity
    - Lazy activation driven by the instances' own graph lookups
    - Typed access to property values and related instances
    - Optional ``bind`` callback for instances that wire themselves
    - Configuration read from a home directory and installed modules

Basic Usage:
    >>> from graphbinder.activation import ImplementationRegistry
    >>> from graphbinder.bindable import Bindable
    >>> from graphbinder.graph_binder import GraphBinder
    >>>
    >>> implementations = ImplementationRegistry()
    >>>
    >>> @implementations.provides("example.Server")
    >>> class Server(Bindable):
    ...     def bind(self, binder):
    ...         self.port = int(binder.value(self, "urn:example:port"))
    >>>
    >>> binder = GraphBinder("urn:example:Application", implementations, graph)
    >>> binder.application.port

The package consists of several modules:
    - binder: The binder query surface and implementation selection
    - graph_binder: The graph-backed binder
    - activation: Activators and the implementation registry
    - bindable: The optional post-construction callback
    - domain: Graph values and vocabulary
    - graph: The graph store contract and an in-memory store
    - configuration: Loading the graph from files and modules
    - jsonld: Reading configuration documents
    - errors: Framework-specific exceptions
"""
