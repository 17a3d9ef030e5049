"""In-memory triple store answering the queries the binder needs.

The binder only relies on the :class:`GraphStore` protocol. :class:`Graph` is a
small insertion-ordered implementation of it, indexed the ways the binder
looks things up: by subject and predicate, by predicate and object, and by
predicate alone.
"""
from collections import defaultdict
from typing import Iterable, Optional, Protocol

from graphbinder.domain import Entity, IRI, Triple, Value

__all__ = ["GraphStore", "Graph"]


class GraphStore(Protocol):
    """Query and mutation primitives consumed by the binder."""

    def project(self, predicate: IRI, obj: Optional[Value] = None) -> list[Entity]:
        ...

    def values(self, subject: Entity, predicate: IRI) -> list[Value]:
        ...

    def first(self, subject: Entity, predicate: IRI) -> Optional[Value]:
        ...

    def properties(self, subject: Entity) -> list[IRI]:
        ...

    def add(self, triples: Iterable[Triple]) -> None:
        ...

    def remove(self, triples: Iterable[Triple]) -> None:
        ...


class Graph:
    """Insertion-ordered set of triples.

    Duplicate triples are ignored, so every query returns each subject,
    value or predicate at most once, in the order it was first added.

    Example:
        >>> graph = Graph()
        >>> graph.add([Triple(IRI("urn:a"), IRI("urn:p"), Literal("1"))])
        >>> graph.first(IRI("urn:a"), IRI("urn:p"))
        Literal(lexical='1', datatype=None)
    """

    def __init__(self, triples: Iterable[Triple] = ()):
        self._triples: dict[Triple, None] = {}
        self._objects: dict[tuple[Entity, IRI], list[Value]] = defaultdict(list)
        self._subjects: dict[tuple[IRI, Value], list[Entity]] = defaultdict(list)
        self._subjects_by_predicate: dict[IRI, dict[Entity, None]] = defaultdict(dict)
        self._predicates: dict[Entity, dict[IRI, None]] = defaultdict(dict)
        self.add(triples)

    def add(self, triples: Iterable[Triple]) -> None:
        for triple in triples:
            if triple in self._triples:
                continue
            self._triples[triple] = None
            self._objects[(triple.subject, triple.predicate)].append(triple.object)
            self._subjects[(triple.predicate, triple.object)].append(triple.subject)
            self._subjects_by_predicate[triple.predicate][triple.subject] = None
            self._predicates[triple.subject][triple.predicate] = None

    def remove(self, triples: Iterable[Triple]) -> None:
        """Remove triples; triples not in the graph are ignored."""
        for triple in triples:
            if triple not in self._triples:
                continue
            del self._triples[triple]
            key = (triple.subject, triple.predicate)
            self._objects[key].remove(triple.object)
            self._subjects[(triple.predicate, triple.object)].remove(triple.subject)
            if not self._objects[key]:
                del self._objects[key]
                del self._subjects_by_predicate[triple.predicate][triple.subject]
                del self._predicates[triple.subject][triple.predicate]

    def project(self, predicate: IRI, obj: Optional[Value] = None) -> list[Entity]:
        """Return the subjects having ``predicate``, optionally with object ``obj``."""
        if obj is None:
            return list(self._subjects_by_predicate.get(predicate, ()))
        return list(self._subjects.get((predicate, obj), ()))

    def values(self, subject: Entity, predicate: IRI) -> list[Value]:
        return list(self._objects.get((subject, predicate), ()))

    def first(self, subject: Entity, predicate: IRI) -> Optional[Value]:
        values = self._objects.get((subject, predicate))
        return values[0] if values else None

    def properties(self, subject: Entity) -> list[IRI]:
        return list(self._predicates.get(subject, ()))

    def __iter__(self):
        return iter(self._triples)

    def __len__(self):
        return len(self._triples)

    def __contains__(self, triple: Triple) -> bool:
        return triple in self._triples
