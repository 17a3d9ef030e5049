"""Reader for flattened JSON-LD node documents.

Configuration files describe entities as JSON-LD node objects. Only the part of
JSON-LD that such documents use is understood here: a ``@context`` of prefix
and term mappings (plus ``@vocab``), node objects with ``@id`` and ``@type``,
value objects with ``@value`` and ``@type``, references with ``@id``, embedded
nodes and arrays of values.

Example:
    >>> loads('''{
    ...   "@context": {"server": "http://purl.org/openapp/server/"},
    ...   "@id": "urn:example:app",
    ...   "@type": "server:Application",
    ...   "server:implementation": {
    ...     "@value": "example.App", "@type": "server:pythonFQName"
    ...   }
    ... }''')
"""

import itertools
import json
import uuid
from typing import Any, Optional

from graphbinder.domain import (
    BlankNode,
    Entity,
    IRI,
    Literal,
    RDF_TYPE,
    Triple,
    Value,
    XSD_BOOLEAN,
    XSD_DOUBLE,
    XSD_INTEGER,
)
from graphbinder.errors import DocumentError

__all__ = ["parse", "load", "loads"]

_KEYWORDS = {"@context", "@id", "@type", "@graph"}


def load(fp) -> list[Triple]:
    """Read the triples of a document from a text file object."""
    try:
        document = json.load(fp)
    except json.JSONDecodeError as e:
        raise DocumentError(f"Configuration is not valid JSON: {e}") from e
    return parse(document)


def loads(text: str) -> list[Triple]:
    """Read the triples of a document held in a string."""
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentError(f"Configuration is not valid JSON: {e}") from e
    return parse(document)


def parse(document: Any) -> list[Triple]:
    """Convert a decoded JSON document into triples.

    Args:
        document: A node object, a list of node objects, or an object whose
            ``@graph`` holds the node objects.

    Returns:
        The triples in document order.

    Raises:
        DocumentError: If the document does not have one of these shapes.
    """
    reader = _Reader()
    if isinstance(document, list):
        for node in document:
            reader.read_node(node, _Context())
    elif isinstance(document, dict):
        context = _Context().extend(document.get("@context"))
        if "@graph" in document:
            nodes = document["@graph"]
            if not isinstance(nodes, list):
                raise DocumentError("@graph must be an array of node objects")
            for node in nodes:
                reader.read_node(node, context)
        else:
            reader.read_node(document, context)
    else:
        raise DocumentError(
            f"Expected a node object or an array, found {type(document).__name__}"
        )
    return reader.triples


class _Context:
    def __init__(self, terms: Optional[dict[str, str]] = None, vocab: Optional[str] = None):
        self.terms = terms or {}
        self.vocab = vocab

    def extend(self, definition: Any) -> "_Context":
        if definition is None:
            return self
        if isinstance(definition, list):
            context = self
            for item in definition:
                context = context.extend(item)
            return context
        if not isinstance(definition, dict):
            raise DocumentError("Only inline @context objects are supported")

        terms = dict(self.terms)
        vocab = self.vocab
        for term, mapping in definition.items():
            if term == "@vocab":
                vocab = mapping
            elif isinstance(mapping, str):
                terms[term] = mapping
            elif isinstance(mapping, dict) and isinstance(mapping.get("@id"), str):
                terms[term] = mapping["@id"]
            else:
                raise DocumentError(f"Unsupported definition for term {term!r}")
        context = _Context(terms, vocab)
        # mappings may themselves be compact IRIs
        context.terms = {term: context.expand(iri, vocab=False) for term, iri in terms.items()}
        return context

    def expand(self, name: str, vocab: bool = True) -> str:
        if name in self.terms and self.terms[name] != name:
            return self.terms[name]
        prefix, colon, suffix = name.partition(":")
        if colon:
            if prefix == "_" or suffix.startswith("//"):
                return name
            if prefix in self.terms:
                return self.terms[prefix] + suffix
            return name
        if vocab and self.vocab:
            return self.vocab + name
        return name


class _Reader:
    """Reads the nodes of one document.

    Blank node labels are local to a document, so both generated and
    ``_:``-prefixed labels are qualified with a scope unique to the reader.
    """

    def __init__(self):
        self.triples: list[Triple] = []
        self._scope = uuid.uuid4().hex
        self._blank_ids = itertools.count()

    def read_node(self, node: Any, context: _Context) -> Entity:
        if not isinstance(node, dict):
            raise DocumentError(f"Expected a node object, found {node!r}")
        context = context.extend(node.get("@context"))
        subject = self._entity(node["@id"], context) if "@id" in node else self._blank()

        types = node.get("@type", [])
        for type_name in types if isinstance(types, list) else [types]:
            self.triples.append(
                Triple(subject, IRI(RDF_TYPE), IRI(context.expand(type_name)))
            )

        for key, value in node.items():
            if key in _KEYWORDS:
                continue
            predicate = IRI(context.expand(key))
            for item in value if isinstance(value, list) else [value]:
                if item is None:
                    continue
                self.triples.append(Triple(subject, predicate, self._value(item, context)))
        return subject

    def _value(self, item: Any, context: _Context) -> Value:
        # bool before int: bool is a subclass of int
        if isinstance(item, bool):
            return Literal("true" if item else "false", XSD_BOOLEAN)
        if isinstance(item, int):
            return Literal(str(item), XSD_INTEGER)
        if isinstance(item, float):
            return Literal(repr(item), XSD_DOUBLE)
        if isinstance(item, str):
            return Literal(item)
        if isinstance(item, dict):
            if "@value" in item:
                datatype = item.get("@type")
                return Literal(
                    str(item["@value"]),
                    context.expand(datatype) if datatype is not None else None,
                )
            if set(item) == {"@id"}:
                return self._entity(item["@id"], context)
            return self.read_node(item, context)
        raise DocumentError(f"Unsupported value {item!r}")

    def _entity(self, identifier: Any, context: _Context) -> Entity:
        if not isinstance(identifier, str):
            raise DocumentError(f"@id must be a string, found {identifier!r}")
        if identifier.startswith("_:"):
            return BlankNode(f"{self._scope}.{identifier[2:]}")
        return IRI(context.expand(identifier, vocab=False))

    def _blank(self) -> BlankNode:
        return BlankNode(f"{self._scope}-{next(self._blank_ids)}")
