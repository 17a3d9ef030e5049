"""Domain models for graph values and the vocabulary the binder reads."""

from dataclasses import dataclass
from typing import Optional, Union

__all__ = [
    "IRI",
    "BlankNode",
    "Literal",
    "Entity",
    "Value",
    "Triple",
    "RDF_TYPE",
    "IMPLEMENTATION",
    "PYTHON_QUALIFIED_NAME",
    "HOME_DIRECTORY",
    "XSD_BOOLEAN",
    "XSD_INTEGER",
    "XSD_DOUBLE",
]


@dataclass(frozen=True)
class IRI:
    """A named graph node.

    Attributes:
        value: The absolute IRI text.
    """

    value: str

    def as_string(self) -> Optional[str]:
        return None

    def as_iri(self) -> str:
        return self.value

    def type_tag(self) -> Optional[str]:
        return None

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class BlankNode:
    """An anonymous graph node, identified only within its graph.

    Attributes:
        label: The node label, without the ``_:`` prefix.
    """

    label: str

    def as_string(self) -> Optional[str]:
        return None

    def as_iri(self) -> str:
        return f"_:{self.label}"

    def type_tag(self) -> Optional[str]:
        return None

    def __str__(self):
        return self.as_iri()


@dataclass(frozen=True)
class Literal:
    """A literal graph value.

    Attributes:
        lexical: The string payload.
        datatype: Optional datatype IRI tagging the payload.
    """

    lexical: str
    datatype: Optional[str] = None

    def as_string(self) -> Optional[str]:
        return self.lexical

    def as_iri(self) -> str:
        raise ValueError(f"Literal {self.lexical!r} has no IRI form")

    def type_tag(self) -> Optional[str]:
        return self.datatype

    def __str__(self):
        return self.lexical


Entity = Union[IRI, BlankNode]
"""A graph node that can be the subject of a triple and be bound to an instance."""

Value = Union[IRI, BlankNode, Literal]
"""Anything that can appear in the object position of a triple."""


@dataclass(frozen=True)
class Triple:
    subject: Entity
    predicate: IRI
    object: Value


RDF_TYPE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"
IMPLEMENTATION = "http://purl.org/openapp/server/implementation"
PYTHON_QUALIFIED_NAME = "http://purl.org/openapp/server/pythonFQName"
HOME_DIRECTORY = "http://purl.org/openapp/server/homeDirectory"

XSD_BOOLEAN = "http://www.w3.org/2001/XMLSchema#boolean"
XSD_INTEGER = "http://www.w3.org/2001/XMLSchema#integer"
XSD_DOUBLE = "http://www.w3.org/2001/XMLSchema#double"
