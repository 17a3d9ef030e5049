"""Helpers for building test graphs."""

from graphbinder.activation import import_activator
from graphbinder.domain import (
    IMPLEMENTATION,
    IRI,
    Literal,
    PYTHON_QUALIFIED_NAME,
    RDF_TYPE,
    Triple,
)


class RecordingActivator:
    """Activator remembering every name it was asked for."""

    def __init__(self, activator=import_activator):
        self._activator = activator
        self.calls = []

    def __call__(self, name):
        self.calls.append(name)
        return self._activator(name)


def triple(subject, predicate, obj):
    return Triple(IRI(subject), IRI(predicate), obj)


def implemented_by(subject, name):
    return triple(subject, IMPLEMENTATION, Literal(name, PYTHON_QUALIFIED_NAME))


def typed(subject, type_iri):
    return triple(subject, RDF_TYPE, IRI(type_iri))


APPLICATION_DOCUMENT = {
    "@context": {
        "server": "http://purl.org/openapp/server/",
        "test": "urn:test:",
    },
    "@graph": [
        {
            "@id": "test:app",
            "@type": "test:Application",
            "server:implementation": {
                "@value": "components.Server",
                "@type": "server:pythonFQName",
            },
            "test:port": 8080,
            "test:handler": {"@id": "test:handler1"},
        },
        {
            "@id": "test:handler1",
            "server:implementation": {
                "@value": "components.Plain",
                "@type": "server:pythonFQName",
            },
        },
    ],
}
