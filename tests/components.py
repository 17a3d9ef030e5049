"""Implementations activated by name from the test graphs."""

from graphbinder.bindable import Bindable
from graphbinder.domain import RDF_TYPE

APP = "urn:test:Application"
PORT = "urn:test:port"
HANDLER = "urn:test:handler"


class Plain:
    pass


class ApplicationLookup(Bindable):
    def bind(self, binder):
        self.application = binder.application


class Server(Bindable):
    def __init__(self):
        self.bound = 0
        self.port = None
        self.handler = None

    def bind(self, binder):
        self.bound += 1
        self.port = int(binder.value(self, PORT))
        self.handler = binder.instance(self, HANDLER)


class SelfLookup(Bindable):
    def bind(self, binder):
        self.found = binder.find_instance(RDF_TYPE, APP)
        self.entity = binder.entity_of(self)


class Broken:
    def __init__(self):
        raise RuntimeError("boom")


class BrokenBind(Bindable):
    def bind(self, binder):
        raise ValueError("cannot bind")


class NeedsArgument:
    def __init__(self, value):
        self.value = value


def not_a_class():
    return Plain()


class StubBinder:
    def __init__(self, application_type, activator):
        self.application_type = application_type
        self.activator = activator
