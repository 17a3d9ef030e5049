from collections import OrderedDict

import pytest

import components
from graphbinder.activation import (
    ImplementationRegistry,
    import_activator,
    load_object,
    qualified_name,
)
from graphbinder.errors import ActivationError


@pytest.fixture
def registry():
    return ImplementationRegistry()


def test_load_object_by_dotted_name():
    assert load_object("collections.OrderedDict") is OrderedDict
    assert load_object("os.path.join") is load_object("os.path:join")


def test_load_object_follows_nested_attributes():
    assert load_object("graphbinder.errors.ActivationError.__init__") is ActivationError.__init__


def test_load_object_without_module_raises():
    with pytest.raises(ActivationError, match="no module"):
        load_object("Plain")


def test_load_object_missing_module_raises():
    with pytest.raises(ActivationError, match="Could not import") as excinfo:
        load_object("no_such_package.Thing")
    assert isinstance(excinfo.value.__cause__, ModuleNotFoundError)


def test_load_object_missing_attribute_raises():
    with pytest.raises(ActivationError, match="not found in components"):
        load_object("components.Missing")


def test_import_activator_creates_new_instances():
    first = import_activator("components.Plain")
    second = import_activator("components.Plain")

    assert isinstance(first, components.Plain)
    assert first is not second


def test_import_activator_rejects_non_classes():
    with pytest.raises(ActivationError, match="is not a class"):
        import_activator("components.not_a_class")


def test_import_activator_wraps_constructor_errors():
    with pytest.raises(ActivationError) as excinfo:
        import_activator("components.NeedsArgument")
    assert excinfo.value.implementation == "components.NeedsArgument"
    assert isinstance(excinfo.value.__cause__, TypeError)


def test_qualified_name():
    assert qualified_name(OrderedDict) == "collections.OrderedDict"
    assert qualified_name(components.Plain) == "components.Plain"


def test_registry_activates_registered_class(registry):
    @registry.provides()
    class Greeter:
        pass

    instance = registry(qualified_name(Greeter))

    assert isinstance(instance, Greeter)
    assert qualified_name(Greeter) in registry


def test_registry_accepts_explicit_name_and_factory_function(registry):
    @registry.provides("urn:test:greeter")
    def make_greeter():
        return components.NeedsArgument("hello")

    assert registry("urn:test:greeter").value == "hello"
    assert registry.registered_names() == ["urn:test:greeter"]


def test_registry_rejects_duplicate_names(registry):
    registry.register("x", components.Plain)

    with pytest.raises(ActivationError, match="Duplicate implementation name 'x'"):
        registry.register("x", components.Plain)


def test_registry_rejects_non_callables(registry):
    with pytest.raises(ActivationError, match="is not a class or function"):
        registry.provides()(42)


def test_registry_falls_back_to_import(registry):
    assert isinstance(registry("components.Plain"), components.Plain)


def test_registry_without_fallback_raises():
    registry = ImplementationRegistry(fallback=None)

    with pytest.raises(ActivationError, match="No implementation registered"):
        registry("components.Plain")


def test_registry_wraps_factory_errors(registry):
    registry.register("broken", components.Broken)

    with pytest.raises(ActivationError) as excinfo:
        registry("broken")
    assert excinfo.value.implementation == "broken"
    assert isinstance(excinfo.value.__cause__, RuntimeError)
