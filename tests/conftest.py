import pytest

from graphbinder.graph import Graph
from graphs import RecordingActivator


@pytest.fixture
def activator() -> RecordingActivator:
    return RecordingActivator()


@pytest.fixture
def graph() -> Graph:
    return Graph()
