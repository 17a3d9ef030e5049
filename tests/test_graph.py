from graphbinder.domain import BlankNode, IRI, Literal, Triple
from graphbinder.graph import Graph

A = IRI("urn:test:a")
B = IRI("urn:test:b")
P = IRI("urn:test:p")
Q = IRI("urn:test:q")


def test_queries_follow_insertion_order():
    graph = Graph(
        [
            Triple(B, P, Literal("2")),
            Triple(A, P, Literal("1")),
            Triple(B, P, Literal("3")),
            Triple(B, Q, A),
        ]
    )

    assert graph.values(B, P) == [Literal("2"), Literal("3")]
    assert graph.first(B, P) == Literal("2")
    assert graph.project(P) == [B, A]
    assert graph.project(Q, A) == [B]
    assert graph.properties(B) == [P, Q]


def test_duplicate_triples_are_ignored():
    graph = Graph([Triple(A, P, Literal("1")), Triple(A, P, Literal("1"))])

    assert len(graph) == 1
    assert graph.values(A, P) == [Literal("1")]
    assert graph.project(P, Literal("1")) == [A]


def test_absent_lookups_are_empty():
    graph = Graph()

    assert graph.first(A, P) is None
    assert graph.values(A, P) == []
    assert graph.project(P) == []
    assert graph.project(P, B) == []
    assert graph.properties(A) == []
    assert len(graph) == 0


def test_literals_differ_by_datatype():
    graph = Graph(
        [Triple(A, P, Literal("1")), Triple(A, P, Literal("1", "urn:test:type"))]
    )

    assert len(graph) == 2
    assert [value.type_tag() for value in graph.values(A, P)] == [None, "urn:test:type"]


def test_value_accessors():
    assert Literal("x").as_string() == "x"
    assert A.as_string() is None
    assert A.as_iri() == "urn:test:a"
    assert BlankNode("n1").as_iri() == "_:n1"
    assert Literal("x", "urn:test:type").type_tag() == "urn:test:type"
    assert IRI("urn:test:a") == A


def test_remove_updates_every_index():
    graph = Graph(
        [
            Triple(A, P, Literal("1")),
            Triple(A, P, Literal("2")),
            Triple(B, P, Literal("1")),
        ]
    )

    graph.remove([Triple(A, P, Literal("1")), Triple(A, Q, B)])

    assert len(graph) == 2
    assert graph.values(A, P) == [Literal("2")]
    assert graph.project(P, Literal("1")) == [B]
    assert graph.project(P) == [A, B]

    graph.remove([Triple(A, P, Literal("2"))])

    assert graph.project(P) == [B]
    assert graph.properties(A) == []
    assert graph.first(A, P) is None
    assert Triple(A, P, Literal("2")) not in graph
