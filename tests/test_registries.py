import pytest

from sketchparse import IdentifierManager, UnresolvedReferenceError
from sketchparse.arrows import ArrowTokenizer
from sketchparse.edges import EdgeRegistry
from sketchparse.nodes import NodeRegistry, infer_shape


def test_ensure_node_is_idempotent(registry: NodeRegistry):
    assert registry.ensure_node("  A ") == "A"
    assert registry.ensure_node("A") == "A"

    assert len(registry) == 1
    assert registry.get("A").numeric_id == 1
    assert registry.get("A").order == 0


def test_labels_are_case_sensitive(registry: NodeRegistry):
    registry.ensure_node("Login")
    registry.ensure_node("login")

    assert registry.node_order == ["Login", "login"]


@pytest.mark.parametrize(
    "label, shape",
    [
        ("circle", "circle"),
        ("CIRCLE", "circle"),
        ("Diamond", "diamond"),
        ("hexagon", "hexagon"),
        ("circles", "rectangle"),
        ("Circle Two", "rectangle"),
        ("circle2", "rectangle"),
    ],
)
def test_shape_inference(label, shape):
    assert infer_shape(label) == shape


def test_base_keywords_only_when_extended_shapes_disabled(identifiers: IdentifierManager):
    registry = NodeRegistry(identifiers, extended_shapes=False)
    registry.ensure_node("star")
    registry.ensure_node("square")

    assert registry.get("star").shape == "rectangle"
    assert registry.get("square").shape == "square"


def test_reference_resolves_to_existing_label(identifiers: IdentifierManager):
    identifiers.assign_id("checkout")
    registry = NodeRegistry(identifiers)

    assert registry.ensure_node(":1") == "checkout"
    assert registry.ensure_node("checkout") == "checkout"
    assert len(registry) == 1

    with pytest.raises(UnresolvedReferenceError):
        registry.ensure_node(":7")
    assert len(registry) == 1


def test_numeric_ids_survive_a_fresh_registry(identifiers: IdentifierManager):
    first = NodeRegistry(identifiers)
    first.ensure_node("A")
    first.ensure_node("B")

    second = NodeRegistry(identifiers)
    second.ensure_node("B")
    second.ensure_node("C")

    assert second.get("B").numeric_id == 2
    assert second.get("B").order == 0
    assert second.get("C").numeric_id == 3


def test_edges_are_not_deduplicated():
    edges = EdgeRegistry()
    edges.create_edge("A", "B")
    edges.create_edge("A", "B", "again")
    loop = edges.create_edge("A", "A")

    assert [edge.edge_id for edge in edges.edges] == ["A-B-0", "A-B-1", "A-A-2"]
    assert loop.is_self_loop
    assert not edges.edges[0].is_self_loop


def test_edges_from_a_chained_line():
    segments, arrows = ArrowTokenizer().split("A <-> B <- C")
    edges = EdgeRegistry()
    created = edges.create_edges_from_arrows(arrows, segments)

    assert [(edge.source, edge.target) for edge in created] == [("A", "B"), ("B", "A"), ("C", "B")]
    assert [edge.edge_id for edge in created] == ["A-B-0", "B-A-1", "C-B-2"]


def test_arrow_with_missing_operand_makes_no_edge():
    segments, arrows = ArrowTokenizer().split("A -> -> B")
    edges = EdgeRegistry()

    assert edges.create_edges_from_arrows(arrows, [label or None for label in segments]) == []
    assert len(edges) == 0
