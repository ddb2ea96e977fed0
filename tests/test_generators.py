import pytest

from sketchgen import LAYOUT_ENGINES, UnknownLayoutError, generate_dot, generate_mermaid, layout_engine
from sketchgen.to_dot import build_digraph
from sketchparse import DocumentCommandSink, SyntaxManager, parse_sketch_code
from sketchparse.utils import build_graph_document


@pytest.fixture
def login_document(login_flow):
    return parse_sketch_code(login_flow, "login")


def test_dot_output(login_document):
    source = generate_dot(login_document)

    assert "digraph sketch {" in source
    assert "n1 [label=start shape=box]" in source
    assert "n2 -> n3 [label=Yes]" in source
    assert "n4 -> n2" in source
    assert "layout=dot" in source
    assert "rankdir=TB" in source


@pytest.mark.parametrize("kind, engine", sorted(LAYOUT_ENGINES.items()))
def test_layout_kinds_select_engine(login_document, kind, engine):
    graph = build_digraph(login_document, layout=kind)

    assert graph.engine == engine
    assert f"layout={engine}" in graph.source


def test_unknown_layout_is_rejected(login_document):
    with pytest.raises(UnknownLayoutError, match="spiral"):
        generate_dot(login_document, layout="spiral")
    assert layout_engine(None) == "dot"
    assert layout_engine(" Circle ") == "circo"


def test_executed_commands_reach_the_output(manager: SyntaxManager, login_flow):
    result = manager.parse(login_flow + "\n@start fill:#ff0000 border:#333333 width:2")
    document = build_graph_document("login", result)
    manager.execute_commands(DocumentCommandSink(document))

    source = generate_dot(document)
    assert 'label="Login Page"' in source
    assert 'fillcolor="#ff0000"' in source
    assert 'color="#333333"' in source
    assert "penwidth=2" in source

    mermaid = generate_mermaid(document)
    assert '  n2["Login Page"]' in mermaid
    assert "  style n1 fill:#ff0000,stroke:#333333,stroke-width:2px" in mermaid


def test_mermaid_output(login_document):
    mermaid = generate_mermaid(login_document)
    lines = mermaid.splitlines()

    assert lines[0] == "flowchart TB"
    assert '  n1["start"]' in lines
    assert "  n2 -->|Yes| n3" in lines
    assert "  n1 --> n2" in lines
    assert mermaid.endswith("\n")


def test_mermaid_shapes_and_escaping():
    document = parse_sketch_code('circle -> diamond\nhexagon\n"say \\"hi\\""\n"two\nlines"', "shapes")
    lines = generate_mermaid(document).splitlines()

    assert '  n1(("circle"))' in lines
    assert '  n2{"diamond"}' in lines
    assert '  n3{{"hexagon"}}' in lines
    assert '  n4["say #quot;hi#quot;"]' in lines
    assert '  n5["two\\nlines"]' in lines


def test_mermaid_escapes_pipe_in_edge_label():
    document = parse_sketch_code("A -a|b-> B", "pipes")

    assert "  n1 -->|a#124;b| n2" in generate_mermaid(document).splitlines()
