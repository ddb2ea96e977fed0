from sketchparse.arrows import ArrowTokenizer, edge_specs
from sketchparse.utils import BACKWARD, BIDIRECTIONAL, FORWARD, Arrow


def _directions(line):
    return [(arrow.direction, arrow.label) for arrow in ArrowTokenizer().tokenize(line)]


def test_each_arrow_form():
    assert _directions("A -> B") == [(FORWARD, None)]
    assert _directions("A <- B") == [(BACKWARD, None)]
    assert _directions("A <-> B") == [(BIDIRECTIONAL, None)]
    assert _directions("A -yes-> B") == [(FORWARD, "yes")]
    assert _directions("A <-maybe-> B") == [(BIDIRECTIONAL, "maybe")]


def test_labeled_bidirectional_is_not_split_into_shorter_arrows():
    arrows = ArrowTokenizer().tokenize("A<-both->B")

    assert len(arrows) == 1
    assert arrows[0].raw == "<-both->"
    assert arrows[0].position == 1
    assert arrows[0].length == 8


def test_chain_positions_and_segments():
    segments, arrows = ArrowTokenizer().split("A -yes-> B -> C")

    assert segments == ["A", "B", "C"]
    assert [(arrow.direction, arrow.label) for arrow in arrows] == [(FORWARD, "yes"), (FORWARD, None)]


def test_label_whitespace_is_trimmed_and_blank_label_dropped():
    assert _directions("A - go now -> B") == [(FORWARD, "go now")]
    assert _directions("A -  -> B") == [(FORWARD, None)]


def test_empty_segments_keep_their_slot():
    segments, arrows = ArrowTokenizer().split("->B")
    assert segments == ["", "B"]
    assert len(arrows) == 1

    segments, arrows = ArrowTokenizer().split("A -> -> B")
    assert segments == ["A", "", "B"]
    assert len(arrows) == 2


def test_line_without_arrows_is_one_segment():
    assert ArrowTokenizer().split("  just a node  ") == (["just a node"], [])
    assert ArrowTokenizer().split("A - > B") == (["A - > B"], [])


def test_edge_specs_follow_direction():
    forward = Arrow(position=0, length=2, direction=FORWARD)
    backward = Arrow(position=0, length=2, direction=BACKWARD, label="x")
    both = Arrow(position=0, length=3, direction=BIDIRECTIONAL)

    assert edge_specs(forward, "A", "B") == [("A", "B", None)]
    assert edge_specs(backward, "A", "B") == [("B", "A", "x")]
    assert edge_specs(both, "A", "B") == [("A", "B", None), ("B", "A", None)]
