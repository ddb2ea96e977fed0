from sketchparse.commands import CommandExtractor, parse_style_params
from sketchparse.quoted_strings import QuotedStringExtractor
from sketchparse.utils import Layout, Rename, SelectNode


def test_command_lines_are_removed_and_order_is_kept():
    text = "A -> B\n=rename( A ,  Alpha )\nB -> C\n=layout(decision)"
    commands, structural = CommandExtractor().extract(text)

    assert structural.split("\n") == ["A -> B", "", "B -> C", ""]
    assert [type(command) for command in commands] == [Rename, Layout]

    rename, layout = commands
    assert rename.old_ref == "A"
    assert rename.new_label == "Alpha"
    assert rename.line == 2
    assert layout.kind == "decision"
    assert layout.line == 4


def test_select_command_with_style_params():
    commands, structural = CommandExtractor().extract("  @:3 fill:#ff0000 border:#000 width:3")

    assert structural == ""
    assert commands == [
        SelectNode(ref=":3", params="fill:#ff0000 border:#000 width:3", raw="@:3 fill:#ff0000 border:#000 width:3", line=1)
    ]


def test_layout_without_argument_defaults_to_tree():
    commands, _ = CommandExtractor().extract("=layout()")

    assert commands[0].kind == "tree"


def test_rename_without_new_label_is_still_extracted():
    commands, _ = CommandExtractor().extract("=rename(A)")

    assert commands[0] == Rename(old_ref="A", new_label="", raw="=rename(A)", line=1)


def test_unknown_equals_command_passes_through():
    commands, structural = CommandExtractor().extract("=colour(red)\nA")

    assert commands == []
    assert structural == "=colour(red)\nA"


def test_lone_at_sign_is_not_a_command():
    commands, structural = CommandExtractor().extract("@")

    assert commands == []
    assert structural == "@"


def test_quoted_arguments_are_restored_and_lines_counted():
    quoted = QuotedStringExtractor().extract('"a\nb"\n=rename(a, "Two\nLines")\n@"a\nb"')
    commands, structural = CommandExtractor().extract(quoted.masked, quoted)

    rename, select = commands
    assert rename.new_label == "Two\nLines"
    assert rename.line == 3
    assert select.ref == "a\nb"
    assert select.line == 5
    # one blank entry per source line the commands covered
    assert structural.split("\n")[1:] == ["", "", "", ""]


def test_parse_style_params():
    assert parse_style_params("fill:#ff0000 border: #00ff00 width:4") == {
        "fill": "#ff0000",
        "stroke": "#00ff00",
        "strokeWidth": 4,
    }
    assert parse_style_params("") == {}
    assert parse_style_params("shadow:on") == {}
