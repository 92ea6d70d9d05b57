"""Unit tests for the tree renderer."""

from treeconcat.file_system_tree.file_system_node import directory_node, file_node
from treeconcat.file_system_tree.tree_renderer import render_tree, stream_tree


def test_single_chain():
    src = directory_node("src", "proj/src", "src", [file_node("a.ts", "proj/src/a.ts", "src/a.ts")])
    assert render_tree(directory_node("proj", "proj", "", [src])) == "proj\n└─ src\n   └─ a.ts"


def test_empty_directory_renders_only_its_name():
    assert render_tree(directory_node("proj", "proj")) == "proj"
    assert list(stream_tree(directory_node("proj", "proj"))) == ["proj"]


def test_continuation_for_non_last_branches():
    tree = directory_node(
        "proj",
        "proj",
        "",
        [
            directory_node(
                "src",
                "proj/src",
                "src",
                [
                    directory_node("lib", "proj/src/lib", "src/lib", [file_node("x.py", "proj/src/lib/x.py")]),
                    file_node("main.py", "proj/src/main.py"),
                ],
            ),
            directory_node("tests", "proj/tests", "tests"),
            file_node("README.md", "proj/README.md"),
        ],
    )
    assert list(stream_tree(tree)) == [
        "proj",
        "├─ src",
        "|  ├─ lib",
        "|  |  └─ x.py",
        "|  └─ main.py",
        "├─ tests",
        "└─ README.md",
    ]


def test_output_is_deterministic():
    def build():
        return directory_node("p", "p", "", [file_node(name, f"p/{name}") for name in ["c", "a", "b"]])

    assert render_tree(build()) == render_tree(build()) == "p\n├─ a\n├─ b\n└─ c"


def test_virtual_directories_render_like_real_ones():
    gap = directory_node("gap", "p/gap", "gap", [file_node("f.txt", "p/gap/f.txt")], is_virtual=True)
    assert render_tree(directory_node("p", "p", "", [gap], is_virtual=True)) == "p\n└─ gap\n   └─ f.txt"
