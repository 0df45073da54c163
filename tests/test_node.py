"""Tests for ThoughtNode and ThoughtTree."""

import io

from rich.console import Console

from tot_reasoning.core.node import ThoughtNode, ThoughtTree


def _thoughts(*names):
    return [{"node_id": str(i), "node_state_instruction": n} for i, n in enumerate(names, 1)]


def _sample_tree() -> ThoughtTree:
    #        root
    #       /    \
    #      a      b
    #     / \
    #    a1  a2
    root = ThoughtNode("root")
    a = ThoughtNode("a", parent=root, id="1")
    ThoughtNode("b", parent=root, id="2")
    ThoughtNode("a1", parent=a, id="1")
    ThoughtNode("a2", parent=a, id="2")
    return ThoughtTree(root)


class TestThoughtNode:
    def test_defaults(self):
        node = ThoughtNode("Solve X")

        assert node.name == "Solve X"
        assert node.value == 0.0
        assert node.valid_status is True
        assert node.parent is None
        assert node.children == []
        assert node.is_root
        assert node.is_leaf
        assert node.depth == 0

    def test_attaches_to_parent(self):
        root = ThoughtNode("root")
        child = ThoughtNode("child", parent=root, id="7")

        assert child.parent is root
        assert root.children == [child]
        assert child.depth == 1
        assert child.id == "7"
        assert not root.is_leaf

    def test_updates_overwrite(self):
        node = ThoughtNode("n")
        node.update_value(4.5)
        node.update_value(2.0)
        node.update_valid_status(False)

        assert node.value == 2.0
        assert node.valid_status is False

    def test_identity_not_field_equality(self):
        root = ThoughtNode("root")
        first = ThoughtNode("same", parent=root)
        second = ThoughtNode("same", parent=root)

        assert first != second
        assert len(root.children) == 2


class TestThoughtTree:
    def test_empty_tree(self):
        tree = ThoughtTree()
        assert tree.all_nodes == []
        assert tree.to_dict() == {}

    def test_all_nodes_preorder(self):
        tree = _sample_tree()
        assert [n.name for n in tree.all_nodes] == ["root", "a", "a1", "a2", "b"]
        assert len(tree) == 5

    def test_update_node_attaches_children(self):
        root = ThoughtNode("root")
        tree = ThoughtTree(root)

        nodes = tree.update_node(_thoughts("x", "y", "z"), root)

        assert [n.name for n in nodes] == ["x", "y", "z"]
        assert [n.id for n in nodes] == ["1", "2", "3"]
        assert root.children == nodes
        assert all(n.parent is root for n in nodes)

    def test_update_node_empty(self):
        root = ThoughtNode("root")
        tree = ThoughtTree(root)
        assert tree.update_node([], root) == []
        assert root.children == []

    def test_update_node_numeric_id(self):
        root = ThoughtNode("root")
        tree = ThoughtTree(root)
        [node] = tree.update_node([{"node_id": 3, "node_state_instruction": "x"}], root)
        assert node.id == "3"

    def test_parse_node_path(self):
        tree = _sample_tree()
        a2 = tree.root.children[0].children[1]

        assert tree.parse_node_path(a2) == ["root", "a", "a2"]
        assert tree.parse_node_path(tree.root) == ["root"]

    def test_path_invariant_for_every_node(self):
        tree = _sample_tree()
        for node in tree.all_nodes:
            path = tree.parse_node_path(node)
            assert path[0] == tree.root.name
            assert path[-1] == node.name
            assert len(path) == node.depth + 1

    def test_show_indents_children(self):
        tree = _sample_tree()
        tree.root.children[1].update_valid_status(False)
        buffer = io.StringIO()

        tree.show(Console(file=buffer, width=120))

        lines = [line for line in buffer.getvalue().splitlines() if line.strip()]
        assert lines[0] == "Updated Tree:"
        assert lines[1].startswith("root, value: 0.0, valid_status: True")
        a1_line = next(line for line in lines if "a1, value" in line)
        a_line = next(line for line in lines if line.lstrip(" │├└─").startswith("a, value"))
        assert a1_line.index("a1") > a_line.index("a,")
        assert any("b, value: 0.0, valid_status: False" in line for line in lines)

    def test_show_empty(self):
        buffer = io.StringIO()
        ThoughtTree().show(Console(file=buffer))
        assert "Empty tree" in buffer.getvalue()

    def test_to_dict(self):
        tree = _sample_tree()
        data = tree.to_dict()

        assert data["name"] == "root"
        assert [c["name"] for c in data["children"]] == ["a", "b"]
        assert [c["name"] for c in data["children"][0]["children"]] == ["a1", "a2"]
