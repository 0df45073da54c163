"""
Thought nodes and the thought tree.

A ThoughtNode is one reasoning step: the text the collaborator proposed, the
score it earned and whether it is still eligible for expansion. Nodes are
linked parent -> children; the tree owns the root and offers traversal,
batch child creation and root-to-node path reconstruction.

The ``value`` field means different things per strategy:

- BFS/DFS: cumulative path score (parent value + own score)
- MCTS: own score plus everything backpropagated through the node, which
  makes it double as a pseudo visit count
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional

from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from tot_reasoning.utils.logging import get_console


@dataclass(eq=False)
class ThoughtNode:
    """
    A single thought in the search tree.

    Creating a node with a parent appends it to ``parent.children``, so every
    non-root node appears exactly once in its parent's child list.

    Attributes:
        name: The thought's text content
        parent: Back-reference to the parent node (None for the root)
        id: Identifier supplied by the collaborator, not guaranteed unique
        value: Numeric score, see module docstring for per-strategy meaning
        valid_status: Whether the node may be selected and expanded
        children: Child thoughts in generation order
        depth: Distance from the root (root = 0)
    """

    name: str
    parent: Optional[ThoughtNode] = field(default=None, repr=False)
    id: str = "0"
    value: float = 0.0
    valid_status: bool = True
    children: List[ThoughtNode] = field(default_factory=list, repr=False)
    depth: int = 0

    def __post_init__(self):
        if self.parent is not None:
            self.depth = self.parent.depth + 1
            self.parent.children.append(self)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def update_value(self, value: float) -> None:
        """Overwrite the node's value."""
        self.value = value

    def update_valid_status(self, status: bool) -> None:
        """Overwrite the node's validity flag."""
        self.valid_status = status


class ThoughtTree:
    """
    Container for a tree of ThoughtNodes.

    Example:
        >>> tree = ThoughtTree(ThoughtNode("Solve X"))
        >>> children = tree.update_node(
        ...     [{"node_id": "1", "node_state_instruction": "Try Y"}],
        ...     tree.root,
        ... )
        >>> tree.parse_node_path(children[0])
        ['Solve X', 'Try Y']
    """

    def __init__(self, root: ThoughtNode | None = None):
        self.root = root

    @property
    def all_nodes(self) -> List[ThoughtNode]:
        """All nodes in pre-order depth-first order (empty without a root)."""
        if self.root is None:
            return []

        nodes = []
        stack = [self.root]
        while stack:
            node = stack.pop()
            nodes.append(node)
            stack.extend(reversed(node.children))
        return nodes

    def update_node(
        self,
        thoughts: Iterable[Mapping[str, Any]],
        current_node: ThoughtNode | None = None,
    ) -> List[ThoughtNode]:
        """
        Create one child of ``current_node`` per proposed thought.

        Args:
            thoughts: Mappings shaped ``{"node_id": ..., "node_state_instruction": ...}``
            current_node: Parent for the new nodes

        Returns:
            The new nodes, in input order
        """
        return [
            ThoughtNode(
                name=thought["node_state_instruction"],
                parent=current_node,
                id=str(thought["node_id"]),
            )
            for thought in thoughts
        ]

    def parse_node_path(self, node: ThoughtNode) -> List[str]:
        """Thought contents from the root (index 0) down to ``node`` (last index)."""
        path = []
        current: ThoughtNode | None = node
        while current is not None:
            path.append(current.name)
            current = current.parent
        return list(reversed(path))

    def render(self) -> Tree | None:
        """Build a rich Tree of the thought hierarchy, or None when empty."""
        if self.root is None:
            return None

        def label(node: ThoughtNode) -> str:
            return escape(f"{node.name}, value: {node.value}, valid_status: {node.valid_status}")

        tree = Tree(label(self.root))
        stack = [(self.root, tree)]
        while stack:
            node, branch = stack.pop()
            for child in node.children:
                stack.append((child, branch.add(label(child))))
        return tree

    def show(self, console: Console | None = None) -> None:
        """Print the tree, one line per node, children nested under parents."""
        console = console or get_console()
        console.print("\nUpdated Tree:")

        tree = self.render()
        if tree is None:
            console.print("Empty tree")
            return
        console.print(tree)

    def to_dict(self, node: ThoughtNode | None = None) -> dict:
        """Nested dictionary export of the subtree under ``node`` (default root)."""
        node = node or self.root
        if node is None:
            return {}
        return {
            "id": node.id,
            "name": node.name,
            "value": node.value,
            "valid_status": node.valid_status,
            "children": [self.to_dict(child) for child in node.children],
        }

    def __len__(self) -> int:
        return len(self.all_nodes)
