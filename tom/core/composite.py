# tom/core/composite.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Generic ordered n-ary tree.

Architecture:
- Implements the Composite pattern used by the test tree
- Each node owns its children; the parent link is a weak back-reference
- Depth-first pre-order iteration drives every tree-wide scan

Responsibilities:
1. Structure
   - Attach, prepend and detach children
   - Maintain parent links
2. Queries
   - Depth, root and ancestor lookup
   - Descendant counting and text rendering

Dependencies:
- protocols.py: Tree capability check
- errors.py: Structural errors
"""

from typing import Any, Iterator, List, Optional
from weakref import ReferenceType, ref

from tom.core.errors import CompositeError
from tom.core.protocols import TreeNode


class Composite:
    """A node in an ordered tree.

    Class Invariants:
    1. Children are kept in insertion order (prepend excepted)
    2. A child's parent is the composite whose children contain it
    3. The parent reference never keeps the parent alive
    """

    def __init__(self) -> None:
        self._children: List[Any] = []
        self._parent: Optional[ReferenceType] = None

    @property
    def children(self) -> List[Any]:
        """Ordered list of child nodes."""
        return self._children

    @property
    def parent(self) -> Optional[Any]:
        """The parent node, or None for a root (or if the parent was dropped)."""
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, value: Optional[Any]) -> None:
        self._parent = ref(value) if value is not None else None

    def _check_child(self, child: Any) -> None:
        if not isinstance(child, TreeNode):
            raise CompositeError("can only add a Composite instance", child)

    def add(self, child: Any) -> Any:
        """Append a child.

        Args:
            child: A node satisfying the tree capability protocol

        Returns:
            The child

        Raises:
            CompositeError: If child is not a tree node
        """
        self._check_child(child)
        child.parent = self
        self._children.append(child)
        return child

    append = add

    def prepend(self, child: Any) -> Any:
        """Insert a child before all existing children and return it."""
        self._check_child(child)
        child.parent = self
        self._children.insert(0, child)
        return child

    def remove(self, child: Any) -> Any:
        """Detach a child and return it.

        Raises:
            CompositeError: If child is not one of this node's children
        """
        for i, existing in enumerate(self._children):
            if existing is child:
                del self._children[i]
                child.parent = None
                return child
        raise CompositeError("not a child of this node", child)

    def level(self) -> int:
        """Depth in the tree, 0 being the root."""
        count = 0
        node = self.parent
        while node is not None:
            count += 1
            node = node.parent
        return count

    def root(self) -> Any:
        """Return the root of this tree."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def parents(self) -> List[Any]:
        """Return the ancestors of this node, nearest first."""
        output = []
        node = self.parent
        while node is not None:
            output.append(node)
            node = node.parent
        return output

    def descendant_count(self) -> int:
        """Number of nodes in this subtree, this node included."""
        return sum(1 for _ in self)

    def tree(self) -> str:
        """Render this subtree, one ``- name`` line per node indented by level."""
        return "".join(f"{'  ' * node.level()}- {node}\n" for node in self)

    def __iter__(self) -> Iterator[Any]:
        """Depth-first pre-order traversal of this node and its descendants."""
        yield self
        for child in self._children:
            yield from child
