# tom/core/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class TreeNode(Protocol):
    """
    Tree capability protocol for type checking.

    Attributes / Methods:
        children: Ordered list of owned child nodes.
        parent: The parent node, or None for a root.
        add(child): Attach a child and return it.
        level(): Distance from the root.
        root(): The ancestor with no parent.

    Runtime Invariants:
    - A node appears at most once in its parent's children.
    - Following parent links always terminates at a root.
    """

    @property
    def children(self) -> List[Any]:
        """Ordered list of child nodes."""
        ...

    @property
    def parent(self) -> Optional[Any]:
        """The parent node, or None."""
        ...

    def add(self, child: Any) -> Any:
        """Attach a child node."""
        ...

    def level(self) -> int:
        """Depth below the root (root is 0)."""
        ...

    def root(self) -> Any:
        """The top of the tree."""
        ...


@runtime_checkable
class RunnableTest(Protocol):
    """
    Minimal shape an object must expose to be accepted as a test.

    Attributes:
        name: The test name.
        body: The callable executed by run(), may be None.
        index: 1-based position among siblings.
        ended: True once the test has passed or failed.
    """

    name: str
    body: Any
    index: int
    ended: bool
