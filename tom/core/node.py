# tom/core/node.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Test node: the entity of the test object model.

Architecture:
- Combines an ordered tree (Composite) with a validated lifecycle
  (StateMachine); the two capabilities share no base class
- Resolves skip/only marks over the whole tree after every insertion
- Executes a test body once per run, racing deferred outcomes against a
  timeout

Responsibilities:
1. Tree building
   - test/skip/only/todo/group/before/after builders
   - Sibling name uniqueness and 1-based indexing
2. Filtering
   - Full-rescan skip/only resolution ("only" wins)
3. Execution
   - Lifecycle transitions and start/end events
   - Result, timing and context capture
4. Housekeeping
   - reset, combine and validate

Cross-cutting:
- Events bubble to ancestors for an external reporter
- Scheduling of children is left to an external runner; max_concurrency is
  stored only
"""

import inspect
import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from tom.core.composite import Composite
from tom.core.context import TestContext, TestStats
from tom.core.errors import DuplicateNameError, ValidationError
from tom.core.options import DEFAULT_NAME, TestOptions
from tom.core.outcome import Outcome, OutcomeKind
from tom.core.protocols import RunnableTest
from tom.core.state_machine import StateMachine
from tom.core.types import Move, TestBody, TestState
from tom.runtime import timeout as timeouts

logger = logging.getLogger(__name__)

TEST_MOVES = (
    Move(TestState.PENDING, TestState.IN_PROGRESS),
    Move(TestState.PENDING, TestState.SKIPPED),
    Move(TestState.PENDING, TestState.IGNORED),
    Move(TestState.PENDING, TestState.TODO),
    Move(TestState.IN_PROGRESS, TestState.PASS),
    Move(TestState.IN_PROGRESS, TestState.FAIL),
)

_TERMINAL = (TestState.PASS, TestState.FAIL)


def _resolve_args(name: Any, body: Any, options: Any):
    """Sort positional constructor arguments by runtime type, in any order."""
    resolved_name, resolved_body, resolved_options = None, None, None
    for arg in (name, body, options):
        if arg is None:
            continue
        if isinstance(arg, str):
            resolved_name = arg
        elif isinstance(arg, (Mapping, TestOptions)):
            resolved_options = arg
        elif callable(arg):
            resolved_body = arg
        else:
            raise TypeError(f"Unexpected test argument: {arg!r}")
    return resolved_name, resolved_body, resolved_options


def _accepts_context(body: TestBody) -> bool:
    """Return True if ``body`` can be called with the context as one positional argument."""
    try:
        signature = inspect.signature(body)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind(None)
    except TypeError:
        return False
    return True


class TestNode(Composite, StateMachine):
    """A named test or group within a test tree.

    Class Invariants:
    1. Direct children have unique names
    2. State only changes along TEST_MOVES (or via reset_state)
    3. marked_skip always equals the result of a full-tree resolution
    4. ended is True exactly when the last run passed or failed

    Usage:
        root = TestNode("suite")
        root.test("adds", lambda: 1 + 1)
        result = await root.children[0].run()
    """

    __test__ = False

    def __init__(self, name: Any = None, body: Any = None, options: Any = None, **option_kwargs: Any) -> None:
        """
        Positional arguments may be given in any order and are told apart by
        type: a ``str`` is the name, a callable the body, a mapping or
        ``TestOptions`` the options. Keyword arguments override options.

        :param name: The test name, defaults to ``"tom"``.
        :param body: A callable which returns, raises or returns an awaitable.
        :param options: Test options.
        :raises ValueError: If an unknown option is supplied.
        """
        name, body, options = _resolve_args(name, body, options)
        Composite.__init__(self)
        StateMachine.__init__(self, TestState.PENDING, TEST_MOVES)

        self.name: str = name or DEFAULT_NAME
        self.body: Optional[TestBody] = body
        self.options: TestOptions = TestOptions.from_value(options, **option_kwargs)

        # Position of this test within its parent's children.
        self.index: int = 1
        self.ended: bool = False
        # Return value on pass, the exception on fail.
        self.result: Any = None
        self.context: Optional[TestContext] = None
        self.stats = TestStats()

        self.marked_skip: bool = self.options.skip
        self.marked_only: bool = self.options.only

    @property
    def timeout(self) -> float:
        return self.options.timeout

    @property
    def max_concurrency(self) -> int:
        return self.options.max_concurrency

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} {self.state}>"

    # ------------------------------------------------------------------
    # Tree building
    # ------------------------------------------------------------------

    def test(self, name: Any = None, body: Any = None, options: Any = None, **option_kwargs: Any) -> "TestNode":
        """
        Add a child test.

        :return: The new child (not this node).
        :raises DuplicateNameError: If a direct child already has this name.
        """
        child = type(self)(name, body, options, **option_kwargs)
        for sibling in self.children:
            if sibling.name == child.name:
                raise DuplicateNameError(child.name)
        self.add(child)
        child.index = len(self.children)
        logger.debug("Added %r to %r at index %d", child, self, child.index)
        self._skip_logic()
        return child

    def _marked(self, mark: str, name: Any, body: Any, options: Any, option_kwargs: Dict[str, Any]) -> "TestNode":
        """Add a child test with ``mark`` forced on its options."""
        name, body, options = _resolve_args(name, body, options)
        marked = TestOptions.from_value(options, **option_kwargs).with_marks(**{mark: True})
        return self.test(name, body, marked)

    def skip(self, name: Any = None, body: Any = None, options: Any = None, **option_kwargs: Any) -> "TestNode":
        """Add a child test marked skip."""
        return self._marked("skip", name, body, options, option_kwargs)

    def only(self, name: Any = None, body: Any = None, options: Any = None, **option_kwargs: Any) -> "TestNode":
        """Add a child test marked only."""
        return self._marked("only", name, body, options, option_kwargs)

    def todo(self, name: Any = None, body: Any = None, options: Any = None, **option_kwargs: Any) -> "TestNode":
        """Add a child test marked todo; its body is never run."""
        return self._marked("todo", name, body, options, option_kwargs)

    def before(self, name: Any = None, body: Any = None, options: Any = None, **option_kwargs: Any) -> "TestNode":
        """Add a child test carrying the ``before`` scheduling hint."""
        return self._marked("before", name, body, options, option_kwargs)

    def after(self, name: Any = None, body: Any = None, options: Any = None, **option_kwargs: Any) -> "TestNode":
        """Add a child test carrying the ``after`` scheduling hint."""
        return self._marked("after", name, body, options, option_kwargs)

    def group(self, name: Any = None, options: Any = None, **option_kwargs: Any) -> "TestNode":
        """Add a child container with no body."""
        if callable(options) and not isinstance(options, (Mapping, TestOptions)):
            raise TypeError("a group has no body")
        return self.test(name, None, options, **option_kwargs)

    # ------------------------------------------------------------------
    # Skip/only resolution
    # ------------------------------------------------------------------

    def _skip_logic(self) -> None:
        """Recompute effective skip for every node in the tree from the explicit marks."""
        root = self.root()
        only_exists = any(node.options.only for node in root)
        for node in root:
            node.marked_only = node.options.only
            if only_exists:
                node.marked_skip = node.options.skip or not node.options.only
            else:
                node.marked_skip = node.options.skip

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def set_state(self, state: Any, *args: Any) -> None:
        """Validated move; entering pass or fail also ends the test and emits ``end``."""
        terminal = state in _TERMINAL and state != self.state
        if terminal and self.can_move(state):
            self.ended = True
        super().set_state(state, *args)
        if terminal:
            self.emit("end")

    async def run(self) -> Any:
        """
        Execute the test body.

        :return: The body's result on pass, None if the test was ignored,
            marked todo or skipped.
        :raises Exception: Whatever the body raised, or TimeoutExpiredError.
        """
        if self.body is None and not self.options.todo:
            self.set_state(TestState.IGNORED, self)
            return None
        if self.options.todo:
            self.set_state(TestState.TODO, self)
            return None
        if self.marked_skip:
            self.set_state(TestState.SKIPPED, self)
            return None

        self.set_state(TestState.IN_PROGRESS, self)
        self.emit("start")
        self.stats.start_clock()
        self.context = TestContext(name=self.name, index=self.index)

        args = (self.context,) if _accepts_context(self.body) else ()
        outcome = Outcome.capture(self.body, *args)
        if outcome.is_deferred:
            try:
                outcome = Outcome(OutcomeKind.VALUE, await timeouts.race(outcome.value, self.options.timeout))
            except Exception as err:
                outcome = Outcome(OutcomeKind.ERROR, err)

        self.result = outcome.value
        self.stats.stop_clock()
        if outcome.kind is OutcomeKind.ERROR:
            logger.debug("%r failed: %r", self, outcome.value)
            self.set_state(TestState.FAIL, self, outcome.value)
            raise outcome.value
        logger.debug("%r passed in %.1fms", self, self.stats.duration)
        self.set_state(TestState.PASS, self, outcome.value)
        return outcome.value

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    def reset(self, deep: bool = False) -> None:
        """
        Return to pending and restore the originally configured marks.

        :param deep: Also reset every descendant.
        """
        nodes = list(self) if deep else [self]
        for node in nodes:
            node.reset_state()
            node.marked_skip = node.options.skip
            node.marked_only = node.options.only
            node.ended = False
            node.result = None
            node.context = None
            node.stats = TestStats()
        logger.debug("Reset %r (deep=%s)", self, deep)

    @classmethod
    def combine(cls, nodes: Iterable[Any], name: Optional[str] = None) -> Any:
        """
        Combine several tests under a common root.

        With more than one node a new root, configured for sequential
        execution, is created and each node attached to it. A single node is
        returned unchanged. Resolution is re-run on the result either way.

        :raises ValidationError: If a node is not a valid test or none are given.
        """
        nodes = list(nodes)
        if not nodes:
            raise ValidationError("At least one test is required", nodes)
        if len(nodes) > 1:
            combined = cls(name, max_concurrency=1)
            for node in nodes:
                cls.validate(node)
                combined.add(node)
        else:
            combined = nodes[0]
            cls.validate(combined)
        combined._skip_logic()
        return combined

    @staticmethod
    def validate(candidate: Any) -> None:
        """
        Check that ``candidate`` looks like a test.

        :raises ValidationError: Unless it exposes name, body, index and ended.
        """
        if not isinstance(candidate, RunnableTest):
            raise ValidationError("Valid TOM required", candidate)
