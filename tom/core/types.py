# tom/core/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Type definitions and enums for the test object model.

This module contains shared type definitions used across the package.
It has no runtime dependencies on other modules so that emitter, state
machine and tree code can all import it without cycles.
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Hashable, Iterable, NamedTuple, Union


class TestState(str, Enum):
    """Lifecycle states of a test node.

    Values are the exact event names emitted on entering each state.
    """

    __test__ = False

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    SKIPPED = "skipped"
    IGNORED = "ignored"
    TODO = "todo"
    PASS = "pass"
    FAIL = "fail"

    def __str__(self) -> str:
        return self.value


class Move(NamedTuple):
    """A declared edge set of a state machine.

    Either side may be a single state or an iterable of states.
    """

    sources: Union[Hashable, Iterable[Hashable]]
    targets: Union[Hashable, Iterable[Hashable]]


# Type aliases for common types
Handler = Callable[..., Any]
TestBody = Callable[..., Union[Any, Awaitable[Any]]]


def event_name_of(state: Any) -> Any:
    """Return the event name announced for a state value."""
    if isinstance(state, Enum):
        return state.value
    return state
