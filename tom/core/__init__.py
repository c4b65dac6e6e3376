"""
Core package providing the test object model.

Architecture:
- Emitter publishes events and bubbles them up the tree
- StateMachine validates lifecycle moves on top of the emitter
- Composite holds the ordered test tree
- TestNode combines tree and lifecycle and runs test bodies

Design Patterns:
- Composite Pattern for the test hierarchy
- Observer Pattern for lifecycle events
- State Pattern for the test lifecycle
"""

# Import order matters to avoid circular dependencies
from .errors import (
    CompositeError,
    DuplicateNameError,
    ExecutionError,
    InvalidMoveError,
    StructuralError,
    TimeoutExpiredError,
    TomError,
    ValidationError,
)
from .types import Move, TestState
from .emitter import Emitter
from .state_machine import StateMachine
from .composite import Composite
from .context import TestContext, TestStats
from .options import TestOptions
from .outcome import Outcome, OutcomeKind
from .node import TestNode

__all__ = [
    # Tree and lifecycle
    "Emitter",
    "StateMachine",
    "Move",
    "Composite",
    "TestNode",
    "TestState",
    # Run support
    "TestContext",
    "TestStats",
    "TestOptions",
    "Outcome",
    "OutcomeKind",
    # Errors
    "TomError",
    "StructuralError",
    "DuplicateNameError",
    "CompositeError",
    "ValidationError",
    "InvalidMoveError",
    "ExecutionError",
    "TimeoutExpiredError",
]
