"""tom: a test object model

This package lets a caller build a tree of named tests and groups, tracks
each test's lifecycle through a validated state machine, resolves tree-wide
skip/only filtering and runs a test body under a timeout while lifecycle
events bubble up the tree for an external reporter.

Responsibilities:
    - Test tree definition
    - Lifecycle state tracking
    - Skip/only resolution
    - Timed execution of test bodies

Interactions:
    - An external runner walks the tree and calls ``run()``
    - An external reporter listens to bubbled events
    - Logging system for diagnostics

Cross-cutting Concerns:
    Concurrency:
        - Single-threaded asyncio; no locking
        - ``max_concurrency`` is a hint for the runner only

    Error Handling:
        - Structured error hierarchy rooted at ``TomError``
        - Body failures are recorded then re-raised from ``run()``

    Logging:
        - Module level loggers under ``tom``
        - Debug records only; no handlers installed
"""

from tom.core import (
    Composite,
    Emitter,
    StateMachine,
    TestContext,
    TestNode,
    TestOptions,
    TestState,
)
from tom.core.errors import (
    DuplicateNameError,
    InvalidMoveError,
    TimeoutExpiredError,
    TomError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "Composite",
    "Emitter",
    "StateMachine",
    "TestContext",
    "TestNode",
    "TestOptions",
    "TestState",
    "TomError",
    "DuplicateNameError",
    "InvalidMoveError",
    "TimeoutExpiredError",
    "ValidationError",
]
