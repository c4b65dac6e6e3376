# tom/core/errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from typing import Any, Dict, Optional


class TomError(Exception):
    """
    Base exception class for errors raised by the test object model.

    :param message: Human readable description of the error.
    :param details: Optional dictionary of structured context.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class StructuralError(TomError):
    """
    Raised when the shape of the test tree is invalid. Structural errors are
    raised synchronously to the caller building the tree and are never retried.
    """


class DuplicateNameError(StructuralError):
    """
    Raised when a test is added under a parent that already has a direct child
    with the same name.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate name: {name}", {"name": name})
        self.name = name


class CompositeError(StructuralError):
    """
    Raised when a value that is not a tree node is attached to, or removed
    from, a composite.
    """

    def __init__(self, message: str, item: Any = None) -> None:
        super().__init__(message, {"item": item})
        self.item = item


class ValidationError(StructuralError):
    """
    Raised when a candidate does not look like a runnable test.

    The offending value is available as ``invalid``.
    """

    def __init__(self, message: str, invalid: Any = None) -> None:
        super().__init__(message, {"invalid": invalid})
        self.invalid = invalid


class InvalidMoveError(TomError):
    """
    Raised when a state machine is asked to move along an undeclared edge.
    The machine's state is left unchanged.
    """

    name = "INVALID_MOVE"

    def __init__(self, message: str, state: Any = None, current: Any = None, valid_from: Any = None) -> None:
        super().__init__(
            message,
            {"state": state, "current": current, "valid_from": list(valid_from or [])},
        )
        self.state = state
        self.current = current
        self.valid_from = list(valid_from or [])


class ExecutionError(TomError):
    """
    Base class for failures produced while running a test body.
    """


class TimeoutExpiredError(ExecutionError):
    """
    Raised when a test body does not settle within its configured timeout.
    """

    def __init__(self, timeout: float, message: Optional[str] = None) -> None:
        # Whole-number floats render without a trailing ".0".
        shown = int(timeout) if isinstance(timeout, float) and timeout.is_integer() else timeout
        super().__init__(message or f"Timeout expired [{shown}]", {"timeout": timeout})
        self.timeout = timeout
