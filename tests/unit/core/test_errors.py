# tests/unit/core/test_errors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""Test suite for error classes defined in errors.py."""

import pytest

from tom.core.errors import (
    CompositeError,
    DuplicateNameError,
    ExecutionError,
    InvalidMoveError,
    StructuralError,
    TimeoutExpiredError,
    TomError,
    ValidationError,
)

# -----------------------------------------------------------------------------
# BASE ERROR TESTS
# -----------------------------------------------------------------------------


def test_tom_error_basic():
    """Test basic TomError functionality."""
    error = TomError("test message")
    assert str(error) == "test message"
    assert error.message == "test message"
    assert error.details == {}

    details = {"key": "value"}
    error = TomError("test message", details)
    assert error.details == details


@pytest.mark.parametrize(
    "error_class,parent",
    [
        (DuplicateNameError, StructuralError),
        (CompositeError, StructuralError),
        (ValidationError, StructuralError),
        (StructuralError, TomError),
        (InvalidMoveError, TomError),
        (TimeoutExpiredError, ExecutionError),
        (ExecutionError, TomError),
    ],
)
def test_error_hierarchy(error_class, parent):
    """Test that every error sits in the expected place in the hierarchy."""
    assert issubclass(error_class, parent)


# -----------------------------------------------------------------------------
# STRUCTURED DETAILS
# -----------------------------------------------------------------------------


def test_duplicate_name_error():
    error = DuplicateNameError("one")
    assert str(error) == "Duplicate name: one"
    assert error.name == "one"


def test_validation_error_carries_invalid_value():
    candidate = {"name": "x"}
    error = ValidationError("Valid TOM required", candidate)
    assert error.invalid is candidate
    assert error.details["invalid"] is candidate


def test_invalid_move_error():
    error = InvalidMoveError("bad move", state="pass", current="pending", valid_from=["in-progress"])
    assert error.name == "INVALID_MOVE"
    assert error.details == {"state": "pass", "current": "pending", "valid_from": ["in-progress"]}


def test_timeout_expired_error_message():
    assert str(TimeoutExpiredError(150)) == "Timeout expired [150]"
    assert str(TimeoutExpiredError(150, "too slow")) == "too slow"
    assert TimeoutExpiredError(150).timeout == 150


@pytest.mark.parametrize("timeout,shown", [(150.0, "150"), (150, "150"), (12.5, "12.5"), (0.0, "0")])
def test_timeout_expired_error_formats_whole_numbers(timeout, shown):
    error = TimeoutExpiredError(timeout)
    assert str(error) == f"Timeout expired [{shown}]"
    assert error.timeout == timeout
