"""Unit tests for the validated StateMachine."""

import unittest
from unittest.mock import Mock

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tom.core.errors import InvalidMoveError
from tom.core.node import TEST_MOVES
from tom.core.state_machine import StateMachine
from tom.core.types import Move, TestState


def make_machine():
    return StateMachine(
        "one",
        [
            {"from": "one", "to": "two"},
            {"from": "two", "to": ["three", "four"]},
            Move(["three", "four"], "five"),
            ("five", "one"),
        ],
    )


class TestStateMachine(unittest.TestCase):
    """Test cases for StateMachine moves."""

    def setUp(self):
        self.machine = make_machine()

    def test_initial_state(self):
        self.assertEqual(self.machine.state, "one")
        self.assertEqual(self.machine.initial_state, "one")

    def test_valid_moves(self):
        self.machine.set_state("two")
        self.machine.set_state("four")
        self.machine.set_state("five")
        self.machine.set_state("one")
        self.assertEqual(self.machine.state, "one")

    def test_assignment_is_validated(self):
        self.machine.state = "two"
        self.assertEqual(self.machine.state, "two")
        with self.assertRaises(InvalidMoveError):
            self.machine.state = "one"
        self.assertEqual(self.machine.state, "two")

    def test_unknown_target(self):
        with self.assertRaises(InvalidMoveError) as ctx:
            self.machine.set_state("six")
        self.assertEqual(str(ctx.exception), "Invalid state: six")
        self.assertEqual(ctx.exception.name, "INVALID_MOVE")
        self.assertEqual(self.machine.state, "one")

    def test_invalid_source_lists_valid_sources(self):
        with self.assertRaises(InvalidMoveError) as ctx:
            self.machine.set_state("five")
        self.assertEqual(str(ctx.exception), "Can only move to 'five' from 'three' or 'four' (not 'one')")
        self.assertEqual(ctx.exception.valid_from, ["three", "four"])
        self.assertEqual(ctx.exception.current, "one")
        self.assertEqual(self.machine.state, "one")

    def test_same_state_is_noop(self):
        handler = Mock()
        self.machine.on(handler)
        self.machine.set_state("one")
        handler.assert_not_called()

    def test_events_on_move(self):
        seen = []
        self.machine.on(lambda name, *args: seen.append((name, args)))
        self.machine.set_state("two", "payload")
        self.assertEqual(seen, [("state", ("two", "one")), ("two", ("payload",))])

    def test_no_events_on_failed_move(self):
        handler = Mock()
        self.machine.on(handler)
        with self.assertRaises(InvalidMoveError):
            self.machine.set_state("three")
        handler.assert_not_called()

    def test_reset_state_bypasses_validation(self):
        handler = Mock()
        self.machine.set_state("two")
        self.machine.set_state("three")
        self.machine.on("reset", handler)
        self.machine.reset_state()
        self.assertEqual(self.machine.state, "one")
        handler.assert_called_once_with("three")

    def test_can_move(self):
        self.assertTrue(self.machine.can_move("two"))
        self.assertFalse(self.machine.can_move("three"))


class TestEnumStates(unittest.TestCase):
    """Test cases using TestState values and the test node edge set."""

    def setUp(self):
        self.machine = StateMachine(TestState.PENDING, TEST_MOVES)

    def test_event_name_is_state_value(self):
        handler = Mock()
        self.machine.on("in-progress", handler)
        self.machine.set_state(TestState.IN_PROGRESS, "x")
        handler.assert_called_once_with("x")

    def test_no_edge_back_to_pending(self):
        self.machine.set_state(TestState.IN_PROGRESS)
        self.machine.set_state(TestState.PASS)
        with self.assertRaises(InvalidMoveError) as ctx:
            self.machine.set_state(TestState.PENDING)
        self.assertIn("Invalid state: pending", str(ctx.exception))

    def test_error_message_uses_state_values(self):
        with self.assertRaises(InvalidMoveError) as ctx:
            self.machine.set_state(TestState.PASS)
        self.assertEqual(str(ctx.exception), "Can only move to 'pass' from 'in-progress' (not 'pending')")


ALL_STATES = list(TestState)
DECLARED = {(source, target) for move in TEST_MOVES for source in (move.sources,) for target in (move.targets,)}


@given(requests=st.lists(st.sampled_from(ALL_STATES), max_size=20))
def test_moves_only_follow_declared_edges(requests):
    """Property: the machine only ever moves along a declared edge, and a refused move changes nothing."""
    machine = StateMachine(TestState.PENDING, TEST_MOVES)
    for target in requests:
        before = machine.state
        try:
            machine.set_state(target)
        except InvalidMoveError:
            assert machine.state == before
            assert (before, target) not in DECLARED
        else:
            assert machine.state == target
            assert before == target or (before, target) in DECLARED


@pytest.mark.parametrize("target", [TestState.PASS, TestState.FAIL, TestState.PENDING])
def test_pending_cannot_jump_to(target):
    machine = StateMachine(TestState.PENDING, TEST_MOVES)
    if target == TestState.PENDING:
        machine.set_state(target)
        assert machine.state == TestState.PENDING
    else:
        with pytest.raises(InvalidMoveError):
            machine.set_state(target)
