# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import asyncio
from typing import Any, List, Tuple

import pytest

from tom.core.node import TestNode


class EventRecorder:
    """Catch-all listener recording (event name, target name, args) tuples."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, str, Tuple[Any, ...]]] = []

    def __call__(self, event_name, target, *args) -> None:
        self.events.append((event_name, target.name, args))

    def attach(self, emitter) -> "EventRecorder":
        emitter.on(self, with_target=True)
        return self

    @property
    def names(self) -> List[str]:
        return [name for name, _, _ in self.events]

    def names_for(self, target_name: str) -> List[str]:
        return [name for name, target, _ in self.events if target == target_name]


@pytest.fixture
def recorder():
    """Factory attaching a fresh EventRecorder to an emitter."""

    def _attach(emitter) -> EventRecorder:
        return EventRecorder().attach(emitter)

    return _attach


@pytest.fixture
def root():
    """An empty root test node."""
    return TestNode("root")


@pytest.fixture
def sample_tree(root):
    """
    A small tree:

        root
          - one
          - group
              - two
              - three
    """
    root.test("one", lambda: 1)
    group = root.group("group")
    group.test("two", lambda: 2)
    group.test("three", lambda: 3)
    return root


@pytest.fixture
def slow_body():
    """Factory for an async body that resolves ``value`` after ``delay`` seconds."""

    def _factory(delay: float, value: Any = "ok"):
        async def body():
            await asyncio.sleep(delay)
            return value

        return body

    return _factory
