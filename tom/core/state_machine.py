# tom/core/state_machine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Hashable, List, Tuple, Union

from tom.core.emitter import Emitter
from tom.core.errors import InvalidMoveError
from tom.core.types import Move, event_name_of

logger = logging.getLogger(__name__)

MoveSpec = Union[Move, Mapping, Tuple[Any, Any]]


def _as_states(value: Any) -> Tuple[Hashable, ...]:
    """Normalise one side of a move to a tuple of states."""
    if value is None:
        return (None,)
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return (value,)
    return tuple(value)


def _as_move(spec: MoveSpec) -> Move:
    if isinstance(spec, Move):
        return Move(_as_states(spec.sources), _as_states(spec.targets))
    if isinstance(spec, Mapping):
        return Move(_as_states(spec.get("from")), _as_states(spec.get("to")))
    sources, targets = spec
    return Move(_as_states(sources), _as_states(targets))


class StateMachine(Emitter):
    """
    A finite state machine that only permits moves along a declared edge set.

    Every successful move emits ``state(new, prev)`` followed by an event
    named after the new state. ``reset_state`` bypasses validation and
    returns the machine to its initial state.
    """

    def __init__(self, initial_state: Hashable, valid_moves: Iterable[MoveSpec]) -> None:
        """
        :param initial_state: The state the machine starts (and resets) in.
        :param valid_moves: Declared edges; each a ``Move``, a ``(from, to)``
            pair or a mapping with ``from``/``to`` keys. Either side may be a
            single state or an iterable of states.
        """
        super().__init__()
        self._valid_moves: List[Move] = [_as_move(move) for move in valid_moves]
        self._initial_state = initial_state
        self._state = initial_state

    @property
    def state(self) -> Hashable:
        """The current state. Assigning to it performs a validated move."""
        return self._state

    @state.setter
    def state(self, value: Hashable) -> None:
        self.set_state(value)

    @property
    def initial_state(self) -> Hashable:
        """The state restored by ``reset_state``."""
        return self._initial_state

    def valid_sources(self, state: Hashable) -> List[Hashable]:
        """Return every state from which ``state`` may be entered, in declaration order."""
        sources = []
        for move in self._valid_moves:
            if state in move.targets:
                sources.extend(source for source in move.sources if source not in sources)
        return sources

    def can_move(self, state: Hashable) -> bool:
        """Return True if moving from the current state to ``state`` is declared."""
        return any(self._state in move.sources and state in move.targets for move in self._valid_moves)

    def set_state(self, state: Hashable, *args: Any) -> None:
        """
        Move to ``state``. Extra arguments are passed to the state event.

        :param state: The target state.
        :raises InvalidMoveError: If no declared edge leads to ``state`` from
            the current state. The current state is left unchanged.
        """
        if state == self._state:
            return

        if not any(state in move.targets for move in self._valid_moves):
            raise InvalidMoveError(f"Invalid state: {event_name_of(state)}", state=state, current=self._state)

        if not self.can_move(state):
            froms = self.valid_sources(state)
            allowed = " or ".join(f"'{event_name_of(s)}'" for s in froms) or "<unspecified>"
            raise InvalidMoveError(
                f"Can only move to '{event_name_of(state)}' from {allowed} (not '{event_name_of(self._state)}')",
                state=state,
                current=self._state,
                valid_from=froms,
            )

        prev_state = self._state
        self._state = state
        logger.debug("%r moved from %s to %s", self, event_name_of(prev_state), event_name_of(state))
        self.emit("state", state, prev_state)
        self.emit(event_name_of(state), *args)

    def reset_state(self) -> None:
        """Unconditionally restore the initial state and emit ``reset(prev)``."""
        prev_state = self._state
        self._state = self._initial_state
        self.emit("reset", prev_state)
