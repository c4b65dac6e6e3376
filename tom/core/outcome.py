# tom/core/outcome.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import inspect
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable


class OutcomeKind(Enum):
    """How a test body completed when it was called."""

    VALUE = auto()  # Returned synchronously
    ERROR = auto()  # Raised synchronously
    DEFERRED = auto()  # Returned an awaitable still to settle


@dataclass(frozen=True)
class Outcome:
    """
    Result of calling a test body: an immediate value, an immediate error or a
    deferred awaitable.
    """

    kind: OutcomeKind
    value: Any = None

    @classmethod
    def capture(cls, fn: Callable[..., Any], *args: Any) -> "Outcome":
        """
        Call ``fn`` and classify what it produced.

        :param fn: The callable to invoke.
        :param args: Positional arguments for ``fn``.
        :return: The classified outcome. Exceptions are captured, not raised.
        """
        try:
            result = fn(*args)
        except Exception as err:
            return cls(OutcomeKind.ERROR, err)
        if inspect.isawaitable(result):
            return cls(OutcomeKind.DEFERRED, result)
        return cls(OutcomeKind.VALUE, result)

    @property
    def is_deferred(self) -> bool:
        return self.kind is OutcomeKind.DEFERRED
