# tom/core/options.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

"""
Per-test configuration.

Options are fixed when a test is created. The explicit skip/only marks held
here are never mutated; effective skipping is derived from them by the
tree-wide resolution pass in ``node.py``.
"""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Union

DEFAULT_NAME = "tom"
DEFAULT_TIMEOUT = 10000  # milliseconds
DEFAULT_MAX_CONCURRENCY = 10


@dataclass(frozen=True)
class TestOptions:
    """Configuration recognised by a test node.

    Attributes:
        timeout: Time limit for an asynchronous body, in milliseconds.
        max_concurrency: Hint for an external runner; not enforced here.
        skip: Explicit skip mark.
        only: Explicit only mark.
        todo: Marks a test as not yet written; the body is never run.
        before: Opaque ordering hint for an external runner.
        after: Opaque ordering hint for an external runner.
    """

    __test__ = False

    timeout: float = DEFAULT_TIMEOUT
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    skip: bool = False
    only: bool = False
    todo: bool = False
    before: bool = False
    after: bool = False

    def __post_init__(self) -> None:
        if self.timeout is None or self.timeout < 0:
            raise ValueError("timeout must be a non-negative number of milliseconds")
        if not self.max_concurrency or self.max_concurrency < 1:
            # A falsy value falls back to the default.
            object.__setattr__(self, "max_concurrency", DEFAULT_MAX_CONCURRENCY)

    @classmethod
    def from_value(
        cls, value: Optional[Union["TestOptions", Mapping[str, Any]]] = None, **overrides: Any
    ) -> "TestOptions":
        """Build options from None, a mapping or existing options plus keyword overrides.

        Raises:
            ValueError: If an unknown option name is given or a value is invalid
        """
        known = {f.name for f in fields(cls)}
        settings: Dict[str, Any] = {}
        if isinstance(value, TestOptions):
            settings.update(asdict(value))
        elif value is not None:
            settings.update(value)
        settings.update(overrides)
        unknown = sorted(set(settings) - known)
        if unknown:
            raise ValueError(f"Unknown test option(s): {', '.join(unknown)}")
        return cls(**settings)

    def with_marks(self, **marks: bool) -> "TestOptions":
        """Return a copy with the given marks applied."""
        return replace(self, **marks)
