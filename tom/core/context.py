# tom/core/context.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class TestContext:
    """
    The per-run context handed to a test body. A fresh context is built for
    every run and kept on the node afterwards for inspection.
    """

    __test__ = False

    name: str
    index: int
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TestStats:
    """Wall-clock timing of the most recent run."""

    __test__ = False

    start: Optional[float] = None
    end: Optional[float] = None

    def start_clock(self) -> None:
        self.start = time.time()
        self.end = None

    def stop_clock(self) -> None:
        self.end = time.time()

    @property
    def duration(self) -> Optional[float]:
        """Elapsed milliseconds, or None if the clock has not been stopped."""
        if self.start is None or self.end is None:
            return None
        return (self.end - self.start) * 1000
