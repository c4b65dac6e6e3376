"""
Runtime package for timed execution.

Architecture:
- Races a test body's deferred outcome against a timeout
- Leaves scheduling of tests to an external runner
"""

from .timeout import TimeoutRace, race

__all__ = ["TimeoutRace", "race"]
