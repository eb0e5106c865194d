"""
Opt-in hot path profiling for parsing and rendering.

Set JSONVALUE_PROFILE before importing jsonvalue to time the parser entry
point, string and number scanning, and rendering. Parsing records the size
of its input, rendering the size of its output. Without the variable every
hook is a no-op.
"""

import os
import time
from dataclasses import dataclass
from typing import Any

PROFILE_HOT_PATHS = __debug__ and "JSONVALUE_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Accumulated timings for one profiled section."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars

    @property
    def mean_time_ns(self) -> float:
        return self.total_time_ns / self.call_count if self.call_count else 0.0


_hot_path_stats: dict[str, HotPathStats] = {}


def _record(name: str, duration_ns: int, chars: int) -> None:
    stats = _hot_path_stats.get(name)
    if stats is None:
        stats = _hot_path_stats[name] = HotPathStats(name)
    stats.record_call(duration_ns, chars)


if PROFILE_HOT_PATHS:

    class ProfileContext:
        """
        Times the enclosed block under a section name.

        chars may be set inside the block when the amount of text handled is
        only known at the end, as with rendering.
        """

        def __init__(self, func_name: str, chars: int = 0) -> None:
            self.func_name = func_name
            self.chars = chars
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            _record(
                self.func_name,
                time.perf_counter_ns() - self.start_time,
                self.chars,
            )

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, chars: int = 0) -> None:
            self.chars = chars

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns a snapshot of the statistics, empty unless profiling is on."""
    return dict(_hot_path_stats)


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()
