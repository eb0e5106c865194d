"""
Hot path profiling tests.

Profiling is switched on by JSONVALUE_PROFILE at import time, so these tests
check whichever mode the test run was started in.
"""

import jsonvalue
from jsonvalue import _profile


def test_profile_context_accepts_late_chars() -> None:
    with _profile.ProfileContext("custom", 10) as ctx:
        ctx.chars = 12

    assert ctx.chars == 12
    jsonvalue.clear_hot_path_stats()


def test_stats_follow_profiling_mode() -> None:
    jsonvalue.clear_hot_path_stats()

    jsonvalue.parse('{"a": ["x", 1.5]}').to_text()
    stats = jsonvalue.get_hot_path_stats()

    if not _profile.PROFILE_HOT_PATHS:
        assert stats == {}
        return

    assert stats["parse_value"].call_count == 1
    assert stats["parse_value"].chars_processed == 17
    assert stats["parse_string"].call_count == 2
    assert stats["parse_number"].call_count == 1
    assert stats["render_value"].call_count == 1
    assert stats["render_value"].chars_processed == len('{"a":["x",1.5]}')

    jsonvalue.clear_hot_path_stats()
    assert jsonvalue.get_hot_path_stats() == {}


def test_hot_path_stats_accumulate() -> None:
    stats = jsonvalue.HotPathStats("parse_value")

    stats.record_call(100, chars=5)
    stats.record_call(50)

    assert stats.call_count == 2
    assert stats.total_time_ns == 150
    assert stats.chars_processed == 5
    assert stats.mean_time_ns == 75


def test_mean_time_without_calls() -> None:
    assert jsonvalue.HotPathStats("render_value").mean_time_ns == 0.0
