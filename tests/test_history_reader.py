"""Tests for grouping history.jsonl prompts into sessions."""

from claude_session_insights.services.history_reader import (
    filter_by_project,
    parse_history_record,
    read_history,
)
from claude_session_insights.types import PrivacyConfig, TimeRange
from claude_session_insights.utils.privacy_profiles import (
    LOCAL_PROFILE,
    SHAREABLE_PROFILE,
    STRICT_PROFILE,
)
from claude_session_insights.utils.redaction import REDACTED_PROMPT
from helpers import DAY, PROJECT, history_row, local_ms

OTHER_PROJECT = "/home/wiz/projects/other"


def _read(paths, privacy=LOCAL_PROFILE, from_date=DAY, to_date=DAY):
    return read_history(paths.history_file, from_date, to_date, privacy)


class TestParseHistoryRecord:
    def test_valid(self):
        record = parse_history_record(history_row("s1", "hi", 1000))
        assert record.session_id == "s1"
        assert record.timestamp == 1000
        assert record.project == PROJECT

    def test_missing_session_id(self):
        assert parse_history_record({"display": "x", "timestamp": 1}) is None

    def test_non_numeric_timestamp(self):
        assert parse_history_record({"sessionId": "s", "timestamp": "2026-02-09"}) is None
        assert parse_history_record({"sessionId": "s", "timestamp": True}) is None

    def test_missing_display_defaults(self):
        record = parse_history_record({"sessionId": "s", "timestamp": 1})
        assert record.display == ""
        assert record.project == ""


class TestReadHistory:
    def test_groups_prompts_by_session(self, paths, write_history):
        write_history([
            history_row("s1", "first", local_ms(hour=10)),
            history_row("s2", "other work", local_ms(hour=9), project=OTHER_PROJECT),
            history_row("s1", "second", local_ms(hour=10, minute=5)),
        ])
        sessions = _read(paths)

        assert [s.session_id for s in sessions] == ["s2", "s1"]
        s1 = sessions[1]
        assert s1.prompts == ["first", "second"]
        assert s1.prompt_timestamps == [local_ms(hour=10), local_ms(hour=10, minute=5)]
        assert s1.time_range == TimeRange(local_ms(hour=10), local_ms(hour=10, minute=5))
        assert s1.project_name == "myapp"
        assert sessions[0].project_name == "other"

    def test_time_range_spans_min_max(self, paths, write_history):
        write_history([
            history_row("s1", "late", local_ms(hour=11)),
            history_row("s1", "early", local_ms(hour=9)),
        ])
        session = _read(paths)[0]
        assert session.time_range.start == local_ms(hour=9)
        assert session.time_range.end == local_ms(hour=11)
        assert session.time_range.start <= min(session.prompt_timestamps)

    def test_date_window(self, paths, write_history):
        write_history([
            history_row("before", "x", local_ms("2026-02-08", 23, 59)),
            history_row("inside", "x", local_ms(DAY, 0, 0)),
            history_row("after", "x", local_ms("2026-02-10", 0, 0)),
        ])
        assert [s.session_id for s in _read(paths)] == ["inside"]
        assert len(_read(paths, from_date="2026-02-08", to_date="2026-02-10")) == 3

    def test_session_spanning_days_keeps_only_window_prompts(self, paths, write_history):
        write_history([
            history_row("s1", "yesterday", local_ms("2026-02-08", 23, 50)),
            history_row("s1", "today", local_ms(DAY, 0, 10)),
        ])
        assert _read(paths)[0].prompts == ["today"]

    def test_first_project_wins(self, paths, write_history):
        write_history([
            history_row("s1", "a", local_ms(hour=10)),
            history_row("s1", "b", local_ms(hour=11), project=OTHER_PROJECT),
        ])
        session = _read(paths)[0]
        assert session.project == PROJECT
        assert session.prompts == ["a", "b"]

    def test_excluded_projects_dropped(self, paths, write_history):
        write_history([
            history_row("s1", "a", local_ms(hour=10)),
            history_row("s2", "b", local_ms(hour=11), project=OTHER_PROJECT),
        ])
        privacy = PrivacyConfig(exclude_projects=("OTHER",))
        assert [s.session_id for s in _read(paths, privacy)] == ["s1"]

    def test_strict_redacts_every_prompt(self, paths, write_history):
        write_history([
            history_row("s1", "fix the login bug", local_ms(hour=10)),
            history_row("s1", "now add tests", local_ms(hour=10, minute=1)),
        ])
        local = _read(paths, LOCAL_PROFILE)[0]
        strict = _read(paths, STRICT_PROFILE)[0]
        assert strict.prompts == [REDACTED_PROMPT, REDACTED_PROMPT]
        assert all(a != b for a, b in zip(local.prompts, strict.prompts))

    def test_shareable_redacts_paths_in_prompts(self, paths, write_history, home_dir):
        write_history([history_row("s1", "look at /home/wiz/projects/myapp/a.py", local_ms())])
        assert _read(paths, SHAREABLE_PROFILE)[0].prompts == ["look at ~/projects/myapp/a.py"]

    def test_skips_malformed_rows(self, paths, write_history):
        write_history([
            "not json",
            {"display": "no session", "timestamp": local_ms()},
            history_row("s1", "ok", local_ms()),
        ])
        assert [s.session_id for s in _read(paths)] == ["s1"]

    def test_out_of_range_timestamp_skipped(self, paths, write_history):
        write_history([
            history_row("good", "hello", local_ms()),
            history_row("far-future", "corrupt", 10**17),
            history_row("far-past", "corrupt", -(10**17)),
        ])
        assert [s.session_id for s in _read(paths)] == ["good"]

    def test_missing_history_file(self, paths):
        assert _read(paths) == []


class TestFilterByProject:
    def test_case_insensitive_substring(self, paths, write_history):
        write_history([
            history_row("s1", "a", local_ms(hour=10)),
            history_row("s2", "b", local_ms(hour=11), project=OTHER_PROJECT),
        ])
        sessions = _read(paths)
        assert [s.session_id for s in filter_by_project(sessions, "MYA")] == ["s1"]
        assert filter_by_project(sessions, None) == sessions
        assert filter_by_project(sessions, "nope") == []
