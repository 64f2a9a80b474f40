"""Tests for the side-artifact readers: tasks, todos, plans, projects, skills, stats."""

import orjson
import pytest

from claude_session_insights.services.plan_reader import read_plans, summarize_plan
from claude_session_insights.services.project_reader import (
    MEMORY_SNIPPET_LENGTH,
    read_project_memories,
    read_project_memory,
    read_projects,
)
from claude_session_insights.services.skill_reader import read_skill_content, read_skills
from claude_session_insights.services.stats_reader import read_stats
from claude_session_insights.services.task_reader import read_tasks, read_todos
from claude_session_insights.types import PrivacyConfig
from claude_session_insights.utils.path_codec import encode_path
from claude_session_insights.utils.privacy_profiles import LOCAL_PROFILE
from helpers import DAY, PROJECT, set_mtime


def _write_json(path, data, day=DAY):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(data) if not isinstance(data, str) else data.encode())
    set_mtime(path, day)
    return path


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------

class TestReadTasks:
    def test_reported_statuses_only(self, paths):
        session = paths.tasks_dir / "sess-1"
        _write_json(session / "1.json", {
            "id": "1", "subject": "Add parser", "status": "completed",
            "description": "d", "blocks": ["2"], "blockedBy": [],
        })
        _write_json(session / "2.json", {"id": "2", "subject": "Wire CLI", "status": "in_progress"})
        _write_json(session / "3.json", {"id": "3", "subject": "Later", "status": "pending"})
        _write_json(session / "4.json", {"id": "4", "status": "completed"})

        tasks = read_tasks(paths.tasks_dir, DAY, DAY)
        assert [t.id for t in tasks] == ["1", "2"]
        assert tasks[0].session_dir == "sess-1"
        assert tasks[0].blocks == ["2"]
        assert tasks[1].status == "in_progress"

    def test_mtime_window(self, paths):
        _write_json(paths.tasks_dir / "s" / "old.json", {"subject": "Old", "status": "completed"}, day="2026-01-01")
        assert read_tasks(paths.tasks_dir, DAY, DAY) == []
        tasks = read_tasks(paths.tasks_dir, "2026-01-01", DAY)
        assert tasks[0].id == "old"

    def test_malformed_and_missing(self, paths):
        _write_json(paths.tasks_dir / "s" / "bad.json", "{nope")
        assert read_tasks(paths.tasks_dir, DAY, DAY) == []
        assert read_tasks(paths.base / "missing", DAY, DAY) == []


# ---------------------------------------------------------------------------
# Todos
# ---------------------------------------------------------------------------

class TestReadTodos:
    def test_list_and_single(self, paths):
        _write_json(paths.todos_dir / "abc.json", [
            {"content": "write tests", "status": "completed"},
            {"content": "ship", "status": "pending", "id": "t2"},
            {"status": "pending"},
        ])
        _write_json(paths.todos_dir / "single.json", {"content": "refactor"})

        todos = read_todos(paths.todos_dir, DAY, DAY)
        assert [t.content for t in todos] == ["write tests", "ship", "refactor"]
        assert todos[0].id == "abc-0"
        assert todos[1].id == "t2"
        assert todos[2].id == "single"
        assert todos[2].status == "unknown"

    def test_outside_window(self, paths):
        _write_json(paths.todos_dir / "old.json", [{"content": "x"}], day="2026-01-01")
        assert read_todos(paths.todos_dir, DAY, DAY) == []


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------

class TestPlans:
    def test_summarize_plan(self):
        title, snippet = summarize_plan("p.md", "# Migrate DB\n\n## Steps\nOne\n\nTwo\nThree\nFour\n")
        assert title == "Migrate DB"
        assert snippet == "One Two Three"

    def test_title_falls_back_to_stem(self):
        title, _ = summarize_plan("quiet-fox.md", "no heading here")
        assert title == "quiet-fox"

    def test_snippet_capped(self):
        _, snippet = summarize_plan("p.md", "x" * 1000)
        assert len(snippet) == 300

    def test_read_plans(self, paths):
        plan = paths.plans_dir / "plan-a.md"
        plan.parent.mkdir(parents=True)
        plan.write_text("# Plan A\nbody\n")
        set_mtime(plan)
        old = paths.plans_dir / "plan-b.md"
        old.write_text("# Plan B\n")
        set_mtime(old, "2026-01-01")

        plans = read_plans(paths.plans_dir, DAY, DAY)
        assert [p.title for p in plans] == ["Plan A"]
        assert plans[0].content is None
        assert read_plans(paths.plans_dir, DAY, DAY, include_content=True)[0].content == "# Plan A\nbody\n"


# ---------------------------------------------------------------------------
# Projects and memory
# ---------------------------------------------------------------------------

class TestProjects:
    def _make_project(self, paths, project, sessions=1, memory=None):
        project_dir = paths.projects_dir / encode_path(project)
        project_dir.mkdir(parents=True, exist_ok=True)
        for i in range(sessions):
            (project_dir / f"s{i}.jsonl").write_text("")
        if memory is not None:
            (project_dir / "memory").mkdir()
            (project_dir / "memory" / "MEMORY.md").write_text(memory)
        return project_dir

    def test_read_projects(self, paths):
        self._make_project(paths, PROJECT, sessions=2, memory="# Notes")
        self._make_project(paths, "/home/wiz/secret", sessions=1)
        (paths.projects_dir / ".hidden").mkdir()

        projects = read_projects(paths.projects_dir, LOCAL_PROFILE)
        assert [p.name for p in projects] == ["myapp", "secret"]
        assert projects[0].decoded_path == PROJECT
        assert projects[0].encoded_path == "-home-wiz-projects-myapp"
        assert projects[0].session_count == 2
        assert projects[0].has_memory
        assert not projects[1].has_memory

    def test_excluded_projects_hidden(self, paths):
        self._make_project(paths, "/home/wiz/secret")
        privacy = PrivacyConfig(exclude_projects=("secret",))
        assert read_projects(paths.projects_dir, privacy) == []

    def test_memory_capped(self, paths):
        self._make_project(paths, PROJECT, memory="m" * 5000)
        memory = read_project_memory(PROJECT, paths.projects_dir)
        assert memory.project_name == "myapp"
        assert len(memory.content) == MEMORY_SNIPPET_LENGTH

    def test_blank_or_missing_memory(self, paths):
        self._make_project(paths, PROJECT, memory="  \n")
        assert read_project_memory(PROJECT, paths.projects_dir) is None
        assert read_project_memory("/nowhere", paths.projects_dir) is None

    def test_memories_keyed_by_project_path(self, paths):
        self._make_project(paths, PROJECT, memory="remember this")
        memories = read_project_memories([PROJECT, PROJECT, "/nowhere"], paths.projects_dir)
        assert memories == {PROJECT: "remember this"}


# ---------------------------------------------------------------------------
# Skills and stats
# ---------------------------------------------------------------------------

class TestSkillsAndStats:
    def test_skills(self, paths):
        for name in ("review", "deploy"):
            (paths.skills_dir / name).mkdir(parents=True)
            (paths.skills_dir / name / "SKILL.md").write_text(f"# {name}")
        (paths.skills_dir / "empty").mkdir()

        assert read_skills(paths.skills_dir) == ["deploy", "review"]
        assert read_skill_content(paths.skills_dir, "review") == "# review"

    def test_unknown_skill(self, paths):
        with pytest.raises(FileNotFoundError, match="Skill not found: nope"):
            read_skill_content(paths.skills_dir, "nope")

    def test_skill_name_cannot_escape(self, paths):
        with pytest.raises(FileNotFoundError):
            read_skill_content(paths.skills_dir, "../secrets")

    def test_stats(self, paths):
        assert read_stats(paths.stats_cache) is None
        paths.stats_cache.write_bytes(orjson.dumps({"totalSessions": 5}))
        assert read_stats(paths.stats_cache) == {"totalSessions": 5}
        paths.stats_cache.write_text("{broken")
        assert read_stats(paths.stats_cache) is None
