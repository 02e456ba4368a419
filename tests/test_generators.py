# Directory: tests/test_generators.py
import json
import logging
import sys

from openpyxl import load_workbook

import main
from analysis.report import export_to_excel
from assignment.greedy import GreedyAssigner
from config import AppConfig
from models import EXPERIENCE_LEVELS, TASK_TYPES
from utils.generators import DataGenerator
from utils.logger import setup_logger
from utils.validators import validate_tasks


def test_generation_is_deterministic():
    first = DataGenerator(seed=5).generate_scenario(6, 10)
    second = DataGenerator(seed=5).generate_scenario(6, 10)

    assert [t.title for t in first[2]] == [t.title for t in second[2]]
    assert [m.username for m in first[0].members] == [m.username for m in second[0].members]


def test_scenario_contents():
    repository, project, tasks = DataGenerator(seed=1).generate_scenario(8, 15)

    assert len(project.members) == 8
    assert len(tasks) == 15
    assert len(repository.tasks) == 15
    assert validate_tasks(tasks)
    for member in repository.members:
        assert member.resolved_experience_level in EXPERIENCE_LEVELS
        assert 1 <= len(member.skills) <= 4
    for index, task in enumerate(tasks):
        assert task.task_type in TASK_TYPES
        assert 1 <= task.complexity <= 10
        # dependencies only point backwards
        assert all(int(dep[1:]) <= index for dep in task.dependencies)
        if task.dependencies:
            assert task.status == "pending"


def test_skill_catalogue_covers_task_types():
    skills = DataGenerator().generate_skills()
    names = [s.name for s in skills]
    assert len(names) == len(set(names))
    assert {"React", "Docker", "Communication"} <= set(names)
    assert [s.id for s in skills[:2]] == ["S1", "S2"]


def test_simulation_accounts_for_every_open_task():
    results = main.run_simulation(AppConfig(seed=3), num_members=10, num_tasks=20)

    open_tasks = [t for t in results["tasks"] if t.status != "completed"]
    assert len(results["results"]) + len(results["failures"]) == len(open_tasks)

    eligible = {m.id for m in results["members_before"] if m.role == "user"}
    assert all(r.member.id in eligible for r in results["results"])
    assert all(0 <= r.score <= 100 for r in results["results"])


def test_simulation_workload_matches_assigned_hours():
    config = AppConfig(seed=11)
    results = main.run_simulation(config, num_members=6, num_tasks=12)

    added = {}
    for r in results["results"]:
        hours = r.task.resolved_estimated_hours(config.default_estimated_hours)
        added[r.member.id] = added.get(r.member.id, 0) + hours

    after = {m.id: m.resolved_workload for m in results["members_after"]}
    for member in results["members_before"]:
        assert after[member.id] == member.resolved_workload + added.get(member.id, 0)


def test_excel_report(tmp_path):
    results = main.run_simulation(AppConfig(seed=2), num_members=5, num_tasks=8)
    path = tmp_path / "report.xlsx"

    ok = export_to_excel(
        str(path),
        results["members_before"],
        results["members_after"],
        results["tasks"],
        results["results"],
        results["failures"],
    )

    assert ok
    workbook = load_workbook(path)
    assert workbook.sheetnames == ["Members", "Tasks", "Assignments", "Workload"]
    assert workbook["Assignments"].max_row == len(results["tasks"]) + 1


def test_excel_report_unwritable_path(tmp_path):
    missing_dir = tmp_path / "missing" / "report.xlsx"
    assert not export_to_excel(str(missing_dir), [], [], [], [], {})


def test_cli_writes_summary(tmp_path, monkeypatch):
    monkeypatch.setattr(
        sys,
        "argv",
        ["task-autoassign", "--members", "4", "--tasks", "6", "--seed", "8", "--output-dir", str(tmp_path)],
    )

    main.main()

    summary = json.loads((tmp_path / "assignment_summary.json").read_text())
    assert summary["project"] == "P1"
    assert summary["config"]["SEED"] == 8
    assert (tmp_path / "assignment_report.xlsx").exists()


def test_simulation_scores_against_the_scenario_start(monkeypatch):
    clocks = []

    class RecordingAssigner(GreedyAssigner):
        def __init__(self, repository, config=None, clock=None):
            clocks.append(clock)
            super().__init__(repository, config, clock)

    monkeypatch.setattr(main, "GreedyAssigner", RecordingAssigner)
    main.run_simulation(AppConfig(seed=4), num_members=4, num_tasks=5)

    assert len(clocks) == 1
    assert clocks[0]() == DataGenerator().config["start_date"]


def test_simulation_skips_ranking_table_unless_debugging(monkeypatch):
    setup_logger(level=logging.INFO)

    def fail(ranking):
        raise AssertionError("ranking table built with DEBUG disabled")

    monkeypatch.setattr(main, "ranking_frame", fail)
    results = main.run_simulation(AppConfig(seed=6), num_members=4, num_tasks=6)

    assert results["metrics"]
