# Directory: tests/test_filters.py
import pytest

from assignment.filters import (
    EligibilityFilterChain,
    check_dependencies_completed,
    filter_by_availability,
    filter_by_experience,
    filter_by_role,
    filter_by_task_type_skills,
    has_required_skills_for_task_type,
    is_experience_appropriate,
)
from assignment.greedy import GreedyAssigner
from errors import DependenciesNotCompleteError, NoEligibleMembersError
from models import Skill, Task
from storage.memory import InMemoryRepository

from conftest import COMMUNICATION, DOCKER, FIGMA, NODE, REACT, make_member


class BrokenTaskRepository(InMemoryRepository):
    def load_tasks_by_ids(self, ids):
        raise RuntimeError("database unavailable")


class ForbiddenTaskRepository(InMemoryRepository):
    def load_tasks_by_ids(self, ids):
        raise AssertionError("dependencies should not be fetched")


def ids(members):
    return [m.id for m in members]


def test_role_filter_excludes_non_users(config):
    members = (
        make_member("U1"),
        make_member("U2", role="admin"),
        make_member("U3", role="TeamLeader"),
        make_member("U4", role="user", skills=[(REACT, 5)]),
    )
    assert ids(filter_by_role(members, config.filters)) == ["U1", "U4"]


def test_chain_fails_when_no_member_has_the_user_role(config):
    members = (make_member("U1", role="admin", skills=[(REACT, 5)], experience_level="lead"),)
    chain = EligibilityFilterChain(InMemoryRepository(), config)

    with pytest.raises(NoEligibleMembersError) as excinfo:
        chain.apply(Task(id="T1", task_type="development"), members)

    assert excinfo.value.reason == "no appropriate role"


@pytest.mark.parametrize(
    "workload, availability, kept",
    [
        (50, 20, False),
        (50, 40, True),
        (10, 0, True),
        (40, 30, False),
        (39.5, 30, True),
        (None, None, True),
    ],
)
def test_availability_is_an_inclusive_or(config, workload, availability, kept):
    member = make_member("U1", workload=workload, availability=availability)
    assert bool(filter_by_availability((member,), config.filters)) is kept


def test_chain_fails_when_nobody_is_available(config):
    members = (
        make_member("U1", workload=45, availability=10),
        make_member("U2", workload=60, availability=30),
    )
    chain = EligibilityFilterChain(InMemoryRepository(), config)

    with pytest.raises(NoEligibleMembersError) as excinfo:
        chain.apply(Task(id="T1"), members)

    assert excinfo.value.reason == "insufficient availability"


def test_task_type_skill_predicate(config):
    task = Task(id="T1", task_type="development")
    assert has_required_skills_for_task_type(make_member("U1", skills=[(REACT, 3)]), task, config.rules)
    assert not has_required_skills_for_task_type(make_member("U1", skills=[(REACT, 2)]), task, config.rules)
    assert not has_required_skills_for_task_type(make_member("U1"), task, config.rules)
    assert not has_required_skills_for_task_type(
        make_member("U1", skills=[(FIGMA, 5)]), task, config.rules
    )


def test_skill_without_level_does_not_qualify(config):
    task = Task(id="T1", task_type="development")
    member = make_member("U1", skills=[(REACT, None)])
    assert not has_required_skills_for_task_type(member, task, config.rules)

    members = (member, make_member("U2", skills=[(NODE, 4)]))
    assert ids(filter_by_task_type_skills(members, task, config.rules)) == ["U2"]


def test_member_with_unrated_skill_is_passed_over(seeded, clock):
    repository = seeded([make_member("U1", skills=[(REACT, None)]), make_member("U2", skills=[(NODE, 4)])])

    result = GreedyAssigner(repository, clock=clock).assign(Task(id="T1", task_type="development"), "P1")

    assert result.member.id == "U2"


def test_task_type_match_is_case_insensitive_substring(config):
    skill = Skill(id="S9", name="advanced reactjs")
    member = make_member("U1", skills=[(skill, 4)])
    assert has_required_skills_for_task_type(member, Task(id="T1", task_type="feature"), config.rules)


def test_java_task_type_has_keywords(config):
    member = make_member("U1", skills=[(Skill(id="S9", name="Spring Boot"), 3)])
    assert has_required_skills_for_task_type(member, Task(id="T1", task_type="JAVA"), config.rules)


@pytest.mark.parametrize("task_type", [None, "other", "research"])
def test_task_without_keywords_accepts_everyone(config, task_type):
    member = make_member("U1")
    assert has_required_skills_for_task_type(member, Task(id="T1", task_type=task_type), config.rules)


def test_skill_filter_keeps_only_skilled_members(config):
    members = (
        make_member("U1", skills=[(REACT, 2)]),
        make_member("U2", skills=[(REACT, 4)]),
        make_member("U3", skills=[(DOCKER, 5)]),
    )
    kept = filter_by_task_type_skills(members, Task(id="T1", task_type="development"), config.rules)
    assert ids(kept) == ["U2"]


def test_skill_filter_falls_back_to_available_members(config):
    members = (
        make_member("U1", skills=[(COMMUNICATION, 5)]),
        make_member("U2", role="admin"),
        make_member("U3", workload=50, availability=10),
        make_member("U4"),
    )
    chain = EligibilityFilterChain(InMemoryRepository(), config)

    eligible = chain.apply(Task(id="T1", task_type="maintenance"), members)

    assert ids(eligible) == ["U1", "U4"]


@pytest.mark.parametrize(
    "level, complexity, appropriate",
    [
        ("intern", 3, True),
        ("intern", 4, False),
        ("junior", 5, True),
        ("junior", 6, False),
        (None, 7, True),
        (None, 8, False),
        ("senior", 9, True),
        ("senior", 10, False),
        ("expert", 10, True),
        ("lead", 10, True),
        ("wizard", 7, True),
        ("wizard", 8, False),
        ("intern", None, True),
    ],
)
def test_experience_bands(config, level, complexity, appropriate):
    member = make_member("U1", experience_level=level)
    task = Task(id="T1", complexity=complexity)
    assert is_experience_appropriate(member, task, config.rules) is appropriate


def test_experience_filter(config):
    members = (
        make_member("U1", experience_level="intern"),
        make_member("U2", experience_level="senior"),
        make_member("U3", experience_level="expert"),
    )
    kept = filter_by_experience(members, Task(id="T1", complexity=8), config.rules)
    assert ids(kept) == ["U2", "U3"]


def test_experience_filter_falls_back_to_skill_survivors(config):
    members = (
        make_member("U1", skills=[(REACT, 4)], experience_level="intern"),
        make_member("U2", skills=[(REACT, 5)], experience_level="junior"),
        make_member("U3", skills=[(COMMUNICATION, 5)], experience_level="lead"),
    )
    chain = EligibilityFilterChain(InMemoryRepository(), config)

    # U3 fails the skill filter; U1 and U2 both fail the experience filter
    eligible = chain.apply(Task(id="T1", task_type="development", complexity=9), members)

    assert ids(eligible) == ["U1", "U2"]


def test_chain_keeps_project_order(config):
    members = tuple(make_member(f"U{i}", skills=[(REACT, 3)]) for i in (5, 2, 9, 1))
    chain = EligibilityFilterChain(InMemoryRepository(), config)
    eligible = chain.apply(Task(id="T1", task_type="development"), members)
    assert ids(eligible) == ["U5", "U2", "U9", "U1"]


def test_chain_returns_new_tuple(config):
    members = [make_member("U1"), make_member("U2")]
    chain = EligibilityFilterChain(InMemoryRepository(), config)
    eligible = chain.apply(Task(id="T1"), members)
    assert isinstance(eligible, tuple)
    assert ids(members) == ["U1", "U2"]


# Dependencies


def test_empty_dependencies_do_not_fetch_tasks(config):
    ok, incomplete = check_dependencies_completed(
        Task(id="T1"), ForbiddenTaskRepository(), config.filters
    )
    assert ok
    assert incomplete == ()


def test_completed_dependencies_pass(config):
    repository = InMemoryRepository()
    repository.add_task(Task(id="T0", status="completed"))
    repository.add_task(Task(id="T2", status="completed"))

    ok, _ = check_dependencies_completed(
        Task(id="T1", dependencies={"T0", "T2"}), repository, config.filters
    )
    assert ok


def test_incomplete_dependency_blocks_assignment(config):
    repository = InMemoryRepository()
    repository.add_task(Task(id="T0", status="completed"))
    repository.add_task(Task(id="T2", status="in-progress"))
    chain = EligibilityFilterChain(repository, config)

    with pytest.raises(DependenciesNotCompleteError) as excinfo:
        chain.apply(Task(id="T1", dependencies={"T0", "T2"}), (make_member("U1"),))

    assert excinfo.value.incomplete_ids == ["T2"]


def test_dependency_fetch_failure_fails_closed(config):
    chain = EligibilityFilterChain(BrokenTaskRepository(), config)
    with pytest.raises(DependenciesNotCompleteError):
        chain.apply(Task(id="T1", dependencies={"T0"}), (make_member("U1"),))


def test_unknown_dependencies_are_ignored(config):
    ok, incomplete = check_dependencies_completed(
        Task(id="T1", dependencies={"deleted"}), InMemoryRepository(), config.filters
    )
    assert ok
    assert incomplete == ()
