# Directory: tests/conftest.py
"""Fixtures and helpers for assignment engine tests."""
from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

import pytest

from config import AppConfig
from models import Member, MemberSkill, Project, ProjectMember, RequiredSkill, Skill
from storage.memory import InMemoryRepository

NOW = datetime(2025, 3, 1, 12, 0)

REACT = Skill(id="S1", name="React")
NODE = Skill(id="S2", name="Node.js")
DOCKER = Skill(id="S3", name="Docker")
FIGMA = Skill(id="S4", name="Figma")
COMMUNICATION = Skill(id="S5", name="Communication")


def make_member(
    member_id: str,
    skills: Sequence[Tuple[Skill, int]] = (),
    required: Sequence[Tuple[Optional[Skill], Optional[int]]] = (),
    **kwargs,
) -> Member:
    """Build a member from (skill, level) pairs."""
    kwargs.setdefault("username", member_id.lower())
    return Member(
        id=member_id,
        skills=[MemberSkill(skill=s, proficiency_level=lvl) for s, lvl in skills],
        required_skills=[RequiredSkill(skill=s, minimum_level=lvl) for s, lvl in required],
        **kwargs,
    )


def make_project(
    members: List[Member], deadline: Optional[datetime] = None, project_id: str = "P1"
) -> Project:
    return Project(
        id=project_id,
        name=f"Project {project_id}",
        deadline=deadline,
        members=[ProjectMember(user=m) for m in members],
    )


def days_from_now(days: float) -> datetime:
    return NOW + timedelta(days=days)


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def seeded(repository):
    """Store a project built from the given members and return the repository."""

    def _seed(members: List[Member], deadline: Optional[datetime] = None, tasks=()):
        repository.add_project(make_project(members, deadline))
        for task in tasks:
            repository.add_task(task)
        return repository

    return _seed
