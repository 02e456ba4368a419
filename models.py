# Directory: models.py
"""
Core data models for the task auto-assignment engine.
"""
from dataclasses import dataclass, field
from typing import Set, List, Optional
from datetime import datetime

EXPERIENCE_LEVELS = ("intern", "junior", "mid-level", "senior", "expert", "lead")

TASK_TYPES = (
    "development",
    "design",
    "testing",
    "documentation",
    "bug-fix",
    "feature",
    "maintenance",
    "JAVA",
    "other",
)

TASK_STATUSES = (
    "pending",
    "in-progress",
    "completed",
    "in-review",
    "to-do",
    "backlog",
    "no-status",
)

DEFAULT_WORKLOAD = 0.0
DEFAULT_AVAILABILITY = 100.0
DEFAULT_EXPERIENCE_LEVEL = "mid-level"
DEFAULT_PERFORMANCE_RATING = 3.0
DEFAULT_MINIMUM_LEVEL = 1


@dataclass(frozen=True)
class Skill:
    """A named skill from the skill catalogue."""

    id: str
    name: str


@dataclass(frozen=True)
class MemberSkill:
    """A skill held by a member with a 1-5 proficiency level."""

    skill: Optional[Skill]
    proficiency_level: int


@dataclass(frozen=True)
class RequiredSkill:
    """A skill a member is expected to hold for their domain."""

    skill: Optional[Skill]
    minimum_level: Optional[int] = None

    @property
    def resolved_minimum_level(self) -> int:
        if self.minimum_level is None:
            return DEFAULT_MINIMUM_LEVEL
        return self.minimum_level


@dataclass
class Member:
    """Project member that can receive automatically assigned tasks."""

    id: str
    username: str
    role: str = "user"
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    skills: List[MemberSkill] = field(default_factory=list)
    required_skills: List[RequiredSkill] = field(default_factory=list)
    workload: Optional[float] = None
    availability: Optional[float] = None
    experience_level: Optional[str] = None
    performance_rating: Optional[float] = None
    version: int = 0

    def __post_init__(self):
        """Initialize default values for collections if None."""
        if self.skills is None:
            self.skills = []
        if self.required_skills is None:
            self.required_skills = []

    def __repr__(self) -> str:
        """Improved string representation for debugging."""
        return (
            f"Member({self.id}, username={self.username}, role={self.role}, "
            f"level={self.resolved_experience_level}, "
            f"workload={self.resolved_workload}, "
            f"availability={self.resolved_availability})"
        )

    @property
    def display_name(self) -> str:
        """Name used in log lines."""
        return self.username or self.email or self.id

    # Explicit default resolution: None means unset, 0 is a real value.

    @property
    def resolved_workload(self) -> float:
        return DEFAULT_WORKLOAD if self.workload is None else self.workload

    @property
    def resolved_availability(self) -> float:
        return DEFAULT_AVAILABILITY if self.availability is None else self.availability

    @property
    def resolved_experience_level(self) -> str:
        return self.experience_level or DEFAULT_EXPERIENCE_LEVEL

    @property
    def resolved_performance_rating(self) -> float:
        if self.performance_rating is None:
            return DEFAULT_PERFORMANCE_RATING
        return self.performance_rating


@dataclass
class MemberSummary:
    """Reduced member projection returned to callers after an assignment."""

    id: str
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    @classmethod
    def from_member(cls, member: Member) -> "MemberSummary":
        return cls(
            id=member.id,
            username=member.username,
            first_name=member.first_name,
            last_name=member.last_name,
        )


@dataclass
class Task:
    """Task model representing a work item to be assigned to a member."""

    id: str
    title: str = ""
    task_type: Optional[str] = None
    complexity: Optional[int] = None
    dependencies: Set[str] = field(default_factory=set)
    due_date: Optional[datetime] = None
    estimated_hours: Optional[float] = None
    status: str = "pending"
    assigned_to: Optional[str] = None
    auto_assigned: bool = False
    project_id: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if self.dependencies is None:
            self.dependencies = set()

    def __repr__(self) -> str:
        """Improved string representation for debugging."""
        return (
            f"Task({self.id}, title={self.title}, type={self.task_type}, "
            f"complexity={self.complexity}, status={self.status}, "
            f"deps={self.dependencies})"
        )

    def resolved_estimated_hours(self, default: float) -> float:
        """Return the estimate, or ``default`` when the task has none."""
        return default if self.estimated_hours is None else self.estimated_hours


@dataclass
class ProjectMember:
    """Membership entry of a project. ``user`` is None when the record is gone."""

    user: Optional[Member]
    role: str = "member"


@dataclass
class Project:
    """Project holding the member pool for assignment."""

    id: str
    name: str
    deadline: Optional[datetime] = None
    members: List[ProjectMember] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"Project({self.id}, name={self.name}, deadline={self.deadline}, "
            f"members={len(self.members)})"
        )
