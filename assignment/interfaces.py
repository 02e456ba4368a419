# Directory: assignment/interfaces.py
"""
Interfaces for task assignment models.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict

from models import Task, MemberSummary


@dataclass
class AssignmentResult:
    """Outcome of a successful assignment."""

    task: Task
    member: MemberSummary
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "task": {
                "id": self.task.id,
                "title": self.task.title,
                "assigned_to": self.task.assigned_to,
                "auto_assigned": self.task.auto_assigned,
            },
            "member": {
                "id": self.member.id,
                "username": self.member.username,
                "first_name": self.member.first_name,
                "last_name": self.member.last_name,
            },
            "score": self.score,
        }


class AssignmentModel(ABC):
    """Base interface for task assignment models."""

    @abstractmethod
    def assign(self, task: Task, project_id: str) -> AssignmentResult:
        """
        Assign a task to a member of a project.

        Args:
            task: Task to assign
            project_id: Project whose members are candidates

        Returns:
            AssignmentResult: Updated task, chosen member and score

        Raises:
            AssignmentError: If no member can be assigned
        """
        pass
