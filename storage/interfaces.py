# Directory: storage/interfaces.py
"""
Interfaces for the data-access collaborator of the assignment engine.
"""
from abc import ABC, abstractmethod
from typing import Iterable, List
from models import Task, Member, Project


class AssignmentRepository(ABC):
    """Base interface for the persistence layer the engine reads and writes through."""

    @abstractmethod
    def load_project_with_members(self, project_id: str) -> Project:
        """
        Load a project with its member entries populated to full member records.

        Args:
            project_id: Identifier of the project

        Returns:
            Project: The project; entries whose user record is gone have ``user=None``

        Raises:
            NotFoundError: If the project does not exist
        """
        pass

    @abstractmethod
    def load_users_by_ids(self, ids: Iterable[str]) -> List[Member]:
        """
        Load members with skills and required skills populated.

        Unknown ids are skipped.
        """
        pass

    @abstractmethod
    def load_tasks_by_ids(self, ids: Iterable[str]) -> List[Task]:
        """Load tasks for dependency checks. Unknown ids are skipped."""
        pass

    @abstractmethod
    def save_task(self, task: Task) -> None:
        """Upsert a task."""
        pass

    @abstractmethod
    def save_member(self, member: Member) -> Member:
        """
        Update an existing member, guarded by its version.

        Args:
            member: Member snapshot carrying the version it was read at

        Returns:
            Member: The stored member with its new version

        Raises:
            NotFoundError: If the member no longer exists
            StaleMemberError: If the stored version differs from ``member.version``
        """
        pass
