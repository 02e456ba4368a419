# Directory: assignment/loader.py
"""
Candidate loading for task assignment.
"""
from typing import Tuple

from errors import AssignmentError, EmptyProjectError, PersistenceError
from models import Member, Project
from storage.interfaces import AssignmentRepository
from utils.logger import logger


class CandidateLoader:
    """Resolves the members of a project into full candidate records."""

    def __init__(self, repository: AssignmentRepository):
        self.repository = repository

    def load(self, project_id: str) -> Tuple[Project, Tuple[Member, ...]]:
        """
        Load a project and the full records of its members.

        Args:
            project_id: Identifier of the project

        Returns:
            Tuple[Project, Tuple[Member, ...]]: The project and its members in
            project order

        Raises:
            NotFoundError: If the project does not exist
            EmptyProjectError: If no member entry resolves to a user
            PersistenceError: If the data-access layer fails
        """
        try:
            project = self.repository.load_project_with_members(project_id)
        except AssignmentError:
            raise
        except Exception as e:
            raise PersistenceError(f"failed to load project {project_id}: {e}") from e

        logger.info(f"Project found: {project.name} ({len(project.members)} entries)")

        if not project.members:
            raise EmptyProjectError(f"project {project.name} has no members")

        # Drop entries whose user record is missing
        member_ids = []
        for entry in project.members:
            if entry.user is None:
                logger.debug(f"Skipping member entry without user in project {project.id}")
                continue
            if entry.user.id not in member_ids:
                member_ids.append(entry.user.id)

        if not member_ids:
            raise EmptyProjectError(f"project {project.name} has no valid members")

        try:
            loaded = self.repository.load_users_by_ids(member_ids)
        except AssignmentError:
            raise
        except Exception as e:
            raise PersistenceError(f"failed to load members of {project_id}: {e}") from e

        by_id = {m.id: m for m in loaded}
        members = tuple(by_id[i] for i in member_ids if i in by_id)

        if not members:
            raise EmptyProjectError(f"no member of project {project.name} is available")

        logger.info(f"Loaded {len(members)} candidate members")
        return project, members
