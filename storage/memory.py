# Directory: storage/memory.py
"""
In-memory implementation of the assignment repository.
"""
import threading
from copy import deepcopy
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Tuple

from errors import NotFoundError, StaleMemberError
from models import Task, Member, Project, ProjectMember
from storage.interfaces import AssignmentRepository
from utils.logger import logger


class InMemoryRepository(AssignmentRepository):
    """
    Thread-safe store of projects, members and tasks.

    Loads hand out deep copies so callers work on snapshots. Project membership
    is kept by member id, so a member removed from the store resolves to
    ``user=None`` in later project loads. Member saves are version checked under
    a per-member lock, which serializes concurrent workload updates.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._members: Dict[str, Member] = {}
        self._tasks: Dict[str, Task] = {}
        self._projects: Dict[str, Tuple[Project, List[Tuple[Optional[str], str]]]] = {}
        self._member_locks: Dict[str, threading.Lock] = {}

    def _member_lock(self, member_id: str) -> threading.Lock:
        with self._lock:
            if member_id not in self._member_locks:
                self._member_locks[member_id] = threading.Lock()
            return self._member_locks[member_id]

    # Seeding helpers

    def add_member(self, member: Member) -> None:
        with self._lock:
            self._members[member.id] = deepcopy(member)

    def remove_member(self, member_id: str) -> None:
        with self._lock:
            self._members.pop(member_id, None)

    def add_task(self, task: Task) -> None:
        with self._lock:
            self._tasks[task.id] = deepcopy(task)

    def add_project(self, project: Project) -> None:
        """Store a project; populated member records are stored as well."""
        entries = []
        for entry in project.members:
            if entry.user is not None:
                self.add_member(entry.user)
                entries.append((entry.user.id, entry.role))
            else:
                entries.append((None, entry.role))

        with self._lock:
            self._projects[project.id] = (replace(project, members=[]), entries)

    def get_member(self, member_id: str) -> Optional[Member]:
        with self._lock:
            member = self._members.get(member_id)
            return deepcopy(member) if member is not None else None

    def get_task(self, task_id: str) -> Optional[Task]:
        with self._lock:
            task = self._tasks.get(task_id)
            return deepcopy(task) if task is not None else None

    @property
    def members(self) -> List[Member]:
        with self._lock:
            return [deepcopy(m) for m in self._members.values()]

    @property
    def tasks(self) -> List[Task]:
        with self._lock:
            return [deepcopy(t) for t in self._tasks.values()]

    # AssignmentRepository

    def load_project_with_members(self, project_id: str) -> Project:
        with self._lock:
            stored = self._projects.get(project_id)
            if stored is None:
                raise NotFoundError(f"project {project_id} not found")

            project, entries = stored
            members = [
                ProjectMember(
                    user=deepcopy(self._members.get(user_id)) if user_id else None,
                    role=role,
                )
                for user_id, role in entries
            ]
            return replace(deepcopy(project), members=members)

    def load_users_by_ids(self, ids: Iterable[str]) -> List[Member]:
        with self._lock:
            return [deepcopy(self._members[i]) for i in ids if i in self._members]

    def load_tasks_by_ids(self, ids: Iterable[str]) -> List[Task]:
        with self._lock:
            return [deepcopy(self._tasks[i]) for i in ids if i in self._tasks]

    def save_task(self, task: Task) -> None:
        with self._lock:
            self._tasks[task.id] = deepcopy(task)

    def save_member(self, member: Member) -> Member:
        with self._member_lock(member.id):
            with self._lock:
                current = self._members.get(member.id)
            if current is None:
                raise NotFoundError(f"member {member.id} not found")
            if current.version != member.version:
                raise StaleMemberError(member.id, member.version, current.version)

            stored = replace(deepcopy(member), version=member.version + 1)
            with self._lock:
                self._members[member.id] = stored
            logger.debug(f"Saved member {member.id} at version {stored.version}")
            return deepcopy(stored)
