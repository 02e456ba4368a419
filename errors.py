# Directory: errors.py
"""
Error taxonomy for the auto-assignment pipeline.
"""
from typing import Iterable, List, Optional


class AssignmentError(Exception):
    """Base class for every failure raised by the assignment pipeline."""

    default_reason = "assignment failed"

    def __init__(self, reason: Optional[str] = None):
        self.reason = reason or self.default_reason
        super().__init__(self.reason)


class NotFoundError(AssignmentError):
    """The requested project does not exist."""

    default_reason = "project not found"


class EmptyProjectError(AssignmentError):
    """The project has no member with a resolvable user record."""

    default_reason = "project has no usable members"


class NoEligibleMembersError(AssignmentError):
    """A hard filter removed every candidate. ``reason`` names the filter."""

    default_reason = "no eligible members after filtering"


class DependenciesNotCompleteError(AssignmentError):
    """At least one predecessor task of the task is not completed."""

    default_reason = "dependent tasks are not all completed"

    def __init__(self, incomplete_ids: Iterable[str] = (), reason: Optional[str] = None):
        self.incomplete_ids: List[str] = sorted(str(i) for i in incomplete_ids)
        if reason is None and self.incomplete_ids:
            reason = (
                f"{self.default_reason}: {', '.join(self.incomplete_ids)}"
            )
        super().__init__(reason)


class NoSuitableMemberError(AssignmentError):
    """Scoring produced no candidate to select."""

    default_reason = "no suitable member found for this task"


class PersistenceError(AssignmentError):
    """A data-access call failed. The original exception is the ``__cause__``."""

    default_reason = "data access failed"


class StaleMemberError(PersistenceError):
    """A member save lost an optimistic concurrency check."""

    default_reason = "member was modified concurrently"

    def __init__(self, member_id: str, expected_version: int, actual_version: int):
        self.member_id = member_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"{self.default_reason}: {member_id} "
            f"(expected version {expected_version}, found {actual_version})"
        )
