# Directory: assignment/filters.py
"""
Eligibility filter chain narrowing the candidates of an assignment.

Every filter takes a tuple of members and returns a new tuple, keeping the
input order. Hard filters raise when nothing survives; soft filters hand back
their input instead.
"""
from typing import Optional, Tuple

from config import AppConfig, AssignmentRules, FilterConfig
from errors import DependenciesNotCompleteError, NoEligibleMembersError
from models import Task, Member
from storage.interfaces import AssignmentRepository
from utils.logger import logger

Members = Tuple[Member, ...]


def has_required_skills_for_task_type(
    member: Member, task: Task, rules: AssignmentRules
) -> bool:
    """
    Check if a member holds a skill important for the task type.

    The skill name must contain one of the task type keywords (case-insensitive)
    and its proficiency must reach ``rules.min_task_type_proficiency``. A task
    without a type, or whose type has no keywords, accepts every member.
    """
    if not task.task_type or not rules.keywords_for(task.task_type):
        return True

    for member_skill in member.skills:
        if member_skill.skill is None or not member_skill.skill.name:
            continue
        if member_skill.proficiency_level is None:
            continue
        if (
            rules.matches_task_type(member_skill.skill.name, task.task_type)
            and member_skill.proficiency_level >= rules.min_task_type_proficiency
        ):
            return True

    return False


def is_experience_appropriate(member: Member, task: Task, rules: AssignmentRules) -> bool:
    """Check if the task complexity lies in the member's complexity band."""
    if task.complexity is None:
        return True

    low, high = rules.complexity_band(member.resolved_experience_level)
    return low <= task.complexity <= high


def filter_by_role(members: Members, config: FilterConfig) -> Members:
    """Keep only members with the eligible role."""
    kept = []
    for member in members:
        if member.role == config.eligible_role:
            kept.append(member)
        else:
            logger.debug(f"{member.display_name} excluded: inappropriate role ({member.role})")
    return tuple(kept)


def filter_by_availability(members: Members, config: FilterConfig) -> Members:
    """Keep members that are lightly loaded or still declare enough availability."""
    kept = []
    for member in members:
        workload = member.resolved_workload
        availability = member.resolved_availability
        if workload < config.max_workload_hours or availability > config.min_availability:
            kept.append(member)
        else:
            logger.debug(
                f"{member.display_name} excluded: insufficient availability "
                f"(workload: {workload}h, availability: {availability}%)"
            )
    return tuple(kept)


def filter_by_task_type_skills(
    members: Members, task: Task, rules: AssignmentRules
) -> Members:
    kept = []
    for member in members:
        if has_required_skills_for_task_type(member, task, rules):
            kept.append(member)
        else:
            logger.debug(
                f"{member.display_name} excluded: insufficient skills "
                f"for task type {task.task_type}"
            )
    return tuple(kept)


def filter_by_experience(members: Members, task: Task, rules: AssignmentRules) -> Members:
    kept = []
    for member in members:
        if is_experience_appropriate(member, task, rules):
            kept.append(member)
        else:
            logger.debug(
                f"{member.display_name} excluded: experience level "
                f"{member.resolved_experience_level} unsuited to complexity {task.complexity}"
            )
    return tuple(kept)


def check_dependencies_completed(
    task: Task, repository: AssignmentRepository, config: FilterConfig
) -> Tuple[bool, Tuple[str, ...]]:
    """
    Check whether every predecessor of a task is completed.

    Args:
        task: Task whose dependencies are checked
        repository: Data access used to fetch the predecessor tasks
        config: Filter configuration holding the completed status

    Returns:
        Tuple[bool, Tuple[str, ...]]: Whether all are completed, and the ids of
        those that are not. A failed fetch counts as not completed.
    """
    if not task.dependencies:
        return True, ()

    try:
        dependent_tasks = repository.load_tasks_by_ids(sorted(task.dependencies))
    except Exception as e:
        logger.error(f"Error while checking dependencies of task {task.id}: {e}")
        return False, tuple(sorted(task.dependencies))

    logger.info(f"Found {len(dependent_tasks)} dependent tasks for task {task.id}")

    incomplete = tuple(
        t.id for t in dependent_tasks if t.status != config.completed_status
    )
    if incomplete:
        logger.info(f"Dependent tasks not completed: {', '.join(incomplete)}")

    return not incomplete, incomplete


class EligibilityFilterChain:
    """
    Sequential filter chain producing the eligible members for a task.

    Order: role (hard), dependency readiness (hard, task level), availability
    (hard), task type skills (soft), experience for complexity (soft).
    """

    def __init__(self, repository: AssignmentRepository, config: Optional[AppConfig] = None):
        self.repository = repository
        self.config = config or AppConfig()

    @staticmethod
    def _with_fallback(filtered: Members, previous: Members, step: str) -> Members:
        if filtered:
            return filtered
        logger.info(f"No member passed the {step} filter, keeping the previous set")
        return previous

    def apply(self, task: Task, members: Members) -> Members:
        """
        Run the full chain.

        Args:
            task: Task to assign
            members: Candidate members in project order

        Returns:
            Members: Eligible members in their original order

        Raises:
            NoEligibleMembersError: If a hard filter leaves no member
            DependenciesNotCompleteError: If a predecessor task is not completed
        """
        filters = self.config.filters
        rules = self.config.rules

        # 1. Role
        by_role = filter_by_role(tuple(members), filters)
        logger.info(f"Members after role filter: {len(by_role)}")
        if not by_role:
            raise NoEligibleMembersError("no appropriate role")

        # 2. Blocking dependencies
        completed, incomplete = check_dependencies_completed(task, self.repository, filters)
        if not completed:
            raise DependenciesNotCompleteError(incomplete)

        # 3. Availability
        available = filter_by_availability(by_role, filters)
        logger.info(f"Members after availability filter: {len(available)}")
        if not available:
            raise NoEligibleMembersError("insufficient availability")

        # 4. Skills for the task type
        skilled = filter_by_task_type_skills(available, task, rules)
        logger.info(f"Members after task type skill filter: {len(skilled)}")
        skilled = self._with_fallback(skilled, available, "task type skill")

        # 5. Experience for the task complexity
        experienced = filter_by_experience(skilled, task, rules)
        logger.info(f"Members after experience filter: {len(experienced)}")
        eligible = self._with_fallback(experienced, skilled, "experience")

        if not eligible:
            raise NoEligibleMembersError("no eligible members after filtering")

        return eligible
