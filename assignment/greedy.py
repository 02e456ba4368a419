# Directory: assignment/greedy.py
"""
Greedy task assignment implementation.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from assignment.filters import EligibilityFilterChain
from assignment.interfaces import AssignmentModel, AssignmentResult
from assignment.loader import CandidateLoader
from assignment.scoring import MemberScorer, ScoreBreakdown
from config import AppConfig
from errors import AssignmentError, NoSuitableMemberError, PersistenceError, StaleMemberError
from models import Task, Member, MemberSummary
from storage.interfaces import AssignmentRepository
from utils.logger import logger


@dataclass
class CandidateScore:
    """A scored candidate in the ranking of a task."""

    member: Member
    breakdown: ScoreBreakdown

    @property
    def score(self) -> float:
        return self.breakdown.score


class GreedyAssigner(AssignmentModel):
    """
    Greedy task assignment model.

    This model loads the project members, narrows them with the eligibility
    filter chain, scores the survivors and assigns the task to the highest
    score. Ties go to the member listed first in the project.
    """

    def __init__(
        self,
        repository: AssignmentRepository,
        config: Optional[AppConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the greedy assigner.

        Args:
            repository: Data access for projects, members and tasks
            config: Engine configuration, defaults to ``AppConfig()``
            clock: Returns the current time, used for urgency scoring
        """
        self.repository = repository
        self.config = config or AppConfig()
        self.loader = CandidateLoader(repository)
        self.filter_chain = EligibilityFilterChain(repository, self.config)
        self.scorer = MemberScorer(self.config, clock)

    def rank_candidates(self, task: Task, project_id: str) -> List[CandidateScore]:
        """
        Rank the eligible members of a project for a task without assigning it.

        Args:
            task: Task to assign
            project_id: Project whose members are candidates

        Returns:
            List[CandidateScore]: Candidates sorted by score, highest first
        """
        project, members = self.loader.load(project_id)
        eligible = self.filter_chain.apply(task, members)

        breakdowns = self.scorer.score_all(eligible, task, project)
        scored = [CandidateScore(m, b) for m, b in zip(eligible, breakdowns)]

        # Stable sort keeps project order between equal scores
        ranked = sorted(scored, key=lambda c: -c.score)

        logger.info(f"Eligible member scores for task {task.id}:")
        for candidate in ranked:
            logger.info(f"  {candidate.member.display_name}: {candidate.score:.2f}")

        return ranked

    def find_best_member(self, task: Task, project_id: str) -> Tuple[Member, float]:
        """Return the highest scoring member and their score."""
        ranked = self.rank_candidates(task, project_id)
        if not ranked:
            raise NoSuitableMemberError()

        best = ranked[0]
        return best.member, best.score

    def assign(self, task: Task, project_id: str) -> AssignmentResult:
        """
        Assign a task to the best member of a project.

        The caller's task is left untouched; the returned result carries an
        updated copy. The member's workload grows by the task estimate and is
        saved before the task.

        Args:
            task: Task to assign
            project_id: Project whose members are candidates

        Returns:
            AssignmentResult: Updated task, chosen member and score
        """
        member, score = self.find_best_member(task, project_id)

        hours = task.resolved_estimated_hours(self.config.default_estimated_hours)
        updated_task = replace(
            task,
            dependencies=set(task.dependencies),
            assigned_to=member.id,
            auto_assigned=True,
        )

        saved_member = self._add_workload(member, hours)
        self._save_task(updated_task)

        logger.info(
            f"Task {task.id} assigned to {saved_member.display_name} "
            f"(score {score:.2f}, workload now {saved_member.resolved_workload}h)"
        )
        return AssignmentResult(
            task=updated_task,
            member=MemberSummary.from_member(saved_member),
            score=score,
        )

    def _add_workload(self, member: Member, hours: float) -> Member:
        """Save the member with ``hours`` added, retrying on version conflicts."""
        current = member
        retries = self.config.max_workload_retries

        for attempt in range(retries + 1):
            updated = replace(current, workload=current.resolved_workload + hours)
            try:
                saved = self.repository.save_member(updated)
                return saved or updated
            except StaleMemberError as e:
                if attempt >= retries:
                    raise
                logger.warning(f"{e.reason}, reloading member (attempt {attempt + 1})")
                current = self._reload_member(member.id, e)
            except AssignmentError:
                raise
            except Exception as e:
                raise PersistenceError(f"failed to save member {member.id}: {e}") from e

        # Unreachable: the last attempt either returns or raises
        raise PersistenceError(f"failed to save member {member.id}")

    def _reload_member(self, member_id: str, cause: Exception) -> Member:
        try:
            reloaded = self.repository.load_users_by_ids([member_id])
        except Exception as e:
            raise PersistenceError(f"failed to reload member {member_id}: {e}") from e
        if not reloaded:
            raise PersistenceError(f"member {member_id} no longer exists") from cause
        return reloaded[0]

    def _save_task(self, task: Task) -> None:
        try:
            self.repository.save_task(task)
        except AssignmentError:
            raise
        except Exception as e:
            raise PersistenceError(f"failed to save task {task.id}: {e}") from e
