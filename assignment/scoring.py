# Directory: assignment/scoring.py
"""
Member scoring for task assignment.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

from joblib import Parallel, delayed

from assignment.filters import has_required_skills_for_task_type, is_experience_appropriate
from config import AppConfig, AssignmentRules, ScoringConfig
from models import Task, Member, Project
from utils.logger import logger

SECONDS_PER_DAY = 60 * 60 * 24


def evaluate_skills(
    member: Member, task: Task, rules: AssignmentRules, scoring: ScoringConfig
) -> float:
    """
    Evaluate a member's skills against the task type and their required skills.

    Two averages are computed: one over the member's required skills that the
    member actually holds, graded on the proficiency margin above the minimum
    level, and one over the member skills matching a task type keyword. They
    are blended depending on which of them found a match.

    Args:
        member: Member to evaluate
        task: Task to assign
        rules: Shared keyword and band tables
        scoring: Scoring configuration

    Returns:
        float: Skill score, nominally 0-100
    """
    if not member.skills:
        return scoring.no_skills_score

    # First entry wins when a skill is listed twice; entries without a level
    # count as not held
    held = {}
    for s in member.skills:
        if s.proficiency_level is None:
            continue
        if s.skill is not None and s.skill.id and s.skill.id not in held:
            held[s.skill.id] = s

    required_total = 0.0
    matched_required = 0
    for required in member.required_skills:
        if required.skill is None:
            continue

        member_skill = held.get(required.skill.id)
        if member_skill is None:
            continue

        matched_required += 1
        difference = member_skill.proficiency_level - required.resolved_minimum_level
        if difference >= 2:
            skill_score = 100.0
        elif difference == 1:
            skill_score = 80.0
        elif difference == 0:
            skill_score = 60.0
        else:
            skill_score = 30.0

        if rules.matches_task_type(required.skill.name, task.task_type):
            skill_score += scoring.task_type_skill_bonus

        required_total += skill_score

    type_total = 0.0
    matched_type = 0
    if rules.keywords_for(task.task_type):
        for member_skill in member.skills:
            if member_skill.skill is None or not member_skill.skill.name:
                continue
            if member_skill.proficiency_level is None:
                continue
            if rules.matches_task_type(member_skill.skill.name, task.task_type):
                matched_type += 1
                type_total += member_skill.proficiency_level * 20

    avg_required = required_total / matched_required if matched_required else 0.0
    avg_type = type_total / matched_type if matched_type else 0.0

    if matched_required and matched_type:
        return avg_required * 0.6 + avg_type * 0.4
    if matched_required:
        return avg_required * 0.8
    if matched_type:
        return avg_type * 0.7
    return scoring.no_match_skills_score


def evaluate_experience_level(member: Member, task: Task, rules: AssignmentRules) -> float:
    """Score the experience level of a member for the task type and complexity."""
    level = member.resolved_experience_level
    score = rules.experience_score(level)
    junior_levels = ("intern", "junior")

    if task.task_type:
        if task.task_type in ("development", "bug-fix") and level in junior_levels:
            score -= 10
        if task.task_type == "documentation":
            score += 5
        if task.task_type == "maintenance" and level in junior_levels:
            score -= 15
        if task.task_type == "design" and level == "intern":
            score -= 10

    if task.complexity is not None:
        if task.complexity >= 8:
            if level == "intern":
                score -= 30
            elif level == "junior":
                score -= 20
            elif level == "mid-level":
                score -= 10
            elif level in ("senior", "expert", "lead"):
                score += 10
        elif task.complexity >= 5:
            if level == "intern":
                score -= 20
            elif level == "junior":
                score -= 10
        elif level in junior_levels:
            score += 10

    return min(100.0, max(0.0, score))


def evaluate_workload(member: Member, rules: AssignmentRules) -> float:
    """Average of the declared availability and the remaining weekly capacity."""
    availability = member.resolved_availability
    workload_factor = max(
        0.0, 100 - (member.resolved_workload / rules.workload_capacity_hours) * 100
    )
    return (availability + workload_factor) / 2


def evaluate_performance(member: Member) -> float:
    # 1-5 rating -> 20-100
    return member.resolved_performance_rating * 20


def evaluate_urgency(task: Task, project: Project, now: datetime) -> float:
    """
    Score how urgent the task is from its due date and the project deadline.

    When both dates are set and the task is neither overdue nor due after the
    project deadline, the ratio below divides the remaining time by itself and
    the score is always 0. That behaviour is kept as is.
    """
    if task.due_date is None:
        return 50.0

    if project.deadline is None:
        if task.due_date < now:
            return 100.0
        days_remaining = max(0.0, (task.due_date - now).total_seconds() / SECONDS_PER_DAY)
        return max(20.0, 100 - days_remaining * 5)

    if task.due_date < now:
        return 100.0

    if task.due_date > project.deadline:
        return 30.0

    total_duration = (task.due_date - now).total_seconds()
    remaining = (task.due_date - now).total_seconds()
    if total_duration == 0:
        # Due right now
        return 100.0
    return 100 - (remaining / total_duration) * 100


def days_until_due(task: Task, now: datetime) -> Optional[float]:
    if task.due_date is None:
        return None
    return max(0.0, (task.due_date - now).total_seconds() / SECONDS_PER_DAY)


@dataclass
class ScoreBreakdown:
    """Sub-scores, weights and adjustments behind a member's final score."""

    member_id: str
    skills: float = 0.0
    experience: float = 0.0
    workload: float = 0.0
    performance: float = 0.0
    urgency: float = 0.0
    performance_weight: float = 0.0
    adjustments: Dict[str, float] = field(default_factory=dict)
    raw_score: float = 0.0
    score: float = 0.0
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        row = {
            "member_id": self.member_id,
            "skills": self.skills,
            "experience": self.experience,
            "workload": self.workload,
            "performance": self.performance,
            "performance_weight": self.performance_weight,
            "urgency": self.urgency,
            "raw_score": self.raw_score,
            "score": self.score,
        }
        row.update({f"adj_{name}": value for name, value in self.adjustments.items()})
        if self.error:
            row["error"] = self.error
        return row


class MemberScorer:
    """
    Computes a bounded fitness score of a member for a task.

    The score starts at a base value, adds five weighted sub-scores (skills,
    experience, workload, performance, urgency), applies penalties for failing
    the task type skill or experience predicates and a bonus for strong
    performers on urgent tasks, and is clamped to the configured bounds.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config or AppConfig()
        self.clock = clock or datetime.now

    def performance_weight(self, task: Task) -> float:
        scoring = self.config.scoring
        if task.complexity is not None and task.complexity >= scoring.complex_task_threshold:
            return scoring.complex_performance_weight
        return scoring.performance_weight

    def _compute(
        self, member: Member, task: Task, project: Project, now: datetime
    ) -> ScoreBreakdown:
        rules = self.config.rules
        scoring = self.config.scoring
        result = ScoreBreakdown(member_id=member.id)

        result.skills = evaluate_skills(member, task, rules, scoring)
        result.experience = evaluate_experience_level(member, task, rules)
        result.workload = evaluate_workload(member, rules)
        result.performance = evaluate_performance(member)
        result.performance_weight = self.performance_weight(task)
        result.urgency = evaluate_urgency(task, project, now)

        score = scoring.base_score
        score += result.skills * scoring.skills_weight
        score += result.experience * scoring.experience_weight
        score += result.workload * scoring.workload_weight
        score += result.performance * result.performance_weight
        score += result.urgency * scoring.urgency_weight

        if not has_required_skills_for_task_type(member, task, rules):
            result.adjustments["skill_mismatch"] = scoring.skill_mismatch_penalty
        if not is_experience_appropriate(member, task, rules):
            result.adjustments["experience_mismatch"] = scoring.experience_mismatch_penalty

        days_left = days_until_due(task, now)
        if (
            days_left is not None
            and days_left <= scoring.urgent_days
            and member.resolved_performance_rating >= scoring.urgent_min_rating
        ):
            result.adjustments["urgent_performance"] = scoring.urgent_performance_bonus

        score += sum(result.adjustments.values())

        result.raw_score = score
        result.score = min(scoring.max_score, max(scoring.min_score, score))
        return result

    def breakdown(
        self, member: Member, task: Task, project: Project, now: Optional[datetime] = None
    ) -> ScoreBreakdown:
        """
        Score a member and keep the intermediate values.

        Any error while scoring gives the member a score of 0 instead of
        propagating; the error text is kept on the breakdown.
        """
        now = now or self.clock()
        try:
            result = self._compute(member, task, project, now)
        except Exception as e:
            logger.error(f"Error while scoring member {member.display_name}: {e}")
            return ScoreBreakdown(member_id=member.id, error=str(e))

        logger.debug(
            f"Scores for {member.display_name}: skills={result.skills:.2f}, "
            f"experience={result.experience:.2f}, workload={result.workload:.2f}, "
            f"performance={result.performance:.2f} (x{result.performance_weight}), "
            f"urgency={result.urgency:.2f}, adjustments={result.adjustments}, "
            f"final={result.score:.2f}"
        )
        return result

    def score(
        self, member: Member, task: Task, project: Project, now: Optional[datetime] = None
    ) -> float:
        """Final score of a member for a task, within the configured bounds."""
        return self.breakdown(member, task, project, now).score

    def score_all(
        self, members: Sequence[Member], task: Task, project: Project
    ) -> List[ScoreBreakdown]:
        """
        Score every member, in parallel when ``config.n_jobs`` is not 1.

        The returned list follows the order of ``members``.
        """
        now = self.clock()
        if self.config.n_jobs == 1 or len(members) < 2:
            return [self.breakdown(m, task, project, now) for m in members]

        return Parallel(n_jobs=self.config.n_jobs, prefer="threads")(
            delayed(self.breakdown)(m, task, project, now) for m in members
        )
