# Directory: config.py
"""
Configuration management for the assignment engine.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Tuple

from models import DEFAULT_EXPERIENCE_LEVEL


def default_task_type_skills() -> Dict[str, List[str]]:
    """Important skill keywords per task type, matched as substrings of skill names."""
    return {
        "development": [
            "JavaScript",
            "React",
            "Node.js",
            "MongoDB",
            "Express",
            "TypeScript",
            "API",
            "Backend",
            "Frontend",
        ],
        "design": [
            "UI/UX Design",
            "Figma",
            "Adobe XD",
            "CSS",
            "HTML",
            "Design",
            "Photoshop",
            "Illustrator",
        ],
        "testing": [
            "Testing",
            "QA",
            "Jest",
            "Cypress",
            "Selenium",
            "Test unitaire",
            "Test d'intégration",
        ],
        "documentation": [
            "Documentation",
            "Markdown",
            "Technical Writing",
            "UML",
            "Diagramme",
        ],
        "bug-fix": [
            "Debugging",
            "Testing",
            "JavaScript",
            "React",
            "Node.js",
            "Backend",
            "Frontend",
        ],
        "feature": [
            "JavaScript",
            "React",
            "Node.js",
            "MongoDB",
            "Express",
            "Frontend",
            "Backend",
        ],
        "maintenance": ["DevOps", "CI/CD", "Docker", "Kubernetes", "AWS", "Azure", "Git"],
        "JAVA": ["Java", "Spring", "Hibernate", "JPA", "Maven", "JUnit"],
        "other": [],
    }


def default_complexity_bands() -> Dict[str, Tuple[int, int]]:
    """Inclusive task complexity range each experience level can handle."""
    return {
        "intern": (1, 3),
        "junior": (1, 5),
        "mid-level": (1, 7),
        "senior": (1, 9),
        "expert": (1, 10),
        "lead": (1, 10),
    }


def default_experience_scores() -> Dict[str, float]:
    return {
        "intern": 30,
        "junior": 50,
        "mid-level": 70,
        "senior": 85,
        "expert": 95,
        "lead": 100,
    }


@dataclass
class AssignmentRules:
    """
    Lookup tables shared by the eligibility filters and the scorer.

    A single instance is injected into both so the two stages can never
    disagree on what a task type needs or what an experience level can handle.
    """

    task_type_skills: Dict[str, List[str]] = field(
        default_factory=default_task_type_skills
    )
    complexity_bands: Dict[str, Tuple[int, int]] = field(
        default_factory=default_complexity_bands
    )
    default_complexity_band: Tuple[int, int] = (1, 7)
    experience_scores: Dict[str, float] = field(
        default_factory=default_experience_scores
    )
    default_experience_score: float = 70
    default_experience_level: str = DEFAULT_EXPERIENCE_LEVEL
    min_task_type_proficiency: int = 3
    workload_capacity_hours: float = 40.0

    def keywords_for(self, task_type: Optional[str]) -> List[str]:
        """Return the keyword list of a task type (empty when unknown or unset)."""
        if not task_type:
            return []
        return self.task_type_skills.get(task_type, [])

    def matches_task_type(self, skill_name: Optional[str], task_type: Optional[str]) -> bool:
        """Check if a skill name contains one of the task type keywords."""
        if not skill_name:
            return False
        lowered = skill_name.lower()
        return any(kw.lower() in lowered for kw in self.keywords_for(task_type))

    def complexity_band(self, experience_level: str) -> Tuple[int, int]:
        low, high = self.complexity_bands.get(
            experience_level, self.default_complexity_band
        )
        return int(low), int(high)

    def experience_score(self, experience_level: str) -> float:
        return self.experience_scores.get(experience_level, self.default_experience_score)


@dataclass
class FilterConfig:
    """Thresholds of the eligibility filter chain."""

    eligible_role: str = "user"
    max_workload_hours: float = 40.0
    min_availability: float = 30.0
    completed_status: str = "completed"


@dataclass
class ScoringConfig:
    """Weights and adjustments of the member scoring function."""

    base_score: float = 50.0
    skills_weight: float = 0.35
    experience_weight: float = 0.20
    workload_weight: float = 0.20
    performance_weight: float = 0.15
    complex_performance_weight: float = 0.20
    complex_task_threshold: int = 7
    urgency_weight: float = 0.10
    skill_mismatch_penalty: float = -20.0
    experience_mismatch_penalty: float = -15.0
    urgent_performance_bonus: float = 10.0
    urgent_days: float = 3.0
    urgent_min_rating: float = 4.0
    no_skills_score: float = 30.0
    no_match_skills_score: float = 20.0
    task_type_skill_bonus: float = 20.0
    min_score: float = 0.0
    max_score: float = 100.0


@dataclass
class AppConfig:
    """Main application configuration."""

    seed: int = 42
    rules: AssignmentRules = field(default_factory=AssignmentRules)
    filters: FilterConfig = field(default_factory=FilterConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    default_estimated_hours: float = 8.0
    n_jobs: int = 1
    max_workload_retries: int = 3

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "AppConfig":
        """Create a configuration from a flat dictionary."""
        # Each section uses a key prefix, e.g. FILTER_MIN_AVAILABILITY
        filter_config = FilterConfig(
            **{
                k.split("_", 1)[1].lower(): v
                for k, v in config_dict.items()
                if k.startswith("FILTER_")
            }
        )

        scoring_config = ScoringConfig(
            **{
                k.split("_", 1)[1].lower(): v
                for k, v in config_dict.items()
                if k.startswith("SCORING_")
            }
        )

        rules_kwargs = {
            k.split("_", 1)[1].lower(): v
            for k, v in config_dict.items()
            if k.startswith("RULES_")
        }
        # JSON has no tuples
        if "complexity_bands" in rules_kwargs:
            rules_kwargs["complexity_bands"] = {
                level: tuple(band)
                for level, band in rules_kwargs["complexity_bands"].items()
            }
        if "default_complexity_band" in rules_kwargs:
            rules_kwargs["default_complexity_band"] = tuple(
                rules_kwargs["default_complexity_band"]
            )
        rules = AssignmentRules(**rules_kwargs)

        return cls(
            seed=config_dict.get("SEED", 42),
            rules=rules,
            filters=filter_config,
            scoring=scoring_config,
            default_estimated_hours=config_dict.get("DEFAULT_ESTIMATED_HOURS", 8.0),
            n_jobs=config_dict.get("N_JOBS", 1),
            max_workload_retries=config_dict.get("MAX_WORKLOAD_RETRIES", 3),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a flat dictionary."""
        result = {
            "SEED": self.seed,
            "DEFAULT_ESTIMATED_HOURS": self.default_estimated_hours,
            "N_JOBS": self.n_jobs,
            "MAX_WORKLOAD_RETRIES": self.max_workload_retries,
        }

        for key, value in vars(self.filters).items():
            result[f"FILTER_{key.upper()}"] = value

        for key, value in vars(self.scoring).items():
            result[f"SCORING_{key.upper()}"] = value

        for key, value in vars(self.rules).items():
            if key == "complexity_bands":
                value = {level: list(band) for level, band in value.items()}
            elif key == "default_complexity_band":
                value = list(value)
            elif key in ("task_type_skills", "experience_scores"):
                value = {k: (list(v) if isinstance(v, list) else v) for k, v in value.items()}
            result[f"RULES_{key.upper()}"] = value

        return result
