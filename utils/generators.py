# Directory: utils/generators.py
"""
Utility functions for generating projects, members and tasks.
"""
import random
import math
from typing import Any, List, Dict, Optional, Tuple
from datetime import datetime, timedelta
from faker import Faker

from config import AssignmentRules
from models import (
    EXPERIENCE_LEVELS,
    Member,
    MemberSkill,
    Project,
    ProjectMember,
    RequiredSkill,
    Skill,
    Task,
)
from storage.memory import InMemoryRepository
from utils.logger import logger


class DataGenerator:
    """Generator for demo and test data: skills, members, a project and tasks."""

    def __init__(self, seed: int = 42, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the generator with a specific seed and optional configuration.

        Args:
            seed: Random seed for reproducibility
            config: Optional configuration settings
        """
        self.seed = seed
        self.fake = Faker()
        self.fake.seed_instance(seed)
        self.random = random.Random(seed)

        # Configuration for data generation
        self.config = config or {
            "skills_per_member_min": 1,
            "skills_per_member_max": 4,
            "required_skills_per_member_max": 2,
            "workload_max": 50,
            "non_user_ratio": 0.15,  # share of admins / team leaders in the project
            "task_hours_min": 2,
            "task_hours_max": 16,
            "task_due_date_min_days": -2,
            "task_due_date_max_days": 30,
            "project_deadline_days": 45,
            "dependency_ratio": 0.2,
            "completed_ratio": 0.3,
            "start_date": datetime(2025, 1, 6, 9, 0),
        }

    def generate_skills(self, rules: Optional[AssignmentRules] = None) -> List[Skill]:
        """Build a skill catalogue from the task type keywords."""
        rules = rules or AssignmentRules()
        names = []
        for keywords in rules.task_type_skills.values():
            for name in keywords:
                if name not in names:
                    names.append(name)
        # A few skills that match no task type
        names.extend(["Communication", "Agile", "Python"])

        skills = [Skill(id=f"S{i + 1}", name=name) for i, name in enumerate(names)]
        logger.info(f"Generated {len(skills)} skills.")
        return skills

    def generate_members(self, num_members: int, skills: List[Skill]) -> List[Member]:
        """
        Generate members with random skills and profiles.

        Args:
            num_members: Number of members to generate
            skills: Skill catalogue to draw from

        Returns:
            List[Member]: Generated members
        """
        members = []
        for i in range(num_members):
            first_name = self.fake.first_name()
            last_name = self.fake.last_name()

            num_skills = self.random.randint(
                self.config["skills_per_member_min"],
                min(self.config["skills_per_member_max"], len(skills)),
            )
            held = self.random.sample(skills, num_skills)
            member_skills = [
                MemberSkill(skill=s, proficiency_level=self.random.randint(1, 5))
                for s in held
            ]

            num_required = self.random.randint(
                0, min(self.config["required_skills_per_member_max"], len(skills))
            )
            required_skills = [
                RequiredSkill(skill=s, minimum_level=self.random.randint(1, 5))
                for s in self.random.sample(skills, num_required)
            ]

            role = "user"
            if self.random.random() < self.config["non_user_ratio"]:
                role = self.random.choice(["admin", "TeamLeader"])

            member = Member(
                id=f"U{i + 1}",
                username=f"{first_name.lower()}.{last_name.lower()}",
                email=self.fake.email(),
                first_name=first_name,
                last_name=last_name,
                role=role,
                skills=member_skills,
                required_skills=required_skills,
                workload=float(self.random.randint(0, self.config["workload_max"])),
                availability=float(self.random.randrange(0, 101, 10)),
                experience_level=self.random.choice(EXPERIENCE_LEVELS),
                performance_rating=float(self.random.randint(1, 5)),
            )
            members.append(member)
            logger.debug(f"Created member: {member}")

        logger.info(f"Generated {len(members)} members.")
        return members

    def generate_project(self, members: List[Member], project_id: str = "P1") -> Project:
        deadline = self.config["start_date"] + timedelta(
            days=self.config["project_deadline_days"]
        )
        return Project(
            id=project_id,
            name=self.fake.catch_phrase(),
            deadline=deadline,
            members=[
                ProjectMember(user=m, role="admin" if m.role == "admin" else "member")
                for m in members
            ],
        )

    def generate_tasks(self, num_tasks: int, project_id: str = "P1") -> List[Task]:
        """
        Generate tasks, some depending on earlier ones.

        Args:
            num_tasks: Number of tasks to generate
            project_id: Project the tasks belong to

        Returns:
            List[Task]: Generated tasks
        """
        rules = AssignmentRules()
        task_types = list(rules.task_type_skills.keys())
        base_date = self.config["start_date"]
        tasks = []

        num_dependencies = math.ceil(self.config["dependency_ratio"] * num_tasks)
        # Only later tasks can depend on earlier ones
        dependency_indices = set()
        if num_tasks > 1:
            dependency_indices = set(
                self.random.sample(
                    range(1, num_tasks), min(num_dependencies, num_tasks - 1)
                )
            )

        for i in range(num_tasks):
            dependencies = set()
            if i in dependency_indices:
                num_deps = self.random.randint(1, min(2, i))
                dependencies = {
                    f"T{d + 1}" for d in self.random.sample(range(i), num_deps)
                }

            status = "pending"
            if not dependencies and self.random.random() < self.config["completed_ratio"]:
                status = "completed"

            due_date = base_date + timedelta(
                days=self.random.randint(
                    self.config["task_due_date_min_days"],
                    self.config["task_due_date_max_days"],
                )
            )

            task = Task(
                id=f"T{i + 1}",
                title=self.fake.bs().capitalize(),
                task_type=self.random.choice(task_types),
                complexity=self.random.randint(1, 10),
                dependencies=dependencies,
                due_date=due_date,
                estimated_hours=float(
                    self.random.randint(
                        self.config["task_hours_min"], self.config["task_hours_max"]
                    )
                ),
                status=status,
                project_id=project_id,
                created_at=base_date,
            )
            tasks.append(task)

            if dependencies:
                logger.debug(f"Created task with dependencies: {task}")

        logger.info(f"Generated {len(tasks)} tasks, {len(dependency_indices)} with dependencies.")
        return tasks

    def generate_scenario(
        self, num_members: int, num_tasks: int
    ) -> Tuple[InMemoryRepository, Project, List[Task]]:
        """
        Generate a complete scenario stored in an in-memory repository.

        Args:
            num_members: Number of project members
            num_tasks: Number of tasks

        Returns:
            Tuple[InMemoryRepository, Project, List[Task]]: Seeded repository,
            the project and its tasks
        """
        skills = self.generate_skills()
        members = self.generate_members(num_members, skills)
        project = self.generate_project(members)
        tasks = self.generate_tasks(num_tasks, project.id)

        repository = InMemoryRepository()
        repository.add_project(project)
        for task in tasks:
            repository.add_task(task)

        return repository, project, tasks
