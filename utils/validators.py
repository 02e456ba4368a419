# Directory: utils/validators.py
"""
Validation utilities for tasks and members.
"""
import networkx as nx
from typing import List, Iterable

from models import Task, Member, EXPERIENCE_LEVELS, TASK_STATUSES, TASK_TYPES
from utils.logger import logger


def build_dependency_graph(tasks: Iterable[Task]) -> nx.DiGraph:
    """Graph with an edge from each dependency to the task depending on it."""
    graph = nx.DiGraph()
    for task in tasks:
        graph.add_node(task.id)
        for dep in task.dependencies:
            graph.add_edge(dep, task.id)
    return graph


def validate_tasks(tasks: List[Task]) -> bool:
    """Validate tasks for circular dependencies."""
    for task in tasks:
        if task.id in task.dependencies:
            logger.error(f"Task {task.id} depends on itself.")
            return False

    graph = build_dependency_graph(tasks)

    # Check if the graph is a DAG (Directed Acyclic Graph)
    if not nx.is_directed_acyclic_graph(graph):
        cycle = nx.find_cycle(graph)
        logger.error(f"Tasks have circular dependencies: {cycle}")
        return False

    return True


def dependency_order(tasks: List[Task]) -> List[Task]:
    """
    Order tasks so that every task comes after its dependencies.

    Dependencies on tasks outside the list are ignored for ordering. Ties keep
    the input order.

    Raises:
        ValueError: If the dependencies contain a cycle
    """
    if not validate_tasks(tasks):
        raise ValueError("tasks have circular dependencies")

    by_id = {t.id: t for t in tasks}
    position = {t.id: i for i, t in enumerate(tasks)}
    graph = build_dependency_graph(tasks)
    graph.remove_nodes_from([n for n in list(graph.nodes) if n not in by_id])

    ordered = nx.lexicographical_topological_sort(graph, key=lambda n: position[n])
    return [by_id[task_id] for task_id in ordered]


def validate_member(member: Member) -> List[str]:
    """
    Check the value ranges of a member profile.

    Args:
        member: Member to check

    Returns:
        List[str]: Problems found, empty when the member is valid
    """
    problems = []

    for member_skill in member.skills:
        name = member_skill.skill.name if member_skill.skill else "<missing skill>"
        if member_skill.proficiency_level is None:
            problems.append(f"skill {name}: missing proficiency level")
        elif not 1 <= member_skill.proficiency_level <= 5:
            problems.append(
                f"skill {name}: proficiency {member_skill.proficiency_level} outside 1-5"
            )

    for required in member.required_skills:
        name = required.skill.name if required.skill else "<missing skill>"
        if required.minimum_level is not None and not 1 <= required.minimum_level <= 5:
            problems.append(
                f"required skill {name}: minimum level {required.minimum_level} outside 1-5"
            )

    if member.workload is not None and member.workload < 0:
        problems.append(f"workload {member.workload} is negative")

    if member.availability is not None and not 0 <= member.availability <= 100:
        problems.append(f"availability {member.availability} outside 0-100")

    if member.performance_rating is not None and not 1 <= member.performance_rating <= 5:
        problems.append(f"performance rating {member.performance_rating} outside 1-5")

    if member.experience_level and member.experience_level not in EXPERIENCE_LEVELS:
        problems.append(f"unknown experience level {member.experience_level}")

    for problem in problems:
        logger.warning(f"Member {member.id}: {problem}")

    return problems


def validate_task(task: Task) -> List[str]:
    """Check the value ranges of a task. Returns the problems found."""
    problems = []

    if task.complexity is not None and not 1 <= task.complexity <= 10:
        problems.append(f"complexity {task.complexity} outside 1-10")

    if task.estimated_hours is not None and task.estimated_hours < 0:
        problems.append(f"estimated hours {task.estimated_hours} is negative")

    if task.status not in TASK_STATUSES:
        problems.append(f"unknown status {task.status}")

    # Unknown types are still assignable, they just match no skill keywords
    if task.task_type and task.task_type not in TASK_TYPES:
        problems.append(f"unknown task type {task.task_type}")

    if task.id in task.dependencies:
        problems.append("task depends on itself")

    for problem in problems:
        logger.warning(f"Task {task.id}: {problem}")

    return problems
