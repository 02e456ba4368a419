# Directory: main.py
"""
Main application entry point for the task auto-assignment engine.

Generates a project scenario, auto-assigns every task in dependency order and
writes a summary of the run.
"""
import os
import argparse
import json
import logging
import time
from typing import Any, Dict, Optional

from analysis.metrics import compute_assignment_metrics, ranking_frame
from analysis.report import export_to_excel
from assignment.greedy import GreedyAssigner
from config import AppConfig
from errors import AssignmentError
from utils.generators import DataGenerator
from utils.logger import logger, setup_logger
from utils.validators import dependency_order, validate_member, validate_task


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from file or use defaults.

    Args:
        config_path: Path to a JSON configuration file

    Returns:
        AppConfig: Application configuration
    """
    if config_path and os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                config_dict = json.load(f)
            return AppConfig.from_dict(config_dict)
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Error loading config from {config_path}: {e}")
            logger.info("Using default configuration.")
            return AppConfig()
    else:
        return AppConfig()


def setup_directories(output_dir: str) -> None:
    """Create the output directory if needed."""
    if not os.path.exists(output_dir):
        os.makedirs(output_dir)
        logger.info(f"Created directory: {output_dir}")


def run_simulation(
    config: AppConfig, num_members: int = 12, num_tasks: int = 30
) -> Dict[str, Any]:
    """
    Run auto-assignment over a generated scenario.

    Args:
        config: Application configuration
        num_members: Number of project members to generate
        num_tasks: Number of tasks to generate

    Returns:
        Dict[str, Any]: Simulation results
    """
    generator = DataGenerator(seed=config.seed)
    repository, project, tasks = generator.generate_scenario(num_members, num_tasks)
    members_before = repository.members

    for member in members_before:
        validate_member(member)
    for task in tasks:
        validate_task(task)

    try:
        ordered = dependency_order(tasks)
    except ValueError as e:
        logger.error(f"Invalid task dependencies: {e}. Exiting simulation.")
        return {}

    # Generated dates are relative to the scenario start, not the wall clock
    start_date = generator.config["start_date"]
    assigner = GreedyAssigner(repository, config, clock=lambda: start_date)
    results = []
    failures = {}

    for task in ordered:
        if task.status == "completed":
            continue

        try:
            if logger.isEnabledFor(logging.DEBUG):
                ranking = assigner.rank_candidates(task, project.id)
                logger.debug(f"Ranking for {task.id}:\n{ranking_frame(ranking).to_string()}")
            result = assigner.assign(task, project.id)
        except AssignmentError as e:
            logger.warning(f"Task {task.id} not assigned: {e.reason}")
            failures[task.id] = e.reason
            continue

        results.append(result)

    members_after = repository.members
    metrics = compute_assignment_metrics(
        [t for t in tasks if t.status != "completed"],
        results,
        members_after,
        default_hours=config.default_estimated_hours,
    )
    logger.info(f"Assignment metrics: {metrics}")

    return {
        "project": project,
        "tasks": tasks,
        "members_before": members_before,
        "members_after": members_after,
        "results": results,
        "failures": failures,
        "metrics": metrics,
    }


def main():
    """Main application entry point."""
    parser = argparse.ArgumentParser(description="Task Auto-Assignment Engine")
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--members", type=int, default=12, help="Number of project members")
    parser.add_argument("--tasks", type=int, default=30, help="Number of tasks")
    parser.add_argument("--seed", type=int, help="Override the configured random seed")
    parser.add_argument("--n-jobs", type=int, help="Parallel jobs used for scoring")
    parser.add_argument("--output-dir", default="output", help="Directory for reports")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set the logging level",
    )
    args = parser.parse_args()

    setup_logger(level=getattr(logging, args.log_level))
    setup_directories(args.output_dir)

    config = load_config(args.config)
    if args.seed is not None:
        config.seed = args.seed
    if args.n_jobs is not None:
        config.n_jobs = args.n_jobs

    logger.info("Starting auto-assignment simulation...")
    results = run_simulation(config, args.members, args.tasks)

    if results:
        summary_path = os.path.join(args.output_dir, "assignment_summary.json")
        serializable_results = {
            "project": results["project"].id,
            "assignments": [r.to_dict() for r in results["results"]],
            "failures": results["failures"],
            "metrics": results["metrics"],
            "config": config.to_dict(),
        }
        with open(summary_path, "w") as f:
            json.dump(serializable_results, f, indent=2)
        logger.info(f"Assignment summary saved to {summary_path}")

        export_to_excel(
            os.path.join(args.output_dir, "assignment_report.xlsx"),
            results["members_before"],
            results["members_after"],
            results["tasks"],
            results["results"],
            results["failures"],
        )
        logger.info("Simulation completed successfully!")
    else:
        logger.error("Simulation failed!")


if __name__ == "__main__":
    start_time = time.time()
    main()
    logger.info(f"--- {round(time.time() - start_time, 2)} seconds ---")
