# Directory: analysis/report.py
"""
Excel export of auto-assignment runs.
"""
from typing import Dict, Sequence

from openpyxl import Workbook
from openpyxl.styles import PatternFill, Font, Alignment
from openpyxl.utils import get_column_letter

from assignment.interfaces import AssignmentResult
from models import Task, Member
from utils.logger import logger


def _style_header(ws) -> None:
    header_fill = PatternFill(start_color="D0D0D0", end_color="D0D0D0", fill_type="solid")
    header_font = Font(bold=True)
    center_align = Alignment(horizontal="center")
    for cell in ws[1]:
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = center_align


def _autosize(ws) -> None:
    for column_cells in ws.columns:
        length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in column_cells)
        ws.column_dimensions[get_column_letter(column_cells[0].column)].width = min(50, length + 2)


def export_to_excel(
    filename: str,
    members_before: Sequence[Member],
    members_after: Sequence[Member],
    tasks: Sequence[Task],
    results: Sequence[AssignmentResult],
    failures: Dict[str, str],
) -> bool:
    """
    Export assignment results to Excel for analysis.

    Args:
        filename: File to save the Excel spreadsheet
        members_before: Members as they were before the run
        members_after: Members after the run
        tasks: Tasks submitted for assignment
        results: Successful assignments
        failures: Task id -> failure reason for tasks that were not assigned

    Returns:
        bool: True if export successful
    """
    wb = Workbook()

    # Members sheet
    ws1 = wb.active
    ws1.title = "Members"
    ws1.append([
        "Member ID", "Username", "Role", "Level", "Skills",
        "Workload", "Availability", "Rating",
    ])
    _style_header(ws1)
    for m in members_before:
        ws1.append([
            m.id,
            m.username,
            m.role,
            m.resolved_experience_level,
            ", ".join(
                f"{s.skill.name}({s.proficiency_level})" for s in m.skills if s.skill
            ),
            m.resolved_workload,
            m.resolved_availability,
            m.resolved_performance_rating,
        ])

    # Tasks sheet
    ws2 = wb.create_sheet("Tasks")
    ws2.append(["TaskID", "Title", "Type", "Complexity", "EstHrs", "DueDate", "Status", "Deps"])
    _style_header(ws2)
    for t in tasks:
        ws2.append([
            t.id,
            t.title,
            t.task_type or "",
            t.complexity if t.complexity is not None else "",
            t.estimated_hours if t.estimated_hours is not None else "",
            t.due_date.strftime("%Y-%m-%d") if t.due_date else "",
            t.status,
            ",".join(sorted(t.dependencies)),
        ])

    # Assignments sheet
    ws3 = wb.create_sheet("Assignments")
    ws3.append(["TaskID", "Assigned To", "Username", "Score", "Outcome"])
    _style_header(ws3)
    by_task = {r.task.id: r for r in results}
    for t in sorted(tasks, key=lambda x: x.id):
        result = by_task.get(t.id)
        if result is not None:
            ws3.append([
                t.id,
                result.member.id,
                result.member.username,
                round(result.score, 2),
                "assigned",
            ])
        else:
            ws3.append([t.id, "", "", "", failures.get(t.id, "not attempted")])

    # Workload sheet
    ws4 = wb.create_sheet("Workload")
    ws4.append(["MemberID", "Before (h)", "After (h)", "Added (h)", "Tasks"])
    _style_header(ws4)
    after = {m.id: m for m in members_after}
    task_counts: Dict[str, int] = {}
    for r in results:
        task_counts[r.member.id] = task_counts.get(r.member.id, 0) + 1
    for m in sorted(members_before, key=lambda x: x.id):
        updated = after.get(m.id, m)
        ws4.append([
            m.id,
            m.resolved_workload,
            updated.resolved_workload,
            updated.resolved_workload - m.resolved_workload,
            task_counts.get(m.id, 0),
        ])

    for ws in (ws1, ws2, ws3, ws4):
        _autosize(ws)

    try:
        wb.save(filename)
    except OSError as e:
        logger.error(f"Could not write Excel report to {filename}: {e}")
        return False

    logger.info(f"Excel report saved as {filename}")
    return True
