import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

from django.core.mail import send_mail
from django.db import transaction
from ehour_backend.config import get_config
from employees.models import Employee
from projects.models import ProjectAssignment
from .models import TimesheetComment, TimesheetEntry, TimesheetLock
from .status import get_assignment_status
from .utils import format_date_key, get_week_start

logger = logging.getLogger(__name__)


@dataclass
class WeekOverview:
    employee: Employee
    week_start: date
    week_end: date
    comment: TimesheetComment
    assignments: List[ProjectAssignment] = field(default_factory=list)
    assignment_map: Dict[ProjectAssignment, Dict[str, TimesheetEntry]] = field(default_factory=dict)
    locked_days: List[date] = field(default_factory=list)


@dataclass
class EntryInput:
    assignment_id: int
    entry_date: date
    hours: Optional[Decimal] = None
    comment: str = ''


def get_valid_assignments(employee, date_start, date_end):
    """Assignments the employee can book on; time allotted assignments over budget are excluded"""
    assignments = []

    for assignment in ProjectAssignment.objects.valid_for(employee, date_start, date_end):
        if assignment.is_time_allotted and not get_assignment_status(assignment).is_valid:
            continue
        assignments.append(assignment)

    return assignments


def get_week_overview(employee, day, config):
    week_start = get_week_start(day, config.first_day_of_week)
    week_end = week_start + timedelta(days=6)

    assignments = get_valid_assignments(employee, week_start, week_end)
    assignment_map = {assignment: {} for assignment in assignments}

    entries = TimesheetEntry.objects.filter(
        assignment__employee=employee,
        entry_date__gte=week_start,
        entry_date__lte=week_end,
    ).select_related('assignment', 'assignment__project', 'assignment__project__customer')

    for entry in entries:
        assignment_map.setdefault(entry.assignment, {})[format_date_key(entry.entry_date)] = entry

    comment = TimesheetComment.objects.filter(employee=employee, comment_date=week_start).first()
    if comment is None:
        comment = TimesheetComment(employee=employee, comment_date=week_start, comment='')

    return WeekOverview(
        employee=employee,
        week_start=week_start,
        week_end=week_end,
        comment=comment,
        assignments=assignments,
        assignment_map=assignment_map,
        locked_days=TimesheetLock.objects.locked_days(week_start, week_end),
    )


def persist_timesheet(timesheet, entry_inputs, comment=None):
    """
    Persist the submitted cells of a timesheet.

    Every assignment is stored in its own savepoint. Assignments whose
    booked hours end up over budget are rolled back and their status is
    returned; an empty list means everything was saved.
    """
    editable = {}
    for rows in timesheet.customers.values():
        for row in rows:
            for cell in row.cells:
                if cell is not None and cell.is_editable:
                    editable[(row.assignment.pk, cell.date)] = (row.assignment, cell.entry)

    per_assignment = {}
    for entry_input in entry_inputs:
        key = (entry_input.assignment_id, entry_input.entry_date)

        if key not in editable:
            logger.debug("Ignoring read-only cell %s on %s", *key)
            continue

        assignment, existing = editable[key]
        per_assignment.setdefault(assignment, []).append((entry_input, existing))

    failed = []

    with transaction.atomic():
        if comment is not None:
            _persist_comment(timesheet, comment)

        for assignment, changes in per_assignment.items():
            status = _persist_assignment(assignment, changes)

            if not status.is_valid:
                failed.append(status)
            elif status.is_in_overrun:
                notify_project_manager(status)

    logger.info(
        "Persisted timesheet of %s for week %s, %d assignment(s) failed",
        timesheet.employee.employee_id, timesheet.week_start, len(failed)
    )
    return failed


def _persist_assignment(assignment, changes):
    with transaction.atomic():
        for entry_input, existing in changes:
            _persist_entry(assignment, entry_input, existing)

        status = get_assignment_status(assignment)

        if not status.is_valid:
            logger.warning(
                "Assignment %s over budget with %s hours, rolling back", assignment.pk, status.booked_hours
            )
            transaction.set_rollback(True)

    return status


def _persist_entry(assignment, entry_input, existing):
    if not entry_input.hours:
        if existing is not None and existing.pk is not None:
            existing.delete()
        return

    entry = existing if existing is not None else TimesheetEntry(
        assignment=assignment, entry_date=entry_input.entry_date
    )
    entry.hours = entry_input.hours
    entry.comment = entry_input.comment or ''
    entry.save()


def _persist_comment(timesheet, text):
    timesheet.comment.comment = text
    comment = timesheet.comment_for_persist()

    if comment.pk is None and not text:
        return

    comment.save()


def notify_project_manager(status):
    assignment = status.assignment
    manager = assignment.project.project_manager

    if not assignment.notify_pm or manager is None or not manager.email:
        return

    send_mail(
        subject=f"Assignment of {assignment.employee.full_name} on {assignment.project.name} in overrun",
        message=(
            f"{assignment.employee.full_name} booked {status.booked_hours} hours on "
            f"{assignment.project.name}, allotted are {assignment.allotted_hours} hours."
        ),
        from_email=get_config().mail_from,
        recipient_list=[manager.email],
    )
    logger.info("Notified %s about overrun of assignment %s", manager.email, assignment.pk)
